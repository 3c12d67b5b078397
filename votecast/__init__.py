""" votecast: election result projection from partial precinct counts. """
from votecast.aggregate import AggregateResult, combine_predictions, \
    sum_results
from votecast.distance import DistanceMetric
from votecast.engine import PredictionEngine, predict_from_datasets
from votecast.errors import ConfigError, DatasetError, DivisionByZeroError, \
    EmptyInputError, InsufficientDataError, NoCandidatesError, VotecastError
from votecast.matching import DEFAULT_FILTERS, MatchFinder
from votecast.projection import Prediction, Projector
from votecast.unit import Dataset, UnitRecord, make_unit

__version__ = '0.1.0'


def predict(historical_datasets, observed_current, **kwargs) \
        -> AggregateResult:
    """
    Predicts the aggregate result of the current round. See
    :meth:`PredictionEngine.predict`.
    """
    return predict_from_datasets(historical_datasets, observed_current,
                                 **kwargs)
