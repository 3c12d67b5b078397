"""
Backtesting: predict a round whose full result is known from a random
sample of its units, and measure how far the prediction lands from the
real result.
"""
from math import floor
from random import Random
from typing import NamedTuple, Optional, Sequence
from votecast.aggregate import AggregateResult, sum_results
from votecast.common import mean_square_error
from votecast.engine import PredictionEngine
from votecast.unit import Dataset, as_dataset


class BacktestResult(NamedTuple):
    fraction: float
    sample_size: int
    total_units: int
    prediction: AggregateResult
    actual: AggregateResult
    error: float

    @property
    def sample_share(self) -> float:
        """ The share of units observed (0-1). """
        if self.total_units == 0:
            return 0
        return self.sample_size / self.total_units


def sample_units(dataset, fraction: float,
                 seed: Optional[int] = None) -> Dataset:
    """
    Draws ``floor(len(dataset) * fraction)`` units without replacement.

    :param dataset: The full round.
    :param fraction: The share of units to draw (0-1).
    :param seed: Seed for the random number generator.
    """
    if not 0 <= fraction <= 1:
        raise ValueError('The sample fraction must be between 0 and 1.')
    dataset = as_dataset(dataset)
    n_units = floor(len(dataset) * fraction)
    sample = Random(seed).sample(list(dataset), n_units)
    return Dataset(sample, '{} ({:.1%} sample)'.format(dataset.name,
                                                       fraction))


def prediction_error(prediction, actual) -> float:
    """
    The mean square error of the predicted shares in percent, so that it
    reads roughly like a squared percentage point.
    """
    return mean_square_error([x * 100 for x in prediction.votes_ratio],
                             [x * 100 for x in actual.votes_ratio])


def run_backtest(historical_datasets: Sequence, current, fraction: float,
                 seed: Optional[int] = None,
                 engine: Optional[PredictionEngine] = None) -> BacktestResult:
    """
    Predicts ``current`` from a random sample of its own units.

    :param historical_datasets: The complete historical rounds.
    :param current: The complete round to predict.
    :param fraction: The share of ``current``'s units to observe.
    :param seed: Seed for the sampling.
    :param engine: The engine to predict with. Defaults to
        ``PredictionEngine()``.
    """
    engine = engine or PredictionEngine()
    current = as_dataset(current)
    observed = sample_units(current, fraction, seed)
    prediction = engine.predict(historical_datasets, observed)
    actual = sum_results(current)
    return BacktestResult(fraction=fraction,
                          sample_size=len(observed),
                          total_units=len(current),
                          prediction=prediction,
                          actual=actual,
                          error=prediction_error(prediction, actual))
