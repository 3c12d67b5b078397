"""
The prediction engine. For every unit of a historical round, the engine
takes the unit's current result if it has been observed; otherwise, it
borrows the current result of the observed unit that voted most like it
historically. The per-unit results are summed, and the sums obtained from
several historical rounds are pooled.
"""
from multiprocessing import Pool
from typing import List, Optional, Sequence, Union
from votecast.aggregate import (AggregateResult, combine_predictions,
                                sum_results)
from votecast.errors import (EmptyInputError, InsufficientDataError,
                             NoCandidatesError)
from votecast.matching import MatchFinder
from votecast.projection import Prediction, Projector
from votecast.unit import Dataset, UnitRecord, as_dataset

UnitResult = Union[UnitRecord, Prediction]


class PredictionEngine:
    """
    Predicts the aggregate result of the current round from a partial
    observation of it and one or more complete historical rounds.
    """
    def __init__(self, matcher: Optional[MatchFinder] = None,
                 projector: Optional[Projector] = None,
                 workers: int = 1):
        """
        :param matcher: The reference unit selector. Defaults to a
            ``MatchFinder`` with the default filter cascade and metric.
        :param projector: The projection used for unobserved units.
        :param workers: The number of processes used to predict from
            several historical rounds concurrently. With 1 (the default),
            rounds are predicted sequentially.
        """
        if workers < 1:
            raise ValueError('At least one worker is required.')
        self.matcher = matcher or MatchFinder()
        self.projector = projector or Projector()
        self.workers = workers

    def reference_pool(self, historical: Dataset,
                       observed: Dataset) -> List[UnitRecord]:
        """
        Returns the historical records of the units that can serve as
        references: units that have been observed in the current round with
        a non-zero electorate. Historical order is kept.
        """
        pool = []
        for unit in historical:
            current = observed.get(unit.id)
            if current is not None and current.total_voters > 0:
                pool.append(unit)
        return pool

    def predict_units(self, historical, observed) -> List[UnitResult]:
        """
        Returns one result per unit of ``historical``, in historical order:
        the observed record where there is one, a ``Prediction`` otherwise.

        :param historical: The complete historical round.
        :param observed: The units of the current round observed so far.
        """
        historical = as_dataset(historical)
        observed = as_dataset(observed)
        pool = self.reference_pool(historical, observed)
        results: List[UnitResult] = []
        for unit in historical:
            current = observed.get(unit.id)
            if current is not None:
                results.append(current)
                continue
            try:
                reference = self.matcher.find_best_match(unit, pool)
            except NoCandidatesError as e:
                raise InsufficientDataError(
                    'Historical round {!r} has no observed reference units '
                    'to predict {} from.'.format(historical.name,
                                                 unit.id)) from e
            results.append(self.projector.project(
                unit, observed.get(reference.id)))
        return results

    def predict_dataset(self, historical, observed) -> AggregateResult:
        """ Predicts the current aggregate from one historical round. """
        return sum_results(self.predict_units(historical, observed))

    def predict(self, historical_datasets: Sequence,
                observed_current) -> AggregateResult:
        """
        Predicts the current aggregate from each historical round and pools
        the predictions.

        :param historical_datasets: The complete historical rounds, in order.
        :param observed_current: The units of the current round observed
            so far.
        """
        if not historical_datasets:
            raise EmptyInputError('At least one historical dataset is '
                                  'required.')
        observed = as_dataset(observed_current)
        params = [(as_dataset(h), observed) for h in historical_datasets]
        if self.workers > 1 and len(params) > 1:
            with Pool(min(self.workers, len(params))) as p:
                predictions = p.starmap(self.predict_dataset, params)
        else:
            predictions = [self.predict_dataset(*args) for args in params]
        return combine_predictions(predictions)

    def __repr__(self) -> str:
        return 'PredictionEngine(metric={!r}, filters={}, workers={})'.format(
            self.matcher.metric, len(self.matcher.filters), self.workers)


def predict_from_datasets(historical_datasets: Sequence, observed_current,
                          **kwargs) -> AggregateResult:
    """
    Predicts the current aggregate with a ``PredictionEngine`` built from
    ``kwargs``.
    """
    return PredictionEngine(**kwargs).predict(historical_datasets,
                                              observed_current)
