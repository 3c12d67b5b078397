"""
Reference unit selection. A unit that has not reported yet is matched with
the reported unit that voted most like it in a historical round.
"""
from typing import Callable, List, Optional, Sequence
from votecast.distance import DistanceMetric
from votecast.errors import NoCandidatesError
from votecast.unit import UnitRecord

Filter = Callable[[UnitRecord, UnitRecord], bool]


def same_locality_and_size(unit: UnitRecord, candidate: UnitRecord) -> bool:
    return (unit.area_locality == candidate.area_locality and
            unit.size_class == candidate.size_class)


def same_area_and_size(unit: UnitRecord, candidate: UnitRecord) -> bool:
    return (unit.area_coarse == candidate.area_coarse and
            unit.size_class == candidate.size_class)


def same_locality(unit: UnitRecord, candidate: UnitRecord) -> bool:
    return unit.area_locality == candidate.area_locality


def same_area(unit: UnitRecord, candidate: UnitRecord) -> bool:
    return unit.area_coarse == candidate.area_coarse


def same_size(unit: UnitRecord, candidate: UnitRecord) -> bool:
    return unit.size_class == candidate.size_class


# Most specific first. Nearby units of similar size are assumed to vote
# most alike.
DEFAULT_FILTERS = (
    same_locality_and_size,
    same_area_and_size,
    same_locality,
    same_area,
    same_size,
)


class MatchFinder:
    """
    Finds the best reference unit for a unit by narrowing the reference
    pool with a cascade of categorical filters and ranking what remains
    with a ``DistanceMetric``.
    """
    def __init__(self, metric: Optional[DistanceMetric] = None,
                 filters: Sequence[Filter] = DEFAULT_FILTERS):
        """
        :param metric: The metric used to rank candidates. Defaults to
            ``DistanceMetric()`` (shares and turnout).
        :param filters: An ordered sequence of predicates
            ``(unit, candidate) -> bool``. The first predicate that accepts
            at least one candidate defines the ranked subset. If no predicate
            accepts any candidate, the whole pool is ranked. By default,
            :data:`DEFAULT_FILTERS` is used.
        """
        self.metric = metric or DistanceMetric()
        self.filters = tuple(filters)

    def candidates(self, unit: UnitRecord,
                   reference_pool: Sequence[UnitRecord]) -> List[UnitRecord]:
        """
        Returns the subset of ``reference_pool`` that will be ranked
        for ``unit``, in pool order.

        :param unit: The unit to find a reference for.
        :param reference_pool: The historical records of the units that
            have current observations.
        """
        for unit_filter in self.filters:
            matched = [c for c in reference_pool if unit_filter(unit, c)]
            if matched:
                return matched
        return list(reference_pool)

    def find_best_match(self, unit: UnitRecord,
                        reference_pool: Sequence[UnitRecord]) -> UnitRecord:
        """
        Returns the reference unit most similar to ``unit``. Ties are broken
        by pool order.

        :param unit: The unit to find a reference for.
        :param reference_pool: The historical records of the units that
            have current observations.
        """
        if not reference_pool:
            raise NoCandidatesError('No reference units to match {} '
                                    'against.'.format(unit.id))
        return self.metric.closest(unit, self.candidates(unit,
                                                         reference_pool))
