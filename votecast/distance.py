"""
Dissimilarity between reporting units, used to rank candidate
reference units.
"""
from typing import Sequence
import numpy as np  # type: ignore
from votecast.unit import UnitRecord

DEFAULT_SCALE = 100


class DistanceMetric:
    """
    Scores how differently two units voted. The share term is the mean
    squared difference of the units' share vectors, scaled to percentages
    before squaring so that the error reads as a squared percentage. The
    optional participation term adds the absolute difference of the units'
    turnout (also in percent).
    """
    def __init__(self, participation: bool = True,
                 scale: float = DEFAULT_SCALE):
        """
        :param participation: If ``True``, the turnout difference is added
            to the share distance.
        :param scale: The factor applied to shares and turnout before they
            are compared. Defaults to 100 (percent).
        """
        self.participation = participation
        self.scale = scale

    def distance(self, unit_a: UnitRecord, unit_b: UnitRecord) -> float:
        """
        Returns the non-negative distance between two units. The distance
        is symmetric.
        """
        ratio_a = np.asarray(unit_a.votes_ratio, dtype=float)
        ratio_b = np.asarray(unit_b.votes_ratio, dtype=float)
        if ratio_a.shape != ratio_b.shape:
            raise ValueError('Cannot compare units {} and {}: {} options vs. '
                             '{} options.'.format(unit_a.id, unit_b.id,
                                                  len(ratio_a), len(ratio_b)))
        dist = float(np.mean((ratio_a * self.scale -
                              ratio_b * self.scale) ** 2))
        if self.participation:
            dist += abs(unit_a.participation * self.scale -
                        unit_b.participation * self.scale)
        return dist

    def rank(self, unit: UnitRecord,
             candidates: Sequence[UnitRecord]) -> np.ndarray:
        """
        Returns the distances from ``unit`` to each candidate,
        in candidate order.
        """
        return np.array([self.distance(unit, c) for c in candidates],
                        dtype=float)

    def closest(self, unit: UnitRecord,
                candidates: Sequence[UnitRecord]) -> UnitRecord:
        """
        Returns the candidate closest to ``unit``. Ties go to the candidate
        that comes first in ``candidates`` (``np.argmin`` returns the first
        index of the minimum).

        :param unit: The unit to find a neighbor for.
        :param candidates: A non-empty sequence of candidate units.
        """
        return candidates[int(np.argmin(self.rank(unit, candidates)))]

    def __repr__(self) -> str:
        return 'DistanceMetric(participation={}, scale={})'.format(
            self.participation, self.scale)
