""" Extrapolation of a unit's current result from a reference unit. """
from typing import NamedTuple, Tuple
from votecast.errors import DivisionByZeroError
from votecast.unit import UnitRecord


class Prediction(NamedTuple):
    """
    The projected result of one unit. ``reference_unit_id`` names the unit
    the result was borrowed from. Tallies are not rounded.
    """
    id: str
    reference_unit_id: str
    total_voters: float
    total_votes: float
    votes: Tuple[float, ...]
    votes_ratio: Tuple[float, ...]


class Projector:
    """
    Projects a unit's current tallies by assuming it turns out and splits
    its vote exactly like its reference unit does in the current round.
    """
    def project(self, historical_unit: UnitRecord,
                reference_current: UnitRecord) -> Prediction:
        """
        :param historical_unit: The unit to project (known historically,
            not yet observed).
        :param reference_current: The current record of its reference unit.
            Must have a non-zero electorate.
        """
        if reference_current.total_voters == 0:
            raise DivisionByZeroError(
                'Cannot project {} from {}: the reference unit has no '
                'eligible voters.'.format(historical_unit.id,
                                          reference_current.id))
        total_votes = (reference_current.total_votes *
                       historical_unit.total_voters /
                       reference_current.total_voters)
        votes_ratio = tuple(reference_current.votes_ratio)
        return Prediction(id=historical_unit.id,
                          reference_unit_id=reference_current.id,
                          total_voters=historical_unit.total_voters,
                          total_votes=total_votes,
                          votes=tuple(x * total_votes for x in votes_ratio),
                          votes_ratio=votes_ratio)


def project(historical_unit: UnitRecord,
            reference_current: UnitRecord) -> Prediction:
    """ Shorthand for ``Projector().project(...)``. """
    return Projector().project(historical_unit, reference_current)
