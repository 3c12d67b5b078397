""" Summation of unit results into aggregate results. """
from typing import Iterable, NamedTuple, Tuple
from votecast.common import vote_shares
from votecast.errors import EmptyInputError


class AggregateResult(NamedTuple):
    """ Summed tallies over a collection of units or predictions. """
    total_voters: float
    total_votes: float
    votes: Tuple[float, ...]

    @property
    def votes_ratio(self) -> Tuple[float, ...]:
        return vote_shares(self.votes, self.total_votes)

    @property
    def participation(self) -> float:
        if self.total_voters == 0:
            return 0
        return self.total_votes / self.total_voters


def sum_results(units: Iterable) -> AggregateResult:
    """
    Sums the electorates, ballots cast and per-option tallies of
    ``units``. Accepts anything with ``total_voters``, ``total_votes`` and
    ``votes`` attributes (unit records, predictions, aggregate results).

    :param units: A non-empty collection of records with equal option
        counts.
    """
    units = list(units)
    if not units:
        raise EmptyInputError('Cannot sum an empty collection of results.')
    n_options = len(units[0].votes)
    total_voters = 0
    total_votes = 0
    votes = [0] * n_options
    for unit in units:
        if len(unit.votes) != n_options:
            raise ValueError('Cannot sum results with {} and {} options.'
                             .format(n_options, len(unit.votes)))
        total_voters += unit.total_voters
        total_votes += unit.total_votes
        for idx, count in enumerate(unit.votes):
            votes[idx] += count
    return AggregateResult(total_voters=total_voters,
                           total_votes=total_votes,
                           votes=tuple(votes))


def combine_predictions(aggregates: Iterable[AggregateResult]) \
        -> AggregateResult:
    """
    Combines independent predictions (one per historical round) by summing
    them. Predictions are pooled by vote count, not averaged.
    """
    return sum_results(aggregates)
