""" Common utility functions for votecast. """
from typing import Sequence, Tuple

# NOTE: Having a large collection of common utility functions is generally
# considered an antipattern, as it makes separation of concerns fuzzier.
# A utility function should only be added here if:
#  a. It is short (preferably <15 lines) and relatively generic.
#  b. It is used by several modules and thus would significantly impede
#     maintainability if duplicated.
#  c. Placing it in a more specific module would create
#     an icky circular dependency.


def vote_shares(votes: Sequence[float], total: float) -> Tuple[float, ...]:
    """
    Divides each tally by ``total``. If ``total`` is zero, every share
    is zero; a unit where nobody voted is valid data, not a fault.
    """
    if total == 0:
        return tuple(0 for _ in votes)
    return tuple(x / total for x in votes)


def mean_square_error(a: Sequence[float], b: Sequence[float]) -> float:
    """ Returns the mean of the squared differences of two vectors. """
    if len(a) != len(b):
        raise ValueError('Cannot compare vectors of length {} and {}.'
                         .format(len(a), len(b)))
    return sum((x - y) ** 2 for x, y in zip(a, b)) / len(a)
