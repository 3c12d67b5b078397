""" Human-readable summaries of predictions. """
from math import floor
from typing import List, Sequence, Tuple


def humanize_prediction(prediction, names: Sequence[str]) \
        -> List[Tuple[str, float]]:
    """
    Pairs each option's share with its name, as a percentage floored to two
    decimal places, sorted from the largest share to the smallest.

    :param prediction: Any result with a ``votes_ratio``.
    :param names: The option names, in option order.
    """
    ratios = prediction.votes_ratio
    if len(names) != len(ratios):
        raise ValueError('Got {} option names for {} options.'
                         .format(len(names), len(ratios)))
    shares = [(name, floor(ratio * 10000) / 100)
              for name, ratio in zip(names, ratios)]
    return sorted(shares, key=lambda share: share[1], reverse=True)


def format_prediction(prediction, names: Sequence[str]) -> str:
    """ Renders ``humanize_prediction`` as an aligned text table. """
    shares = humanize_prediction(prediction, names)
    width = max([len(name) for name, _ in shares] + [0])
    return '\n'.join('{:<{}}  {:>6.2f} %'.format(name, width, pct)
                     for name, pct in shares)
