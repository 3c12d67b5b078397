""" Reporting units and the datasets that hold them. """
from collections import OrderedDict
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, \
    Tuple
from votecast.common import vote_shares
from votecast.errors import DatasetError

DEFAULT_BUCKET_WIDTH = 100


class UnitRecord(NamedTuple):
    """
    The observed tallies of one reporting unit (a precinct) in one
    election round.

    Records are immutable; ``votes_ratio`` and ``participation`` are derived
    from the tallies on access and are never stored.
    """
    id: str
    area_coarse: str
    area_locality: str
    precinct: str
    size_class: int
    total_voters: float
    total_votes: float
    votes: Tuple[float, ...]

    @property
    def votes_ratio(self) -> Tuple[float, ...]:
        """ Per-option share of the votes cast (all zero if none were). """
        return vote_shares(self.votes, self.total_votes)

    @property
    def participation(self) -> float:
        """
        Ballots cast per eligible voter. Defined as 0 for a unit without
        eligible voters.
        """
        if self.total_voters == 0:
            return 0
        return self.total_votes / self.total_voters

    @property
    def num_options(self) -> int:
        return len(self.votes)


def size_class(total_voters: float,
               bucket_width: int = DEFAULT_BUCKET_WIDTH) -> int:
    """
    Buckets a unit's electorate into a coarse size category.

    :param total_voters: The number of eligible voters in the unit.
    :param bucket_width: The number of voters per bucket.
    """
    if bucket_width <= 0:
        raise ValueError('Bucket width must be positive.')
    return int(total_voters // bucket_width)


def unit_id(area_coarse, area_locality, precinct) -> str:
    """ Composes a unit id from its area hierarchy. """
    return '{}-{}-{}'.format(area_coarse, area_locality, precinct)


def make_unit(area_coarse, area_locality, precinct, total_voters: float,
              total_votes: float, votes: Iterable[float],
              bucket_width: int = DEFAULT_BUCKET_WIDTH) -> UnitRecord:
    """
    Builds a ``UnitRecord``, deriving its id and size class.

    :param area_coarse: The coarse region (district) code.
    :param area_locality: The locality (municipality) code.
    :param precinct: The precinct code within the locality.
    :param total_voters: The number of eligible voters.
    :param total_votes: The number of ballots cast.
    :param votes: The per-option tallies, in option order.
    :param bucket_width: The width of the electorate size buckets.
    """
    return UnitRecord(id=unit_id(area_coarse, area_locality, precinct),
                      area_coarse=str(area_coarse),
                      area_locality=str(area_locality),
                      precinct=str(precinct),
                      size_class=size_class(total_voters, bucket_width),
                      total_voters=total_voters,
                      total_votes=total_votes,
                      votes=tuple(votes))


class Dataset:
    """
    An ordered collection of units from one election round. Datasets are
    joined with each other by unit id only.
    """
    def __init__(self, units: Iterable[UnitRecord], name: str = ''):
        """
        :param units: The units, in a stable order. Ids must be unique and
            every unit must carry the same number of options.
        :param name: A label for the round (used in logs and reports).
        """
        self.name = name
        self.units: Tuple[UnitRecord, ...] = tuple(units)
        self._index: Dict[str, UnitRecord] = OrderedDict()
        for unit in self.units:
            if unit.id in self._index:
                raise DatasetError('Duplicate unit id {!r} in dataset {!r}.'
                                   .format(unit.id, name))
            self._index[unit.id] = unit
        option_counts = set(unit.num_options for unit in self.units)
        if len(option_counts) > 1:
            raise DatasetError('Units in dataset {!r} have differing option '
                               'counts: {}.'.format(name,
                                                    sorted(option_counts)))

    def by_id(self) -> Dict[str, UnitRecord]:
        """ Returns a copy of the id -> unit mapping, in dataset order. """
        return OrderedDict(self._index)

    def get(self, id_: str) -> Optional[UnitRecord]:
        return self._index.get(id_)

    def subset(self, ids: Iterable[str], name: Optional[str] = None) \
            -> 'Dataset':
        """
        Returns a new dataset with the units whose ids are in ``ids``,
        keeping this dataset's order.
        """
        wanted = set(ids)
        return Dataset([u for u in self.units if u.id in wanted],
                       self.name if name is None else name)

    @property
    def ids(self) -> List[str]:
        return list(self._index.keys())

    @property
    def num_options(self) -> Optional[int]:
        """ The option count shared by all units (``None`` if empty). """
        if not self.units:
            return None
        return self.units[0].num_options

    def __contains__(self, id_: object) -> bool:
        return id_ in self._index

    def __iter__(self) -> Iterator[UnitRecord]:
        return iter(self.units)

    def __len__(self) -> int:
        return len(self.units)

    def __repr__(self) -> str:
        return 'Dataset {!r} with {} units and {} options'.format(
            self.name, len(self.units), self.num_options)


def as_dataset(units, name: str = '') -> Dataset:
    """ Wraps a plain sequence of units in a ``Dataset`` if necessary. """
    if isinstance(units, Dataset):
        return units
    return Dataset(units, name)
