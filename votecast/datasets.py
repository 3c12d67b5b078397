"""
Loaders that turn per-precinct result tables into datasets.

Conventions:
Each row of a result table is one precinct in one round. The unit id is
built from the district, municipality and precinct columns. Rows that do
not match the source's filters (e.g. rows from the other round, or rows
flagged as erroneous) are skipped, as are rows with missing cells and lines
with more cells than the header.

Live tables may lack the district column. Their districts are then looked
up by municipality in a mapping built from a complete round
(see ``locality_to_coarse``).
"""
import logging
from typing import Dict, List, Mapping, Optional
import pandas as pd  # type: ignore
from votecast.config import DatasetSource
from votecast.errors import DatasetError
from votecast.unit import DEFAULT_BUCKET_WIDTH, Dataset, make_unit

logger = logging.getLogger(__name__)


def load_dataset(path: str, source: DatasetSource,
                 bucket_width: int = DEFAULT_BUCKET_WIDTH,
                 name: Optional[str] = None,
                 coarse_map: Optional[Mapping[str, str]] = None) -> Dataset:
    """
    Reads a result table into a ``Dataset``.

    :param path: The CSV file to read (usually ``source.path``).
    :param source: The column layout and row filters of the table.
    :param bucket_width: The width of the electorate size buckets.
    :param name: The name of the dataset. Defaults to ``path``.
    :param coarse_map: Municipality -> district mapping, used when the
        table has no district column.
    """
    bad_lines: List[List[str]] = []

    def skip_line(line: List[str]) -> None:
        bad_lines.append(line)

    frame = pd.read_csv(path, sep=source.separator, skipinitialspace=True,
                        engine='python', on_bad_lines=skip_line)
    if bad_lines:
        logger.warning('Skipped %d malformed lines in %s.', len(bad_lines),
                       path)
    dataset = units_from_frame(frame, source, bucket_width,
                               name=name or path, coarse_map=coarse_map)
    logger.info('Loaded %d units from %s.', len(dataset), path)
    return dataset


def units_from_frame(frame: pd.DataFrame, source: DatasetSource,
                     bucket_width: int = DEFAULT_BUCKET_WIDTH,
                     name: str = '',
                     coarse_map: Optional[Mapping[str, str]] = None
                     ) -> Dataset:
    """
    Builds a ``Dataset`` from a DataFrame laid out as described by
    ``source``.

    :param frame: The raw table, one row per precinct.
    :param source: The column layout and row filters of the table.
    :param bucket_width: The width of the electorate size buckets.
    :param name: The name of the dataset.
    :param coarse_map: Municipality -> district mapping. Only consulted if
        the district column is absent; rows from municipalities missing in
        the mapping are dropped.
    """
    cols = source.columns
    lookup_coarse = (coarse_map is not None and
                     cols['coarse'] not in frame.columns)
    required = [cols['locality'], cols['precinct'], cols['voters'],
                cols['votes_cast']] + list(source.options)
    if not lookup_coarse:
        required.insert(0, cols['coarse'])
    if source.invalid_votes:
        required.append(cols['valid_votes'])
    required += list(source.filters)
    missing = [c for c in required if c not in frame.columns]
    if missing:
        raise DatasetError('Table {!r} is missing columns: {}.'
                           .format(name, ', '.join(missing)))

    rows = frame
    for col, value in source.filters.items():
        rows = rows[rows[col] == value]
    complete = rows.dropna(subset=required)
    if len(complete) < len(rows):
        logger.warning('Dropped %d incomplete rows from %r.',
                       len(rows) - len(complete), name)

    votes = complete[list(source.options)].astype(int)
    if source.invalid_votes:
        votes = votes.assign(_invalid=complete[cols['votes_cast']] -
                             complete[cols['valid_votes']])
    units = []
    unknown = 0
    for (_, row), tallies in zip(complete.iterrows(),
                                 votes.itertuples(index=False)):
        locality = _code(row[cols['locality']])
        if lookup_coarse:
            if locality not in coarse_map:
                unknown += 1
                continue
            coarse = coarse_map[locality]
        else:
            coarse = _code(row[cols['coarse']])
        units.append(make_unit(coarse, locality,
                               _code(row[cols['precinct']]),
                               int(row[cols['voters']]),
                               int(row[cols['votes_cast']]),
                               (int(x) for x in tallies),
                               bucket_width))
    if unknown:
        logger.warning('Dropped %d rows of %r from municipalities without a '
                       'known district.', unknown, name)
    return Dataset(units, name)


def locality_to_coarse(dataset: Dataset) -> Dict[str, str]:
    """
    Maps each municipality to its district. Used to complete the ids of
    tables that only identify precincts by municipality.
    """
    return {unit.area_locality: unit.area_coarse for unit in dataset}


def _code(value) -> str:
    """
    Normalizes an area code read by pandas (ints may come back as floats
    when a column had missing cells).
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()
