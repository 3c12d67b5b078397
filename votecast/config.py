"""
YAML configuration for votecast: engine parameters, the CSV sources that
datasets are loaded from, and the option names used in reports.

An example lives in ``elections.yml`` at the repository root.
"""
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple
import yaml
from votecast.distance import DEFAULT_SCALE, DistanceMetric
from votecast.engine import PredictionEngine
from votecast.errors import ConfigError
from votecast.matching import MatchFinder
from votecast.unit import DEFAULT_BUCKET_WIDTH

# Default column layout of the per-precinct result tables.
DEFAULT_COLUMNS: Mapping[str, str] = MappingProxyType({
    'coarse': 'OKRES',
    'locality': 'OBEC',
    'precinct': 'OKRSEK',
    'voters': 'VOL_SEZNAM',
    'votes_cast': 'VYD_OBALKY',
    'valid_votes': 'PL_HL_CELK',
})
NO_FILTERS: Mapping[str, Any] = MappingProxyType({})


class EngineSettings(NamedTuple):
    bucket_width: int = DEFAULT_BUCKET_WIDTH
    scale: float = DEFAULT_SCALE
    participation: bool = True
    workers: int = 1

    def build_engine(self) -> PredictionEngine:
        """ Builds a ``PredictionEngine`` with these settings. """
        metric = DistanceMetric(participation=self.participation,
                                scale=self.scale)
        return PredictionEngine(matcher=MatchFinder(metric=metric),
                                workers=self.workers)


class DatasetSource(NamedTuple):
    """
    Describes how to read one election round from a CSV table.

    ``options`` lists the per-option tally columns in option order. If
    ``invalid_votes`` is set, invalid ballots (ballots cast minus valid
    votes) are appended as a final option. ``filters`` maps columns to the
    value a row must have to be kept (e.g. the round number).
    ``coarse_from`` names another source whose municipality -> district
    mapping fills in the districts of a table without a district column.
    """
    path: str
    options: Tuple[str, ...]
    filters: Mapping[str, Any] = NO_FILTERS
    invalid_votes: bool = False
    columns: Mapping[str, str] = DEFAULT_COLUMNS
    separator: str = ';'
    coarse_from: Optional[str] = None


class Config(NamedTuple):
    engine: EngineSettings
    sources: Dict[str, DatasetSource]
    options: Dict[str, List[str]]

    def source(self, name: str) -> DatasetSource:
        if name not in self.sources:
            raise ConfigError('Unknown source {!r}. Configured sources: {}.'
                              .format(name, ', '.join(sorted(self.sources))))
        return self.sources[name]

    def option_names(self, name: Optional[str]) -> Optional[List[str]]:
        if name is None:
            return None
        if name not in self.options:
            raise ConfigError('Unknown option list {!r}.'.format(name))
        return self.options[name]


_ENGINE_TYPES = {
    'bucket_width': int,
    'scale': (int, float),
    'participation': bool,
    'workers': int,
}
_SOURCE_KEYS = {'path', 'options', 'filters', 'invalid_votes', 'columns',
                'separator', 'coarse_from'}


def load_config(path: str) -> Config:
    """
    Reads a configuration file.

    :param path: The path to the YAML file.
    """
    with open(path, encoding='utf-8') as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError('Could not parse {}: {}'.format(path, e)) from e
    return parse_config(raw or {})


def parse_config(raw: Mapping) -> Config:
    """ Validates an already parsed configuration mapping. """
    if not isinstance(raw, Mapping):
        raise ConfigError('The configuration must be a mapping.')
    unknown = set(raw) - {'engine', 'sources', 'options'}
    if unknown:
        raise ConfigError('Unknown configuration sections: {}.'
                          .format(', '.join(sorted(unknown))))
    sources = {name: _parse_source(name, src) for name, src
               in (raw.get('sources') or {}).items()}
    for name, source in sources.items():
        if source.coarse_from is None:
            continue
        # The referenced source must carry its own district column.
        reference = sources.get(source.coarse_from)
        if reference is None or reference.coarse_from is not None:
            raise ConfigError('Source {!r} takes its districts from {!r}, '
                              'which is not a source with a district '
                              'column.'.format(name, source.coarse_from))
    return Config(engine=_parse_engine(raw.get('engine') or {}),
                  sources=sources,
                  options=_parse_options(raw.get('options') or {}))


def _parse_engine(raw: Mapping) -> EngineSettings:
    if not isinstance(raw, Mapping):
        raise ConfigError('The engine section must be a mapping.')
    for key, value in raw.items():
        if key not in _ENGINE_TYPES:
            raise ConfigError('Unknown engine setting {!r}.'.format(key))
        # bool is an int subclass; only accept it where a bool is expected.
        expected = _ENGINE_TYPES[key]
        if (not isinstance(value, expected) or
                (isinstance(value, bool) and expected is not bool)):
            raise ConfigError('Invalid value for engine setting {!r}: {!r}.'
                              .format(key, value))
    settings = EngineSettings(**raw)
    if settings.bucket_width <= 0 or settings.workers < 1:
        raise ConfigError('bucket_width and workers must be positive.')
    return settings


def _parse_source(name: str, raw: Mapping) -> DatasetSource:
    if not isinstance(raw, Mapping):
        raise ConfigError('Source {!r} must be a mapping.'.format(name))
    unknown = set(raw) - _SOURCE_KEYS
    if unknown:
        raise ConfigError('Unknown keys in source {!r}: {}.'
                          .format(name, ', '.join(sorted(unknown))))
    if 'path' not in raw or 'options' not in raw:
        raise ConfigError('Source {!r} needs a path and a list of option '
                          'columns.'.format(name))
    if not isinstance(raw['options'], list) or not raw['options']:
        raise ConfigError('The options of source {!r} must be a non-empty '
                          'list.'.format(name))
    coarse_from = raw.get('coarse_from')
    if coarse_from is not None and not isinstance(coarse_from, str):
        raise ConfigError('coarse_from of source {!r} must be a source '
                          'name.'.format(name))
    columns = dict(DEFAULT_COLUMNS)
    columns.update(raw.get('columns') or {})
    return DatasetSource(path=str(raw['path']),
                         options=tuple(str(o) for o in raw['options']),
                         filters=MappingProxyType(
                             dict(raw.get('filters') or {})),
                         invalid_votes=bool(raw.get('invalid_votes', False)),
                         columns=MappingProxyType(columns),
                         separator=str(raw.get('separator', ';')),
                         coarse_from=coarse_from)


def _parse_options(raw: Mapping) -> Dict[str, List[str]]:
    if not isinstance(raw, Mapping):
        raise ConfigError('The options section must be a mapping.')
    options = {}
    for name, names in raw.items():
        if not isinstance(names, list):
            raise ConfigError('Option list {!r} must be a list.'.format(name))
        options[name] = [str(n) for n in names]
    return options
