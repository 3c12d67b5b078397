import os
import pytest
from votecast.config import DEFAULT_COLUMNS, Config, DatasetSource, \
    EngineSettings, load_config, parse_config
from votecast.engine import PredictionEngine
from votecast.errors import ConfigError

EXAMPLE_CONFIG = os.path.join(os.path.dirname(__file__), '..',
                              'elections.yml')


@pytest.fixture
def raw():
    """ A minimal configuration with one source and one option list. """
    return {
        'engine': {'bucket_width': 50, 'participation': False},
        'sources': {
            'round-1': {
                'path': 'round1.csv',
                'filters': {'KOLO': 1},
                'options': ['HLASY_01', 'HLASY_02'],
                'invalid_votes': True,
                'columns': {'voters': 'VOTERS'},
            },
        },
        'options': {'ROUND_1': ['Alice', 'Bob', 'Invalid']},
    }


def test_parse_config(raw):
    config = parse_config(raw)
    assert config.engine == EngineSettings(bucket_width=50, scale=100,
                                           participation=False, workers=1)
    source = config.source('round-1')
    assert source.path == 'round1.csv'
    assert source.options == ('HLASY_01', 'HLASY_02')
    assert source.filters == {'KOLO': 1}
    assert source.invalid_votes
    assert source.columns['voters'] == 'VOTERS'
    assert source.columns['coarse'] == DEFAULT_COLUMNS['coarse']
    assert source.separator == ';'
    assert config.option_names('ROUND_1') == ['Alice', 'Bob', 'Invalid']
    assert config.option_names(None) is None


def test_defaults():
    config = parse_config({})
    assert config == Config(engine=EngineSettings(), sources={}, options={})
    assert config.engine.participation
    assert config.engine.bucket_width == 100


def test_build_engine(raw):
    engine = parse_config(raw).engine.build_engine()
    assert isinstance(engine, PredictionEngine)
    assert not engine.matcher.metric.participation
    assert engine.matcher.metric.scale == 100
    assert engine.workers == 1


def test_source_defaults():
    source = DatasetSource(path='x.csv', options=('A',))
    assert source.filters == {}
    assert not source.invalid_votes
    assert source.columns == DEFAULT_COLUMNS
    assert source.coarse_from is None


def test_source_defaults_are_read_only():
    source = DatasetSource(path='x.csv', options=('A',))
    with pytest.raises(TypeError):
        source.filters['KOLO'] = 1
    with pytest.raises(TypeError):
        source.columns['coarse'] = 'DISTRICT'
    assert DatasetSource(path='y.csv', options=('A',)).filters == {}
    assert DEFAULT_COLUMNS['coarse'] == 'OKRES'


def test_parsed_sources_do_not_share_mappings(raw):
    raw['sources']['round-2'] = {'path': 'round2.csv', 'options': ['A']}
    config = parse_config(raw)
    assert config.source('round-1').columns['voters'] == 'VOTERS'
    assert config.source('round-2').columns['voters'] == 'VOL_SEZNAM'
    with pytest.raises(TypeError):
        config.source('round-2').filters['KOLO'] = 2


def test_coarse_from(raw):
    raw['sources']['live'] = {'path': 'live.csv', 'options': ['A'],
                              'coarse_from': 'round-1'}
    assert parse_config(raw).source('live').coarse_from == 'round-1'


@pytest.mark.parametrize('coarse_from', ['round-3', 'live', 'chained', 1])
def test_invalid_coarse_from(raw, coarse_from):
    # 'chained' itself takes its districts from another source.
    raw['sources']['chained'] = {'path': 'c.csv', 'options': ['A'],
                                 'coarse_from': 'round-1'}
    raw['sources']['live'] = {'path': 'live.csv', 'options': ['A'],
                              'coarse_from': coarse_from}
    with pytest.raises(ConfigError):
        parse_config(raw)


def test_unknown_source(raw):
    with pytest.raises(ConfigError):
        parse_config(raw).source('round-2')


def test_unknown_option_list(raw):
    with pytest.raises(ConfigError):
        parse_config(raw).option_names('ROUND_2')


@pytest.mark.parametrize('engine', [
    {'bucket_size': 100},
    {'bucket_width': '100'},
    {'bucket_width': True},
    {'bucket_width': 0},
    {'workers': 0},
    {'participation': 'yes'},
    [1, 2],
])
def test_invalid_engine(engine):
    with pytest.raises(ConfigError):
        parse_config({'engine': engine})


@pytest.mark.parametrize('source', [
    {'path': 'x.csv'},
    {'options': ['A']},
    {'path': 'x.csv', 'options': []},
    {'path': 'x.csv', 'options': 'A'},
    {'path': 'x.csv', 'options': ['A'], 'round': 1},
    'x.csv',
])
def test_invalid_source(source):
    with pytest.raises(ConfigError):
        parse_config({'sources': {'bad': source}})


def test_invalid_sections():
    with pytest.raises(ConfigError):
        parse_config({'engines': {}})
    with pytest.raises(ConfigError):
        parse_config({'options': {'X': 'Alice'}})
    with pytest.raises(ConfigError):
        parse_config(['engine'])


def test_load_config(tmp_path):
    path = tmp_path / 'config.yml'
    path.write_text('engine:\n'
                    '  scale: 200\n'
                    'sources:\n'
                    '  live:\n'
                    '    path: live.csv\n'
                    '    options: [A, B]\n'
                    'options:\n'
                    '  LIVE: [Zeman, Drahoš]\n', encoding='utf-8')
    config = load_config(str(path))
    assert config.engine.scale == 200
    assert config.source('live').options == ('A', 'B')
    assert config.option_names('LIVE') == ['Zeman', 'Drahoš']


def test_load_empty_config(tmp_path):
    path = tmp_path / 'empty.yml'
    path.write_text('')
    assert load_config(str(path)) == parse_config({})


def test_load_malformed_config(tmp_path):
    path = tmp_path / 'bad.yml'
    path.write_text('engine: [unclosed\n')
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_example_config():
    config = load_config(EXAMPLE_CONFIG)
    assert set(config.sources) == {'prez-2018-1', 'prez-2018-2',
                                   'prez-2023-1', 'prez-2023-1-live'}
    assert config.source('prez-2023-1-live').coarse_from == 'prez-2018-1'
    # Two candidates plus invalid ballots in the 2018 run-off.
    assert len(config.source('prez-2018-2').options) + 1 == \
        len(config.option_names('SECOND_ROUND_2018'))
    assert len(config.source('prez-2023-1').options) + 1 == \
        len(config.option_names('FIRST_ROUND_2023'))
