"""
Command line entry points.

    python -m votecast.cli predict elections.yml -H prez-2018-1 -c live
    python -m votecast.cli backtest elections.yml -H prez-2018-1 \\
        -c prez-2023-1 -f 0.005 -f 0.05 --options FIRST_ROUND_2023
"""
import logging
import sys
import click
from votecast.backtest import run_backtest
from votecast.config import Config, load_config
from votecast.datasets import load_dataset, locality_to_coarse
from votecast.errors import ConfigError, VotecastError
from votecast.report import format_prediction
from votecast.unit import Dataset

FORMAT = '%(asctime)-15s %(levelname)s %(message)s'  # for logging


@click.group()
@click.option('--log-level', default='WARNING', help='The logging level.',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                                case_sensitive=False))
def cli(log_level):
    logging.basicConfig(format=FORMAT, level=log_level.upper())


@cli.command()
@click.argument('config_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--historical', '-H', 'historical', multiple=True,
              required=True, help='A configured source with a complete '
              'historical round (repeatable).')
@click.option('--current', '-c', required=True, help='The configured source '
              'with the units of the current round observed so far.')
@click.option('--options', 'option_names', help='The configured option '
              'names to label the prediction with.')
def predict(config_file, historical, current, option_names):
    """ Predicts the result of the current round. """
    try:
        config = load_config(config_file)
        engine = config.engine.build_engine()
        historical_data = [_load(config, name) for name in historical]
        observed = _load(config, current)
        prediction = engine.predict(historical_data, observed)
        names = _names(config, option_names, prediction)
    except (VotecastError, OSError, ValueError) as e:
        logging.error(e, exc_info=True)
        sys.exit(1)
    click.echo('Predicting from {} observed units:'.format(len(observed)))
    click.echo(format_prediction(prediction, names))


@cli.command()
@click.argument('config_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--historical', '-H', 'historical', multiple=True,
              required=True, help='A configured source with a complete '
              'historical round (repeatable).')
@click.option('--current', '-c', required=True, help='The configured source '
              'with the complete round to predict.')
@click.option('--fraction', '-f', 'fractions', multiple=True,
              type=click.FloatRange(0, 1),
              default=(0.005, 0.015, 0.02, 0.05, 0.1), help='The share of '
              'units observed (repeatable).')
@click.option('--seed', type=int, help='Seed for sampling the observed '
              'units.')
@click.option('--options', 'option_names', help='The configured option '
              'names to label the prediction with.')
def backtest(config_file, historical, current, fractions, seed,
             option_names):
    """ Predicts a known round from samples of its own units. """
    try:
        config = load_config(config_file)
        engine = config.engine.build_engine()
        historical_data = [_load(config, name) for name in historical]
        current_data = _load(config, current)
        results = [run_backtest(historical_data, current_data, fraction,
                                seed, engine) for fraction in fractions]
    except (VotecastError, OSError, ValueError) as e:
        logging.error(e, exc_info=True)
        sys.exit(1)
    for result in results:
        click.echo('Predicting from {} ({:.2%}) units sample:'.format(
            result.sample_size, result.sample_share))
        try:
            names = _names(config, option_names, result.prediction)
        except (VotecastError, OSError, ValueError) as e:
            logging.error(e, exc_info=True)
            sys.exit(1)
        click.echo(format_prediction(result.prediction, names))
        click.echo('Error: {:.2f}'.format(result.error))


def _load(config: Config, name: str) -> Dataset:
    source = config.source(name)
    coarse_map = None
    if source.coarse_from is not None:
        coarse_map = locality_to_coarse(_load(config, source.coarse_from))
    return load_dataset(source.path, source, config.engine.bucket_width,
                        name=name, coarse_map=coarse_map)


def _names(config: Config, option_names, prediction):
    names = config.option_names(option_names)
    if names is None:
        return ['option {}'.format(idx + 1)
                for idx in range(len(prediction.votes))]
    if len(names) != len(prediction.votes):
        raise ConfigError('Option list {!r} has {} names, but the prediction '
                          'has {} options.'.format(option_names, len(names),
                                                   len(prediction.votes)))
    return names


if __name__ == '__main__':
    cli()
