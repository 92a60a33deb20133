"""restdns console entry point.
"""

import logging

import click

from restdns import cli
from restdns import config
from restdns import exc


# pylint complains "No value passed for parameter 'config' in function call".
# This is ok, as these parameters come from click decorators.
#
# pylint: disable=E1120
@click.group(cls=cli.make_multi_command('restdns.sproc'))
@click.option('--config', 'config_file', required=True,
              envvar='RESTDNS_CONFIG',
              type=click.Path(exists=True, dir_okay=False),
              help='Settings file (YAML).')
@click.option('--log-conf', required=False,
              type=click.Path(exists=True, dir_okay=False),
              help='Logging dictConfig file (YAML).')
@click.option('--debug/--no-debug',
              help='Sets logging level to debug',
              is_flag=True, default=False)
@click.pass_context
def run(ctx, config_file, log_conf, debug):
    """restdns CLI."""
    ctx.obj = {}
    ctx.obj['logging.debug'] = False

    cli.init_logger('daemon.yml', log_conf)
    if debug:
        ctx.obj['logging.debug'] = True
        logging.getLogger('restdns').setLevel(logging.DEBUG)
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        ctx.obj['settings'] = config.load(config_file)
    except exc.ConfigError as err:
        raise click.UsageError(err.message)
