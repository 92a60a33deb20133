"""restdns command line helpers."""


import importlib
import logging
import logging.config
import os
import pkgutil
import tempfile
import traceback

import click
import yaml

import restdns


def init_logger(name, log_conf_file=None):
    """Initialize logger from YAML dictConfig file."""
    if log_conf_file is None:
        log_conf_file = os.path.join(restdns.RESTDNS_ETC, 'logging', name)
    try:
        with open(log_conf_file, 'r') as fh:
            log_config = yaml.safe_load(fh)
            logging.config.dictConfig(log_config)

    except (IOError, ValueError, yaml.YAMLError):
        with tempfile.NamedTemporaryFile(delete=False, mode='w') as f:
            traceback.print_exc(file=f)
            click.echo('Unable to load log conf: %s [ %s ]' %
                       (log_conf_file, f.name), err=True)


def make_multi_command(module_name):
    """Make a Click group from all submodules of the module."""

    class MCommand(click.Group):
        """restdns CLI driver."""

        def list_commands(self, ctx):
            climod = importlib.import_module(module_name)
            commands = [
                name for _finder, name, _ispkg
                in pkgutil.iter_modules(climod.__path__)
            ]
            return sorted([cmd.replace('_', '-') for cmd in commands])

        def get_command(self, ctx, cmd_name):
            try:
                full_name = '.'.join([module_name, cmd_name.replace('-', '_')])
                mod = importlib.import_module(full_name)
                return mod.init()
            except ImportError:
                with tempfile.NamedTemporaryFile(delete=False, mode='w') as f:
                    traceback.print_exc(file=f)
                    click.echo('Unable to load plugin: %s [ %s ]' %
                               (cmd_name, f.name), err=True)
                return None

    return MCommand
