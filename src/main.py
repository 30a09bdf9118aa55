#!/usr/bin/env python3
"""
Sitekeeper - installer & manager for self-hosted site installations
Main entry point for the command line interface
"""

import logging
import os
import sys

import click
from rich.table import Table

# Add src to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from __version__ import get_full_version
from commands import doctor as doctor_commands
from core.doctor import CATEGORIES
from core.errors import PreconditionError
from core.system import DEVELOPMENT, System
from utils.env_config import get_config, get_config_bool, initialize_config, show_config_summary
from utils.logging_config import level_from_name, setup_logging
from utils.ui import UI

logger = logging.getLogger(__name__)


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging and verbose errors')
@click.option('-D', '--development', is_flag=True, help='Run in development mode')
@click.version_option(version=get_full_version(), prog_name='sitekeeper')
@click.pass_context
def cli(ctx, debug, development):
    """Sitekeeper - install, configure and diagnose site installations"""

    # Initialize configuration from .env file
    config_result = initialize_config()

    # Enable debug from environment if not set via CLI
    if not debug and get_config_bool('DEBUG_MODE'):
        debug = True

    level = logging.DEBUG if debug else level_from_name(get_config('LOG_LEVEL'))
    setup_logging(level=level, log_file=get_config('SITEKEEPER_LOG_PATH'), force=True)

    for warning in config_result['warnings']:
        logger.warning(warning)
    for error in config_result['errors']:
        logger.error(error)

    ui = UI(verbose=debug)
    environment = DEVELOPMENT if development else None
    ctx.obj = {'ui': ui, 'system': System(ui, environment=environment)}


def _finish(ui, result):
    if result:
        return
    if result.error is not None:
        ui.error(result.error)
    else:
        ui.log(result.message, style='error')
    sys.exit(1)


@cli.command()
@click.argument('categories', nargs=-1, type=click.Choice(CATEGORIES))
@click.option('--quiet', '-q', is_flag=True, help='Do not print a notice when no checks match')
@click.option('--skip-instance-check', is_flag=True, help='Do not look for an installation in the current folder')
@click.option('--local', is_flag=True, help='The installation is a local/development install')
@click.option('--no-stack', is_flag=True, help='Skip the system stack check')
@click.option('--no-check-mem', is_flag=True, help='Skip the memory check')
@click.option('--list', 'list_only', is_flag=True, help='List the checks that would run')
@click.pass_obj
def doctor(obj, categories, quiet, skip_instance_check, local, no_stack, no_check_mem, list_only):
    """Check the system for any potential hiccups"""
    ui = obj['ui']

    if list_only:
        result = doctor_commands.list_checks(categories)
        table = Table(title="Doctor Checks", show_header=True, header_style="bold magenta")
        table.add_column("Check", style="cyan")
        table.add_column("Categories", style="green")
        for check in result.data['checks']:
            table.add_row(check['title'], ', '.join(check['category']) or '-')
        ui.console.print(table)
        return

    flags = {}
    if no_stack:
        flags['stack'] = False
    if no_check_mem:
        flags['check_mem'] = False

    try:
        result = doctor_commands.run(
            categories, quiet=quiet, skip_instance_check=skip_instance_check, local=local,
            ui=ui, system=obj['system'], **flags,
        )
    except PreconditionError as e:
        ui.error(e)
        sys.exit(1)

    _finish(ui, result)


@cli.command()
@click.argument('category', type=click.Choice(CATEGORIES))
@click.option('--local', is_flag=True, help='The installation is a local/development install')
@click.pass_obj
def preflight(obj, category, local):
    """Run the checks another command would run before CATEGORY"""
    ui = obj['ui']
    try:
        result = doctor_commands.preflight(category, ui=ui, system=obj['system'], local=local)
    except PreconditionError as e:
        ui.error(e)
        sys.exit(1)

    _finish(ui, result)


@cli.command('show-config')
def show_config():
    """Show current Sitekeeper settings"""
    show_config_summary()


def main():
    cli()


if __name__ == '__main__':
    main()
