"""
Core CLI implementation for the shopdb package.
"""

from pathlib import Path
from typing import Optional

import click

from ..config import DatabaseConfig
from .logging import setup_logging, get_logger
from ..commands import DemoCommand, InitDatabaseCommand, PoolStatsCommand, TestConnectionCommand

@click.group()
@click.option('--debug', is_flag=True, help='Enable detailed debug output')
@click.option('--env-file', type=click.Path(dir_okay=False, path_type=Path), help='Settings file (defaults to .env)')
@click.pass_context
def cli(ctx, debug: bool, env_file: Optional[Path]):
    """Product database toolkit"""
    # Store debug flag in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug

    # Setup logging with debug flag
    setup_logging(debug=debug)

    # Get logger for CLI
    logger = get_logger('cli')
    if debug:
        logger.debug("Debug mode enabled")

    # Initialize config and store in context
    try:
        config = DatabaseConfig.load(env_file)
        ctx.obj['config'] = config
        if debug:
            logger.debug(f"Using settings from {config.source.value}")
    except ValueError as e:
        click.echo(f"Error initializing configuration: {str(e)}", err=True)
        ctx.exit(1)

@cli.command('test-connection')
@click.pass_context
def test_connection(ctx):
    """Test database connectivity"""
    TestConnectionCommand(ctx.obj['config']).execute()

@cli.command('init-db')
@click.pass_context
def init_db(ctx):
    """Create the products table and load sample data"""
    InitDatabaseCommand(ctx.obj['config']).execute()

@cli.command()
@click.pass_context
def demo(ctx):
    """Run every product operation against the database"""
    DemoCommand(ctx.obj['config']).execute()

@cli.command('pool-stats')
@click.pass_context
def pool_stats(ctx):
    """Show connection pool occupancy"""
    PoolStatsCommand(ctx.obj['config']).execute()
