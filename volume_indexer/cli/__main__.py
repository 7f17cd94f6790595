# volume_indexer/cli/__main__.py

"""
Volume Indexer CLI

Usage: python -m volume_indexer.cli [command] [options]
"""

import click

from .context import CLIContext
from ..core.config import configure_logging
from .commands.db import db
from .commands.pools import pools
from .commands.process import process
from .commands.volume import volume, swaps


@click.group()
@click.option('--config', 'config_path', type=click.Path(dir_okay=False),
              help='Path to YAML configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config_path, verbose):
    """Volume Indexer - swap normalization and volume aggregation"""
    ctx.ensure_object(dict)
    try:
        cli_context = CLIContext(config_path)
    except Exception as e:
        raise click.ClickException(f"Failed to load configuration: {e}")

    configure_logging(cli_context.config, verbose=verbose)
    ctx.obj['cli_context'] = cli_context
    ctx.call_on_close(cli_context.shutdown)


cli.add_command(db)
cli.add_command(pools)
cli.add_command(process)
cli.add_command(volume)
cli.add_command(swaps)


if __name__ == '__main__':
    cli()
