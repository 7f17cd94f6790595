# volume_indexer/cli/commands/volume.py

import click
from datetime import datetime, timezone

from ...database.types import SnapshotPeriod


def _parse_period(ctx, param, value) -> SnapshotPeriod:
    try:
        return SnapshotPeriod.from_name(value)
    except ValueError:
        raise click.BadParameter(f"Unknown period '{value}'. Valid: hour, day, week")


def _format_time(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime('%Y-%m-%d %H:%M')


@click.group()
def volume():
    """Swap volume snapshots"""
    pass


@volume.command('show')
@click.argument('pool')
@click.option('--period', default='day', callback=_parse_period, help='hour, day or week')
@click.option('--limit', default=24, type=int, help='Number of most recent buckets')
@click.pass_context
def show(ctx, pool, period, limit):
    """Show the most recent snapshots of a pool"""
    db_manager = ctx.obj['cli_context'].db_manager
    with db_manager.get_session() as session:
        snapshots = db_manager.get_snapshot_repo().get_latest(session, pool, period, limit)

    if not snapshots:
        click.echo(f"No {period.value} snapshots for {pool}")
        return

    click.echo(f"📈 {period.value} snapshots for {pool.lower()}")
    click.echo(f"{'bucket start':<17} {'swaps':>6} {'volume':>24} {'volume USD':>24}")
    for snapshot in reversed(snapshots):
        click.echo(f"{_format_time(snapshot.timestamp):<17} {snapshot.count:>6} "
                   f"{snapshot.volume:>24.6f} {snapshot.volume_usd:>24.2f}")


@click.group()
def swaps():
    """Swap records"""
    pass


@swaps.command('list')
@click.argument('pool')
@click.option('--limit', default=20, type=int, help='Number of most recent swaps')
@click.pass_context
def list_swaps(ctx, pool, limit):
    """List the most recent swaps of a pool"""
    db_manager = ctx.obj['cli_context'].db_manager
    with db_manager.get_session() as session:
        records = [swap.to_record() for swap in db_manager.get_swap_repo().get_by_pool(session, pool, limit)]

    if not records:
        click.echo(f"No swaps recorded for {pool}")
        return

    for record in records:
        click.echo(f"{record.block_number} {record.tx_hash[:12]}… "
                   f"sold {record.amount_sold} {record.token_sold[:8]}… "
                   f"bought {record.amount_bought} {record.token_bought[:8]}… "
                   f"(${record.volume_usd:.2f})")
