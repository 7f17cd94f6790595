# volume_indexer/cli/commands/pools.py

import click

from ...core.config import load_registry


@click.group()
def pools():
    """Pool registry management"""
    pass


@pools.command('import')
@click.argument('registry_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--dry-run', is_flag=True, help='Validate the file without writing')
@click.pass_context
def import_pools(ctx, registry_file, dry_run):
    """Create or update pools and base pools from a YAML registry file

    Examples:
        volume-indexer pools import pools.yaml
        volume-indexer pools import pools.yaml --dry-run
    """
    try:
        registry = load_registry(registry_file)
    except Exception as e:
        raise click.ClickException(f"Invalid registry file: {e}")

    click.echo(f"📋 Found {len(registry.pools)} pools and {len(registry.base_pools)} base pools")

    if dry_run:
        for pool in registry.pools:
            click.echo(f"   • {pool.address} ({pool.pool_type.value}, {len(pool.coins)} coins)")
        for base_pool in registry.base_pools:
            kind = "virtual lending" if base_pool.is_virtual else "base"
            click.echo(f"   • {base_pool.address} ({kind}, {len(base_pool.coins)} coins)")
        click.echo("🔍 DRY RUN - nothing written")
        return

    cli_context = ctx.obj['cli_context']
    db_manager = cli_context.db_manager
    db_manager.create_tables()

    results = {"created": 0, "updated": 0, "unchanged": 0}
    try:
        with db_manager.get_transaction() as session:
            for base_pool in registry.base_pools:
                result = db_manager.get_base_pool_repo().upsert(session, base_pool)
                results[result["action"]] += 1
            for pool in registry.pools:
                result = db_manager.get_pool_repo().upsert(session, pool)
                results[result["action"]] += 1
    except Exception as e:
        raise click.ClickException(f"Pool import failed: {e}")

    click.echo("\n📊 Import Summary:")
    click.echo(f"   Created: {results['created']}")
    click.echo(f"   Updated: {results['updated']}")
    click.echo(f"   Unchanged: {results['unchanged']}")


@pools.command('show')
@click.argument('address')
@click.pass_context
def show_pool(ctx, address):
    """Show a pool's layout and cumulative volume"""
    db_manager = ctx.obj['cli_context'].db_manager
    try:
        with db_manager.get_session() as session:
            pool = db_manager.get_pool_repo().get_by_address(session, address)
            if pool is None:
                raise click.ClickException(f"Pool not found: {address}")
            info = pool.to_info()
    except ValueError as e:
        raise click.ClickException(str(e))

    click.echo(f"🏊 Pool {info.address}" + (f" ({info.name})" if info.name else ""))
    click.echo(f"   Type: {info.pool_type.value}  Asset type: {info.asset_type.name}  V2: {info.is_v2}")
    if info.base_pool:
        click.echo(f"   Base pool: {info.base_pool}")
    for index, (coin, decimals) in enumerate(zip(info.coins, info.coin_decimals)):
        click.echo(f"   [{index}] {coin} ({decimals} decimals)")
    click.echo(f"   Cumulative volume: {info.cumulative_volume}")
    click.echo(f"   Cumulative volume USD: {info.cumulative_volume_usd}")
