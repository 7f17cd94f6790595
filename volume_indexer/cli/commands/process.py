# volume_indexer/cli/commands/process.py

import click

from ...utils.event_reader import ExchangeEventReader


@click.command()
@click.argument('events_file', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def process(ctx, events_file):
    """Process a JSON-lines file of exchange events in file order

    Examples:
        volume-indexer process events.jsonl
        volume-indexer --config config.yaml -v process events.jsonl
    """
    cli_context = ctx.obj['cli_context']
    try:
        cli_context.db_manager.create_tables()
        processor = cli_context.get_swap_processor()
        reader = ExchangeEventReader(events_file)
        stats = processor.process_events(reader)
    except Exception as e:
        raise click.ClickException(f"Processing failed: {e}")

    click.echo("📊 Processing Summary:")
    click.echo(f"   Events: {stats.events}")
    click.echo(f"   Swaps recorded: {stats.swaps}")
    click.echo(f"   Skipped: {stats.skipped_total}")
    for error_type, count in sorted(stats.skipped.items()):
        click.echo(f"      {error_type}: {count}")
    if reader.invalid_lines:
        click.echo(f"   Undecodable lines: {reader.invalid_lines}")
    for error in stats.errors[:10]:
        click.echo(f"   ❌ {error.error_type}: {error.message}")
