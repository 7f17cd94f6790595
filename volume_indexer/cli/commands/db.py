# volume_indexer/cli/commands/db.py

import click


@click.group()
def db():
    """Database administration"""
    pass


@db.command('init')
@click.pass_context
def init(ctx):
    """Create all tables that do not exist yet"""
    cli_context = ctx.obj['cli_context']
    db_manager = cli_context.db_manager
    try:
        db_manager.create_tables()
    except Exception as e:
        raise click.ClickException(f"Database initialization failed: {e}")

    if not db_manager.health_check():
        raise click.ClickException("Database health check failed")
    click.echo(f"✅ Database tables ready ({db_manager.backend_name})")
