# cli/commands/db.py
import click
from core.sa.database import Database

@click.group()
def db():
    """Database commands"""
    pass

@db.command()
def init():
    """Create all tables

    Example:
        booknest db init
    """
    database = Database()
    try:
        database.init_db()
        click.echo(click.style("Database initialized", fg='green'))
        click.echo(f"  Tables: {', '.join(sorted(database.table_names()))}")
    finally:
        database.dispose()

@db.command()
@click.confirmation_option(prompt='This deletes every book and reading list. Continue?')
def drop():
    """Drop all tables"""
    database = Database()
    try:
        database.drop_db()
        click.echo(click.style("Database dropped", fg='yellow'))
    finally:
        database.dispose()
