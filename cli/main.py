# cli/main.py
import logging
import click
from core.config import get_settings
from .commands.db import db
from .commands.book import book
from .commands.lists import lists
from .commands.token import token
from .commands.serve import serve

@click.group()
@click.option('--verbose/--no-verbose', default=False, help='Log debug output')
def cli(verbose: bool):
    """BookNest CLI"""
    level = logging.DEBUG if verbose else getattr(logging, get_settings().log_level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

cli.add_command(db)
cli.add_command(book)
cli.add_command(lists)
cli.add_command(token)
cli.add_command(serve)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
