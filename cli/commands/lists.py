# cli/commands/lists.py
import click
from core.sa.database import Database
from typing import List
from core.models.view import ReadingListItem
from core.sa.models import ReadingStatus
from core.sa.repositories import ReadingListRepository
from core.views import ReadingListView, status_label
from core.views.base import ReadingListActions
from ..utils import operator_context, print_notifications

@click.group()
def lists():
    """Reading list commands"""
    pass

def _print_section(label: str, items: List[ReadingListItem]):
    click.echo(click.style(f"\n{label} ({len(items)})", fg='blue', bold=True))
    for item in items:
        click.echo(click.style(f"  {item.book.title}", fg='cyan') + f" by {item.book.author}  [{item.id}]")

@lists.command()
@click.argument('user_id')
def show(user_id: str):
    """Show a user's reading lists"""
    database = Database()
    session = database.get_session()
    try:
        view = ReadingListView(operator_context(user_id), ReadingListRepository(session))
        state = view.load()
        print_notifications(state)
        if state.has_errors:
            raise click.exceptions.Exit(1)
        _print_section(status_label(ReadingStatus.CURRENTLY_READING), state.currently_reading)
        _print_section(status_label(ReadingStatus.WANT_TO_READ), state.want_to_read)
    finally:
        session.close()
        database.dispose()

@lists.command()
@click.argument('user_id')
@click.argument('book_id')
@click.option('--status', type=click.Choice([s.value for s in ReadingStatus]),
              default=ReadingStatus.WANT_TO_READ.value, show_default=True, help='List to put the book on')
def add(user_id: str, book_id: str, status: str):
    """Put a book on one of a user's lists"""
    database = Database()
    session = database.get_session()
    try:
        actions = ReadingListActions(operator_context(user_id), ReadingListRepository(session))
        result = actions.add_to_list(book_id, status)
        print_notifications(result)
        if result.has_errors:
            raise click.exceptions.Exit(1)
    finally:
        session.close()
        database.dispose()

@lists.command()
@click.argument('user_id')
@click.argument('entry_id')
def remove(user_id: str, entry_id: str):
    """Remove a book from a user's lists"""
    database = Database()
    session = database.get_session()
    try:
        view = ReadingListView(operator_context(user_id), ReadingListRepository(session))
        state = view.remove(entry_id)
        print_notifications(state)
        if state.has_errors:
            raise click.exceptions.Exit(1)
    finally:
        session.close()
        database.dispose()
