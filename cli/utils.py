# cli/utils.py
import click
from core.auth import Identity, SessionContext
from core.config import get_settings
from core.models.view import NotificationVariant, ViewState
from core.sa.models import Book
from core.storage import LocalObjectStore

def open_store() -> LocalObjectStore:
    """Object store built from the configured settings"""
    settings = get_settings()
    return LocalObjectStore(
        settings.storage_root,
        secret=settings.jwt_secret,
        public_url=settings.public_url,
        algorithm=settings.jwt_algorithm,
    )

def operator_context(user_id: str) -> SessionContext:
    """Session context for commands run on behalf of a user from the shell"""
    return SessionContext(Identity(user_id=user_id))

def print_notifications(state: ViewState) -> None:
    """Echo a view's notifications, errors in red on stderr"""
    for note in state.notifications:
        is_error = note.variant == NotificationVariant.DESTRUCTIVE
        line = click.style(note.title, fg='red' if is_error else 'green', bold=True)
        if note.description:
            line += click.style(f": {note.description}", fg='red' if is_error else 'blue')
        click.echo(line, err=is_error)

def print_book(book: Book) -> None:
    click.echo(click.style(book.title, fg='cyan', bold=True) + click.style(f" by {book.author}", fg='blue'))
    click.echo(f"  ID: {book.id}")
    if book.genre:
        click.echo(f"  Genre: {book.genre}")
    if book.published_year:
        click.echo(f"  Published: {book.published_year}")
    if book.page_count:
        click.echo(f"  Pages: {book.page_count}")
    click.echo(f"  PDF: {book.pdf_file_path or '-'}")
    if book.cover_image_url:
        click.echo(f"  Cover: {book.cover_image_url}")
