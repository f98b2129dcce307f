# cli/commands/book.py
import click
from core.sa.database import Database
from pathlib import Path
from typing import Optional
from core.exceptions import BookNestError
from core.sa.repositories import BookRepository
from core.utils.image import ImageDownloader
from core.views import IngestionView, SelectedFile
from ..utils import open_store, operator_context, print_book, print_notifications

@click.group()
def book():
    """Book related commands"""
    pass

@book.command('list')
@click.option('--limit', default=None, type=int, help='Limit number of books to show')
def list_books(limit: Optional[int]):
    """List the catalog, newest first"""
    database = Database()
    session = database.get_session()
    try:
        repo = BookRepository(session)
        books = repo.list_all(limit=limit)
        if not books:
            click.echo(click.style("No books in the catalog", fg='yellow'))
            return
        for book_obj in books:
            print_book(book_obj)
        click.echo(click.style(f"\n{repo.count_books()} books total", fg='blue'))
    except BookNestError as e:
        raise click.ClickException(str(e))
    finally:
        session.close()
        database.dispose()

@book.command()
@click.argument('pdf', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--title', required=True, help='Book title')
@click.option('--author', required=True, help='Author name')
@click.option('--description', default='', help='Short description')
@click.option('--genre', default='', help='Genre')
@click.option('--published-year', default='', help='Year of publication')
@click.option('--page-count', default='', help='Number of pages')
@click.option('--cover', type=click.Path(exists=True, dir_okay=False, path_type=Path), help='Cover image file')
@click.option('--cover-url', help='Download the cover image from this URL')
@click.option('--as-user', default='cli', show_default=True, help='User id recorded as the uploader')
def add(pdf: Path, title: str, author: str, description: str, genre: str, published_year: str,
        page_count: str, cover: Optional[Path], cover_url: Optional[str], as_user: str):
    """Upload a PDF and create its catalog entry

    Example:
        booknest book add dune.pdf --title Dune --author "Frank Herbert" --published-year 1965
        booknest book add dune.pdf --title Dune --author "Frank Herbert" --cover-url https://example.com/dune.jpg
    """
    if cover and cover_url:
        raise click.UsageError("Use either --cover or --cover-url, not both")

    cover_file = None
    if cover:
        cover_file = SelectedFile(filename=cover.name, data=cover.read_bytes())
    elif cover_url:
        try:
            image, filename = ImageDownloader().download_image(cover_url)
        except BookNestError as e:
            raise click.ClickException(str(e))
        cover_file = SelectedFile(filename=filename, data=image.data, content_type=image.content_type)

    database = Database()

    session = database.get_session()
    try:
        view = IngestionView(operator_context(as_user), BookRepository(session), open_store())
        view.update_form(
            title=title,
            author=author,
            description=description,
            genre=genre,
            published_year=published_year,
            page_count=page_count,
        )
        view.select_pdf(SelectedFile(filename=pdf.name, data=pdf.read_bytes(), content_type='application/pdf'))
        view.select_cover(cover_file)

        state = view.submit()
        print_notifications(state)
        if state.has_errors:
            raise click.exceptions.Exit(1)
        click.echo(f"  ID: {state.book.id}")
        click.echo(f"  PDF: {state.book.pdf_file_path}")
        if state.book.cover_image_url:
            click.echo(f"  Cover: {state.book.cover_image_url}")
    finally:
        session.close()
        database.dispose()
