# core/views/catalog.py
import logging

from core.auth.session import SessionContext
from core.exceptions import BookNestError
from core.models.book import BookSummary
from core.models.view import CatalogCard, CatalogState
from core.navigation import book_path
from core.sa.repositories.book import BookRepository
from core.sa.repositories.reading_list import ReadingListRepository
from .base import ReadingListActions

logger = logging.getLogger(__name__)


class CatalogView(ReadingListActions):
    """The library page: every book, newest first, with list shortcuts on each card."""

    def __init__(
        self,
        session: SessionContext,
        books: BookRepository,
        reading_lists: ReadingListRepository,
    ):
        super().__init__(session, reading_lists)
        self.books = books

    def load(self) -> CatalogState:
        """Fetch all books.

        A failing fetch never raises: the state comes back empty with an error
        notification.
        """
        state = CatalogState()
        if self._gate(state):
            return state

        try:
            books = self.books.list_all()
        except BookNestError as e:
            logger.warning(f"Catalog fetch failed: {str(e)}")
            state.notify_error("Error loading books", str(e))
            return state

        state.books = [
            CatalogCard(**BookSummary.model_validate(book).model_dump(), link=book_path(book.id))
            for book in books
        ]
        return state

    def open_book(self, book_id: str) -> str:
        """Navigation target of a card click"""
        return book_path(book_id)
