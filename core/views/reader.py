# core/views/reader.py
import logging
from typing import Optional

from core.auth.session import SessionContext
from core.exceptions import BookNestError, NotFoundError
from core.models.book import BookDetail
from core.models.view import ReaderState
from core.navigation import LIBRARY_PATH
from core.sa.models import Book
from core.sa.repositories.book import BookRepository
from core.sa.repositories.reading_list import ReadingListRepository
from core.storage import BOOKS_BUCKET, LocalObjectStore
from .base import ReadingListActions

logger = logging.getLogger(__name__)

SIGNED_URL_EXPIRY = 3600


class ReaderView(ReadingListActions):
    """Detail page of one book with its PDF embedded."""

    def __init__(
        self,
        session: SessionContext,
        books: BookRepository,
        reading_lists: ReadingListRepository,
        store: LocalObjectStore,
        signed_url_expiry: int = SIGNED_URL_EXPIRY,
    ):
        super().__init__(session, reading_lists)
        self.books = books
        self.store = store
        self.signed_url_expiry = signed_url_expiry

    def load(self, book_id: str) -> ReaderState:
        """Fetch a book and a signed URL for its PDF.

        A missing book or a failed fetch redirects back to the library with a
        notification. A book without a PDF, or whose URL cannot be signed,
        renders without ``pdf_url``.
        """
        state = ReaderState()
        if self._gate(state):
            return state

        try:
            book = self.books.get_by_id(book_id)
            if book is None:
                raise NotFoundError("Book not found")
        except BookNestError as e:
            logger.warning(f"Could not load book {book_id}: {str(e)}")
            state.notify_error("Error loading book", str(e))
            state.redirect = LIBRARY_PATH
            return state

        state.book = BookDetail.model_validate(book)
        state.pdf_url = self.content_url(book)
        return state

    def content_url(self, book: Book) -> Optional[str]:
        """Signed URL of the book's PDF, or None when there is nothing to show"""
        if not book.pdf_file_path:
            return None
        try:
            return self.store.create_signed_url(BOOKS_BUCKET, book.pdf_file_path, self.signed_url_expiry)
        except BookNestError as e:
            logger.warning(f"Could not sign {book.pdf_file_path} for book {book.id}: {str(e)}")
            return None
