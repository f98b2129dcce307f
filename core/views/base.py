# core/views/base.py
import logging
from typing import Optional, TypeVar

from core.auth.session import SessionContext
from core.exceptions import BookNestError
from core.models.view import ListActionResult, ViewState
from core.sa.models import ReadingStatus
from core.sa.repositories.reading_list import ReadingListRepository

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=ViewState)


def status_label(status: str) -> str:
    """Human-readable name of a list status"""
    return ReadingStatus(status).label


class ProtectedView:
    """Base for views that need a signed-in identity."""

    def __init__(self, session: SessionContext):
        self.session = session

    @property
    def user_id(self) -> str:
        return self.session.identity.user_id

    def _gate(self, state: S) -> Optional[S]:
        """Return ``state`` with a sign-in redirect if nobody is signed in, else None"""
        redirect = self.session.require()
        if redirect is None:
            return None
        state.redirect = redirect.path
        return state


class ReadingListActions(ProtectedView):
    """Add-to-list behaviour shared by the catalog and reader views."""

    def __init__(self, session: SessionContext, reading_lists: ReadingListRepository):
        super().__init__(session)
        self.reading_lists = reading_lists

    def add_to_list(self, book_id: str, status: str) -> ListActionResult:
        """Put a book on one of the user's lists, replacing any earlier status.

        Args:
            book_id: The ID of the book
            status: ``want_to_read`` or ``currently_reading``

        Returns:
            ListActionResult with a confirmation or the error message
        """
        result = ListActionResult()
        if self._gate(result):
            return result

        try:
            entry = self.reading_lists.upsert_status(self.user_id, book_id, status)
        except BookNestError as e:
            logger.error(f"Add to list failed for book {book_id}: {str(e)}")
            result.notify_error("Error", str(e))
            return result

        result.entry_id = entry.id
        result.status = entry.status
        result.notify("Added to list", f"Book added to {status_label(entry.status)}")
        return result
