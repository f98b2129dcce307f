# core/views/reading_list.py
import logging
from typing import List, Optional

from core.auth.session import SessionContext
from core.exceptions import BookNestError, NotFoundError
from core.models.book import BookSummary
from core.models.view import Notification, ReadingListItem, ReadingListState
from core.navigation import book_path
from core.sa.models import ReadingListEntry, ReadingStatus
from core.sa.repositories.reading_list import ReadingListRepository
from .base import ProtectedView

logger = logging.getLogger(__name__)


def partition_by_status(entries: List[ReadingListEntry]) -> ReadingListState:
    """Split memberships into the two lists.

    Entries whose status is neither list value are left out of both.
    """
    state = ReadingListState()
    for entry in entries:
        item = ReadingListItem(
            id=entry.id,
            status=entry.status,
            book=BookSummary.model_validate(entry.book),
            link=book_path(entry.book_id),
        )
        if entry.status == ReadingStatus.CURRENTLY_READING.value:
            state.currently_reading.append(item)
        elif entry.status == ReadingStatus.WANT_TO_READ.value:
            state.want_to_read.append(item)
        else:
            logger.debug(f"Skipping reading list entry {entry.id} with status {entry.status!r}")
    return state


class ReadingListView(ProtectedView):
    """The "My Lists" page."""

    def __init__(self, session: SessionContext, reading_lists: ReadingListRepository):
        super().__init__(session)
        self.reading_lists = reading_lists
        self._snapshot: Optional[ReadingListState] = None

    def load(self) -> ReadingListState:
        """Fetch the user's memberships and split them by status"""
        state = ReadingListState()
        if self._gate(state):
            return state

        try:
            entries = self.reading_lists.list_for_user(self.user_id)
        except BookNestError as e:
            logger.warning(f"Reading list fetch failed for {self.user_id}: {str(e)}")
            state.notify_error("Error loading lists", str(e))
            return state

        self._snapshot = partition_by_status(entries)
        return self._snapshot.model_copy(deep=True)

    def remove(self, entry_id: str) -> ReadingListState:
        """Delete a membership and reload both lists.

        On failure the last loaded lists are returned untouched with an error
        notification. When nothing was loaded yet, the current lists are
        fetched for that response instead.
        """
        state = ReadingListState()
        if self._gate(state):
            return state

        try:
            if not self.reading_lists.delete_entry(entry_id, user_id=self.user_id):
                raise NotFoundError("Reading list entry not found")
        except BookNestError as e:
            logger.error(f"Remove of reading list entry {entry_id} failed: {str(e)}")
            state = self._last_loaded()
            state.notify_error("Error", str(e))
            return state

        state = self.load()
        state.notifications.insert(0, Notification(title="Removed", description="Book removed from list"))
        return state

    def _last_loaded(self) -> ReadingListState:
        if self._snapshot is None:
            return self.load()
        return self._snapshot.model_copy(deep=True)
