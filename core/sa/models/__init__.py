# core/sa/models/__init__.py
from .base import Base, TimestampMixin
from .book import Book
from .reading_list import ReadingListEntry, ReadingStatus, STATUS_LABELS
from .session import RevokedSession

__all__ = [
    'Base',
    'TimestampMixin',
    'Book',
    'ReadingListEntry',
    'ReadingStatus',
    'STATUS_LABELS',
    'RevokedSession',
]
