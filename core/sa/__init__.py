# core/sa/__init__.py
from .database import Database
from .models import (
    Base, Book, ReadingListEntry, ReadingStatus, RevokedSession
)

__all__ = [
    'Database',
    'Base',
    'Book',
    'ReadingListEntry',
    'ReadingStatus',
    'RevokedSession',
]
