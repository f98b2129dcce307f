from .book import BookRepository
from .reading_list import ReadingListRepository
from .session import SessionRepository

__all__ = ['BookRepository', 'ReadingListRepository', 'SessionRepository']
