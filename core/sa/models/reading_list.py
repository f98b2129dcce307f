# core/sa/models/reading_list.py
from enum import Enum
from sqlalchemy import String, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin
from .book import generate_id

class ReadingStatus(str, Enum):
    WANT_TO_READ = "want_to_read"
    CURRENTLY_READING = "currently_reading"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

STATUS_LABELS = {
    ReadingStatus.WANT_TO_READ: "Want to Read",
    ReadingStatus.CURRENTLY_READING: "Currently Reading",
}

class ReadingListEntry(Base, TimestampMixin):
    """One user's membership of a book in a reading list.

    At most one entry exists per (user_id, book_id); writing a new status for
    the same pair overwrites the old one.
    """
    __tablename__ = 'reading_lists'

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    book_id: Mapped[str] = mapped_column(String(36), ForeignKey('books.id', ondelete='CASCADE'), nullable=False)
    # Plain string so rows written by other clients with unknown statuses still load
    status: Mapped[str] = mapped_column(String(50), nullable=False)

    # Relationships
    book = relationship('Book', back_populates='reading_list_entries')

    __table_args__ = (
        UniqueConstraint('user_id', 'book_id', name='uix_reading_lists_user_book'),
        Index('idx_reading_lists_user_id', 'user_id'),
    )
