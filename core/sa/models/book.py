# core/sa/models/book.py
from uuid import uuid4
from sqlalchemy import String, Integer, Text, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin

def generate_id() -> str:
    return str(uuid4())

class Book(Base, TimestampMixin):
    __tablename__ = 'books'

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    genre: Mapped[str | None] = mapped_column(String(100), nullable=True)
    published_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    page_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cover_image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    pdf_file_path: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # Relationships
    reading_list_entries = relationship('ReadingListEntry', back_populates='book')

    __table_args__ = (
        Index('idx_books_created_at', 'created_at'),
    )

    def __repr__(self) -> str:
        return f"<Book {self.id} {self.title!r}>"
