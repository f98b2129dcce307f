# core/sa/repositories/book.py
import logging
from typing import Optional, List
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import DataServiceError, ValidationError
from ..models import Book

logger = logging.getLogger(__name__)

class BookRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, book_id: str) -> Optional[Book]:
        """Get a book by its ID.

        Args:
            book_id: The ID of the book

        Returns:
            The Book object if found, None otherwise

        Raises:
            DataServiceError: If the query fails
        """
        try:
            return self.session.query(Book).filter(Book.id == book_id).one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching book {book_id}: {str(e)}")
            self.session.rollback()
            raise DataServiceError(str(e)) from e

    def list_all(self, limit: Optional[int] = None, offset: int = 0) -> List[Book]:
        """List every book, newest first.

        Args:
            limit: Maximum number of books to return (all when None)
            offset: Number of books to skip

        Returns:
            List of Book objects ordered by creation time descending

        Raises:
            DataServiceError: If the query fails
        """
        try:
            query = self.session.query(Book).order_by(desc(Book.created_at))
            if offset:
                query = query.offset(offset)
            if limit is not None:
                query = query.limit(limit)
            return query.all()
        except SQLAlchemyError as e:
            logger.error(f"Error listing books: {str(e)}")
            self.session.rollback()
            raise DataServiceError(str(e)) from e

    def count_books(self) -> int:
        """Count all books in the catalog"""
        try:
            return self.session.query(Book).count()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise DataServiceError(str(e)) from e

    def create_book(
        self,
        title: str,
        author: str,
        description: Optional[str] = None,
        genre: Optional[str] = None,
        published_year: Optional[int] = None,
        page_count: Optional[int] = None,
        cover_image_url: Optional[str] = None,
        pdf_file_path: Optional[str] = None,
    ) -> Book:
        """Create a new catalog entry.

        Args:
            title: Book title, must not be blank
            author: Author name, must not be blank
            description: Optional description
            genre: Optional genre
            published_year: Optional year of publication
            page_count: Optional number of pages
            cover_image_url: Optional public URL of the cover image
            pdf_file_path: Optional storage path of the PDF in the books bucket

        Returns:
            The created Book object

        Raises:
            ValidationError: If title or author is blank
            DataServiceError: If the insert fails
        """
        if not title or not title.strip():
            raise ValidationError("Title is required")
        if not author or not author.strip():
            raise ValidationError("Author is required")

        book = Book(
            title=title.strip(),
            author=author.strip(),
            description=description,
            genre=genre,
            published_year=published_year,
            page_count=page_count,
            cover_image_url=cover_image_url,
            pdf_file_path=pdf_file_path,
        )
        self.session.add(book)
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error creating book {title!r}: {str(e)}")
            self.session.rollback()
            raise DataServiceError(str(e)) from e
        return book
