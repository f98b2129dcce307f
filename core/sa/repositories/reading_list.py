# core/sa/repositories/reading_list.py
import logging
from datetime import datetime, UTC
from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from core.exceptions import DataServiceError, NotFoundError, ValidationError
from ..models import Book, ReadingListEntry, ReadingStatus
from ..models.book import generate_id

logger = logging.getLogger(__name__)

class ReadingListRepository:
    """Repository for reading list memberships."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_by_id(self, entry_id: str) -> Optional[ReadingListEntry]:
        """Get a membership by its ID"""
        try:
            return self.session.query(ReadingListEntry).filter(ReadingListEntry.id == entry_id).one_or_none()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise DataServiceError(str(e)) from e

    def get_for_user_book(self, user_id: str, book_id: str) -> Optional[ReadingListEntry]:
        """Get the membership for a (user, book) pair, reloading it from the database"""
        return (
            self.session.query(ReadingListEntry)
            .populate_existing()
            .filter(
                ReadingListEntry.user_id == user_id,
                ReadingListEntry.book_id == book_id
            )
            .one_or_none()
        )

    def list_for_user(self, user_id: str) -> List[ReadingListEntry]:
        """Get every membership owned by a user with its book loaded.

        Args:
            user_id: The identity owning the memberships

        Returns:
            List of ReadingListEntry objects, newest first, whatever their status

        Raises:
            DataServiceError: If the query fails
        """
        try:
            return (
                self.session.query(ReadingListEntry)
                .populate_existing()
                .options(joinedload(ReadingListEntry.book))
                .filter(ReadingListEntry.user_id == user_id)
                .order_by(desc(ReadingListEntry.created_at))
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Error listing reading lists for {user_id}: {str(e)}")
            self.session.rollback()
            raise DataServiceError(str(e)) from e

    def upsert_status(self, user_id: str, book_id: str, status: str) -> ReadingListEntry:
        """Add a book to a user's list, or overwrite the status if it is already listed.

        Args:
            user_id: The identity owning the membership
            book_id: The ID of the book
            status: One of the ReadingStatus values

        Returns:
            The single membership for the pair, carrying the new status

        Raises:
            ValidationError: If the status is not a known ReadingStatus
            NotFoundError: If the book does not exist
            DataServiceError: If the write fails
        """
        try:
            status = ReadingStatus(status).value
        except ValueError:
            raise ValidationError(f"Invalid reading list status: {status}")

        try:
            if self.session.get(Book, book_id) is None:
                raise NotFoundError("Book not found")

            insert = self._dialect_insert()
            if insert is not None:
                now = datetime.now(UTC)
                stmt = insert(ReadingListEntry).values(
                    id=generate_id(),
                    user_id=user_id,
                    book_id=book_id,
                    status=status,
                    created_at=now,
                    updated_at=now,
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=['user_id', 'book_id'],
                    set_={"status": stmt.excluded.status, "updated_at": now},
                )
                self.session.execute(stmt)
            else:
                self._update_or_create(user_id, book_id, status)

            self.session.commit()
            return self.get_for_user_book(user_id, book_id)
        except SQLAlchemyError as e:
            logger.error(f"Error writing status {status} for user {user_id}, book {book_id}: {str(e)}")
            self.session.rollback()
            raise DataServiceError(str(e)) from e

    def delete_entry(self, entry_id: str, user_id: Optional[str] = None) -> bool:
        """Delete a membership.

        Args:
            entry_id: The ID of the membership to delete
            user_id: When given, only a membership owned by this user is deleted

        Returns:
            True if the membership was deleted, False if not found
        """
        try:
            query = self.session.query(ReadingListEntry).filter(ReadingListEntry.id == entry_id)
            if user_id is not None:
                query = query.filter(ReadingListEntry.user_id == user_id)
            result = query.delete(synchronize_session=False)
            self.session.commit()
            return result > 0
        except SQLAlchemyError as e:
            logger.error(f"Error deleting reading list entry {entry_id}: {str(e)}")
            self.session.rollback()
            raise DataServiceError(str(e)) from e

    def _dialect_insert(self):
        dialect = self.session.get_bind().dialect.name
        if dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert
            return insert
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert
            return insert
        return None

    def _update_or_create(self, user_id: str, book_id: str, status: str) -> None:
        entry = (
            self.session.query(ReadingListEntry)
            .filter(
                ReadingListEntry.user_id == user_id,
                ReadingListEntry.book_id == book_id
            )
            .with_for_update()
            .first()
        )
        if entry:
            entry.status = status
        else:
            self.session.add(ReadingListEntry(user_id=user_id, book_id=book_id, status=status))
