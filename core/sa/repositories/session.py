# core/sa/repositories/session.py
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import DataServiceError
from ..models import RevokedSession

class SessionRepository:
    """Tracks signed-out session ids."""

    def __init__(self, session: Session):
        self.session = session

    def revoke(self, jti: str, user_id: str) -> None:
        """Mark a session id as signed out. Revoking twice is a no-op."""
        if self.is_revoked(jti):
            return
        self.session.add(RevokedSession(jti=jti, user_id=user_id))
        try:
            self.session.commit()
        except IntegrityError:
            # Concurrent sign-out of the same session
            self.session.rollback()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise DataServiceError(str(e)) from e

    def is_revoked(self, jti: str) -> bool:
        try:
            return self.session.get(RevokedSession, jti) is not None
        except SQLAlchemyError as e:
            self.session.rollback()
            raise DataServiceError(str(e)) from e
