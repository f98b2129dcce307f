# core/auth/session.py
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, UTC
from typing import Optional
from uuid import uuid4

from jose import JWTError, jwt

from core.exceptions import AuthError
from core.navigation import LANDING_PATH, SIGN_IN_PATH, Redirect
from core.sa.repositories.session import SessionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """A signed-in user as issued by the auth service."""
    user_id: str
    session_id: Optional[str] = None
    email: Optional[str] = None


class AuthClient:
    """Issues and validates bearer tokens for identities.

    Tokens are HS256 JWTs: ``sub`` carries the user id, ``jti`` the session
    id that sign-out revokes.
    """

    def __init__(self, secret: str, sessions: SessionRepository, algorithm: str = "HS256"):
        if not secret:
            raise AuthError("A JWT secret is required")
        self.secret = secret
        self.sessions = sessions
        self.algorithm = algorithm

    def issue_token(self, user_id: str, expires_in: int = 3600, email: Optional[str] = None) -> str:
        """Create a bearer token for a user.

        Args:
            user_id: Identity to embed in the token
            expires_in: Token lifetime in seconds
            email: Optional email claim

        Returns:
            Encoded JWT
        """
        if not user_id:
            raise AuthError("user_id is required")
        now = datetime.now(UTC)
        claims = {
            "sub": user_id,
            "jti": uuid4().hex,
            "iat": now,
            "exp": now + timedelta(seconds=expires_in),
        }
        if email:
            claims["email"] = email
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def resolve(self, token: Optional[str]) -> Optional[Identity]:
        """Turn a bearer token into an identity.

        Returns None for a missing, malformed, expired or signed-out token.
        """
        if not token:
            return None
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug(f"Rejected token: {str(e)}")
            return None

        user_id = claims.get("sub")
        if not user_id:
            return None
        session_id = claims.get("jti")
        if session_id and self.sessions.is_revoked(session_id):
            return None
        return Identity(user_id=user_id, session_id=session_id, email=claims.get("email"))

    def revoke(self, identity: Identity) -> None:
        """Sign a session out"""
        if identity.session_id is None:
            logger.warning(f"Token of user {identity.user_id} has no session id, nothing to revoke")
            return
        self.sessions.revoke(identity.session_id, identity.user_id)
        logger.info(f"Signed out session {identity.session_id} of user {identity.user_id}")


class SessionContext:
    """The current identity (or none) for one application root.

    Views receive this object in their constructor and only read it; sign-out
    is the single operation that changes it.
    """

    def __init__(self, identity: Optional[Identity] = None, auth: Optional[AuthClient] = None):
        self._identity = identity
        self._auth = auth

    @classmethod
    def from_token(cls, token: Optional[str], auth: AuthClient) -> "SessionContext":
        return cls(auth.resolve(token), auth)

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def require(self) -> Optional[Redirect]:
        """Gate for protected views: a sign-in redirect when nobody is signed in."""
        if self._identity is None:
            return Redirect(SIGN_IN_PATH)
        return None

    def sign_out(self) -> Redirect:
        """End the session and send the caller to the landing page."""
        if self._identity is not None and self._auth is not None:
            self._auth.revoke(self._identity)
        self._identity = None
        return Redirect(LANDING_PATH)
