# api/dependencies.py
"""
Dependency injection for the API routes.

Every request gets its own database session, session context and view
objects; nothing here is a module-level singleton.
"""
from typing import Iterator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from core.auth import AuthClient, SessionContext
from core.config import Settings
from core.sa.database import Database
from core.sa.repositories import BookRepository, ReadingListRepository, SessionRepository
from core.storage import LocalObjectStore
from core.views import CatalogView, IngestionView, ReaderView, ReadingListView

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_store(request: Request) -> LocalObjectStore:
    return request.app.state.store


def get_db(database: Database = Depends(get_database)) -> Iterator[Session]:
    """Get a database session.

    The session is closed when the request is complete.

    Yields:
        Session: A SQLAlchemy session
    """
    session = database.get_session()
    try:
        yield session
    finally:
        session.close()


def get_auth_client(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthClient:
    return AuthClient(settings.jwt_secret, SessionRepository(db), algorithm=settings.jwt_algorithm)


def get_session_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthClient = Depends(get_auth_client),
) -> SessionContext:
    token = credentials.credentials if credentials else None
    return SessionContext.from_token(token, auth)


def get_catalog_view(
    session: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> CatalogView:
    return CatalogView(session, BookRepository(db), ReadingListRepository(db))


def get_reader_view(
    session: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
    store: LocalObjectStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> ReaderView:
    return ReaderView(
        session,
        BookRepository(db),
        ReadingListRepository(db),
        store,
        signed_url_expiry=settings.signed_url_ttl,
    )


def get_reading_list_view(
    session: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
) -> ReadingListView:
    return ReadingListView(session, ReadingListRepository(db))


def get_ingestion_view(
    session: SessionContext = Depends(get_session_context),
    db: Session = Depends(get_db),
    store: LocalObjectStore = Depends(get_store),
) -> IngestionView:
    return IngestionView(session, BookRepository(db), store)
