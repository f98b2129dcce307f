# api/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import admin, auth, books, lists, storage
from core.config import Settings, get_settings
from core.exceptions import BookNestError
from core.sa.database import Database
from core.storage import LocalObjectStore

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    store: Optional[LocalObjectStore] = None,
) -> FastAPI:
    """Create and configure the API.

    Args:
        settings: Application settings. If None, loads from environment.
        database: Database to use instead of one built from settings
        store: Object store to use instead of one built from settings
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    database = database or Database(settings.database_url)
    store = store or LocalObjectStore(
        settings.storage_root,
        secret=settings.jwt_secret,
        public_url=settings.public_url,
        algorithm=settings.jwt_algorithm,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Initialize database on startup
        app.state.database.init_db()
        logger.info("BookNest API started")
        yield
        app.state.database.dispose()
        logger.info("BookNest API stopped")

    app = FastAPI(title="BookNest", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(BookNestError)
    async def booknest_error_handler(request: Request, exc: BookNestError):
        logger.error(f"Unhandled error on {request.url.path}: {exc}")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)})

    app.include_router(auth.router, prefix=API_PREFIX)
    app.include_router(books.router, prefix=API_PREFIX)
    app.include_router(lists.router, prefix=API_PREFIX)
    app.include_router(admin.router, prefix=API_PREFIX)
    app.include_router(storage.router)

    @app.get("/")
    async def root():
        return {"name": "BookNest", "status": "running"}

    return app
