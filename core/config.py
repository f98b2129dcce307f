# core/config.py
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",   # Vite dev server
    "http://localhost:4173",   # Vite preview
    "http://127.0.0.1:5173",
    "http://localhost",
]


@dataclass
class Settings:
    """Application settings loaded from environment."""

    # Database
    database_url: str = "sqlite:///booknest.db"

    # Object storage
    storage_root: str = "data/storage"
    public_url: str = "http://localhost:8000"

    # Auth
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    token_ttl: int = 3600

    # Signed content URLs
    signed_url_ttl: int = 3600

    # HTTP
    cors_origins: List[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """Load settings from environment variables (and a .env file if present)."""
        load_dotenv(env_file)

        origins = os.getenv("BOOKNEST_CORS_ORIGINS")
        return cls(
            database_url=os.getenv("DATABASE_URL", cls.database_url),
            storage_root=os.getenv("BOOKNEST_STORAGE_ROOT", cls.storage_root),
            public_url=os.getenv("BOOKNEST_PUBLIC_URL", cls.public_url).rstrip("/"),
            jwt_secret=os.getenv("BOOKNEST_JWT_SECRET", cls.jwt_secret),
            jwt_algorithm=os.getenv("BOOKNEST_JWT_ALGORITHM", cls.jwt_algorithm),
            token_ttl=int(os.getenv("BOOKNEST_TOKEN_TTL", cls.token_ttl)),
            signed_url_ttl=int(os.getenv("BOOKNEST_SIGNED_URL_TTL", cls.signed_url_ttl)),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()] if origins else list(DEFAULT_CORS_ORIGINS),
            log_level=os.getenv("BOOKNEST_LOG_LEVEL", cls.log_level).upper(),
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings.from_env()
