"""Core app configuration, database session and signing policy."""

from app.core.config import get_settings, settings
from app.core.database import SessionLocal, get_db
from app.core.tokens import TokenConfig

__all__ = ["SessionLocal", "TokenConfig", "get_db", "get_settings", "settings"]
