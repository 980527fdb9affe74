"""Core app configuration, database and error taxonomy."""

from app.core.config import get_settings, settings
from app.core.database import get_db
from app.core.errors import (
    AppError,
    AuthError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)

__all__ = [
    "AppError",
    "AuthError",
    "NotFoundError",
    "UpstreamError",
    "ValidationError",
    "get_db",
    "get_settings",
    "settings",
]
