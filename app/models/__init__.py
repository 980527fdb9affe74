"""SQLAlchemy ORM models."""

from app.models.application import APPLICATION_STATUSES, Application, Document
from app.models.base import Base
from app.models.identity import Identity
from app.models.service import Service
from app.models.user import USER_ROLES, User

__all__ = [
    "APPLICATION_STATUSES",
    "USER_ROLES",
    "Application",
    "Base",
    "Document",
    "Identity",
    "Service",
    "User",
]
