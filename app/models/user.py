"""ORM model for user profiles (keyed by the identity provider's user id)."""

from sqlalchemy import Column, DateTime, String, func

from app.models.base import Base

USER_ROLES = ("customer", "admin")


class User(Base):
    """
    Profile row synchronized from the identity provider on registration or first login.

    role: 'customer' or 'admin'. The `role` cookie caches this column for the route guard.
    """

    __tablename__ = "users"

    id = Column(String(128), primary_key=True)
    name = Column(String(255), nullable=False, default="")
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(32), nullable=True)
    role = Column(String(32), nullable=False, default="customer")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
