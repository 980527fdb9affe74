"""ORM model backing the local identity provider (email/password accounts)."""

from sqlalchemy import Column, DateTime, String, func

from app.models.base import Base


class Identity(Base):
    """Credentials for the local identity provider. Not used with the Firebase backend."""

    __tablename__ = "identities"

    id = Column(String(64), primary_key=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    display_name = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
