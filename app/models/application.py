"""ORM models for submitted applications and their uploaded documents."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from app.models.base import Base

APPLICATION_STATUSES = ("pending", "processing", "completed", "rejected")


class Application(Base):
    """
    One customer request for one service, identified publicly by its tracking code.

    service_id is a soft reference: deleting the service leaves the application with NULL.
    """

    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tracking_code = Column(String(16), nullable=False, unique=True, index=True)
    user_id = Column(
        String(128),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    service_id = Column(
        Integer,
        ForeignKey("services.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    status = Column(String(32), nullable=False, default="pending", index=True)
    remarks = Column(Text, nullable=False, default="")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    user = relationship("User", lazy="joined")
    service = relationship("Service", lazy="joined")
    documents = relationship(
        "Document",
        back_populates="application",
        cascade="all, delete-orphan",
        order_by="Document.id",
    )


class Document(Base):
    """Uploaded file for one required-document label of an application."""

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(
        Integer,
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    label = Column(String(255), nullable=False)
    file_url = Column(String(2048), nullable=False)
    storage_path = Column(String(1024), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    application = relationship("Application", back_populates="documents")
