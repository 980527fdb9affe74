"""ORM model for the service catalog."""

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from app.models.base import Base, JSONList


class Service(Base):
    """A government service customers can apply for.

    required_documents is an ordered list of free-text labels; applications copy the
    label text onto their document rows at submission time.
    """

    __tablename__ = "services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    required_documents = Column(JSONList, nullable=False, default=list)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
