"""Shared helpers for tests: in-memory SQLite sessions and a recording blob store."""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.models import Base, Service, User
from app.storage import StorageError


def make_session_factory() -> sessionmaker:
    """Fresh in-memory database with every table created; one connection shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def add_user(db: Session, user_id: str, name: str, email: str, role: str = "customer") -> User:
    user = User(id=user_id, name=name, email=email, role=role)
    db.add(user)
    db.commit()
    return user


def add_service(db: Session, name: str, documents: list[str], description: str = "") -> Service:
    service = Service(name=name, description=description, required_documents=documents)
    db.add(service)
    db.commit()
    return service


class RecordingBlobStore:
    """In-memory blob store. fail_on_upload=N makes the Nth upload (1-based) fail."""

    def __init__(self, fail_on_upload: int | None = None) -> None:
        self.blobs: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.upload_calls = 0
        self._fail_on_upload = fail_on_upload

    def upload(self, path: str, content: bytes, content_type: str | None = None) -> None:
        self.upload_calls += 1
        if self._fail_on_upload == self.upload_calls:
            raise StorageError("Storage returned 500: upstream unavailable", 500)
        if path in self.blobs:
            raise StorageError(f"The resource already exists: {path}", 409)
        self.blobs[path] = content

    def get_public_url(self, path: str) -> str:
        return f"https://files.test/{path}"

    def delete(self, paths: list[str]) -> None:
        for path in paths:
            self.blobs.pop(path, None)
            self.deleted.append(path)
