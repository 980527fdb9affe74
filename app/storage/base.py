"""Blob store contract used by the submission workflow."""

from typing import Protocol, runtime_checkable


class StorageError(Exception):
    """Raised when the blob store rejects or fails an operation."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


@runtime_checkable
class BlobStore(Protocol):
    """Uploads documents under a path key and hands out public URLs."""

    def upload(self, path: str, content: bytes, content_type: str | None = None) -> None:
        """Store content at path. Raises StorageError if the path exists or the upload fails."""
        ...

    def get_public_url(self, path: str) -> str:
        """Public URL for a stored path (no existence check)."""
        ...

    def delete(self, paths: list[str]) -> None:
        """Remove stored paths; missing paths are ignored."""
        ...
