"""Local filesystem blob store; files are served by the app under PUBLIC_FILES_BASE_URL."""

import logging
from pathlib import Path
from urllib.parse import quote

from app.storage.base import StorageError

logger = logging.getLogger(__name__)


class LocalBlobStore:
    """Stores documents at {root}/{user_id}/{application_id}/{label}.{ext}."""

    def __init__(self, root: str, public_base_url: str) -> None:
        self._root = Path(root).resolve()
        self._public_base_url = public_base_url.rstrip("/")
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, path: str) -> Path:
        target = (self._root / path).resolve()
        # Keys come from user-supplied labels; never write outside the root.
        if self._root not in target.parents:
            raise StorageError(f"Invalid storage path: {path}")
        return target

    def upload(self, path: str, content: bytes, content_type: str | None = None) -> None:
        target = self._resolve(path)
        if target.exists():
            raise StorageError(f"The resource already exists: {path}", 409)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        except OSError as e:
            raise StorageError(f"Failed to store {path}: {e}") from e
        logger.debug("Stored document at %s (%s bytes)", target, len(content))

    def get_public_url(self, path: str) -> str:
        return f"{self._public_base_url}/{quote(path)}"

    def delete(self, paths: list[str]) -> None:
        for path in paths:
            target = self._resolve(path)
            try:
                target.unlink(missing_ok=True)
            except OSError as e:
                raise StorageError(f"Failed to delete {path}: {e}") from e
