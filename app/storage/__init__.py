"""Blob store backends for uploaded application documents.

Supported backends:
- local: filesystem under STORAGE_LOCAL_ROOT, served at PUBLIC_FILES_BASE_URL
- supabase: Supabase Storage bucket over REST
"""

from typing import TYPE_CHECKING

from app.storage.base import BlobStore, StorageError

if TYPE_CHECKING:
    from app.core.config import Settings


def build_blob_store(settings: "Settings") -> BlobStore:
    """Create the blob store matching STORAGE_BACKEND."""
    if settings.STORAGE_BACKEND == "local":
        from app.storage.local import LocalBlobStore

        return LocalBlobStore(settings.STORAGE_LOCAL_ROOT, settings.PUBLIC_FILES_BASE_URL)

    if settings.STORAGE_BACKEND == "supabase":
        from app.storage.supabase import SupabaseBlobStore

        if not settings.SUPABASE_URL or settings.SUPABASE_SERVICE_KEY is None:
            raise ValueError(
                "STORAGE_BACKEND=supabase requires SUPABASE_URL and SUPABASE_SERVICE_KEY"
            )
        return SupabaseBlobStore(
            settings.SUPABASE_URL,
            settings.SUPABASE_SERVICE_KEY.get_secret_value(),
            settings.SUPABASE_BUCKET,
            timeout=settings.SUPABASE_REQUEST_TIMEOUT_SEC,
        )

    raise ValueError(f"Unsupported storage backend: {settings.STORAGE_BACKEND}")


__all__ = ["BlobStore", "StorageError", "build_blob_store"]
