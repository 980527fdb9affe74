"""Shared route dependencies: collaborator adapters and error-to-HTTP translation."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import (
    AppError,
    AuthError,
    DuplicateEmail,
    MissingDocuments,
    NotFoundError,
    RegistrationError,
    UpstreamError,
    ValidationError,
)
from app.services.identity import IdentityProvider, build_identity_provider
from app.storage import BlobStore, build_blob_store


def get_identity_provider(
    db: Annotated[Session, Depends(get_db)],
) -> IdentityProvider:
    """Dependency: identity provider for this request (local backend shares the DB session)."""
    return build_identity_provider(get_settings(), db)


@lru_cache
def get_blob_store() -> BlobStore:
    """Dependency: process-wide blob store (stateless apart from configuration)."""
    return build_blob_store(get_settings())


def http_error(e: AppError) -> HTTPException:
    """Map the workflow error taxonomy onto HTTP status codes."""
    if isinstance(e, DuplicateEmail):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    if isinstance(e, RegistrationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    if isinstance(e, AuthError):
        return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    if isinstance(e, MissingDocuments):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": e.message, "missing": e.missing},
        )
    if isinstance(e, ValidationError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)
    if isinstance(e, UpstreamError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
