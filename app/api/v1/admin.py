"""Admin endpoints: application review and user role management."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin
from app.api.v1.deps import http_error
from app.core.database import get_db
from app.core.errors import AppError
from app.schemas.applications import (
    AdminApplicationDetail,
    AdminApplicationsResponse,
    AdminApplicationSummary,
    StatusCounts,
    StatusUpdateRequest,
)
from app.schemas.auth import CurrentUser, RoleUpdateRequest, UserProfile, UsersListResponse
from app.services import accounts, review

router = APIRouter()


@router.get("/applications", response_model=AdminApplicationsResponse)
def list_applications(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    search: Annotated[str | None, Query(max_length=255)] = None,
) -> AdminApplicationsResponse:
    """
    Every application with applicant and service, newest first.

    `search` filters on tracking code, applicant name and service name; `stats` always
    counts all applications.
    """
    overview = review.list_applications(db, search)
    return AdminApplicationsResponse(
        applications=[
            AdminApplicationSummary.model_validate(a) for a in overview.applications
        ],
        stats=StatusCounts(total=overview.total, **overview.by_status),
    )


@router.get("/applications/{application_id}", response_model=AdminApplicationDetail)
def get_application(
    application_id: int,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> AdminApplicationDetail:
    try:
        application = review.get_application_for_review(db, application_id)
    except AppError as e:
        raise http_error(e) from e
    return AdminApplicationDetail.model_validate(application)


@router.patch("/applications/{application_id}", response_model=AdminApplicationDetail)
def update_application(
    application_id: int,
    body: StatusUpdateRequest,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> AdminApplicationDetail:
    """Set status and remarks in one write. No transition rules; last write wins."""
    try:
        application = review.update_application_status(
            db, application_id, body.status, body.remarks
        )
    except AppError as e:
        raise http_error(e) from e
    return AdminApplicationDetail.model_validate(application)


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    search: Annotated[str | None, Query(max_length=255)] = None,
) -> UsersListResponse:
    """All registered users, newest first, optionally filtered by name or e-mail."""
    users = accounts.list_users(db, search)
    return UsersListResponse(users=[UserProfile.model_validate(u) for u in users])


@router.patch("/users/{user_id}/role", response_model=UserProfile)
def update_user_role(
    user_id: str,
    body: RoleUpdateRequest,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserProfile:
    """Grant or revoke admin. Server-side checks see the change on the next request."""
    try:
        user = accounts.set_user_role(db, user_id, body.role)
    except AppError as e:
        raise http_error(e) from e
    return UserProfile.model_validate(user)
