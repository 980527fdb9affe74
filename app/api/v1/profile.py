"""Profile endpoints: the signed-in user's own name and phone."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.api.v1.deps import http_error
from app.core.database import get_db
from app.core.errors import AppError
from app.schemas.auth import CurrentUser, ProfileUpdateRequest, UserProfile
from app.services import accounts

router = APIRouter()


@router.get("", response_model=UserProfile)
def get_profile(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserProfile:
    try:
        return UserProfile.model_validate(accounts.get_profile(db, user.id))
    except AppError as e:
        raise http_error(e) from e


@router.patch("", response_model=UserProfile)
def update_profile(
    body: ProfileUpdateRequest,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserProfile:
    """Update name and phone. E-mail and role are not editable here."""
    try:
        updated = accounts.update_profile(db, user.id, body.name, body.phone)
    except AppError as e:
        raise http_error(e) from e
    return UserProfile.model_validate(updated)
