"""Public tracking endpoint: status lookup by tracking code, no authentication."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.deps import http_error
from app.core.database import get_db
from app.core.errors import AppError
from app.schemas.applications import TrackingResponse
from app.services.applications import track_application

router = APIRouter()


@router.get("/{tracking_code}", response_model=TrackingResponse)
def track(
    tracking_code: str,
    db: Annotated[Session, Depends(get_db)],
) -> TrackingResponse:
    """Service name, status and submission date for an exact tracking code (e.g. DSC-123456)."""
    try:
        result = track_application(db, tracking_code)
    except AppError as e:
        raise http_error(e) from e
    return TrackingResponse.model_validate(result)
