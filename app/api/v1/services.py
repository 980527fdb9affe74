"""Service catalog endpoints: public listing, admin create/update/delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin
from app.api.v1.deps import http_error
from app.core.database import get_db
from app.core.errors import AppError
from app.schemas.auth import CurrentUser
from app.schemas.catalog import ServiceOut, ServicesListResponse, ServiceWriteRequest
from app.services import catalog

router = APIRouter()


@router.get("", response_model=ServicesListResponse)
def list_services(db: Annotated[Session, Depends(get_db)]) -> ServicesListResponse:
    """All offered services, newest first, with their required document labels."""
    services = catalog.list_services(db)
    return ServicesListResponse(services=[ServiceOut.model_validate(s) for s in services])


@router.get("/{service_id}", response_model=ServiceOut)
def get_service(
    service_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> ServiceOut:
    try:
        return ServiceOut.model_validate(catalog.get_service(db, service_id))
    except AppError as e:
        raise http_error(e) from e


@router.post("", response_model=ServiceOut, status_code=201)
def create_service(
    body: ServiceWriteRequest,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> ServiceOut:
    """
    Create a service (admin only).

    `documents` accepts the comma-separated form value ("Aadhaar, Photo"); labels are
    trimmed and blanks dropped, order preserved.
    """
    try:
        service = catalog.create_service(db, body.name, body.description, body.documents)
    except AppError as e:
        raise http_error(e) from e
    return ServiceOut.model_validate(service)


@router.put("/{service_id}", response_model=ServiceOut)
def update_service(
    service_id: int,
    body: ServiceWriteRequest,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> ServiceOut:
    try:
        service = catalog.update_service(
            db, service_id, body.name, body.description, body.documents
        )
    except AppError as e:
        raise http_error(e) from e
    return ServiceOut.model_validate(service)


@router.delete("/{service_id}", status_code=204)
def delete_service(
    service_id: int,
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
    confirm: Annotated[bool, Query(description="Must be true to delete")] = False,
) -> Response:
    """
    Hard delete (admin only). Requires ?confirm=true.

    Existing applications for the service are kept and lose their service link.
    """
    try:
        catalog.delete_service(db, service_id, confirm)
    except AppError as e:
        raise http_error(e) from e
    return Response(status_code=204)
