"""Customer application endpoints: submit with documents, list, view, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, UploadFile
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.api.v1.auth import get_current_user
from app.api.v1.deps import get_blob_store, http_error
from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import AppError
from app.schemas.applications import (
    ApplicationDetail,
    ApplicationsListResponse,
    ApplicationSummary,
)
from app.schemas.auth import CurrentUser
from app.services import applications as workflow
from app.services.applications import UploadedDocument
from app.storage import BlobStore

router = APIRouter()

SERVICE_ID_FIELD = "service_id"


def _is_upload_file(obj: object) -> bool:
    """True if obj is an uploaded file (UploadFile or file-like with filename and read)."""
    if isinstance(obj, UploadFile):
        return True
    return (
        hasattr(obj, "read")
        and callable(getattr(obj, "read", None))
        and hasattr(obj, "filename")
    )


async def read_submission_form(
    request: Request, max_file_bytes: int
) -> tuple[int, dict[str, UploadedDocument]]:
    """
    Parse a multipart submission: `service_id` plus one file part per required label.

    The part name is the document label (e.g. "Aadhaar"). File parts without a file name
    (an empty browser file input) are ignored and will be reported as missing.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type != "multipart/form-data":
        raise HTTPException(
            status_code=415,
            detail="Content-Type must be multipart/form-data.",
        )
    form = await request.form()
    raw_service_id = form.get(SERVICE_ID_FIELD)
    try:
        service_id = int(str(raw_service_id))
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=422,
            detail=f"Multipart request must include a numeric '{SERVICE_ID_FIELD}' field.",
        )

    files: dict[str, UploadedDocument] = {}
    for label, value in form.multi_items():
        if label == SERVICE_ID_FIELD or not _is_upload_file(value):
            continue
        filename = getattr(value, "filename", None) or ""
        if not filename:
            continue
        content = await value.read()
        if len(content) > max_file_bytes:
            raise HTTPException(
                status_code=422,
                detail=f"'{label}' must not exceed {max_file_bytes // (1024 * 1024)} MB.",
            )
        files[label] = UploadedDocument(
            filename=filename,
            content=content,
            content_type=getattr(value, "content_type", None),
        )
    return service_id, files


@router.post("", response_model=ApplicationDetail, status_code=201)
async def submit_application(
    request: Request,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    blob_store: Annotated[BlobStore, Depends(get_blob_store)],
) -> ApplicationDetail:
    """
    Apply for a service.

    Send `multipart/form-data` with `service_id` and one file per required document, the
    part named after the document label. Missing labels return 422 with the list; nothing
    is written. Uploads run in catalog order; if any upload or insert fails, nothing is
    kept and 502 carries the storage or database message.
    """
    settings = get_settings()
    service_id, files = await read_submission_form(request, settings.MAX_UPLOAD_FILE_BYTES)
    try:
        application = await run_in_threadpool(
            workflow.submit_application,
            db,
            blob_store,
            user.id,
            service_id,
            files,
            settings.TRACKING_CODE_MAX_ATTEMPTS,
        )
    except AppError as e:
        raise http_error(e) from e
    return ApplicationDetail.model_validate(application)


@router.get("", response_model=ApplicationsListResponse)
def list_my_applications(
    user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ApplicationsListResponse:
    """The signed-in customer's applications, newest first."""
    rows = workflow.list_user_applications(db, user.id)
    return ApplicationsListResponse(
        applications=[ApplicationSummary.model_validate(a) for a in rows]
    )


@router.get("/{application_id}", response_model=ApplicationDetail)
def get_my_application(
    application_id: int,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ApplicationDetail:
    """One of the customer's applications with status, remarks and documents."""
    try:
        application = workflow.get_user_application(db, user.id, application_id)
    except AppError as e:
        raise http_error(e) from e
    return ApplicationDetail.model_validate(application)


@router.delete("/{application_id}", status_code=204)
def delete_my_application(
    application_id: int,
    user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    blob_store: Annotated[BlobStore, Depends(get_blob_store)],
    confirm: Annotated[bool, Query(description="Must be true to delete")] = False,
) -> Response:
    """Hard delete of the customer's own application, whatever its status. Requires ?confirm=true."""
    try:
        workflow.delete_user_application(db, blob_store, user.id, application_id, confirm)
    except AppError as e:
        raise http_error(e) from e
    return Response(status_code=204)
