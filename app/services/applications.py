"""Customer application workflow: submission with document upload, listing, deletion, tracking.

Submission is one logical transaction. The application row is flushed to get its id
(needed for the blob path), each document is uploaded in catalog order, and the rows
are committed only after every upload succeeded. On any failure the rows are rolled
back and the blobs already uploaded are removed, so no half-submitted application
is left behind.
"""

import logging
import random
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import MissingDocuments, NotFoundError, UpstreamError, ValidationError
from app.models import Application, Document, Service
from app.storage import BlobStore, StorageError

logger = logging.getLogger(__name__)

TRACKING_CODE_PREFIX = "DSC-"
TRACKING_CODE_MIN = 100000
TRACKING_CODE_MAX = 999999
DEFAULT_TRACKING_CODE_ATTEMPTS = 5

TRACKING_NOT_FOUND_MESSAGE = "Application not found. Please check the ID."

_EXTENSION_RE = re.compile(r"[a-z0-9]{1,10}")

_rng = random.SystemRandom()


@dataclass(frozen=True)
class UploadedDocument:
    """One file supplied for a required-document label."""

    filename: str
    content: bytes
    content_type: str | None = None


@dataclass(frozen=True)
class TrackingResult:
    """What an unauthenticated visitor may see for a tracking code."""

    tracking_code: str
    service_name: str | None
    status: str
    created_at: datetime


def generate_tracking_code(rng: random.Random | None = None) -> str:
    """DSC- followed by six digits (100000-999999)."""
    return f"{TRACKING_CODE_PREFIX}{(rng or _rng).randint(TRACKING_CODE_MIN, TRACKING_CODE_MAX)}"


def allocate_tracking_code(
    db: Session,
    max_attempts: int = DEFAULT_TRACKING_CODE_ATTEMPTS,
    rng: random.Random | None = None,
) -> str:
    """Generate codes until one is unused. The unique index still guards concurrent submits."""
    for _ in range(max_attempts):
        code = generate_tracking_code(rng)
        taken = db.query(Application.id).filter(Application.tracking_code == code).first()
        if taken is None:
            return code
        logger.warning("Tracking code collision: %s", code)
    raise UpstreamError("Could not allocate a unique application ID. Please try again.")


def document_path(user_id: str, application_id: int, label: str, filename: str) -> str:
    """Blob key {user_id}/{application_id}/{label}.{ext}; ext from the uploaded file name."""
    ext = filename.rsplit(".", 1)[1].strip().lower() if "." in filename else ""
    safe_label = label.replace("/", "-").replace("\\", "-").strip() or "document"
    if not _EXTENSION_RE.fullmatch(ext):
        ext = "bin"
    return f"{user_id}/{application_id}/{safe_label}.{ext}"


def missing_documents(service: Service, files: Mapping[str, UploadedDocument]) -> list[str]:
    """Required labels (catalog order) with no file or an empty file."""
    return [
        label
        for label in service.required_documents or []
        if label not in files or not files[label].content
    ]


def _discard_blobs(blob_store: BlobStore, paths: list[str]) -> None:
    if not paths:
        return
    try:
        blob_store.delete(paths)
    except StorageError as e:
        logger.warning("Could not remove %s uploaded blob(s): %s", len(paths), e.message)


def submit_application(
    db: Session,
    blob_store: BlobStore,
    user_id: str,
    service_id: int,
    files: Mapping[str, UploadedDocument],
    max_code_attempts: int = DEFAULT_TRACKING_CODE_ATTEMPTS,
    rng: random.Random | None = None,
) -> Application:
    """
    Create a pending application with one document per required label.

    Raises NotFoundError for an unknown service, MissingDocuments before any write when a
    label has no file, and UpstreamError (after rollback and blob cleanup) when the
    database or blob store fails.
    """
    service = db.get(Service, service_id)
    if service is None:
        raise NotFoundError("Service not found.")
    missing = missing_documents(service, files)
    if missing:
        raise MissingDocuments(missing)

    uploaded: list[str] = []
    try:
        code = allocate_tracking_code(db, max_code_attempts, rng)
        application = Application(
            tracking_code=code,
            user_id=user_id,
            service_id=service.id,
            status="pending",
            remarks="",
        )
        db.add(application)
        db.flush()

        for label in service.required_documents or []:
            doc = files[label]
            path = document_path(user_id, application.id, label, doc.filename)
            blob_store.upload(path, doc.content, doc.content_type)
            uploaded.append(path)
            db.add(
                Document(
                    application_id=application.id,
                    label=label,
                    file_url=blob_store.get_public_url(path),
                    storage_path=path,
                )
            )
            db.flush()
        db.commit()
    except (SQLAlchemyError, StorageError, UpstreamError) as e:
        db.rollback()
        _discard_blobs(blob_store, uploaded)
        message = e.message if isinstance(e, (StorageError, UpstreamError)) else str(e)
        logger.error(
            "Application submission failed",
            extra={
                "user_id": user_id,
                "service_id": service_id,
                "uploaded_before_failure": len(uploaded),
                "reason": message[:500],
            },
        )
        raise UpstreamError(message) from e

    db.refresh(application)
    logger.info(
        "Application submitted",
        extra={
            "application_id": application.id,
            "tracking_code": application.tracking_code,
            "document_count": len(uploaded),
        },
    )
    return application


def list_user_applications(db: Session, user_id: str) -> list[Application]:
    return (
        db.query(Application)
        .filter(Application.user_id == user_id)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .all()
    )


def get_user_application(db: Session, user_id: str, application_id: int) -> Application:
    """The customer's own application with documents; NotFoundError for anyone else's."""
    application = (
        db.query(Application)
        .filter(Application.id == application_id, Application.user_id == user_id)
        .first()
    )
    if application is None:
        raise NotFoundError("Application not found.")
    return application


def delete_user_application(
    db: Session,
    blob_store: BlobStore,
    user_id: str,
    application_id: int,
    confirm: bool,
) -> None:
    """
    Hard delete of the customer's application and its document rows, in any status.

    Blobs are removed after the commit; a storage failure there is logged, not raised.
    """
    if not confirm:
        raise ValidationError("Are you sure you want to delete this application? Confirmation required.")
    application = get_user_application(db, user_id, application_id)
    paths = [d.storage_path for d in application.documents if d.storage_path]
    db.delete(application)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise UpstreamError(str(e)) from e
    _discard_blobs(blob_store, paths)
    logger.info(
        "Application deleted by owner",
        extra={"application_id": application_id, "user_id": user_id},
    )


def track_application(db: Session, tracking_code: str) -> TrackingResult:
    """Public lookup by exact tracking code."""
    code = (tracking_code or "").strip()
    if not code:
        raise ValidationError("Enter an application ID.")
    application = (
        db.query(Application).filter(Application.tracking_code == code).first()
    )
    if application is None:
        raise NotFoundError(TRACKING_NOT_FOUND_MESSAGE)
    return TrackingResult(
        tracking_code=application.tracking_code,
        service_name=application.service.name if application.service else None,
        status=application.status,
        created_at=application.created_at,
    )
