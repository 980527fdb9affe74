"""Admin review: list every application, open one, set its status and remarks."""

import logging
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, UpstreamError, ValidationError
from app.models import APPLICATION_STATUSES, Application

logger = logging.getLogger(__name__)

REMARKS_MAX_LEN = 5000


@dataclass
class ApplicationOverview:
    """Admin dashboard: matching applications plus counts over all applications."""

    applications: list[Application]
    total: int = 0
    by_status: dict[str, int] = field(default_factory=dict)


def _matches(application: Application, term: str) -> bool:
    haystack = [
        application.tracking_code,
        application.user.name if application.user else None,
        application.service.name if application.service else None,
    ]
    return any(term in value.lower() for value in haystack if value)


def list_applications(db: Session, search: str | None = None) -> ApplicationOverview:
    """
    All applications with user and service, newest first.

    search filters (case-insensitive substring) on tracking code, applicant name and
    service name; the status counts always cover every application.
    """
    applications = (
        db.query(Application)
        .order_by(Application.created_at.desc(), Application.id.desc())
        .all()
    )
    by_status = {status: 0 for status in APPLICATION_STATUSES}
    for application in applications:
        by_status[application.status] = by_status.get(application.status, 0) + 1

    term = (search or "").strip().lower()
    matching = [a for a in applications if _matches(a, term)] if term else applications
    return ApplicationOverview(
        applications=matching,
        total=len(applications),
        by_status=by_status,
    )


def get_application_for_review(db: Session, application_id: int) -> Application:
    """One application with its user, service and documents loaded."""
    application = db.get(Application, application_id)
    if application is None:
        raise NotFoundError("Application not found.")
    return application


def update_application_status(
    db: Session,
    application_id: int,
    status: str,
    remarks: str | None,
) -> Application:
    """
    Persist status and remarks together. Any status may follow any other.

    No version check: concurrent reviewers overwrite each other (last write wins).
    """
    if status not in APPLICATION_STATUSES:
        raise ValidationError(f"Status must be one of: {', '.join(APPLICATION_STATUSES)}.")
    remarks = remarks or ""
    if len(remarks) > REMARKS_MAX_LEN:
        raise ValidationError(f"Remarks must be at most {REMARKS_MAX_LEN} characters.")

    application = get_application_for_review(db, application_id)
    previous = application.status
    application.status = status
    application.remarks = remarks
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise UpstreamError(str(e)) from e
    db.refresh(application)
    logger.info(
        "Application status updated",
        extra={
            "application_id": application_id,
            "previous_status": previous,
            "status": status,
        },
    )
    return application
