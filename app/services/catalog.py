"""Service catalog management: the offered services and their required documents."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, UpstreamError, ValidationError
from app.models import Service

logger = logging.getLogger(__name__)

SERVICE_NAME_MAX_LEN = 255

# Demo catalog seeded into an empty table (python -m app.scripts.seed_services).
DEFAULT_SERVICES: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    ("PAN Card", "Apply for new PAN or update existing", ("Aadhaar", "Photo")),
    (
        "Income Certificate",
        "Get your income certificate online",
        ("Aadhaar", "Ration Card", "Salary Slip"),
    ),
    (
        "Driving License",
        "Apply for learner's or permanent license",
        ("Aadhaar", "Photo", "Address Proof"),
    ),
    (
        "Passport Application",
        "Fresh passport application assistance",
        ("Aadhaar", "Photo", "Birth Certificate"),
    ),
    ("Aadhaar Update", "Update Aadhaar details easily", ("Aadhaar", "Address Proof")),
)


def parse_document_labels(raw: str | list[str] | None) -> list[str]:
    """
    Turn "Aadhaar, Photo,,  Address Proof" into ["Aadhaar", "Photo", "Address Proof"].

    Order is preserved; blank entries are dropped. A list is accepted for JSON clients.
    """
    if raw is None:
        return []
    parts = raw if isinstance(raw, list) else raw.split(",")
    return [p.strip() for p in parts if p and p.strip()]


def _validate(name: str, description: str | None) -> tuple[str, str]:
    name = (name or "").strip()
    if not name or len(name) > SERVICE_NAME_MAX_LEN:
        raise ValidationError("Service name is required.")
    return name, (description or "").strip()


def list_services(db: Session) -> list[Service]:
    return db.query(Service).order_by(Service.created_at.desc(), Service.id.desc()).all()


def get_service(db: Session, service_id: int) -> Service:
    service = db.get(Service, service_id)
    if service is None:
        raise NotFoundError("Service not found.")
    return service


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise UpstreamError(str(e)) from e


def create_service(
    db: Session,
    name: str,
    description: str | None,
    documents: str | list[str] | None,
) -> Service:
    name, description = _validate(name, description)
    service = Service(
        name=name,
        description=description,
        required_documents=parse_document_labels(documents),
    )
    db.add(service)
    _commit(db)
    db.refresh(service)
    logger.info("Service created", extra={"service_id": service.id, "service_name": name})
    return service


def update_service(
    db: Session,
    service_id: int,
    name: str,
    description: str | None,
    documents: str | list[str] | None,
) -> Service:
    name, description = _validate(name, description)
    service = get_service(db, service_id)
    service.name = name
    service.description = description
    service.required_documents = parse_document_labels(documents)
    _commit(db)
    db.refresh(service)
    logger.info("Service updated", extra={"service_id": service.id})
    return service


def delete_service(db: Session, service_id: int, confirm: bool) -> None:
    """
    Hard delete. Applications that reference the service keep their row and lose the link.

    confirm must be True; the pages and API ask the admin first.
    """
    if not confirm:
        raise ValidationError("Are you sure you want to delete this service? Confirmation required.")
    service = get_service(db, service_id)
    db.delete(service)
    _commit(db)
    logger.info("Service deleted", extra={"service_id": service_id})


def seed_default_services(db: Session) -> int:
    """Insert DEFAULT_SERVICES when the catalog is empty. Returns rows inserted."""
    if db.query(Service).count() > 0:
        return 0
    for name, description, documents in DEFAULT_SERVICES:
        db.add(Service(name=name, description=description, required_documents=list(documents)))
    _commit(db)
    return len(DEFAULT_SERVICES)
