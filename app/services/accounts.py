"""Registration, login and profile management on top of an identity provider.

Profiles live in the users table keyed by the provider's user id. Login keeps the
profile in sync: it creates a missing profile and applies the admin allow-list.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import (
    AppError,
    LoginError,
    NotFoundError,
    RegistrationError,
    UpstreamError,
    ValidationError,
)
from app.core.security import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    PHONE_MAX_LEN,
    create_access_token,
)
from app.models import USER_ROLES, User
from app.services.identity import IdentityProvider

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_NAME = "Admin User"


@dataclass
class AuthSession:
    """Profile plus the session token to hand to the browser."""

    user: User
    token: str


def _validate_email(email: str) -> str:
    email = email.strip()
    if not email or "@" not in email or len(email) > EMAIL_MAX_LEN:
        raise ValidationError("Enter a valid email address.")
    return email


def _validate_password(password: str) -> None:
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        raise ValidationError(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters."
        )


def _validate_name_phone(name: str, phone: str | None) -> tuple[str, str | None]:
    name = name.strip()
    if not name or len(name) > NAME_MAX_LEN:
        raise ValidationError("Name is required.")
    phone = (phone or "").strip() or None
    if phone is not None and len(phone) > PHONE_MAX_LEN:
        raise ValidationError("Phone number is too long.")
    return name, phone


def register(
    db: Session,
    provider: IdentityProvider,
    name: str,
    email: str,
    phone: str | None,
    password: str,
) -> AuthSession:
    """
    Create a provider account and its customer profile; return a fresh session.

    Raises DuplicateEmail when the provider already knows the e-mail, RegistrationError
    for any other provider or database failure, ValidationError for empty fields.
    """
    name, phone = _validate_name_phone(name, phone)
    email = _validate_email(email)
    _validate_password(password)

    try:
        identity = provider.create_account(email, password, display_name=name)
    except UpstreamError as e:
        raise RegistrationError(e.message) from e

    user = User(id=identity.id, name=name, email=email, phone=phone, role="customer")
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Profile insert failed after account creation: %s", identity.id)
        raise RegistrationError(str(e)) from e

    logger.info("User registered", extra={"user_id": user.id})
    return AuthSession(user=user, token=create_access_token(sub=user.id, role=user.role))


def login(
    db: Session,
    provider: IdentityProvider,
    email: str,
    password: str,
    admin_emails: frozenset[str] = frozenset(),
) -> AuthSession:
    """
    Authenticate and sync the profile; return a fresh session.

    E-mails in admin_emails are (re)promoted to admin on every login. A provider account
    without a profile gets a customer profile. Every failure surfaces as LoginError.
    """
    try:
        if not email or not email.strip() or not password:
            raise ValidationError("Email and password are required.")
        email = email.strip()
        identity = provider.authenticate(email, password)
        user = db.get(User, identity.id)

        if email.lower() in admin_emails:
            if user is None:
                user = User(
                    id=identity.id,
                    name=identity.display_name or DEFAULT_ADMIN_NAME,
                    email=identity.email or email,
                    role="admin",
                )
                db.add(user)
            elif user.role != "admin":
                user.role = "admin"
            logger.info("Admin allow-list applied on login", extra={"user_id": identity.id})
        elif user is None:
            user = User(
                id=identity.id,
                name=identity.display_name or email.split("@")[0],
                email=identity.email or email,
                role="customer",
            )
            db.add(user)

        db.commit()
        db.refresh(user)
    except AppError as e:
        raise LoginError(e.message) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Profile sync failed during login")
        raise LoginError(str(e)) from e

    return AuthSession(user=user, token=create_access_token(sub=user.id, role=user.role))


def logout(provider: IdentityProvider, user_id: str | None) -> None:
    """End the provider session; the caller clears the session and role cookies."""
    if user_id:
        provider.end_session(user_id)


def get_profile(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("Profile not found.")
    return user


def update_profile(db: Session, user_id: str, name: str, phone: str | None) -> User:
    """Owner-editable fields only: name and phone."""
    name, phone = _validate_name_phone(name, phone)
    user = get_profile(db, user_id)
    user.name = name
    user.phone = phone
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise UpstreamError(str(e)) from e
    db.refresh(user)
    return user


def list_users(db: Session, search: str | None = None) -> list[User]:
    """All profiles, newest first, optionally filtered by name or e-mail substring."""
    users = db.query(User).order_by(User.created_at.desc(), User.id).all()
    term = (search or "").strip().lower()
    if not term:
        return users
    return [
        u for u in users
        if term in (u.name or "").lower() or term in (u.email or "").lower()
    ]


def set_user_role(db: Session, user_id: str, role: str) -> User:
    """
    Change a user's role (admin operation).

    The target's role cookie is not touched here; the pages re-issue it the next time they
    redirect that user by role. Server-side checks read this column, so the change is
    enforced immediately.
    """
    if role not in USER_ROLES:
        raise ValidationError(f"Role must be one of: {', '.join(USER_ROLES)}.")
    user = get_profile(db, user_id)
    previous = user.role
    user.role = role
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise UpstreamError(str(e)) from e
    db.refresh(user)
    logger.info(
        "User role changed",
        extra={"user_id": user_id, "previous_role": previous, "role": role},
    )
    return user
