"""Identity provider adapters: e-mail/password accounts issuing a stable user id.

The rest of the app only sees `ProviderIdentity`; the session token handed to the
browser is always our own JWT (app.core.security), whichever backend is used.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import (
    DuplicateEmail,
    InvalidCredentials,
    RegistrationError,
    UpstreamError,
)
from app.core.security import hash_password, verify_password
from app.models import Identity

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

FIREBASE_AUTH_BASE_URL = "https://identitytoolkit.googleapis.com/v1"

# Identity Toolkit error codes that mean "wrong e-mail or password".
FIREBASE_CREDENTIAL_ERRORS = frozenset(
    {"EMAIL_NOT_FOUND", "INVALID_PASSWORD", "INVALID_LOGIN_CREDENTIALS", "INVALID_EMAIL"}
)


@dataclass(frozen=True)
class ProviderIdentity:
    """Authenticated account as reported by the provider."""

    id: str
    email: str
    display_name: str | None = None


class IdentityProvider(Protocol):
    def create_account(
        self, email: str, password: str, display_name: str | None = None
    ) -> ProviderIdentity: ...

    def authenticate(self, email: str, password: str) -> ProviderIdentity: ...

    def end_session(self, user_id: str) -> None: ...


class LocalIdentityProvider:
    """Accounts stored in the identities table with bcrypt hashes."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def create_account(
        self, email: str, password: str, display_name: str | None = None
    ) -> ProviderIdentity:
        normalized = email.strip().lower()
        existing = self._db.query(Identity).filter(Identity.email == normalized).first()
        if existing is not None:
            raise DuplicateEmail()
        identity = Identity(
            id=uuid.uuid4().hex,
            email=normalized,
            password_hash=hash_password(password),
            display_name=display_name,
        )
        try:
            self._db.add(identity)
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise RegistrationError(str(e)) from e
        return ProviderIdentity(id=identity.id, email=normalized, display_name=display_name)

    def authenticate(self, email: str, password: str) -> ProviderIdentity:
        normalized = email.strip().lower()
        identity = self._db.query(Identity).filter(Identity.email == normalized).first()
        if identity is None or not verify_password(password, identity.password_hash):
            raise InvalidCredentials()
        return ProviderIdentity(
            id=identity.id, email=identity.email, display_name=identity.display_name
        )

    def end_session(self, user_id: str) -> None:
        # Tokens are stateless JWTs; clearing the cookies ends the session.
        return None


def _firebase_error_code(resp: httpx.Response) -> str:
    """Extract the Identity Toolkit error code, e.g. 'EMAIL_EXISTS' or 'WEAK_PASSWORD : ...'."""
    try:
        return str(resp.json().get("error", {}).get("message", ""))
    except ValueError:
        return resp.text[:200] if resp.text else f"HTTP {resp.status_code}"


class FirebaseIdentityProvider:
    """Firebase Authentication via the Identity Toolkit REST API."""

    def __init__(
        self,
        api_key: str,
        timeout: float = 15.0,
        base_url: str = FIREBASE_AUTH_BASE_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    def _post(self, action: str, payload: dict) -> httpx.Response:
        url = f"{self._base_url}/accounts:{action}"
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                return client.post(url, params={"key": self._api_key}, json=payload)
        except httpx.HTTPError as e:
            raise UpstreamError(f"Identity provider unreachable: {e}") from e

    def create_account(
        self, email: str, password: str, display_name: str | None = None
    ) -> ProviderIdentity:
        resp = self._post(
            "signUp",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        if resp.status_code >= 400:
            code = _firebase_error_code(resp)
            if code.startswith("EMAIL_EXISTS"):
                raise DuplicateEmail()
            raise RegistrationError(code or "Registration failed")
        data = resp.json()
        return ProviderIdentity(
            id=data["localId"],
            email=data.get("email", email),
            display_name=display_name,
        )

    def authenticate(self, email: str, password: str) -> ProviderIdentity:
        resp = self._post(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        if resp.status_code >= 400:
            code = _firebase_error_code(resp)
            if code.split(" ")[0] in FIREBASE_CREDENTIAL_ERRORS:
                raise InvalidCredentials()
            raise UpstreamError(f"Identity provider returned {resp.status_code}: {code}")
        data = resp.json()
        return ProviderIdentity(
            id=data["localId"],
            email=data.get("email", email),
            display_name=data.get("displayName") or None,
        )

    def end_session(self, user_id: str) -> None:
        # The REST API has no sign-out; ID tokens simply expire.
        return None


def build_identity_provider(settings: Settings, db: Session) -> IdentityProvider:
    """Create the identity provider matching IDENTITY_BACKEND."""
    if settings.IDENTITY_BACKEND == "firebase":
        if settings.FIREBASE_API_KEY is None:
            raise ValueError("IDENTITY_BACKEND=firebase requires FIREBASE_API_KEY")
        return FirebaseIdentityProvider(
            settings.FIREBASE_API_KEY.get_secret_value(),
            timeout=settings.FIREBASE_REQUEST_TIMEOUT_SEC,
        )
    return LocalIdentityProvider(db)
