"""Register/login/logout endpoints and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.api.v1.deps import get_identity_provider, http_error
from app.core.config import get_settings
from app.core.cookies import clear_session_cookies, set_session_cookies
from app.core.database import get_db
from app.core.errors import AppError
from app.core.route_guard import SESSION_COOKIE, home_for_role
from app.core.security import decode_access_token
from app.models import User
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    SessionResponse,
    UserProfile,
)
from app.services import accounts
from app.services.identity import IdentityProvider

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_session_user(token: str | None, db: Session) -> User | None:
    """Decode a session token and load its profile; None if missing, invalid or unknown."""
    if not token:
        return None
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError:
        return None
    sub = payload.get("sub")
    if not sub:
        return None
    return db.get(User, str(sub))


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """
    Dependency: require a valid session (Bearer header or session cookie).

    The role comes from the users table, not from the token or the role cookie.
    """
    token = credentials.credentials if credentials else request.cookies.get(SESSION_COOKIE)
    if not token:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    sub = payload.get("sub")
    if not sub:
        raise _unauthorized("Invalid token payload")
    user = db.get(User, str(sub))
    if user is None:
        raise _unauthorized("User not found")
    return CurrentUser.model_validate(user)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


def _session_response(response: Response, session: accounts.AuthSession) -> SessionResponse:
    set_session_cookies(response, session.token, session.user.role, get_settings())
    return SessionResponse(
        access_token=session.token,
        token_type="bearer",
        user=UserProfile.model_validate(session.user),
        redirect_to=home_for_role(session.user.role),
    )


@router.post("/register", response_model=SessionResponse, status_code=201)
def register(
    body: RegisterRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
) -> SessionResponse:
    """
    Create an account and a customer profile, then start a session.

    Sets the `session` and `role` cookies and also returns the token for Bearer clients.
    409 when the e-mail is already registered.
    """
    try:
        session = accounts.register(
            db, provider, body.name, body.email, body.phone, body.password
        )
    except AppError as e:
        raise http_error(e) from e
    return _session_response(response, session)


@router.post("/login", response_model=SessionResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
) -> SessionResponse | JSONResponse:
    """
    Authenticate with e-mail and password.

    Include the returned token in the Authorization header as: Bearer <access_token>,
    or rely on the session cookie set on this response.
    """
    try:
        session = accounts.login(
            db, provider, body.email, body.password, get_settings().admin_emails
        )
    except AppError as e:
        # Raising would drop cookie changes; return the error with the markers cleared.
        exc = http_error(e)
        failed = JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
        clear_session_cookies(failed)
        return failed
    return _session_response(response, session)


@router.post("/logout", status_code=204)
def logout(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
) -> Response:
    """End the session and clear the session and role cookies. Always succeeds."""
    user = resolve_session_user(request.cookies.get(SESSION_COOKIE), db)
    accounts.logout(provider, user.id if user else None)
    result = Response(status_code=204)
    clear_session_cookies(result)
    return result


@router.get("/me", response_model=CurrentUser)
def me(current_user: Annotated[CurrentUser, Depends(get_current_user)]) -> CurrentUser:
    """The authenticated user as seen by the server (role from the database)."""
    return current_user
