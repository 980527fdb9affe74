"""Session, role and language cookies shared by the JSON API and the pages."""

from starlette.responses import Response

from app.core.config import Settings
from app.core.route_guard import LANG_COOKIE, ROLE_COOKIE, SESSION_COOKIE

SUPPORTED_LANGUAGES = ("en", "kn")
DEFAULT_LANGUAGE = "en"

_DAY_SECONDS = 24 * 60 * 60


def set_session_cookies(response: Response, token: str, role: str, settings: Settings) -> None:
    """Session token plus the role marker the route guard reads."""
    max_age = settings.SESSION_COOKIE_DAYS * _DAY_SECONDS
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=max_age,
        httponly=True,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )
    set_role_cookie(response, role, settings)


def set_role_cookie(response: Response, role: str, settings: Settings) -> None:
    """Re-issue only the role marker, e.g. after the stored role changed mid-session."""
    response.set_cookie(
        ROLE_COOKIE,
        role,
        max_age=settings.SESSION_COOKIE_DAYS * _DAY_SECONDS,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )


def clear_session_cookies(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE)
    response.delete_cookie(ROLE_COOKIE)


def normalize_language(value: str | None) -> str:
    return value if value in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def set_lang_cookie(response: Response, lang: str, settings: Settings) -> None:
    response.set_cookie(
        LANG_COOKIE,
        normalize_language(lang),
        max_age=settings.LANG_COOKIE_DAYS * _DAY_SECONDS,
        samesite="lax",
        secure=settings.COOKIE_SECURE,
    )
