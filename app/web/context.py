"""Request-scoped page context: language and the route-guard markers, passed to renderers."""

from dataclasses import dataclass

from fastapi import Request

from app.core.cookies import normalize_language
from app.core.route_guard import LANG_COOKIE, ROLE_COOKIE, SESSION_COOKIE
from app.web.i18n import status_label, translate


@dataclass(frozen=True)
class PageContext:
    """Everything a renderer may know about the request. Built per request, never global."""

    lang: str
    path: str
    has_session: bool = False
    role: str | None = None

    def t(self, key: str) -> str:
        return translate(key, self.lang)

    def status(self, status: str) -> str:
        return status_label(status, self.lang)


def get_page_context(request: Request) -> PageContext:
    """Dependency: build the PageContext from the lang, session and role cookies."""
    return PageContext(
        lang=normalize_language(request.cookies.get(LANG_COOKIE)),
        path=request.url.path,
        has_session=bool(request.cookies.get(SESSION_COOKIE)),
        role=request.cookies.get(ROLE_COOKIE),
    )
