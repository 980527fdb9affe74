"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from app.api.v1 import router as v1_router
from app.core.config import settings
from app.core.route_guard import ROLE_COOKIE, SESSION_COOKIE, resolve_redirect
from app.web.pages import router as pages_router

app = FastAPI(
    title="Digital Seva API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def route_guard(request: Request, call_next):
    """Redirect page requests by the presence of the session cookie and the role marker."""
    target = resolve_redirect(
        request.url.path,
        request.cookies.get(SESSION_COOKIE),
        request.cookies.get(ROLE_COOKIE),
    )
    if target is not None:
        return RedirectResponse(target, status_code=303)
    return await call_next(request)


app.include_router(v1_router, prefix=settings.API_V1_PREFIX)
app.include_router(pages_router)

if settings.STORAGE_BACKEND == "local" and settings.PUBLIC_FILES_BASE_URL.startswith("/"):
    Path(settings.STORAGE_LOCAL_ROOT).mkdir(parents=True, exist_ok=True)
    app.mount(
        settings.PUBLIC_FILES_BASE_URL,
        StaticFiles(directory=settings.STORAGE_LOCAL_ROOT, check_dir=False),
        name="files",
    )
