"""Server-rendered pages. Forms post back here and redirect with 303 on success."""

import logging
from typing import Annotated
from urllib.parse import urlsplit

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.api.v1.applications import read_submission_form
from app.api.v1.auth import resolve_session_user
from app.api.v1.deps import get_blob_store, get_identity_provider
from app.core.config import get_settings
from app.core.cookies import (
    clear_session_cookies,
    set_lang_cookie,
    set_role_cookie,
    set_session_cookies,
)
from app.core.database import get_db
from app.core.errors import AppError
from app.core.route_guard import (
    ADMIN_HOME,
    CUSTOMER_HOME,
    LOGIN_PATH,
    ROLE_COOKIE,
    SESSION_COOKIE,
    home_for_role,
)
from app.models import Service, User
from app.services import accounts, catalog, review
from app.services import applications as workflow
from app.services.identity import IdentityProvider
from app.storage import BlobStore
from app.web import render
from app.web.context import PageContext, get_page_context

logger = logging.getLogger(__name__)

router = APIRouter(include_in_schema=False)

Ctx = Annotated[PageContext, Depends(get_page_context)]
Db = Annotated[Session, Depends(get_db)]


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=303)


def _to_login() -> RedirectResponse:
    response = _redirect(LOGIN_PATH)
    clear_session_cookies(response)
    return response


def _page_user(request: Request, db: Session) -> User | None:
    """The profile behind the session cookie, re-read from the database on every page."""
    return resolve_session_user(request.cookies.get(SESSION_COOKIE), db)


def _with_role(ctx: PageContext, user: User) -> PageContext:
    """Context whose role reflects the database rather than the role cookie."""
    return PageContext(lang=ctx.lang, path=ctx.path, has_session=True, role=user.role)


def _to_stored_home(request: Request, user: User) -> RedirectResponse:
    """Redirect to the home of the stored role, re-issuing a role marker that has drifted."""
    response = _redirect(home_for_role(user.role))
    if request.cookies.get(ROLE_COOKIE) != user.role:
        set_role_cookie(response, user.role, get_settings())
    return response


def _admin_or_redirect(request: Request, db: Session) -> User | RedirectResponse:
    user = _page_user(request, db)
    if user is None:
        return _to_login()
    if user.role != "admin":
        return _to_stored_home(request, user)
    return user


# --- public ---


@router.get("/", response_class=HTMLResponse)
def home(ctx: Ctx, db: Db) -> HTMLResponse:
    return render.home_page(ctx, catalog.list_services(db))


@router.get("/lang/{code}")
def switch_language(code: str, request: Request) -> RedirectResponse:
    """Persist the language choice and go back to the page the user came from."""
    target = "/"
    referer = request.headers.get("referer")
    if referer:
        parts = urlsplit(referer)
        if parts.path.startswith("/") and not parts.path.startswith("/lang/"):
            target = parts.path + (f"?{parts.query}" if parts.query else "")
    response = _redirect(target)
    set_lang_cookie(response, code, get_settings())
    return response


@router.get("/track", response_class=HTMLResponse)
def track(ctx: Ctx, db: Db, code: str = "") -> HTMLResponse:
    if not code.strip():
        return render.track_page(ctx)
    try:
        result = workflow.track_application(db, code)
    except AppError as e:
        return render.track_page(ctx, code=code, error=e.message)
    return render.track_page(ctx, code=code, result=result)


# --- session ---


@router.get("/login", response_class=HTMLResponse)
def login_form(ctx: Ctx) -> HTMLResponse:
    return render.login_page(ctx)


@router.post("/login")
def login_submit(
    ctx: Ctx,
    db: Db,
    provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
    email: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> Response:
    settings = get_settings()
    try:
        session = accounts.login(db, provider, email, password, settings.admin_emails)
    except AppError as e:
        failed = render.login_page(ctx, email=email, error=e.message)
        clear_session_cookies(failed)
        return failed
    response = _redirect(home_for_role(session.user.role))
    set_session_cookies(response, session.token, session.user.role, settings)
    return response


@router.get("/register", response_class=HTMLResponse)
def register_form(ctx: Ctx) -> HTMLResponse:
    return render.register_page(ctx)


@router.post("/register")
def register_submit(
    ctx: Ctx,
    db: Db,
    provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
    name: Annotated[str, Form()] = "",
    email: Annotated[str, Form()] = "",
    phone: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
) -> Response:
    try:
        session = accounts.register(db, provider, name, email, phone, password)
    except AppError as e:
        return render.register_page(ctx, name=name, email=email, phone=phone, error=e.message)
    response = _redirect(home_for_role(session.user.role))
    set_session_cookies(response, session.token, session.user.role, get_settings())
    return response


@router.api_route("/logout", methods=["GET", "POST"])
def logout(
    request: Request,
    db: Db,
    provider: Annotated[IdentityProvider, Depends(get_identity_provider)],
) -> RedirectResponse:
    user = _page_user(request, db)
    accounts.logout(provider, user.id if user else None)
    return _to_login()


# --- customer area ---


@router.get("/dashboard", response_class=HTMLResponse)
def customer_dashboard(request: Request, ctx: Ctx, db: Db) -> Response:
    user = _page_user(request, db)
    if user is None:
        return _to_login()
    if user.role == "admin":
        return _to_stored_home(request, user)
    applications = workflow.list_user_applications(db, user.id)
    return render.customer_dashboard_page(_with_role(ctx, user), user, applications)


@router.get("/dashboard/apply", response_class=HTMLResponse)
def apply_form(request: Request, ctx: Ctx, db: Db, service_id: int | None = None) -> Response:
    """Step one lists the catalog; step two (with service_id) shows one file input per label."""
    user = _page_user(request, db)
    if user is None:
        return _to_login()
    ctx = _with_role(ctx, user)
    services = catalog.list_services(db)
    if service_id is None:
        return render.apply_page(ctx, services)
    try:
        selected = catalog.get_service(db, service_id)
    except AppError as e:
        return render.apply_page(ctx, services, error=e.message)
    return render.apply_page(ctx, services, selected)


@router.post("/dashboard/apply")
async def apply_submit(
    request: Request,
    ctx: Ctx,
    db: Db,
    blob_store: Annotated[BlobStore, Depends(get_blob_store)],
) -> Response:
    # Blocking database calls stay off the event loop.
    user = await run_in_threadpool(_page_user, request, db)
    if user is None:
        return _to_login()
    ctx = _with_role(ctx, user)
    settings = get_settings()
    services = await run_in_threadpool(catalog.list_services, db)
    try:
        service_id, files = await read_submission_form(request, settings.MAX_UPLOAD_FILE_BYTES)
    except HTTPException as e:
        return render.apply_page(ctx, services, error=str(e.detail))

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
        selected = await run_in_threadpool(db.get, Service, service_id)
        return render.apply_page(ctx, services, selected, error=e.message)
    logger.info("Application submitted from page", extra={"application_id": application.id})
    return _redirect(CUSTOMER_HOME)


@router.get("/dashboard/applications/{application_id}", response_class=HTMLResponse)
def customer_application(
    application_id: int,
    request: Request,
    ctx: Ctx,
    db: Db,
) -> Response:
    user = _page_user(request, db)
    if user is None:
        return _to_login()
    ctx = _with_role(ctx, user)
    try:
        application = workflow.get_user_application(db, user.id, application_id)
    except AppError as e:
        applications = workflow.list_user_applications(db, user.id)
        return render.customer_dashboard_page(ctx, user, applications, error=e.message)
    return render.customer_application_page(ctx, application)


@router.post("/dashboard/applications/{application_id}/delete")
def customer_application_delete(
    application_id: int,
    request: Request,
    ctx: Ctx,
    db: Db,
    blob_store: Annotated[BlobStore, Depends(get_blob_store)],
    confirm: Annotated[str, Form()] = "",
) -> Response:
    user = _page_user(request, db)
    if user is None:
        return _to_login()
    try:
        workflow.delete_user_application(
            db, blob_store, user.id, application_id, confirm == "true"
        )
    except AppError as e:
        applications = workflow.list_user_applications(db, user.id)
        return render.customer_dashboard_page(
            _with_role(ctx, user), user, applications, error=e.message
        )
    return _redirect(CUSTOMER_HOME)


@router.get("/dashboard/profile", response_class=HTMLResponse)
def profile_form(request: Request, ctx: Ctx, db: Db) -> Response:
    user = _page_user(request, db)
    if user is None:
        return _to_login()
    return render.profile_page(_with_role(ctx, user), user)


@router.post("/dashboard/profile")
def profile_submit(
    request: Request,
    ctx: Ctx,
    db: Db,
    name: Annotated[str, Form()] = "",
    phone: Annotated[str, Form()] = "",
) -> Response:
    user = _page_user(request, db)
    if user is None:
        return _to_login()
    ctx = _with_role(ctx, user)
    try:
        user = accounts.update_profile(db, user.id, name, phone)
    except AppError as e:
        return render.profile_page(ctx, user, error=e.message)
    return render.profile_page(ctx, user, notice=ctx.t("profile_saved"))


# --- admin area ---


@router.get("/admin", include_in_schema=False)
def admin_root() -> RedirectResponse:
    return _redirect(ADMIN_HOME)


@router.get("/admin/dashboard", response_class=HTMLResponse)
def admin_dashboard(request: Request, ctx: Ctx, db: Db, search: str = "") -> Response:
    admin = _admin_or_redirect(request, db)
    if isinstance(admin, RedirectResponse):
        return admin
    overview = review.list_applications(db, search)
    return render.admin_dashboard_page(_with_role(ctx, admin), overview, search)


@router.get("/admin/applications/{application_id}", response_class=HTMLResponse)
def admin_application(application_id: int, request: Request, ctx: Ctx, db: Db) -> Response:
    admin = _admin_or_redirect(request, db)
    if isinstance(admin, RedirectResponse):
        return admin
    try:
        application = review.get_application_for_review(db, application_id)
    except AppError:
        return _redirect(ADMIN_HOME)
    return render.admin_application_page(_with_role(ctx, admin), application)


@router.post("/admin/applications/{application_id}")
def admin_application_update(
    application_id: int,
    request: Request,
    ctx: Ctx,
    db: Db,
    status: Annotated[str, Form()] = "",
    remarks: Annotated[str, Form()] = "",
) -> Response:
    admin = _admin_or_redirect(request, db)
    if isinstance(admin, RedirectResponse):
        return admin
    ctx = _with_role(ctx, admin)
    try:
        application = review.update_application_status(db, application_id, status, remarks)
    except AppError as e:
        try:
            application = review.get_application_for_review(db, application_id)
        except AppError:
            return _redirect(ADMIN_HOME)
        return render.admin_application_page(ctx, application, error=e.message)
    return render.admin_application_page(ctx, application, notice=ctx.t("status_updated"))


@router.get("/admin/services", response_class=HTMLResponse)
def admin_services(request: Request, ctx: Ctx, db: Db) -> Response:
    admin = _admin_or_redirect(request, db)
    if isinstance(admin, RedirectResponse):
        return admin
    return render.admin_services_page(_with_role(ctx, admin), catalog.list_services(db))


@router.post("/admin/services")
def admin_service_create(
    request: Request,
    ctx: Ctx,
    db: Db,
    name: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    documents: Annotated[str, Form()] = "",
) -> Response:
    admin = _admin_or_redirect(request, db)
    if isinstance(admin, RedirectResponse):
        return admin
    try:
        catalog.create_service(db, name, description, documents)
    except AppError as e:
        return render.admin_services_page(
            _with_role(ctx, admin), catalog.list_services(db), error=e.message
        )
    return _redirect("/admin/services")


@router.post("/admin/services/{service_id}")
def admin_service_update(
    service_id: int,
    request: Request,
    ctx: Ctx,
    db: Db,
    name: Annotated[str, Form()] = "",
    description: Annotated[str, Form()] = "",
    documents: Annotated[str, Form()] = "",
) -> Response:
    admin = _admin_or_redirect(request, db)
    if isinstance(admin, RedirectResponse):
        return admin
    try:
        catalog.update_service(db, service_id, name, description, documents)
    except AppError as e:
        return render.admin_services_page(
            _with_role(ctx, admin), catalog.list_services(db), error=e.message
        )
    return _redirect("/admin/services")


@router.post("/admin/services/{service_id}/delete")
def admin_service_delete(
    service_id: int,
    request: Request,
    ctx: Ctx,
    db: Db,
    confirm: Annotated[str, Form()] = "",
) -> Response:
    admin = _admin_or_redirect(request, db)
    if isinstance(admin, RedirectResponse):
        return admin
    try:
        catalog.delete_service(db, service_id, confirm == "true")
    except AppError as e:
        return render.admin_services_page(
            _with_role(ctx, admin), catalog.list_services(db), error=e.message
        )
    return _redirect("/admin/services")


@router.get("/admin/users", response_class=HTMLResponse)
def admin_users(request: Request, ctx: Ctx, db: Db, search: str = "") -> Response:
    admin = _admin_or_redirect(request, db)
    if isinstance(admin, RedirectResponse):
        return admin
    return render.admin_users_page(_with_role(ctx, admin), accounts.list_users(db, search), search)


@router.post("/admin/users/{user_id}/role")
def admin_user_role(
    user_id: str,
    request: Request,
    ctx: Ctx,
    db: Db,
    role: Annotated[str, Form()] = "",
) -> Response:
    admin = _admin_or_redirect(request, db)
    if isinstance(admin, RedirectResponse):
        return admin
    try:
        accounts.set_user_role(db, user_id, role)
    except AppError as e:
        return render.admin_users_page(
            _with_role(ctx, admin), accounts.list_users(db), error=e.message
        )
    logger.info("Role changed by admin", extra={"user_id": user_id, "admin_id": admin.id})
    return _redirect("/admin/users")
