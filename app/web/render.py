"""HTML rendering for the pages. Every renderer takes the PageContext explicitly."""

from datetime import datetime
from html import escape

from fastapi.responses import HTMLResponse

from app.models import APPLICATION_STATUSES, USER_ROLES, Application, Service, User
from app.services.applications import TrackingResult
from app.services.review import ApplicationOverview
from app.web.context import PageContext

STYLE = """
body { font-family: Arial, sans-serif; margin: 0; background: #f9fafb; color: #1f295d; }
header { background: #fff; border-bottom: 1px solid #eee; padding: 12px 32px; display: flex;
         justify-content: space-between; align-items: center; }
header a, header button { margin-left: 16px; color: #1f295d; text-decoration: none; }
main { max-width: 960px; margin: 32px auto; padding: 0 16px; }
.brand { font-weight: bold; font-size: 20px; }
.brand span { color: #911a20; }
.card { background: #fff; border: 1px solid #eee; border-radius: 12px; padding: 20px; margin-bottom: 16px; }
.error { background: #fef2f2; color: #b91c1c; border: 1px solid #fecaca; padding: 12px; border-radius: 8px; }
.notice { background: #f0fdf4; color: #15803d; border: 1px solid #bbf7d0; padding: 12px; border-radius: 8px; }
.status { font-weight: bold; padding: 2px 8px; border-radius: 6px; font-size: 12px; }
.status-pending { background: #fffbeb; color: #d97706; }
.status-processing { background: #eff6ff; color: #2563eb; }
.status-completed { background: #f0fdf4; color: #16a34a; }
.status-rejected { background: #fef2f2; color: #dc2626; }
table { width: 100%; border-collapse: collapse; }
th, td { text-align: left; padding: 8px; border-bottom: 1px solid #f3f4f6; }
label { display: block; margin-top: 8px; }
"""


def _e(value: object) -> str:
    return escape("" if value is None else str(value))


def _date(value: datetime | None) -> str:
    return value.strftime("%d %b %Y") if value else ""


def status_badge(ctx: PageContext, status: str) -> str:
    return f'<span class="status status-{_e(status)}">{_e(ctx.status(status))}</span>'


def error_panel(message: str | None) -> str:
    return f'<div class="error" role="alert">{_e(message)}</div>' if message else ""


def notice_panel(message: str | None) -> str:
    return f'<div class="notice">{_e(message)}</div>' if message else ""


def _nav(ctx: PageContext) -> str:
    links = [f'<a href="/">{_e(ctx.t("home"))}</a>', f'<a href="/track">{_e(ctx.t("track_application"))}</a>']
    if ctx.has_session:
        if ctx.role == "admin":
            links += [
                f'<a href="/admin/dashboard">{_e(ctx.t("admin_dashboard"))}</a>',
                f'<a href="/admin/services">{_e(ctx.t("manage_services"))}</a>',
                f'<a href="/admin/users">{_e(ctx.t("all_users"))}</a>',
            ]
        else:
            links += [
                f'<a href="/dashboard">{_e(ctx.t("dashboard"))}</a>',
                f'<a href="/dashboard/profile">{_e(ctx.t("profile"))}</a>',
            ]
        links.append(
            f'<form method="post" action="/logout" style="display:inline">'
            f'<button type="submit">{_e(ctx.t("logout"))}</button></form>'
        )
    else:
        links += [
            f'<a href="/login">{_e(ctx.t("login"))}</a>',
            f'<a href="/register">{_e(ctx.t("register"))}</a>',
        ]
    other = "kn" if ctx.lang == "en" else "en"
    links.append(f'<a href="/lang/{other}">{"ಕನ್ನಡ" if other == "kn" else "English"}</a>')
    return "".join(links)


def page(ctx: PageContext, title: str, body: str, status_code: int = 200) -> HTMLResponse:
    """Wrap body in the shared layout."""
    html = f"""<!DOCTYPE html>
<html lang="{_e(ctx.lang)}">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>{_e(title)} | {_e(ctx.t("app_name"))}</title>
  <style>{STYLE}</style>
</head>
<body>
  <header><div class="brand"><span>Digital</span> Seva</div><nav>{_nav(ctx)}</nav></header>
  <main>{body}</main>
</body>
</html>"""
    return HTMLResponse(html, status_code=status_code)


def home_page(ctx: PageContext, services: list[Service]) -> HTMLResponse:
    cards = "".join(
        f'<div class="card"><h3>{_e(s.name)}</h3><p>{_e(s.description)}</p>'
        f'<a href="/dashboard/apply?service_id={s.id}">{_e(ctx.t("apply_for_service"))}</a></div>'
        for s in services
    )
    body = (
        f'<h1>{_e(ctx.t("center_name"))}</h1><p>{_e(ctx.t("tagline"))}</p>'
        f'<p><a href="/register">{_e(ctx.t("get_started"))}</a> · '
        f'<a href="/track">{_e(ctx.t("track_application"))}</a></p>'
        f'<h2>{_e(ctx.t("our_services"))}</h2>{cards}'
    )
    return page(ctx, ctx.t("home"), body)


def login_page(ctx: PageContext, email: str = "", error: str | None = None) -> HTMLResponse:
    body = f"""<div class="card"><h1>{_e(ctx.t("login"))}</h1>{error_panel(error)}
<form method="post" action="/login">
  <label>{_e(ctx.t("email"))}<input type="email" name="email" value="{_e(email)}" required /></label>
  <label>{_e(ctx.t("password"))}<input type="password" name="password" required /></label>
  <button type="submit">{_e(ctx.t("login"))}</button>
</form>
<p><a href="/register">{_e(ctx.t("register"))}</a></p></div>"""
    return page(ctx, ctx.t("login"), body, 400 if error else 200)


def register_page(
    ctx: PageContext,
    name: str = "",
    email: str = "",
    phone: str = "",
    error: str | None = None,
) -> HTMLResponse:
    body = f"""<div class="card"><h1>{_e(ctx.t("register"))}</h1>{error_panel(error)}
<form method="post" action="/register">
  <label>{_e(ctx.t("name"))}<input name="name" value="{_e(name)}" required /></label>
  <label>{_e(ctx.t("email"))}<input type="email" name="email" value="{_e(email)}" required /></label>
  <label>{_e(ctx.t("phone"))}<input name="phone" value="{_e(phone)}" /></label>
  <label>{_e(ctx.t("password"))}<input type="password" name="password" minlength="6" required /></label>
  <button type="submit">{_e(ctx.t("register"))}</button>
</form>
<p><a href="/login">{_e(ctx.t("login"))}</a></p></div>"""
    return page(ctx, ctx.t("register"), body, 400 if error else 200)


def track_page(
    ctx: PageContext,
    code: str = "",
    result: TrackingResult | None = None,
    error: str | None = None,
) -> HTMLResponse:
    found = ""
    if result is not None:
        found = f"""<div class="card">
<p>{_e(ctx.t("id_label"))} <strong>{_e(result.tracking_code)}</strong></p>
<p>{_e(ctx.t("service"))}: {_e(result.service_name or ctx.t("unknown_service"))}</p>
<p>{_e(ctx.t("status"))}: {status_badge(ctx, result.status)}</p>
<p>{_e(ctx.t("submitted_on"))}: {_e(_date(result.created_at))}</p></div>"""
    body = f"""<div class="card"><h1>{_e(ctx.t("track_application"))}</h1>
<form method="get" action="/track">
  <input name="code" value="{_e(code)}" placeholder="DSC-123456" aria-label="{_e(ctx.t("enter_application_id"))}" />
  <button type="submit">{_e(ctx.t("track_now"))}</button>
</form>{error_panel(error)}</div>{found}"""
    return page(ctx, ctx.t("track_application"), body, 404 if error else 200)


def _application_rows(ctx: PageContext, applications: list[Application], href: str) -> str:
    return "".join(
        f"<tr><td>{_e(a.tracking_code)}</td>"
        f"<td>{_e(a.service.name if a.service else ctx.t('unknown_service'))}</td>"
        f"<td>{status_badge(ctx, a.status)}</td><td>{_e(_date(a.created_at))}</td>"
        f'<td><a href="{href}/{a.id}">{_e(ctx.t("view_details"))}</a></td></tr>'
        for a in applications
    )


def customer_dashboard_page(
    ctx: PageContext, user: User, applications: list[Application], error: str | None = None
) -> HTMLResponse:
    pending = sum(1 for a in applications if a.status in ("pending", "processing"))
    completed = sum(1 for a in applications if a.status == "completed")
    if applications:
        listing = (
            f'<table><tr><th>{_e(ctx.t("id_label"))}</th><th>{_e(ctx.t("service"))}</th>'
            f'<th>{_e(ctx.t("status"))}</th><th>{_e(ctx.t("submitted_on"))}</th><th></th></tr>'
            f'{_application_rows(ctx, applications, "/dashboard/applications")}</table>'
        )
    else:
        listing = f'<p>{_e(ctx.t("no_applications"))}</p><p>{_e(ctx.t("no_applications_hint"))}</p>'
    body = f"""<h1>{_e(ctx.t("my_dashboard"))}</h1><p>{_e(user.name)} · {_e(ctx.t("dashboard_intro"))}</p>
{error_panel(error)}
<div class="card">{_e(ctx.t("total_applications"))}: {len(applications)} ·
{_e(ctx.t("pending_processing"))}: {pending} · {_e(ctx.t("completed"))}: {completed}</div>
<p><a href="/dashboard/apply">{_e(ctx.t("apply_new_service"))}</a></p>
<div class="card"><h2>{_e(ctx.t("recent_applications"))}</h2>{listing}</div>"""
    return page(ctx, ctx.t("my_dashboard"), body)


def apply_page(
    ctx: PageContext,
    services: list[Service],
    selected: Service | None = None,
    error: str | None = None,
) -> HTMLResponse:
    if selected is None:
        choices = "".join(
            f'<div class="card"><h3>{_e(s.name)}</h3><p>{_e(s.description)}</p>'
            f'<p>{_e(ctx.t("documents"))}: {_e(", ".join(s.required_documents or []))}</p>'
            f'<a href="/dashboard/apply?service_id={s.id}">{_e(ctx.t("continue"))}</a></div>'
            for s in services
        )
        body = (
            f'<h1>{_e(ctx.t("apply_for_service"))}</h1><p>{_e(ctx.t("apply_intro"))}</p>'
            f'{error_panel(error)}<h2>{_e(ctx.t("step_choose_service"))}</h2>{choices}'
        )
        return page(ctx, ctx.t("apply_for_service"), body)

    inputs = "".join(
        f'<label>{_e(label)}<input type="file" name="{_e(label)}" required /></label>'
        for label in selected.required_documents or []
    )
    body = f"""<h1>{_e(ctx.t("apply_for_service"))}</h1>
<h2>{_e(ctx.t("step_upload_documents"))} {_e(selected.name)}</h2>{error_panel(error)}
<div class="card"><form method="post" action="/dashboard/apply" enctype="multipart/form-data">
  <input type="hidden" name="service_id" value="{selected.id}" />
  {inputs}<p>{_e(ctx.t("file_hint"))}</p>
  <button type="submit">{_e(ctx.t("submit_application"))}</button>
</form></div>"""
    return page(ctx, ctx.t("apply_for_service"), body, 422 if error else 200)


def _documents_list(ctx: PageContext, application: Application) -> str:
    items = "".join(
        f'<li><a href="{_e(d.file_url)}" target="_blank" rel="noopener">{_e(d.label)}</a></li>'
        for d in application.documents
    )
    return f'<h3>{_e(ctx.t("documents"))}</h3><ul>{items}</ul>'


def customer_application_page(
    ctx: PageContext,
    application: Application,
    error: str | None = None,
) -> HTMLResponse:
    confirm_js = escape(ctx.t("confirm_delete_application"), quote=True).replace("&#x27;", "\\'")
    body = f"""<h1>{_e(ctx.t("id_label"))} {_e(application.tracking_code)}</h1>{error_panel(error)}
<div class="card">
<p>{_e(ctx.t("service"))}: {_e(application.service.name if application.service else ctx.t("unknown_service"))}</p>
<p>{_e(ctx.t("status"))}: {status_badge(ctx, application.status)}</p>
<p>{_e(ctx.t("remarks"))}: {_e(application.remarks)}</p>
<p>{_e(ctx.t("submitted_on"))}: {_e(_date(application.created_at))}</p>
{_documents_list(ctx, application)}
<form method="post" action="/dashboard/applications/{application.id}/delete"
      onsubmit="return confirm('{confirm_js}')">
  <input type="hidden" name="confirm" value="true" />
  <button type="submit">{_e(ctx.t("delete_application"))}</button>
</form></div>"""
    return page(ctx, application.tracking_code, body)


def profile_page(
    ctx: PageContext, user: User, notice: str | None = None, error: str | None = None
) -> HTMLResponse:
    body = f"""<h1>{_e(ctx.t("profile"))}</h1>{notice_panel(notice)}{error_panel(error)}
<div class="card"><form method="post" action="/dashboard/profile">
  <label>{_e(ctx.t("name"))}<input name="name" value="{_e(user.name)}" required /></label>
  <label>{_e(ctx.t("email"))}<input value="{_e(user.email)}" disabled /></label>
  <label>{_e(ctx.t("phone"))}<input name="phone" value="{_e(user.phone)}" /></label>
  <button type="submit">{_e(ctx.t("save"))}</button>
</form></div>"""
    return page(ctx, ctx.t("profile"), body, 422 if error else 200)


def admin_dashboard_page(ctx: PageContext, overview: ApplicationOverview, search: str = "") -> HTMLResponse:
    stats = " · ".join(
        f"{_e(ctx.status(status))}: {overview.by_status.get(status, 0)}"
        for status in APPLICATION_STATUSES
    )
    rows = "".join(
        f"<tr><td>{_e(a.tracking_code)}</td><td>{_e(a.user.name if a.user else '')}"
        f"<br/><small>{_e(a.user.email if a.user else '')}</small></td>"
        f"<td>{_e(a.service.name if a.service else ctx.t('unknown_service'))}</td>"
        f"<td>{status_badge(ctx, a.status)}</td><td>{_e(_date(a.created_at))}</td>"
        f'<td><a href="/admin/applications/{a.id}">{_e(ctx.t("view_details"))}</a></td></tr>'
        for a in overview.applications
    )
    body = f"""<h1>{_e(ctx.t("admin_dashboard"))}</h1><p>{_e(ctx.t("admin_dashboard_intro"))}</p>
<div class="card">{_e(ctx.t("total_applications"))}: {overview.total} · {stats}</div>
<form method="get" action="/admin/dashboard"><input name="search" value="{_e(search)}" />
<button type="submit">{_e(ctx.t("search"))}</button></form>
<div class="card"><table><tr><th>{_e(ctx.t("id_label"))}</th><th>{_e(ctx.t("applicant"))}</th>
<th>{_e(ctx.t("service"))}</th><th>{_e(ctx.t("status"))}</th><th>{_e(ctx.t("submitted_on"))}</th><th></th></tr>
{rows}</table></div>"""
    return page(ctx, ctx.t("admin_dashboard"), body)


def admin_application_page(
    ctx: PageContext,
    application: Application,
    notice: str | None = None,
    error: str | None = None,
) -> HTMLResponse:
    options = "".join(
        f'<option value="{s}"{" selected" if s == application.status else ""}>{_e(ctx.status(s))}</option>'
        for s in APPLICATION_STATUSES
    )
    user = application.user
    body = f"""<h1>{_e(ctx.t("id_label"))} {_e(application.tracking_code)}</h1>
{notice_panel(notice)}{error_panel(error)}
<div class="card">
<p>{_e(ctx.t("applicant"))}: {_e(user.name if user else "")} ({_e(user.email if user else "")}, {_e(user.phone if user else "")})</p>
<p>{_e(ctx.t("service"))}: {_e(application.service.name if application.service else ctx.t("unknown_service"))}</p>
<p>{_e(ctx.t("status"))}: {status_badge(ctx, application.status)}</p>
<p>{_e(ctx.t("submitted_on"))}: {_e(_date(application.created_at))}</p>
{_documents_list(ctx, application)}</div>
<div class="card"><h2>{_e(ctx.t("update_status"))}</h2>
<form method="post" action="/admin/applications/{application.id}">
  <label>{_e(ctx.t("status"))}<select name="status">{options}</select></label>
  <label>{_e(ctx.t("remarks"))}<textarea name="remarks">{_e(application.remarks)}</textarea></label>
  <button type="submit">{_e(ctx.t("update_status"))}</button>
</form></div>"""
    return page(ctx, application.tracking_code, body, 422 if error else 200)


def _service_form(ctx: PageContext, action: str, service: Service | None, submit: str) -> str:
    docs = ", ".join(service.required_documents or []) if service else ""
    return f"""<form method="post" action="{action}">
  <label>{_e(ctx.t("service_name"))}<input name="name" value="{_e(service.name if service else "")}" required /></label>
  <label>{_e(ctx.t("description"))}<textarea name="description">{_e(service.description if service else "")}</textarea></label>
  <label>{_e(ctx.t("required_documents_csv"))}<input name="documents" value="{_e(docs)}" /></label>
  <button type="submit">{_e(submit)}</button>
</form>"""


def admin_services_page(
    ctx: PageContext, services: list[Service], error: str | None = None
) -> HTMLResponse:
    confirm_js = escape(ctx.t("confirm_delete_service"), quote=True).replace("&#x27;", "\\'")
    cards = "".join(
        f'<div class="card"><h3>{_e(s.name)}</h3>'
        f'{_service_form(ctx, f"/admin/services/{s.id}", s, ctx.t("save"))}'
        f'<form method="post" action="/admin/services/{s.id}/delete" '
        f"onsubmit=\"return confirm('{confirm_js}')\">"
        f'<input type="hidden" name="confirm" value="true" />'
        f'<button type="submit">{_e(ctx.t("delete"))}</button></form></div>'
        for s in services
    )
    body = f"""<h1>{_e(ctx.t("manage_services"))}</h1>{error_panel(error)}
<div class="card"><h2>{_e(ctx.t("add_service"))}</h2>{_service_form(ctx, "/admin/services", None, ctx.t("add_service"))}</div>
{cards}"""
    return page(ctx, ctx.t("manage_services"), body, 422 if error else 200)


def admin_users_page(
    ctx: PageContext, users: list[User], search: str = "", error: str | None = None
) -> HTMLResponse:
    rows = ""
    for u in users:
        options = "".join(
            f'<option value="{r}"{" selected" if r == u.role else ""}>{r}</option>' for r in USER_ROLES
        )
        rows += (
            f"<tr><td>{_e(u.name)}</td><td>{_e(u.email)}<br/><small>{_e(u.phone)}</small></td>"
            f"<td>{_e(_date(u.created_at))}</td>"
            f'<td><form method="post" action="/admin/users/{_e(u.id)}/role">'
            f'<select name="role">{options}</select>'
            f'<button type="submit">{_e(ctx.t("change_role"))}</button></form></td></tr>'
        )
    body = f"""<h1>{_e(ctx.t("all_users"))}</h1>{error_panel(error)}
<form method="get" action="/admin/users"><input name="search" value="{_e(search)}" />
<button type="submit">{_e(ctx.t("search"))}</button></form>
<div class="card"><table><tr><th>{_e(ctx.t("name"))}</th><th>{_e(ctx.t("email"))}</th>
<th>{_e(ctx.t("joined"))}</th><th>{_e(ctx.t("role"))}</th></tr>{rows}</table></div>"""
    return page(ctx, ctx.t("all_users"), body, 422 if error else 200)
