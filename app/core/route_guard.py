"""Cookie-based page gate evaluated before any page renders.

The guard trusts the `session` and `role` cookies as-is: it does not verify the
token or re-read the role from the database. Page handlers and the JSON API do
that on every request, so a stale role marker only affects which page a user is
bounced to, never what data they can reach.
"""

CUSTOMER_AREA = "/dashboard"
ADMIN_AREA = "/admin"
LOGIN_PATH = "/login"
REGISTER_PATH = "/register"
CUSTOMER_HOME = "/dashboard"
ADMIN_HOME = "/admin/dashboard"

SESSION_COOKIE = "session"
ROLE_COOKIE = "role"
LANG_COOKIE = "lang"


def _under(path: str, area: str) -> bool:
    return path == area or path.startswith(area + "/")


def resolve_redirect(path: str, session: str | None, role: str | None) -> str | None:
    """
    Return the path to redirect to, or None to let the request through.

    Rules run in order:
    1. no session and path under /dashboard or /admin -> /login
    2. session, path under /admin, role marker not admin -> /dashboard
    3. session and path is /login or /register -> role's home page
    """
    has_session = bool(session)
    if not has_session:
        if _under(path, CUSTOMER_AREA) or _under(path, ADMIN_AREA):
            return LOGIN_PATH
        return None
    if _under(path, ADMIN_AREA) and role != "admin":
        return CUSTOMER_HOME
    if path in (LOGIN_PATH, REGISTER_PATH):
        return ADMIN_HOME if role == "admin" else CUSTOMER_HOME
    return None


def home_for_role(role: str | None) -> str:
    """Landing page after login for the given role."""
    return ADMIN_HOME if role == "admin" else CUSTOMER_HOME
