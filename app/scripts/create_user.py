"""
Create an account and profile (e.g. first admin) with the local identity backend. Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD NAME [--phone PHONE] [--role customer|admin]
Example:
  python -m app.scripts.create_user admin@example.com your-secure-password "Admin User" --role admin
"""
import argparse
import sys

from app.core.database import session_scope
from app.core.errors import AppError
from app.models import USER_ROLES
from app.services import accounts
from app.services.identity import LocalIdentityProvider


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a Digital Seva user from the command line.")
    parser.add_argument("email", help="E-mail address used to log in")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("name", help="Display name")
    parser.add_argument("--phone", default=None)
    parser.add_argument("--role", default="customer", choices=list(USER_ROLES))
    args = parser.parse_args()

    with session_scope() as db:
        try:
            session = accounts.register(
                db, LocalIdentityProvider(db), args.name, args.email, args.phone, args.password
            )
            if args.role != session.user.role:
                accounts.set_user_role(db, session.user.id, args.role)
        except AppError as e:
            print(e.message, file=sys.stderr)
            return 1
        print(f"Created user '{session.user.email}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
