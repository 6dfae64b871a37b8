"""
Create a user (e.g. first admin). Run from project root:
  python -m app.scripts.create_user EMAIL NAME PASSWORD [role]
Example:
  python -m app.scripts.create_user admin@example.com "Admin User" your-secure-password admin
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.core.errors import EmailAlreadyRegistered
from app.core.roles import Role
from app.core.security import EMAIL_MAX_LEN, NAME_MAX_LEN, PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.services.user_store import UserStore
from app.services.users import register_user


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a Warden user (no registration endpoint).")
    parser.add_argument("email", help=f"Email (max {EMAIL_MAX_LEN} chars)")
    parser.add_argument("name", help=f"Display name (max {NAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default=Role.USER.value, choices=[r.value for r in Role])
    args = parser.parse_args()

    email = args.email.strip()
    name = args.name.strip()
    if not email or len(email) > EMAIL_MAX_LEN or "@" not in email:
        print("Invalid email.", file=sys.stderr)
        return 1
    if not name or len(name) > NAME_MAX_LEN:
        print("Invalid name length.", file=sys.stderr)
        return 1
    if len(args.password) < PASSWORD_MIN_LEN or len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        register_user(UserStore(db), email=email, name=name, password=args.password, role=args.role)
        print(f"Created user '{email}' with role '{args.role}'.")
        return 0
    except EmailAlreadyRegistered:
        print(f"User '{email}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
