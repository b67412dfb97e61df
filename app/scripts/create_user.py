"""
Create an account of any role (the only way to add further Admins). Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD EMAIL FIRST_NAME LAST_NAME [role]
Example:
  python -m app.scripts.create_user alice 'S3cure!pass' alice@example.com Alice Smith Admin
"""
import argparse
import sys

from pydantic import ValidationError

from app.api.v1.lookups import format_validation_errors
from app.core.database import session_scope
from app.core.security import hash_password, password_rule_violations
from app.models import User, UserRole
from app.schemas.user import UserUpdate


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a DineClick user account.")
    parser.add_argument("username", help="Username (letters, digits, - . _ @ +)")
    parser.add_argument("password", help="Password (8-128 chars, mixed case, digit, symbol)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("first_name", help="First name (1-30 chars)")
    parser.add_argument("last_name", help="Last name (1-30 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.REGISTERED_USER.value,
        choices=[r.value for r in UserRole],
    )
    args = parser.parse_args()

    try:
        profile = UserUpdate(
            username=args.username.strip(),
            email=args.email,
            first_name=args.first_name,
            last_name=args.last_name,
        )
    except ValidationError as e:
        for err in format_validation_errors(e):
            print(f"{err['field']}: {err['error']}", file=sys.stderr)
        return 1
    violations = password_rule_violations(args.password)
    if violations:
        for message in violations:
            print(f"password: {message}", file=sys.stderr)
        return 1

    with session_scope() as db:
        existing = db.query(User).filter(User.username_is(profile.username)).first()
        if existing:
            print(f"User '{profile.username}' already exists.", file=sys.stderr)
            return 1
        user = User(
            username=profile.username,
            email=profile.email,
            password_hash=hash_password(args.password),
            first_name=profile.first_name,
            last_name=profile.last_name,
            role=UserRole(args.role),
        )
        db.add(user)
        db.commit()
        print(f"Created user '{profile.username}' with role '{args.role}' (id {user.id}).")
        return 0


if __name__ == "__main__":
    sys.exit(main())
