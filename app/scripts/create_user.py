"""
Create a user (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user FULLNAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user "Jane Doe" jane@example.com your-secure-password ADMIN
"""
import argparse
import asyncio
import sys

from pydantic import ValidationError

from app.core.config import get_settings
from app.core.database import Database
from app.core.errors import ServiceError
from app.core.logging import configure_logging
from app.core.security import hash_password_async
from app.models.user import UserRole
from app.schemas.auth import RegisterRequest
from app.services.users import DuplicateEmailError, create_user


async def _create(data: RegisterRequest, role: UserRole) -> int:
    settings = get_settings()
    db = Database(settings.DATABASE_URL)
    try:
        async with db.sessionmaker() as session:
            password_hash = await hash_password_async(data.password, settings.BCRYPT_ROUNDS)
            try:
                await create_user(
                    session,
                    fullname=data.fullname,
                    email=data.email,
                    password_hash=password_hash,
                    role=role,
                )
            except DuplicateEmailError:
                print(f"User '{data.email}' already exists.", file=sys.stderr)
                return 1
            except ServiceError as e:
                print(f"Could not create user: {e.message}", file=sys.stderr)
                return 1
        print(f"Created user '{data.email}' with role '{role.value}'.")
        return 0
    finally:
        await db.dispose()


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a user from the command line.")
    parser.add_argument("fullname", help="Full name (3-30 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (at least 6 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.USER.value,
        choices=[r.value for r in UserRole],
    )
    args = parser.parse_args()
    configure_logging(get_settings().LOG_LEVEL)

    try:
        data = RegisterRequest(
            fullname=args.fullname.strip(),
            email=args.email.strip(),
            password=args.password,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"{field}: {err['msg']}", file=sys.stderr)
        return 1

    return asyncio.run(_create(data, UserRole(args.role)))


if __name__ == "__main__":
    sys.exit(main())
