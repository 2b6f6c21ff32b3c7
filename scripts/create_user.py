"""Create a user directly in the database (bootstrap the first admin).

Usage:
    python -m scripts.create_user <email> <name> [role] [password]
Role defaults to admin. If password is omitted, a random one is printed.
"""

import asyncio
import secrets
import sys

from sqlalchemy import func, select

from portfolio.domain.enums import UserRole
from portfolio.infrastructure.persistence.database import dispose_engine, get_session_factory
from portfolio.infrastructure.persistence.models import User
from portfolio.infrastructure.security.password import get_password_hash


async def main() -> None:
    """Insert one user; refuses when a live user already has the email."""
    if len(sys.argv) < 3:
        print(
            "Usage: python -m scripts.create_user <email> <name> [role] [password]",
            file=sys.stderr,
        )
        sys.exit(1)
    email = sys.argv[1].strip().lower()
    name = sys.argv[2]
    role = sys.argv[3] if len(sys.argv) > 3 else UserRole.ADMIN.value
    password = sys.argv[4] if len(sys.argv) > 4 else None
    if role not in UserRole.values():
        print(f"Unknown role {role!r}; expected one of {UserRole.values()}", file=sys.stderr)
        sys.exit(1)
    if not password:
        password = secrets.token_urlsafe(12)
        print(f"Generated password: {password}")

    session_factory = get_session_factory()
    try:
        async with session_factory() as session:
            async with session.begin():
                existing = await session.execute(
                    select(User.id).where(
                        func.lower(User.email) == email, User.deleted_at.is_(None)
                    )
                )
                if existing.first() is not None:
                    print(f"User already exists: {email}", file=sys.stderr)
                    sys.exit(1)
                user = User(
                    email=email,
                    name=name,
                    role=role,
                    password_hash=get_password_hash(password),
                )
                session.add(user)
                await session.flush()
                print(f"Created {role} user {email} (id={user.id})")
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
