"""User lookups for authentication. Returns plain values, never ORM objects."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portfolio.domain.exceptions import StoreError
from portfolio.infrastructure.persistence.models.user import User


class UserRepository:
    """Live-user lookups by email (login) and id (principal resolution)."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def _first(self, stmt: Any) -> Any:
        try:
            async with self._session_factory() as session:
                return (await session.execute(stmt)).first()
        except SQLAlchemyError as e:
            raise StoreError(StoreError.STORE_FAILURE, str(e)) from e

    async def get_credentials_by_email(self, email: str) -> tuple[str, str] | None:
        row = await self._first(
            select(User.id, User.password_hash).where(
                func.lower(User.email) == email.strip().lower(),
                User.deleted_at.is_(None),
            )
        )
        return (row.id, row.password_hash) if row is not None else None

    async def get_principal_row(self, user_id: str) -> dict[str, Any] | None:
        row = await self._first(
            select(User.id, User.email, User.role).where(
                User.id == user_id, User.deleted_at.is_(None)
            )
        )
        if row is None:
            return None
        return {"id": row.id, "email": row.email, "role": row.role}
