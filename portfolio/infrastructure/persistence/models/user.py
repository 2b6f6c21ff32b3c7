"""User ORM model: portfolio account and the root of every ownership chain."""

from sqlalchemy import Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.domain.enums import UserRole
from portfolio.infrastructure.persistence.database import Base
from portfolio.infrastructure.persistence.models.mixins import SoftDeletePortfolioModel


class User(SoftDeletePortfolioModel, Base):
    """User model. Table: users. Email unique among live rows."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.VIEWER.value, index=True
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="Asia/Tokyo")
    language: Mapped[str] = mapped_column(String(5), nullable=False, default="ja")

    __table_args__ = (
        Index(
            "uq_users_email_live",
            "email",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )
