"""Expense ORM model (property operating costs)."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.infrastructure.persistence.database import Base
from portfolio.infrastructure.persistence.models.mixins import SoftDeletePortfolioModel


class Expense(SoftDeletePortfolioModel, Base):
    """Table: expenses."""

    __tablename__ = "expenses"

    property_id: Mapped[str] = mapped_column(
        String, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    )
    expense_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    amount: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False)
    vendor: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    receipt_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    recurring_frequency: Mapped[str | None] = mapped_column(String(20), nullable=True)
