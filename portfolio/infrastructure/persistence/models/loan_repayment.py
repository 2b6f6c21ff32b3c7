"""Loan repayment ORM model. Rows are removed on delete (no soft-delete marker)."""

from datetime import date

from sqlalchemy import Date, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.infrastructure.persistence.database import Base
from portfolio.infrastructure.persistence.models.mixins import PortfolioModel


class LoanRepayment(PortfolioModel, Base):
    """Table: loan_repayments."""

    __tablename__ = "loan_repayments"

    loan_id: Mapped[str] = mapped_column(
        String, ForeignKey("loans.id", ondelete="CASCADE"), nullable=False, index=True
    )
    payment_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    amount: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False)
    principal_amount: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False)
    interest_amount: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False)
    payment_method: Mapped[str | None] = mapped_column(String(50), nullable=True)
    reference_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
