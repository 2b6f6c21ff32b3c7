"""Loan ORM model. Linked to a property, an owner, or both."""

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.infrastructure.persistence.database import Base
from portfolio.infrastructure.persistence.models.mixins import SoftDeletePortfolioModel


class Loan(SoftDeletePortfolioModel, Base):
    """Table: loans. At least one of property_id / owner_id is set."""

    __tablename__ = "loans"

    property_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("properties.id", ondelete="CASCADE"), nullable=True, index=True
    )
    owner_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("owners.id", ondelete="SET NULL"), nullable=True, index=True
    )
    lender_name: Mapped[str] = mapped_column(String(100), nullable=False)
    branch_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    loan_type: Mapped[str] = mapped_column(String(20), nullable=False)
    principal_amount: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False)
    current_balance: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False)
    interest_rate: Mapped[float] = mapped_column(Numeric(6, 3, asdecimal=False), nullable=False)
    loan_term_months: Mapped[int] = mapped_column(Integer, nullable=False)
    monthly_payment: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "property_id IS NOT NULL OR owner_id IS NOT NULL", name="ck_loans_has_parent"
        ),
    )
