"""Loan API schemas.

A loan hangs off a property, an owner, or both; at least one must be given
on create (enforced by the ownership resolver, which also checks both).
"""

from pydantic import Field

from portfolio.domain.enums import LoanType
from portfolio.schemas.base import PatchModel, WriteModel


class LoanCreate(WriteModel):
    property_id: str | None = Field(default=None, min_length=1)
    owner_id: str | None = Field(default=None, min_length=1)
    lender_name: str = Field(..., min_length=1, max_length=100)
    branch_name: str | None = Field(default=None, max_length=100)
    loan_type: LoanType
    principal_amount: float = Field(..., gt=0)
    current_balance: float = Field(..., ge=0)
    interest_rate: float = Field(..., ge=0, le=100)
    loan_term_months: int = Field(..., gt=0)
    monthly_payment: float = Field(..., gt=0)
    notes: str | None = Field(default=None, max_length=2000)


class LoanUpdate(PatchModel):
    non_nullable = frozenset({
        "lender_name", "loan_type", "principal_amount", "current_balance",
        "interest_rate", "loan_term_months", "monthly_payment",
    })

    property_id: str | None = Field(default=None, min_length=1)
    owner_id: str | None = Field(default=None, min_length=1)
    lender_name: str | None = Field(default=None, min_length=1, max_length=100)
    branch_name: str | None = Field(default=None, max_length=100)
    loan_type: LoanType | None = None
    principal_amount: float | None = Field(default=None, gt=0)
    current_balance: float | None = Field(default=None, ge=0)
    interest_rate: float | None = Field(default=None, ge=0, le=100)
    loan_term_months: int | None = Field(default=None, gt=0)
    monthly_payment: float | None = Field(default=None, gt=0)
    notes: str | None = Field(default=None, max_length=2000)
