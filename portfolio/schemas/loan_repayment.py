"""Loan repayment API schemas."""

from datetime import date

from pydantic import Field, model_validator

from portfolio.schemas.base import PatchModel, WriteModel


class LoanRepaymentCreate(WriteModel):
    loan_id: str = Field(..., min_length=1)
    payment_date: date
    amount: float = Field(..., gt=0)
    principal_amount: float = Field(..., ge=0)
    interest_amount: float = Field(..., ge=0)
    payment_method: str | None = Field(default=None, max_length=50)
    reference_number: str | None = Field(default=None, max_length=100)
    notes: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def split_matches_amount(self) -> "LoanRepaymentCreate":
        if round(self.principal_amount + self.interest_amount, 2) > round(self.amount, 2):
            raise ValueError("principal_amount + interest_amount cannot exceed amount")
        return self


class LoanRepaymentUpdate(PatchModel):
    non_nullable = frozenset({"payment_date", "amount", "principal_amount", "interest_amount"})

    payment_date: date | None = None
    amount: float | None = Field(default=None, gt=0)
    principal_amount: float | None = Field(default=None, ge=0)
    interest_amount: float | None = Field(default=None, ge=0)
    payment_method: str | None = Field(default=None, max_length=50)
    reference_number: str | None = Field(default=None, max_length=100)
    notes: str | None = Field(default=None, max_length=2000)
