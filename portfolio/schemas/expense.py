"""Expense API schemas."""

from datetime import datetime

from pydantic import Field, model_validator

from portfolio.domain.enums import ExpenseCategory, RecurringFrequency
from portfolio.schemas.base import PatchModel, WriteModel


class ExpenseCreate(WriteModel):
    property_id: str = Field(..., min_length=1)
    expense_date: datetime
    category: ExpenseCategory
    amount: float = Field(..., ge=0)
    vendor: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    receipt_url: str | None = Field(default=None, max_length=500)
    is_recurring: bool = False
    recurring_frequency: RecurringFrequency | None = None

    @model_validator(mode="after")
    def frequency_when_recurring(self) -> "ExpenseCreate":
        if self.is_recurring and self.recurring_frequency is None:
            raise ValueError("recurring_frequency is required when is_recurring is true")
        if not self.is_recurring:
            self.recurring_frequency = None
        return self


class ExpenseUpdate(PatchModel):
    non_nullable = frozenset({"expense_date", "category", "amount", "is_recurring"})

    expense_date: datetime | None = None
    category: ExpenseCategory | None = None
    amount: float | None = Field(default=None, ge=0)
    vendor: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    receipt_url: str | None = Field(default=None, max_length=500)
    is_recurring: bool | None = None
    recurring_frequency: RecurringFrequency | None = None
