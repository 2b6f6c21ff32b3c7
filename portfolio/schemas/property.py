"""Property API schemas."""

from datetime import date

from pydantic import Field

from portfolio.domain.enums import PropertyType
from portfolio.schemas.base import PatchModel, WriteModel


class PropertyCreate(WriteModel):
    name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=200)
    property_type: PropertyType
    purchase_price: float = Field(..., gt=0)
    purchase_date: date
    current_valuation: float | None = Field(default=None, gt=0)


class PropertyUpdate(PatchModel):
    non_nullable = frozenset({"name", "address", "property_type", "purchase_price", "purchase_date"})

    name: str | None = Field(default=None, min_length=1, max_length=100)
    address: str | None = Field(default=None, min_length=1, max_length=200)
    property_type: PropertyType | None = None
    purchase_price: float | None = Field(default=None, gt=0)
    purchase_date: date | None = None
    current_valuation: float | None = Field(default=None, gt=0)
