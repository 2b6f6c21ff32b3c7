"""Rent roll API schemas (one row per rentable unit of a property)."""

from datetime import date

from pydantic import Field, model_validator

from portfolio.domain.enums import OccupancyStatus
from portfolio.schemas.base import PatchModel, WriteModel


class RentRollCreate(WriteModel):
    property_id: str = Field(..., min_length=1)
    room_number: str = Field(..., min_length=1, max_length=20)
    tenant_name: str | None = Field(default=None, max_length=100)
    monthly_rent: float = Field(..., ge=0)
    occupancy_status: OccupancyStatus = OccupancyStatus.VACANT
    lease_start_date: date | None = None
    lease_end_date: date | None = None
    security_deposit: float | None = Field(default=None, ge=0)
    key_money: float | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def lease_dates_ordered(self) -> "RentRollCreate":
        if self.lease_start_date and self.lease_end_date and self.lease_end_date < self.lease_start_date:
            raise ValueError("lease_end_date must not be before lease_start_date")
        return self


class RentRollUpdate(PatchModel):
    non_nullable = frozenset({"room_number", "monthly_rent", "occupancy_status"})

    room_number: str | None = Field(default=None, min_length=1, max_length=20)
    tenant_name: str | None = Field(default=None, max_length=100)
    monthly_rent: float | None = Field(default=None, ge=0)
    occupancy_status: OccupancyStatus | None = None
    lease_start_date: date | None = None
    lease_end_date: date | None = None
    security_deposit: float | None = Field(default=None, ge=0)
    key_money: float | None = Field(default=None, ge=0)
    notes: str | None = Field(default=None, max_length=2000)
