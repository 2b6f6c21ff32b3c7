"""Rent roll ORM model: one row per rentable unit of a property."""

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, Numeric, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.domain.enums import OccupancyStatus
from portfolio.infrastructure.persistence.database import Base
from portfolio.infrastructure.persistence.models.mixins import SoftDeletePortfolioModel


class RentRoll(SoftDeletePortfolioModel, Base):
    """Table: rent_rolls. room_number unique per property among live rows."""

    __tablename__ = "rent_rolls"

    property_id: Mapped[str] = mapped_column(
        String, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    )
    room_number: Mapped[str] = mapped_column(String(20), nullable=False)
    tenant_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    monthly_rent: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    occupancy_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=OccupancyStatus.VACANT.value
    )
    lease_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    lease_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    security_deposit: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)
    key_money: Mapped[float | None] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index(
            "uq_rent_rolls_property_room_live",
            "property_id",
            "room_number",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )
