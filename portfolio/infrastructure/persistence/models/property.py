"""Property ORM model (owned directly by a user)."""

from datetime import date

from sqlalchemy import Date, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.infrastructure.persistence.database import Base
from portfolio.infrastructure.persistence.models.mixins import SoftDeletePortfolioModel


class Property(SoftDeletePortfolioModel, Base):
    """Real-estate property. Table: properties."""

    __tablename__ = "properties"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    address: Mapped[str] = mapped_column(String(200), nullable=False)
    property_type: Mapped[str] = mapped_column(String(20), nullable=False)
    purchase_price: Mapped[float] = mapped_column(Numeric(14, 2, asdecimal=False), nullable=False)
    purchase_date: Mapped[date] = mapped_column(Date, nullable=False)
    current_valuation: Mapped[float | None] = mapped_column(
        Numeric(14, 2, asdecimal=False), nullable=True
    )
