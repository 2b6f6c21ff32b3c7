"""Owner ORM model: individual or corporation a user holds loans through."""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.domain.enums import OwnerKind
from portfolio.infrastructure.persistence.database import Base
from portfolio.infrastructure.persistence.models.mixins import SoftDeletePortfolioModel


class Owner(SoftDeletePortfolioModel, Base):
    """Table: owners."""

    __tablename__ = "owners"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    owner_kind: Mapped[str] = mapped_column(
        String(20), nullable=False, default=OwnerKind.INDIVIDUAL.value
    )
