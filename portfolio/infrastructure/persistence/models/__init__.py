"""Persistence models: ORM entities and mixins."""

from portfolio.infrastructure.persistence.models.expense import Expense
from portfolio.infrastructure.persistence.models.loan import Loan
from portfolio.infrastructure.persistence.models.loan_repayment import LoanRepayment
from portfolio.infrastructure.persistence.models.mixins import (
    CuidMixin,
    PortfolioModel,
    SoftDeleteMixin,
    SoftDeletePortfolioModel,
    TimestampMixin,
)
from portfolio.infrastructure.persistence.models.owner import Owner
from portfolio.infrastructure.persistence.models.property import Property
from portfolio.infrastructure.persistence.models.rent_roll import RentRoll
from portfolio.infrastructure.persistence.models.user import User

# Table name -> ORM class, used by the descriptor-driven store.
MODELS_BY_TABLE = {
    model.__tablename__: model
    for model in (User, Property, Owner, Loan, LoanRepayment, RentRoll, Expense)
}

__all__ = [
    "CuidMixin",
    "Expense",
    "Loan",
    "LoanRepayment",
    "MODELS_BY_TABLE",
    "Owner",
    "PortfolioModel",
    "Property",
    "RentRoll",
    "SoftDeleteMixin",
    "SoftDeletePortfolioModel",
    "TimestampMixin",
    "User",
]
