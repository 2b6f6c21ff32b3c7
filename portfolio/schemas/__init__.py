"""Pydantic request/response schemas for the API."""

from portfolio.schemas.auth import LoginRequest, TokenResponse
from portfolio.schemas.expense import ExpenseCreate, ExpenseUpdate
from portfolio.schemas.health import HealthResponse
from portfolio.schemas.loan import LoanCreate, LoanUpdate
from portfolio.schemas.loan_repayment import LoanRepaymentCreate, LoanRepaymentUpdate
from portfolio.schemas.owner import OwnerCreate, OwnerUpdate
from portfolio.schemas.property import PropertyCreate, PropertyUpdate
from portfolio.schemas.rent_roll import RentRollCreate, RentRollUpdate
from portfolio.schemas.user import UserCreate, UserUpdate

__all__ = [
    "ExpenseCreate",
    "ExpenseUpdate",
    "HealthResponse",
    "LoanCreate",
    "LoanRepaymentCreate",
    "LoanRepaymentUpdate",
    "LoanUpdate",
    "LoginRequest",
    "OwnerCreate",
    "OwnerUpdate",
    "PropertyCreate",
    "PropertyUpdate",
    "RentRollCreate",
    "RentRollUpdate",
    "TokenResponse",
    "UserCreate",
    "UserUpdate",
]
