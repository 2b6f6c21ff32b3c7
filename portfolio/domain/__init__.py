"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from portfolio.domain.enums import (
    ExpenseCategory,
    LoanType,
    OccupancyStatus,
    OwnerKind,
    PropertyType,
    RecurringFrequency,
    SortOrder,
    UserRole,
)
from portfolio.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BadRequestException,
    ConflictException,
    PortfolioException,
    ResourceNotFoundException,
    StoreError,
    ValidationException,
)

__all__ = [
    # Enums
    "ExpenseCategory",
    "LoanType",
    "OccupancyStatus",
    "OwnerKind",
    "PropertyType",
    "RecurringFrequency",
    "SortOrder",
    "UserRole",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "BadRequestException",
    "ConflictException",
    "PortfolioException",
    "ResourceNotFoundException",
    "StoreError",
    "ValidationException",
]
