"""Domain enumerations for the Portfolio application.

Enums represent fixed sets of domain values (property types, roles, etc.).
"""

from enum import Enum


class _ValuesMixin:
    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [member.value for member in cls]  # type: ignore[attr-defined]


class UserRole(_ValuesMixin, str, Enum):
    """Role of a portfolio user; admin bypasses ownership on the users resource."""

    ADMIN = "admin"
    OWNER = "owner"
    MANAGER = "manager"
    VIEWER = "viewer"
    AUDITOR = "auditor"


class PropertyType(_ValuesMixin, str, Enum):
    APARTMENT = "apartment"
    OFFICE = "office"
    HOUSE = "house"
    LAND = "land"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"
    MIXED_USE = "mixed_use"
    OTHER = "other"


class OwnerKind(_ValuesMixin, str, Enum):
    INDIVIDUAL = "individual"
    CORPORATION = "corporation"


class LoanType(_ValuesMixin, str, Enum):
    MORTGAGE = "mortgage"
    BUSINESS = "business"
    PERSONAL = "personal"
    OTHER = "other"


class OccupancyStatus(_ValuesMixin, str, Enum):
    """Rent roll unit status. Vacant units carry no tenant or lease dates."""

    OCCUPIED = "occupied"
    VACANT = "vacant"
    RESERVED = "reserved"


class ExpenseCategory(_ValuesMixin, str, Enum):
    MANAGEMENT_FEE = "management_fee"
    REPAIR_COST = "repair_cost"
    UTILITY = "utility"
    INSURANCE = "insurance"
    TAX = "tax"
    OTHER = "other"


class RecurringFrequency(_ValuesMixin, str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"


class Language(_ValuesMixin, str, Enum):
    JA = "ja"
    EN = "en"


class SortOrder(_ValuesMixin, str, Enum):
    ASC = "asc"
    DESC = "desc"
