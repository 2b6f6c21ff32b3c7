"""Resource catalog: descriptors for every REST resource of the portfolio API."""

from collections.abc import Callable

from portfolio.application.resources.descriptors import (
    FilterField,
    ParentLink,
    ResourceDescriptor,
    ResourceRegistry,
    UniqueRule,
)
from portfolio.application.resources.policies import RentRollPolicy, UserPolicy
from portfolio.domain.enums import (
    ExpenseCategory,
    LoanType,
    OccupancyStatus,
    OwnerKind,
    PropertyType,
    UserRole,
)
from portfolio.schemas import (
    ExpenseCreate,
    ExpenseUpdate,
    LoanCreate,
    LoanRepaymentCreate,
    LoanRepaymentUpdate,
    LoanUpdate,
    OwnerCreate,
    OwnerUpdate,
    PropertyCreate,
    PropertyUpdate,
    RentRollCreate,
    RentRollUpdate,
    UserCreate,
    UserUpdate,
)

PROPERTIES = "properties"
OWNERS = "owners"
LOANS = "loans"
LOAN_REPAYMENTS = "loan-repayments"
RENT_ROLLS = "rent-rolls"
EXPENSES = "expenses"
USERS = "users"

_TIMESTAMPS = frozenset({"created_at", "updated_at"})


def build_registry(hash_password: Callable[[str], str]) -> ResourceRegistry:
    """Build the read-only registry used by the access layer and the store.

    Args:
        hash_password: Password hasher injected into the users policy.

    Returns:
        ResourceRegistry with expanded ownership chains.
    """
    return ResourceRegistry([
        ResourceDescriptor(
            name=PROPERTIES,
            table="properties",
            create_schema=PropertyCreate,
            update_schema=PropertyUpdate,
            owner_column="user_id",
            filters=(
                FilterField("property_type", "property_type", choices=tuple(PropertyType.values())),
            ),
            search_fields=("name", "address"),
            sortable=_TIMESTAMPS | {"name", "purchase_date", "purchase_price"},
            dependents=(LOANS, RENT_ROLLS, EXPENSES, LOAN_REPAYMENTS),
        ),
        ResourceDescriptor(
            name=OWNERS,
            table="owners",
            create_schema=OwnerCreate,
            update_schema=OwnerUpdate,
            owner_column="user_id",
            filters=(FilterField("owner_kind", "owner_kind", choices=tuple(OwnerKind.values())),),
            search_fields=("name",),
            sortable=_TIMESTAMPS | {"name"},
            dependents=(LOANS, LOAN_REPAYMENTS),
        ),
        ResourceDescriptor(
            name=LOANS,
            table="loans",
            create_schema=LoanCreate,
            update_schema=LoanUpdate,
            parents=(ParentLink("property_id", PROPERTIES), ParentLink("owner_id", OWNERS)),
            filters=(
                FilterField("property_id", "property_id"),
                FilterField("owner_id", "owner_id"),
                FilterField("loan_type", "loan_type", choices=tuple(LoanType.values())),
            ),
            search_fields=("lender_name",),
            sortable=_TIMESTAMPS
            | {"lender_name", "principal_amount", "current_balance", "interest_rate"},
            free_text_fields=("notes",),
            dependents=(LOAN_REPAYMENTS,),
        ),
        ResourceDescriptor(
            name=LOAN_REPAYMENTS,
            table="loan_repayments",
            create_schema=LoanRepaymentCreate,
            update_schema=LoanRepaymentUpdate,
            parents=(ParentLink("loan_id", LOANS),),
            filters=(
                FilterField("loan_id", "loan_id"),
                FilterField("start_date", "payment_date", op="gte", kind="date"),
                FilterField("end_date", "payment_date", op="lte", kind="date"),
            ),
            search_fields=("reference_number", "payment_method"),
            sortable=_TIMESTAMPS | {"payment_date", "amount"},
            default_sort="payment_date",
            soft_delete=False,
            free_text_fields=("notes",),
        ),
        ResourceDescriptor(
            name=RENT_ROLLS,
            table="rent_rolls",
            create_schema=RentRollCreate,
            update_schema=RentRollUpdate,
            parents=(ParentLink("property_id", PROPERTIES),),
            filters=(
                FilterField("property_id", "property_id"),
                FilterField(
                    "occupancy_status", "occupancy_status", choices=tuple(OccupancyStatus.values())
                ),
            ),
            search_fields=("room_number", "tenant_name"),
            sortable=_TIMESTAMPS | {"room_number", "monthly_rent", "lease_end_date"},
            unique_rules=(UniqueRule(("room_number",), scope_column="property_id"),),
            free_text_fields=("notes",),
            policy=RentRollPolicy(),
        ),
        ResourceDescriptor(
            name=EXPENSES,
            table="expenses",
            create_schema=ExpenseCreate,
            update_schema=ExpenseUpdate,
            parents=(ParentLink("property_id", PROPERTIES),),
            filters=(
                FilterField("property_id", "property_id"),
                FilterField("category", "category", choices=tuple(ExpenseCategory.values())),
                FilterField("start_date", "expense_date", op="gte", kind="datetime"),
                FilterField("end_date", "expense_date", op="lte", kind="datetime"),
                FilterField("min_amount", "amount", op="gte", kind="float"),
                FilterField("max_amount", "amount", op="lte", kind="float"),
                FilterField("is_recurring", "is_recurring", kind="bool"),
            ),
            search_fields=("vendor", "description"),
            sortable=_TIMESTAMPS | {"expense_date", "amount", "category"},
            default_sort="expense_date",
            free_text_fields=("description",),
        ),
        ResourceDescriptor(
            name=USERS,
            table="users",
            create_schema=UserCreate,
            update_schema=UserUpdate,
            owner_column="id",
            filters=(FilterField("role", "role", choices=tuple(UserRole.values())),),
            search_fields=("name", "email"),
            sortable=_TIMESTAMPS | {"name", "email"},
            unique_rules=(UniqueRule(("email",)),),
            hidden_fields=frozenset({"password_hash"}),
            admin_bypass=True,
            invalidate_namespace=True,
            policy=UserPolicy(hash_password),
        ),
    ])
