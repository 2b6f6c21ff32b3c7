"""Resource descriptors, the registry built from them, and write policies."""

from portfolio.application.resources.catalog import build_registry
from portfolio.application.resources.descriptors import (
    FilterField,
    OwnershipChain,
    OwnershipScope,
    ParentLink,
    ResourceDescriptor,
    ResourceRegistry,
    UniqueRule,
)
from portfolio.application.resources.policies import RentRollPolicy, ResourcePolicy, UserPolicy

__all__ = [
    "FilterField",
    "OwnershipChain",
    "OwnershipScope",
    "ParentLink",
    "RentRollPolicy",
    "ResourceDescriptor",
    "ResourcePolicy",
    "ResourceRegistry",
    "UniqueRule",
    "UserPolicy",
    "build_registry",
]
