"""Application layer: DTOs, interfaces, resource descriptors and services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (resource store, auth, cache).
"""

from portfolio.application.interfaces import (
    IAuthProvider,
    ICacheService,
    IResourceStore,
    IUserRepository,
)
from portfolio.application.services import OwnershipResolver, ResourceAccessLayer

__all__ = [
    "IAuthProvider",
    "ICacheService",
    "IResourceStore",
    "IUserRepository",
    "OwnershipResolver",
    "ResourceAccessLayer",
]
