"""Application interfaces (ports): store, auth and cache protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from portfolio.infrastructure or portfolio.api.
"""

from portfolio.application.interfaces.repositories import IResourceStore, IUserRepository
from portfolio.application.interfaces.services import IAuthProvider, ICacheService

__all__ = [
    "IAuthProvider",
    "ICacheService",
    "IResourceStore",
    "IUserRepository",
]
