"""Repositories: the descriptor-driven resource store and user lookups for auth."""

from portfolio.infrastructure.persistence.repositories.resource_store import SqlResourceStore
from portfolio.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = ["SqlResourceStore", "UserRepository"]
