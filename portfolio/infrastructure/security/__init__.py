"""Security: JWT, password hashing, and the auth collaborator."""

from portfolio.infrastructure.security.auth_provider import JwtAuthProvider
from portfolio.infrastructure.security.jwt import create_access_token, verify_token
from portfolio.infrastructure.security.password import get_password_hash, verify_password

__all__ = [
    "JwtAuthProvider",
    "create_access_token",
    "get_password_hash",
    "verify_password",
    "verify_token",
]
