"""JWT auth collaborator: issues tokens on login and resolves bearer credentials."""

import asyncio
import logging

from portfolio.application.dtos.access import AuthUser
from portfolio.application.interfaces.repositories import IUserRepository
from portfolio.core.config import get_settings
from portfolio.domain.exceptions import AuthenticationException
from portfolio.infrastructure.security.jwt import create_access_token, verify_token
from portfolio.infrastructure.security.password import get_password_hash, verify_password

logger = logging.getLogger(__name__)

# Lazy dummy hash so unknown emails cost the same bcrypt check as known ones.
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(get_password_hash, "not-a-real-password")
    return _dummy_hash_cache


class JwtAuthProvider:
    """IAuthProvider backed by python-jose tokens and the users table."""

    def __init__(self, users: IUserRepository) -> None:
        self.users = users

    async def get_current_user(self, credential: str | None) -> AuthUser | None:
        if not credential:
            return None
        try:
            payload = verify_token(credential)
        except ValueError:
            logger.debug("Rejected bearer token")
            return None
        return AuthUser(id=str(payload["sub"]), email=str(payload.get("email", "")))

    async def login(self, email: str, password: str) -> tuple[str, int]:
        """Check credentials and issue an access token.

        Returns:
            (access_token, lifetime_seconds)

        Raises:
            AuthenticationException: Unknown email or wrong password (same message).
        """
        credentials = await self.users.get_credentials_by_email(email)
        hashed = credentials[1] if credentials else await _get_dummy_hash()
        valid = await asyncio.to_thread(verify_password, password, hashed)
        if credentials is None or not valid:
            raise AuthenticationException("Invalid email or password")
        user_id = credentials[0]
        token = create_access_token(user_id, {"email": email.strip().lower()})
        logger.info("User %s logged in", user_id)
        return token, get_settings().access_token_expire_minutes * 60
