"""Caller identity DTOs threaded explicitly through the access layer."""

from dataclasses import dataclass

from portfolio.domain.enums import UserRole


@dataclass(frozen=True)
class AuthUser:
    """Identity returned by the auth collaborator for a valid credential."""

    id: str
    email: str


@dataclass(frozen=True)
class Principal:
    """Authenticated caller resolved once per request. Role comes from the users row."""

    id: str
    email: str
    role: UserRole | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass(frozen=True)
class RequestContext:
    """Per-request values passed as an argument, never stored globally.

    Attributes:
        credential: Bearer token from the Authorization header, if any.
        request_id: Correlation id from the request id middleware.
    """

    credential: str | None
    request_id: str | None = None
