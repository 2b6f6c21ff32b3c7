"""User API schemas."""

import re
from typing import Annotated

from pydantic import AfterValidator, EmailStr, Field

from portfolio.domain.enums import Language, UserRole
from portfolio.schemas.base import PatchModel, WriteModel

_PASSWORD_RULES = (
    (re.compile(r"[a-z]"), "a lowercase letter"),
    (re.compile(r"[A-Z]"), "an uppercase letter"),
    (re.compile(r"\d"), "a digit"),
)


def _check_password(value: str) -> str:
    missing = [label for pattern, label in _PASSWORD_RULES if not pattern.search(value)]
    if missing:
        raise ValueError(f"Password must contain {', '.join(missing)}")
    return value


Password = Annotated[str, Field(min_length=8, max_length=128), AfterValidator(_check_password)]


class UserCreate(WriteModel):
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.VIEWER
    password: Password
    timezone: str = Field(default="Asia/Tokyo", max_length=64)
    language: Language = Language.JA


class UserUpdate(PatchModel):
    non_nullable = frozenset({"email", "name", "role", "password", "timezone", "language"})

    email: EmailStr | None = None
    name: str | None = Field(default=None, min_length=1, max_length=100)
    role: UserRole | None = None
    password: Password | None = None
    timezone: str | None = Field(default=None, max_length=64)
    language: Language | None = None
