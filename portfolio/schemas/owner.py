"""Owner API schemas (individual or corporate holder of loans)."""

from pydantic import Field

from portfolio.domain.enums import OwnerKind
from portfolio.schemas.base import PatchModel, WriteModel


class OwnerCreate(WriteModel):
    name: str = Field(..., min_length=1, max_length=100)
    owner_kind: OwnerKind = OwnerKind.INDIVIDUAL


class OwnerUpdate(PatchModel):
    non_nullable = frozenset({"name", "owner_kind"})

    name: str | None = Field(default=None, min_length=1, max_length=100)
    owner_kind: OwnerKind | None = None
