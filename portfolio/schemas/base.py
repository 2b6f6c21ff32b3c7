"""Base request models shared by resource write schemas."""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator


class WriteModel(BaseModel):
    """Create body: unknown fields (ids, owner columns, timestamps) are rejected."""

    model_config = ConfigDict(
        extra="forbid", use_enum_values=True, str_strip_whitespace=True, validate_default=True
    )


class PatchModel(WriteModel):
    """Partial update body. Fields in non_nullable may be omitted but not set to null."""

    non_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def reject_null_required(cls, data: Any) -> Any:
        if isinstance(data, dict):
            for name in cls.non_nullable:
                if name in data and data[name] is None:
                    raise ValueError(f"{name} cannot be null")
        return data

    @model_validator(mode="after")
    def require_any_field(self) -> "PatchModel":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        return self
