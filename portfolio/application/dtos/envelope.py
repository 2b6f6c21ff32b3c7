"""Response envelope DTOs: the uniform shape every access-layer operation returns."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ErrorInfo:
    """Error block of a failed envelope. Message is already sanitized."""

    code: str
    message: str
    details: Any = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


@dataclass(frozen=True)
class PaginationMeta:
    """Pagination block for LIST responses.

    total_pages is ceil(total / limit) and 0 when total is 0.
    """

    page: int
    limit: int
    total: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "PaginationMeta":
        return cls(
            page=int(payload["page"]),
            limit=int(payload["limit"]),
            total=int(payload["total"]),
            total_pages=int(payload["totalPages"]),
        )


@dataclass(frozen=True)
class Envelope:
    """Uniform result: success iff error is None; data is None on failure.

    status_code is the HTTP-equivalent status carried alongside the body.

    Raises:
        ValueError: On construction if the success/error/data invariant is broken.
    """

    success: bool
    data: Any = None
    error: ErrorInfo | None = None
    meta: PaginationMeta | None = None
    status_code: int = 200

    def __post_init__(self) -> None:
        if self.success != (self.error is None):
            raise ValueError("Envelope success must be true exactly when error is absent")
        if not self.success and self.data is not None:
            raise ValueError("Failed envelope must not carry data")

    def to_dict(self) -> dict[str, Any]:
        """JSON body: {success, data, meta?} or {success, error}."""
        if not self.success:
            return {"success": False, "error": self.error.to_dict()}  # type: ignore[union-attr]
        body: dict[str, Any] = {"success": True, "data": self.data}
        if self.meta is not None:
            body["meta"] = self.meta.to_dict()
        return body

    @classmethod
    def from_dict(cls, payload: dict[str, Any], status_code: int = 200) -> "Envelope":
        """Rebuild a success envelope from to_dict() output (cache restore)."""
        meta = payload.get("meta")
        return cls(
            success=True,
            data=payload.get("data"),
            meta=PaginationMeta.from_dict(meta) if meta else None,
            status_code=status_code,
        )
