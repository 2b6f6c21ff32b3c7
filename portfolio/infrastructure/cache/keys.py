"""Cache key builders for enveloped LIST results. Single place for key format (DRY).

Layout: api:{resource}:user:{principal_id|anonymous}:{sha256(query signature)}

Prefix deletion relies on this layout: a principal's entries for a
resource all start with resource_prefix(resource, principal_id).
"""

import hashlib

from portfolio.core.constants import (
    CACHE_ANONYMOUS_BUCKET,
    CACHE_KEY_SEP,
    CACHE_PREFIX_API,
    CACHE_USER_SEGMENT,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the key separator or a glob character."""
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value or any(ch in value for ch in "*?[]"):
        raise ValueError(
            f"Cache key component {name!r} must not contain {CACHE_KEY_SEP!r} or glob characters"
        )


def signature_digest(signature: str) -> str:
    """Hex SHA-256 of a canonical query signature."""
    return hashlib.sha256(signature.encode("utf-8")).hexdigest()


def resource_prefix(resource: str, principal_id: str | None = None) -> str:
    """Prefix covering a resource namespace, or one principal's slice of it."""
    _validate_key_component(resource, "resource")
    prefix = f"{CACHE_PREFIX_API}{CACHE_KEY_SEP}{resource}{CACHE_KEY_SEP}"
    if principal_id is None:
        return prefix
    _validate_key_component(principal_id, "principal_id")
    return f"{prefix}{CACHE_USER_SEGMENT}{CACHE_KEY_SEP}{principal_id}{CACHE_KEY_SEP}"


def list_key(resource: str, principal_id: str | None, signature: str) -> str:
    """Cache key for one principal's LIST result with one query signature."""
    bucket = principal_id or CACHE_ANONYMOUS_BUCKET
    return f"{resource_prefix(resource, bucket)}{signature_digest(signature)}"
