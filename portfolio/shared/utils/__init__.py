"""Shared utilities: datetime, generators, sanitization."""

from portfolio.shared.utils.datetime import ensure_utc, to_json_value, utc_now
from portfolio.shared.utils.generators import generate_cuid
from portfolio.shared.utils.sanitization import InputSanitizer, sanitize_message

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "to_json_value",
    "InputSanitizer",
    "sanitize_message",
]
