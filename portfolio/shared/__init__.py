"""Shared utilities: telemetry and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from portfolio.shared.utils import (
    ensure_utc,
    generate_cuid,
    sanitize_message,
    utc_now,
)

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "sanitize_message",
]
