"""Logging configuration for the application."""

import logging
import sys

from portfolio.core.config import get_settings
from portfolio.shared.utils.sanitization import sanitize_message


class RedactingFilter(logging.Filter):
    """Redact credentials from every record before it is emitted."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.args:
            record.msg = sanitize_message(record.getMessage())
            record.args = None
        elif isinstance(record.msg, str):
            record.msg = sanitize_message(record.msg)
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout with credential redaction applied.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RedactingFilter())
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[handler],
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
