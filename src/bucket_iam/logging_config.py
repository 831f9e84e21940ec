"""Structured logging configuration for the bucket IAM client.

Library modules log through ``structlog.get_logger(__name__)`` and never
configure logging themselves. Applications that want JSON output call
``configure_logging()`` once at startup.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog


def configure_logging(log_level: str | None = None) -> None:
    """Configure structlog to render JSON through the standard library.

    Sets up:
    - JSON output on stdout
    - ISO timestamp format
    - Log level filtering (INFO by default, overridable via LOG_LEVEL)
    - Exception formatting

    Args:
        log_level: Level name; falls back to the LOG_LEVEL env var
    """
    level_name = (log_level or os.environ.get("LOG_LEVEL", "INFO")).upper()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name, logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def mask_token(token: str, visible_chars: int = 4) -> str:
    """Mask an access token for safe logging.

    Returns:
        Masked token string (e.g., "ya29...AbCd")
    """
    if len(token) <= visible_chars * 2:
        return "***"
    return f"{token[:visible_chars]}...{token[-visible_chars:]}"
