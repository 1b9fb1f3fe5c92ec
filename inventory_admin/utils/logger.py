"""
Logging utilities for the admin console

Structured logging through structlog on top of the standard logging module.
"""

import logging
import sys
from typing import Optional

import structlog


def configure_logging(log_level: Optional[str] = None, json_output: bool = False) -> None:
    """
    Setup logging configuration

    Args:
        log_level: Root log level name, defaults to INFO
        json_output: Render events as JSON (production) instead of console text
    """
    level = getattr(logging, (log_level or "INFO").upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        stream=sys.stdout,
    )
    logging.getLogger().setLevel(level)

    if json_output:
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderers = [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            *renderers
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
