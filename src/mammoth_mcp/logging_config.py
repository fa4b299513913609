"""Structured logging configuration for mammoth-mcp.

Provides JSON-formatted structured logging using structlog. All logs go to
stderr because stdout carries the MCP stdio transport.
"""

import logging
import sys
from typing import Union

import structlog


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure structlog with JSON rendering for production use.

    Sets up structlog processors for:
    - ISO timestamp formatting
    - Log level addition
    - JSON rendering

    Also configures stdlib logging to route through structlog. Safe to call
    more than once; the last call wins.

    Args:
        level: stdlib level number or name (e.g. "DEBUG")
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure stdlib logging to also use structlog
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound with the module name.

    Args:
        name: Module name (typically __name__)

    Returns:
        A structlog BoundLogger instance with module context
    """
    return structlog.get_logger(name)


# Configure on module import
configure_logging()
