"""Server configuration for mammoth-mcp.

Settings are read from environment variables once at startup and passed
explicitly to the server factory.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from . import __version__
from .errors import MAX_DOCUMENT_SIZE

SERVER_NAME = "mammoth-mcp"

ENV_LOG_LEVEL = "MAMMOTH_MCP_LOG_LEVEL"
ENV_MAX_DOCUMENT_SIZE = "MAMMOTH_MCP_MAX_DOCUMENT_SIZE"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ServerConfig:
    """Runtime settings for one server instance.

    Attributes:
        name: Server name advertised to MCP clients
        version: Server version, reported in the startup log
        log_level: stdlib logging level name
        max_document_size: Largest accepted DOCX in bytes; 0 disables the check
    """

    name: str = SERVER_NAME
    version: str = __version__
    log_level: str = "INFO"
    max_document_size: int = MAX_DOCUMENT_SIZE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """Build a config from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            ServerConfig with overrides applied

        Raises:
            ValueError: If a variable holds an unusable value
        """
        if environ is None:
            environ = os.environ

        log_level = environ.get(ENV_LOG_LEVEL, "INFO").strip().upper()
        if log_level not in _LOG_LEVELS:
            raise ValueError(
                f"{ENV_LOG_LEVEL} must be one of {', '.join(_LOG_LEVELS)}, got {log_level!r}"
            )

        raw_size = environ.get(ENV_MAX_DOCUMENT_SIZE)
        if raw_size is None or not raw_size.strip():
            max_document_size = MAX_DOCUMENT_SIZE
        else:
            try:
                max_document_size = int(raw_size)
            except ValueError:
                raise ValueError(
                    f"{ENV_MAX_DOCUMENT_SIZE} must be an integer byte count, got {raw_size!r}"
                ) from None
            if max_document_size < 0:
                raise ValueError(f"{ENV_MAX_DOCUMENT_SIZE} cannot be negative")

        return cls(log_level=log_level, max_document_size=max_document_size)
