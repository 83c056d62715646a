#!/usr/bin/env python3
"""
Configuration for the Airtable MCP Server
Loads settings from the environment (and .env) into an explicit ServerConfig
"""

import os
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from . import __version__
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_AIRTABLE_API_URL = "https://api.airtable.com/v0"
DEFAULT_COMPLETION_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:8000"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class ServerConfig:
    """Settings shared by every component; built once at process start"""

    airtable_access_token: str
    airtable_api_url: str = DEFAULT_AIRTABLE_API_URL
    airtable_timeout: float = 30.0
    completion_api_key: Optional[str] = None
    completion_api_url: str = DEFAULT_COMPLETION_API_URL
    completion_timeout: float = 60.0
    server_name: str = "airtable-mcp"
    server_version: str = __version__
    server_mode: str = "stdio"  # "stdio" or "http"
    server_port: int = 8080
    cors_origins: List[str] = field(default_factory=lambda: DEFAULT_CORS_ORIGINS.split(","))
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "ServerConfig":
        """Build configuration from environment variables.

        Raises ConfigurationError when the Airtable credential is missing, a
        numeric setting cannot be parsed, or the mode or log level is unknown.
        """
        if load_dotenv_file:
            load_dotenv()

        token = os.getenv("AIRTABLE_ACCESS_TOKEN") or os.getenv("AIRTABLE_API_KEY")
        if not token:
            raise ConfigurationError("AIRTABLE_ACCESS_TOKEN environment variable is required")

        mode = os.getenv("MCP_SERVER_MODE", "stdio").lower()
        if mode not in ("stdio", "http"):
            raise ConfigurationError(f"MCP_SERVER_MODE must be 'stdio' or 'http', got '{mode}'")

        try:
            port = int(os.getenv("MCP_SERVER_PORT", "8080"))
            timeout = float(os.getenv("AIRTABLE_TIMEOUT", "30"))
            completion_timeout = float(os.getenv("COMPLETION_TIMEOUT", "60"))
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric setting: {e}") from e

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        if log_level not in LOG_LEVELS:
            raise ConfigurationError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got '{log_level}'")

        origins = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)

        return cls(
            airtable_access_token=token,
            airtable_api_url=os.getenv("AIRTABLE_API_URL", DEFAULT_AIRTABLE_API_URL),
            airtable_timeout=timeout,
            completion_api_key=os.getenv("COMPLETION_API_KEY") or None,
            completion_api_url=os.getenv("COMPLETION_API_URL", DEFAULT_COMPLETION_API_URL),
            completion_timeout=completion_timeout,
            server_name=os.getenv("MCP_SERVER_NAME", "airtable-mcp"),
            server_version=os.getenv("MCP_SERVER_VERSION", __version__),
            server_mode=mode,
            server_port=port,
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=log_level,
        )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
