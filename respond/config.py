"""Configuration for the respond package.

Settings are read from environment variables once and held process-wide.

Environment Variables:
    RESPOND_LOG_LEVEL: Level used by ``configure_logging`` (default: "warning")
    RESPOND_JSON_ENSURE_ASCII: Escape non-ASCII characters in JSON bodies (default: "false")
    RESPOND_TRUST_FORWARDED_PROTO: Use X-Forwarded-Proto for Location URLs (default: "false")
"""

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"critical", "error", "warning", "info", "debug"}


class RespondConfig(BaseModel):
    """Configuration model for response rendering.

    Attributes:
        log_level: Logging level for the package logger
        ensure_ascii: Escape non-ASCII characters when encoding JSON
        trust_forwarded_proto: Honour X-Forwarded-Proto when building URLs
    """

    log_level: str = Field(default="warning", description="Package log level")
    ensure_ascii: bool = Field(default=False, description="JSON ASCII escaping")
    trust_forwarded_proto: bool = Field(
        default=False, description="Use X-Forwarded-Proto for Location URLs"
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.strip().lower()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(sorted(_LOG_LEVELS))}"
            )
        return level


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def load_config() -> RespondConfig:
    """Build configuration from environment variables and defaults.

    Returns:
        RespondConfig populated from the environment
    """
    log_level = os.getenv("RESPOND_LOG_LEVEL", "warning")
    if log_level.strip().lower() not in _LOG_LEVELS:
        logger.warning(f"Invalid log level: {log_level}, using 'warning'")
        log_level = "warning"

    return RespondConfig(
        log_level=log_level,
        ensure_ascii=_env_flag("RESPOND_JSON_ENSURE_ASCII"),
        trust_forwarded_proto=_env_flag("RESPOND_TRUST_FORWARDED_PROTO"),
    )


_config: Optional[RespondConfig] = None


def get_config() -> RespondConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Optional[RespondConfig]) -> None:
    """Replace the process-wide configuration.

    Passing None drops the current configuration so the next
    ``get_config`` call reloads it from the environment.
    """
    global _config
    _config = config
