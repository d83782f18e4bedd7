"""Runtime settings resolved from SLATEMARK_* environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from slatemark.utils.errors import ConfigurationError
from slatemark.utils.logging import LogFormat, LogLevel

DEFAULT_LOG_LEVEL = LogLevel.WARNING.value
DEFAULT_LOG_FORMAT = LogFormat.CONSOLE.value


@dataclass(frozen=True)
class Settings:
    """Resolved settings for logging and the CLI."""

    log_level: str = DEFAULT_LOG_LEVEL
    log_format: str = DEFAULT_LOG_FORMAT
    log_file: Optional[Path] = None
    shortcode_registry: Optional[str] = None


def _choice(env_var: str, default: str, allowed: set[str], *, upper: bool) -> str:
    raw = (os.getenv(env_var) or "").strip()
    if not raw:
        return default
    value = raw.upper() if upper else raw.lower()
    if value not in allowed:
        raise ConfigurationError(
            f"{env_var}={raw!r} is not one of {sorted(allowed)}",
            config_key=env_var,
            user_message=f"Invalid value for {env_var}: {raw}",
            help_text=f"Use one of: {', '.join(sorted(allowed))}",
        )
    return value


def resolve_settings() -> Settings:
    """Resolve settings from the environment."""
    log_level = _choice(
        "SLATEMARK_LOG_LEVEL",
        DEFAULT_LOG_LEVEL,
        {level.value for level in LogLevel},
        upper=True,
    )
    log_format = _choice(
        "SLATEMARK_LOG_FORMAT",
        DEFAULT_LOG_FORMAT,
        {fmt.value for fmt in LogFormat},
        upper=False,
    )

    log_file_raw = (os.getenv("SLATEMARK_LOG_FILE") or "").strip()
    registry = (os.getenv("SLATEMARK_SHORTCODE_REGISTRY") or "").strip()

    return Settings(
        log_level=log_level,
        log_format=log_format,
        log_file=Path(log_file_raw).expanduser() if log_file_raw else None,
        shortcode_registry=registry or None,
    )
