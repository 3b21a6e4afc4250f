"""Configuration management for vacacal."""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

VACACAL_HOME = Path(os.environ.get("VACACAL_HOME", Path.home() / ".vacacal"))
CONFIG_FILE = VACACAL_HOME / "config" / "vacacal.conf"

ENDPOINT_ENV_VAR = "VACACAL_ENDPOINT_URL"
ERROR_MODE_ENV_VAR = "VACACAL_ERROR_MODE"


class ErrorMode(str, Enum):
    """How the remote adapter reports failures."""

    # Queries resolve to empty lists and mutation failures are only logged
    RESILIENT = "resilient"
    # Every failure is raised to the caller
    STRICT = "strict"


@dataclass
class Config:
    """vacacal configuration."""

    endpoint_url: str = ""
    error_mode: ErrorMode = ErrorMode.RESILIENT
    request_timeout: float = 15.0


def parse_error_mode(value: str) -> ErrorMode:
    """Parse an error mode name, falling back to resilient."""
    try:
        return ErrorMode(value.strip().lower())
    except ValueError:
        logger.warning(f"Unknown error mode '{value}', using '{ErrorMode.RESILIENT.value}'")
        return ErrorMode.RESILIENT


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None, environ: dict | None = None) -> Config:
    """
    Load configuration from vacacal.conf, then apply environment overrides.

    VACACAL_ENDPOINT_URL and VACACAL_ERROR_MODE take precedence over the file.
    """
    config = Config()
    config_file = config_file or CONFIG_FILE
    environ = os.environ if environ is None else environ

    if config_file.exists():
        for line in config_file.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = _unquote(value.strip())

            match key:
                case "endpoint_url":
                    config.endpoint_url = value
                case "error_mode":
                    config.error_mode = parse_error_mode(value)
                case "request_timeout":
                    try:
                        config.request_timeout = float(value)
                    except ValueError:
                        logger.warning(f"Invalid REQUEST_TIMEOUT '{value}', keeping {config.request_timeout}")

    if environ.get(ENDPOINT_ENV_VAR):
        config.endpoint_url = environ[ENDPOINT_ENV_VAR].strip()
    if environ.get(ERROR_MODE_ENV_VAR):
        config.error_mode = parse_error_mode(environ[ERROR_MODE_ENV_VAR])

    if not config.endpoint_url:
        logger.warning(f"No endpoint configured. Set {ENDPOINT_ENV_VAR} or ENDPOINT_URL in {config_file}")

    return config
