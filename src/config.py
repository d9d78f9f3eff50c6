"""Console configuration: JSON file, environment overrides, validation.

Precedence (lowest to highest):
    defaults < config.json < CIVIC_CONSOLE_* environment < command-line flags
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from constants import APP_NAME, DEFAULT_PAGE_SIZE, DEFAULT_TIMEOUT, DEFAULT_USER_INFO_PATH, PAGE_SIZES
from model.resources import REGISTRY

log = logging.getLogger(__name__)

ENV_BASE_URL = "CIVIC_CONSOLE_BASE_URL"
ENV_TIMEOUT = "CIVIC_CONSOLE_TIMEOUT"


def default_config_path() -> Path:
    """config.json under the XDG config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config"))
    return Path(xdg_config) / APP_NAME / "config.json"


class ConfigValidationError(Exception):
    """Raised when the configuration cannot be used."""


@dataclass
class ConsoleConfig:
    """Where the PHP backend lives and how to talk to it."""

    base_url: str = "http://localhost/"
    user_info_path: str = DEFAULT_USER_INFO_PATH
    timeout: float = DEFAULT_TIMEOUT
    page_size: int = DEFAULT_PAGE_SIZE
    endpoints: dict[str, str] = field(default_factory=dict)  # resource -> endpoint path
    verify_tls: bool = True

    def endpoint_for(self, resource: str) -> str | None:
        return self.endpoints.get(resource)


def validate_config(config: ConsoleConfig) -> list[str]:
    """Validate a ConsoleConfig and return list of warnings.

    Raises ConfigValidationError for critical issues.
    Returns list of non-critical warnings.
    """
    warnings = []

    parsed = urlparse(config.base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigValidationError(
            f"Invalid base URL: {config.base_url!r} (must be http:// or https://)"
        )

    if config.timeout <= 0:
        raise ConfigValidationError(f"Invalid timeout: {config.timeout} (must be positive)")

    if config.page_size not in PAGE_SIZES:
        raise ConfigValidationError(
            f"Invalid page size: {config.page_size} (must be one of {', '.join(map(str, PAGE_SIZES))})"
        )

    for resource in config.endpoints:
        if resource not in REGISTRY:
            warnings.append(f"Unknown resource in endpoints: '{resource}' (ignored)")

    if parsed.scheme == "http" and parsed.hostname not in ("localhost", "127.0.0.1"):
        warnings.append(f"Base URL {config.base_url} is not using HTTPS")

    return warnings


def _strict_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected true or false, got {type(value).__name__}")
    return value


def _from_dict(data: dict[str, Any]) -> ConsoleConfig:
    known = {
        "base_url": str,
        "user_info_path": str,
        "timeout": float,
        "page_size": int,
        "verify_tls": _strict_bool,
    }
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key == "endpoints":
            if not isinstance(value, dict):
                raise ConfigValidationError("'endpoints' must be an object")
            kwargs["endpoints"] = {str(k): str(v) for k, v in value.items()}
        elif key in known:
            try:
                kwargs[key] = known[key](value)
            except (TypeError, ValueError) as e:
                raise ConfigValidationError(f"Invalid value for '{key}': {value!r}") from e
        else:
            log.warning(f"Ignoring unknown config key '{key}'")
    return ConsoleConfig(**kwargs)


def load_config(path: Path | None = None, environ: dict[str, str] | None = None) -> ConsoleConfig:
    """Load config.json (if present) and apply environment overrides.

    Args:
        path: Config file; defaults to the XDG location. An explicit path must exist.
        environ: Environment mapping; defaults to os.environ

    Raises:
        ConfigValidationError: unreadable file or bad values
    """
    environ = os.environ if environ is None else environ
    config_path = path or default_config_path()

    if config_path.exists():
        try:
            data = json.loads(config_path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigValidationError(f"Cannot read {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError(f"{config_path} must contain a JSON object")
        config = _from_dict(data)
        log.info(f"Loaded config from {config_path}")
    elif path is not None:
        raise ConfigValidationError(f"Config file not found: {path}")
    else:
        config = ConsoleConfig()

    if environ.get(ENV_BASE_URL):
        config = replace(config, base_url=environ[ENV_BASE_URL])
    if environ.get(ENV_TIMEOUT):
        try:
            config = replace(config, timeout=float(environ[ENV_TIMEOUT]))
        except ValueError as e:
            raise ConfigValidationError(
                f"Invalid {ENV_TIMEOUT}: {environ[ENV_TIMEOUT]!r}"
            ) from e
    return config
