"""Settings loading from YAML and environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from routewall.models.settings import Settings

DEFAULT_CONFIG_FILE = "routewall.yaml"

# Environment variable -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "ROUTEWALL_API_TOKEN": ("api", "token"),
    "ROUTEWALL_ZONE_ID": ("api", "zone_id"),
    "ROUTEWALL_API_BASE_URL": ("api", "base_url"),
    "ROUTEWALL_API_TIMEOUT": ("api", "timeout"),
    "ROUTEWALL_API_RETRY_ATTEMPTS": ("api", "retry_attempts"),
    "ROUTEWALL_API_RETRY_DELAY": ("api", "retry_delay"),
    "ROUTEWALL_RULE_ID": ("waf", "rule_identifier"),
    "ROUTEWALL_RULE_DESCRIPTION": ("waf", "rule_description"),
    "ROUTEWALL_RULE_ACTION": ("waf", "rule_action"),
    "ROUTEWALL_APP_URL": ("app", "url"),
}

REQUIRED_API_KEYS = (
    ("token", "ROUTEWALL_API_TOKEN"),
    ("zone_id", "ROUTEWALL_ZONE_ID"),
)


class ConfigValidationError(ValueError):
    """Raised when configuration is missing or invalid."""


def load_settings(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Load settings from defaults, a YAML file, then the environment.

    Args:
        path: Explicit config file. When omitted, ``routewall.yaml`` in the
            working directory is used if it exists.
        env: Environment mapping (defaults to ``os.environ``)

    Returns:
        Validated Settings

    Raises:
        ConfigValidationError: If the file is missing, unreadable, or any value is invalid
    """
    env = os.environ if env is None else env
    data = _read_config_file(path)

    for variable, (section, key) in ENV_OVERRIDES.items():
        value = env.get(variable)
        if value is None or value == "":
            continue
        section_data = data.setdefault(section, {})
        if not isinstance(section_data, dict):
            raise ConfigValidationError(f"Config section '{section}' must be a mapping")
        section_data[key] = value

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigValidationError(f"Invalid configuration: {exc}") from exc


def _read_config_file(path: str | Path | None) -> dict[str, Any]:
    if path is None:
        default = Path(DEFAULT_CONFIG_FILE)
        if not default.exists():
            return {}
        config_path = default
    else:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigValidationError(f"Config file not found: {config_path}")

    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigValidationError(f"Cannot read config file {config_path}: {exc}") from exc

    try:
        payload = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in {config_path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigValidationError(f"Config file must be a mapping: {config_path}")
    return payload


def require_api_credentials(settings: Settings) -> None:
    """Raise ConfigValidationError naming the first missing API credential."""
    for key, variable in REQUIRED_API_KEYS:
        if not getattr(settings.api, key):
            raise ConfigValidationError(
                f"Missing required configuration: api.{key} (set {variable})"
            )
