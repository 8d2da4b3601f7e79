"""Configuration loading and validation."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from marketing_analytics.exceptions import InvalidConfigError
from marketing_analytics.models import AppConfig

_ENV_TO_CONFIG: dict[str, str] = {
    "MKT_OUTPUT_ROOT": "output_root",
    "MKT_HISTORY_FILE": "history_file",
    "MKT_HISTORY_LIMIT": "history_limit",
    "MKT_CURRENCY_SYMBOL": "currency_symbol",
    "MKT_REPORT_FILENAME": "report_filename",
}

_INT_FIELDS = {"history_limit"}


def load_config(
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
    dotenv_path: Path | None = None,
) -> AppConfig:
    """Load config from defaults, yaml file, .env, env, and explicit overrides."""
    payload: dict[str, Any] = {}
    dotenv_to_load = dotenv_path if dotenv_path is not None else Path(".env")
    load_dotenv(dotenv_path=dotenv_to_load, override=False)

    if config_path is not None:
        if not config_path.exists():
            raise InvalidConfigError(f"Config file does not exist: {config_path}")
        try:
            raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise InvalidConfigError(f"Config file is not valid YAML: {config_path}") from exc
        if not isinstance(raw, dict):
            raise InvalidConfigError("Config file must contain a top-level mapping.")
        payload.update(raw)

    for env_key, config_key in _ENV_TO_CONFIG.items():
        env_value = os.getenv(env_key)
        if env_value is None or env_value == "":
            continue
        payload[config_key] = _coerce_env_value(config_key, env_value)

    if overrides:
        for key, value in overrides.items():
            if value is not None:
                payload[key] = value

    try:
        return AppConfig(**payload)
    except ValidationError as exc:
        raise InvalidConfigError(f"Invalid configuration: {exc}") from exc


def ensure_output_root(path_value: str) -> Path:
    """Ensure output root exists."""
    path = Path(path_value)
    path.mkdir(parents=True, exist_ok=True)
    return path


def _coerce_env_value(config_key: str, env_value: str) -> Any:
    if config_key in _INT_FIELDS:
        try:
            return int(env_value)
        except ValueError as exc:
            raise InvalidConfigError(
                f"{config_key} must be an integer, got '{env_value}'."
            ) from exc
    return env_value
