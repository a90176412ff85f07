from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as SchemaValidationError

from agentic.core.config.schema import AppConfig
from agentic.core.runtime.errors import ConfigError

DEFAULT_CONFIG_PATH = "config.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read config file {path}: {exc}") from exc
    try:
        content = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")
    return content


def _apply_env_overrides(merged: dict[str, Any]) -> dict[str, Any]:
    openai = merged.get("openai")
    if openai is None:
        openai = {}
    elif not isinstance(openai, dict):
        raise ConfigError("Config key 'openai' must be a mapping")
    merged["openai"] = dict(openai)

    env_api_key = os.getenv("AGENTIC_OPENAI_API_KEY")
    if env_api_key:
        merged["openai"]["api_key"] = env_api_key

    env_base_url = os.getenv("AGENTIC_OPENAI_BASE_URL")
    if env_base_url:
        merged["openai"]["base_url"] = env_base_url

    env_log_level = os.getenv("AGENTIC_LOG_LEVEL")
    if env_log_level:
        telemetry = merged.get("telemetry")
        if not isinstance(telemetry, dict):
            telemetry = {}
        merged["telemetry"] = {**telemetry, "log_level": env_log_level}
    return merged


def load_app_config(path: str | Path | None = None) -> AppConfig:
    config_path = Path(path or os.getenv("AGENTIC_CONFIG_FILE") or DEFAULT_CONFIG_PATH)
    merged = _apply_env_overrides(_load_yaml(config_path))

    # An empty base_url in the file means "use the default endpoint".
    if not merged["openai"].get("base_url"):
        merged["openai"].pop("base_url", None)

    try:
        return AppConfig.model_validate(merged)
    except SchemaValidationError as exc:
        raise ConfigError(f"Invalid agentic configuration in {config_path}: {exc}") from exc
