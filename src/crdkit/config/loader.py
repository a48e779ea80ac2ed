"""Configuration loading and override resolution."""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from crdkit.config.models import EngineConfig
from crdkit.runtime_env import load_runtime_env

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/crdkit.yaml")


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError("Configuration file must deserialize to a mapping")
    return data


def _split_operators(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def apply_overrides(
    raw_config: dict[str, Any],
    env: Mapping[str, str],
    overrides: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Apply precedence: explicit overrides > env > YAML defaults."""
    merged = copy.deepcopy(raw_config)
    if env.get("CRDKIT_LOG_LEVEL"):
        merged.setdefault("logging", {})["level"] = env["CRDKIT_LOG_LEVEL"]
    if env.get("CRDKIT_DISABLED_RULES") is not None:
        merged.setdefault("registry", {})["disabled_rules"] = _split_operators(
            env["CRDKIT_DISABLED_RULES"]
        )

    if overrides:
        if overrides.get("log_level"):
            merged.setdefault("logging", {})["level"] = overrides["log_level"]
        if overrides.get("disabled_rules") is not None:
            merged.setdefault("registry", {})["disabled_rules"] = list(
                overrides["disabled_rules"]
            )
        if overrides.get("error_separator"):
            merged.setdefault("validation", {})["error_separator"] = overrides[
                "error_separator"
            ]
    return merged


def load_engine_config(
    config_path: Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> EngineConfig:
    """Load and validate engine config.

    An explicit `config_path` must exist; the default path is optional.
    """
    if env is None:
        load_runtime_env()
        active_env: Mapping[str, str] = os.environ
    else:
        active_env = env
    if config_path is not None:
        raw = _load_yaml(config_path)
    elif DEFAULT_CONFIG_PATH.exists():
        raw = _load_yaml(DEFAULT_CONFIG_PATH)
    else:
        LOGGER.debug("No config file at %s; using defaults", DEFAULT_CONFIG_PATH)
        raw = {}
    merged = apply_overrides(raw, active_env, overrides)
    return EngineConfig.model_validate(merged)
