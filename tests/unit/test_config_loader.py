"""Configuration loading tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from crdkit.config import EngineConfig, load_engine_config
from crdkit.config.loader import apply_overrides


def _write_config(tmp_path: Path, content: str) -> Path:
    config_path = tmp_path / "crdkit.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path


def test_defaults_apply_without_a_config_file(monkeypatch, tmp_path: Path) -> None:  # type: ignore[no-untyped-def]
    """The default config path is optional."""
    monkeypatch.chdir(tmp_path)

    config = load_engine_config(env={})

    assert config == EngineConfig()
    assert config.logging.level == "WARNING"
    assert config.registry.disabled_rules == []
    assert config.validation.error_separator == "\n"


def test_yaml_values_are_loaded(tmp_path: Path) -> None:
    """An explicit YAML file provides the base values."""
    config_path = _write_config(
        tmp_path,
        """
schema_version: "1.0.0"
logging:
  level: info
registry:
  disabled_rules: ["fn"]
validation:
  error_separator: "; "
""".strip(),
    )

    config = load_engine_config(config_path, env={})

    assert config.logging.level == "INFO"
    assert config.registry.disabled_rules == ["fn"]
    assert config.validation.error_separator == "; "


def test_overrides_beat_env_and_env_beats_yaml(tmp_path: Path) -> None:
    """Explicit overrides have the highest precedence."""
    config_path = _write_config(tmp_path, "logging:\n  level: info\n")
    env = {"CRDKIT_LOG_LEVEL": "error", "CRDKIT_DISABLED_RULES": "pattern, fn"}

    from_env = load_engine_config(config_path, env=env)
    overridden = load_engine_config(
        config_path,
        env=env,
        overrides={"log_level": "debug", "disabled_rules": [], "error_separator": " | "},
    )

    assert from_env.logging.level == "ERROR"
    assert from_env.registry.disabled_rules == ["pattern", "fn"]
    assert overridden.logging.level == "DEBUG"
    assert overridden.registry.disabled_rules == []
    assert overridden.validation.error_separator == " | "


def test_apply_overrides_does_not_mutate_input() -> None:
    """Override resolution works on a copy."""
    raw = {"logging": {"level": "INFO"}}

    merged = apply_overrides(raw, {"CRDKIT_LOG_LEVEL": "DEBUG"}, None)

    assert merged["logging"]["level"] == "DEBUG"
    assert raw["logging"]["level"] == "INFO"


def test_unknown_rule_operator_is_rejected(monkeypatch, tmp_path: Path) -> None:  # type: ignore[no-untyped-def]
    """Disabled rules must name registered operators."""
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ValidationError):
        load_engine_config(env={"CRDKIT_DISABLED_RULES": "between"})


def test_unknown_log_level_is_rejected(monkeypatch, tmp_path: Path) -> None:  # type: ignore[no-untyped-def]
    """Log levels must be known to the logging module."""
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ValidationError):
        load_engine_config(env={"CRDKIT_LOG_LEVEL": "chatty"})


def test_unknown_keys_are_rejected(tmp_path: Path) -> None:
    """Config models forbid extra keys."""
    config_path = _write_config(tmp_path, "logging:\n  verbosity: 3\n")

    with pytest.raises(ValidationError):
        load_engine_config(config_path, env={})


def test_missing_explicit_path_is_an_error(tmp_path: Path) -> None:
    """An explicit config path must exist."""
    with pytest.raises(FileNotFoundError):
        load_engine_config(tmp_path / "absent.yaml", env={})


def test_non_mapping_yaml_is_rejected(tmp_path: Path) -> None:
    """The config document must be a mapping."""
    config_path = _write_config(tmp_path, "- one\n- two\n")

    with pytest.raises(ValueError):
        load_engine_config(config_path, env={})


def test_dotenv_is_loaded_when_env_is_not_given(monkeypatch, tmp_path: Path) -> None:  # type: ignore[no-untyped-def]
    """Without an explicit env mapping the process env and .env are used."""
    (tmp_path / ".env").write_text("CRDKIT_LOG_LEVEL=debug\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CRDKIT_LOG_LEVEL", "placeholder")
    monkeypatch.delenv("CRDKIT_LOG_LEVEL")
    monkeypatch.delenv("CRDKIT_DISABLED_RULES", raising=False)
    monkeypatch.delenv("CRDKIT_DISABLE_DOTENV", raising=False)

    config = load_engine_config()

    assert config.logging.level == "DEBUG"
