"""Configuration exports."""

from crdkit.config.loader import DEFAULT_CONFIG_PATH, load_engine_config
from crdkit.config.log_setup import configure_logging
from crdkit.config.models import (
    EngineConfig,
    LoggingSettings,
    RegistrySettings,
    ValidationSettings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "EngineConfig",
    "LoggingSettings",
    "RegistrySettings",
    "ValidationSettings",
    "configure_logging",
    "load_engine_config",
]
