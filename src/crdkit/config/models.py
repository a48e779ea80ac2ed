"""Pydantic models for engine configuration."""

from __future__ import annotations

import logging

from pydantic import Field, field_validator

from crdkit.constants import DEFAULT_ERROR_SEPARATOR, SCHEMA_VERSION
from crdkit.schema.base import StrictSchemaModel
from crdkit.schema.registry import DEFAULT_REGISTRY


class LoggingSettings(StrictSchemaModel):
    """Log level applied to the `crdkit` logger."""

    level: str = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value: str | int) -> str:
        if isinstance(value, int):
            return logging.getLevelName(value)
        normalized = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"Unknown log level: {value}")
        return normalized


class RegistrySettings(StrictSchemaModel):
    """Controls over which rule operators are available."""

    disabled_rules: list[str] = Field(default_factory=list)

    @field_validator("disabled_rules")
    @classmethod
    def validate_operators(cls, value: list[str]) -> list[str]:
        unknown = sorted(set(value) - set(DEFAULT_REGISTRY.operators()))
        if unknown:
            raise ValueError(f"Unknown rule operators: {', '.join(unknown)}")
        return value


class ValidationSettings(StrictSchemaModel):
    """Presentation of aggregated validation messages."""

    error_separator: str = Field(default=DEFAULT_ERROR_SEPARATOR, min_length=1)


class EngineConfig(StrictSchemaModel):
    """Central engine configuration."""

    schema_version: str = Field(default=SCHEMA_VERSION, min_length=1)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    registry: RegistrySettings = Field(default_factory=RegistrySettings)
    validation: ValidationSettings = Field(default_factory=ValidationSettings)
