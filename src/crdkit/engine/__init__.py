"""Defaulting and validation engines."""

from crdkit.engine.defaulting import Defaulter, apply_defaults
from crdkit.engine.runner import Engine
from crdkit.engine.validation import ValidationReport, Validator, validate

__all__ = [
    "Defaulter",
    "Engine",
    "ValidationReport",
    "Validator",
    "apply_defaults",
    "validate",
]
