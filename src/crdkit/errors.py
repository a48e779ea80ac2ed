"""Exception types raised by schema compilation and validation."""

from __future__ import annotations


class SchemaDefinitionError(ValueError):
    """Raised when a record schema is declared incorrectly.

    These errors depend only on the declarations, never on data, and are
    raised while a record type is compiled.
    """

    def __init__(
        self,
        message: str,
        *,
        record: str | None = None,
        field: str | None = None,
        operator: str | None = None,
    ) -> None:
        self.record = record
        self.field = field
        self.operator = operator
        location = ".".join(part for part in (record, field) if part)
        super().__init__(f"{location}: {message}" if location else message)


class UnknownRuleError(SchemaDefinitionError):
    """Raised when a rule operator is not in the registry."""


class DuplicateRuleError(SchemaDefinitionError):
    """Raised when one field declares the same operator twice."""


class IncompatibleRuleError(SchemaDefinitionError):
    """Raised when a rule does not apply to the field's shape."""


class MissingRuleValueError(SchemaDefinitionError):
    """Raised when a rule that needs an operand has none."""


class InvalidLiteralError(SchemaDefinitionError):
    """Raised when an operand or default cannot be parsed or resolved."""


class InvalidDefaultError(SchemaDefinitionError):
    """Raised when a default declaration does not fit the field."""


class UnsupportedFieldError(SchemaDefinitionError):
    """Raised when a field cannot be traversed by the engines."""


class RecordValidationError(ValueError):
    """Raised by `ValidationReport.raise_for_errors` when violations exist."""

    def __init__(self, record_type: str, errors: list[str]) -> None:
        self.record_type = record_type
        self.errors = list(errors)
        joined = "\n".join(self.errors)
        super().__init__(f"{record_type} failed validation:\n{joined}")
