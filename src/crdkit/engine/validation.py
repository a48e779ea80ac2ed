"""Rule evaluation and error aggregation."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from pydantic import Field

from crdkit.constants import DEFAULT_ERROR_SEPARATOR
from crdkit.errors import RecordValidationError
from crdkit.schema.base import Record, StrictSchemaModel
from crdkit.schema.catalog import SchemaCatalog, get_default_catalog
from crdkit.schema.compiler import FieldPlan
from crdkit.schema.shapes import iter_nested_records

LOGGER = logging.getLogger(__name__)


class ValidationReport(StrictSchemaModel):
    """All violations found in one record, in traversal order."""

    record_type: str = Field(min_length=1)
    errors: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def message(self, separator: str = DEFAULT_ERROR_SEPARATOR) -> str:
        return separator.join(self.errors)

    def raise_for_errors(self) -> None:
        """Raise `RecordValidationError` if any violation was found."""
        if self.errors:
            raise RecordValidationError(self.record_type, self.errors)

    def to_json(self) -> str:
        payload: dict[str, Any] = self.model_dump(mode="json")
        payload["ok"] = self.ok
        return orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8")


class Validator:
    """Evaluate every compiled rule of a record without short-circuiting.

    Fields without rules that hold nested records are validated recursively;
    a failing nested record contributes one message naming the field (and
    the element index or key for containers).
    """

    def __init__(
        self,
        catalog: SchemaCatalog | None = None,
        *,
        error_separator: str = DEFAULT_ERROR_SEPARATOR,
    ) -> None:
        self._catalog = get_default_catalog() if catalog is None else catalog
        self.error_separator = error_separator

    def validate(self, record: Record) -> ValidationReport:
        errors = self.collect(record)
        LOGGER.debug(
            "Validated %s: %d violation(s)", type(record).__name__, len(errors)
        )
        return ValidationReport(record_type=type(record).__name__, errors=errors)

    def collect(self, record: Record) -> list[str]:
        """Return the violation messages of `record`."""
        schema = self._catalog.schema_for(type(record))
        errors: list[str] = []
        for plan in schema.fields:
            if plan.skipped:
                continue
            if plan.rules:
                for compiled in plan.rules:
                    compiled.check(record, errors)
            elif plan.recurses:
                self._collect_nested(plan, getattr(record, plan.name), errors)
        return errors

    def _collect_nested(self, plan: FieldPlan, value: Any, errors: list[str]) -> None:
        for label, nested in iter_nested_records(plan.shape, value, plan.name):
            nested_errors = self.collect(nested)
            if nested_errors:
                joined = self.error_separator.join(nested_errors)
                errors.append(f"Field '{label}' failed validation '{joined}'")


def validate(record: Record, *, catalog: SchemaCatalog | None = None) -> ValidationReport:
    """Validate `record` against its declared rules."""
    return Validator(catalog).validate(record)
