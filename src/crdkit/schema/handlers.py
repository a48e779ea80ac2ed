"""Rule handlers: each turns a declared rule into a check for one field.

Handlers run while a schema is compiled. Operand problems raise
`SchemaDefinitionError` subclasses there; the returned checks only append
messages for data violations.
"""

from __future__ import annotations

import operator
import re
from typing import Any, Callable

from crdkit.errors import (
    InvalidLiteralError,
    MissingRuleValueError,
    SchemaDefinitionError,
)
from crdkit.schema.literals import (
    LiteralParseError,
    fit_field,
    parse_scalar,
    parse_size,
)
from crdkit.schema.rules import Check, RuleContext
from crdkit.schema.shapes import ScalarShape

Comparison = tuple[Callable[[Any, Any], bool], str]

# Maps operator to (violation test, symbol used in the message).
NUMERIC_COMPARISONS: dict[str, Comparison] = {
    "ge": (operator.lt, ">="),
    "gt": (operator.le, ">"),
    "le": (operator.gt, "<="),
    "lt": (operator.ge, "<"),
}
LENGTH_COMPARISONS: dict[str, Comparison] = {
    "minLength": (operator.lt, ">="),
    "maxLength": (operator.gt, "<="),
    "minItems": (operator.lt, ">="),
    "maxItems": (operator.gt, "<="),
}


def handle_required(ctx: RuleContext) -> Check:
    field_name = ctx.field_name

    def check(record: Any, errors: list[str]) -> None:
        if getattr(record, field_name) is None:
            errors.append(f"Field '{field_name}' is required")

    return check


def handle_numeric_comparison(ctx: RuleContext) -> Check:
    threshold = _numeric_threshold(ctx)
    if ctx.rule.operator == "mo":
        if threshold == 0:
            raise _error(InvalidLiteralError, ctx, "Modulo threshold must not be zero")
        return field_check(
            ctx,
            lambda value: value % threshold != 0,
            f"must be a multiple of {threshold}.",
        )
    comparison = NUMERIC_COMPARISONS.get(ctx.rule.operator)
    if comparison is None:
        raise _error(SchemaDefinitionError, ctx, "Invalid numeric operator")
    violates, symbol = comparison
    return field_check(
        ctx,
        lambda value: violates(value, threshold),
        f"must be {symbol} {threshold}.",
    )


def handle_length_comparison(ctx: RuleContext) -> Check:
    comparison = LENGTH_COMPARISONS.get(ctx.rule.operator)
    if comparison is None:
        raise _error(SchemaDefinitionError, ctx, "Invalid length operator")
    raw = _require_value(ctx)
    try:
        threshold = parse_size(raw)
    except LiteralParseError as exc:
        raise _error(InvalidLiteralError, ctx, str(exc)) from exc
    violates, symbol = comparison
    return field_check(
        ctx,
        lambda value: violates(len(value), threshold),
        f"length must be {symbol} {threshold}.",
    )


def handle_pattern(ctx: RuleContext) -> Check:
    raw = _require_value(ctx, "pattern")
    try:
        regex = re.compile(raw)
    except re.error as exc:
        raise _error(InvalidLiteralError, ctx, f"Invalid regex pattern: {exc}") from exc
    return field_check(
        ctx,
        lambda value: regex.search(value) is None,
        f"does not match the required pattern: '{raw}'.",
    )


def handle_custom_function(ctx: RuleContext) -> Check:
    function_name = _require_value(ctx, "function name")
    if not callable(getattr(ctx.record_type, function_name, None)):
        raise _error(
            InvalidLiteralError,
            ctx,
            f"Custom validation function '{function_name}' is not defined",
        )
    field_name = ctx.field_name

    def check(record: Any, errors: list[str]) -> None:
        outcome = getattr(record, function_name)()
        if outcome is None or outcome is True:
            return
        message = "predicate returned False" if outcome is False else str(outcome)
        errors.append(
            f"Field '{field_name}' failed custom validation '{function_name}': {message}"
        )

    return check


def field_check(
    ctx: RuleContext, violates: Callable[[Any], bool], requirement: str
) -> Check:
    """Report `requirement` for present values where `violates` holds."""
    field_name = ctx.field_name
    message = f"Field '{field_name}' {requirement}"

    def check(record: Any, errors: list[str]) -> None:
        value = getattr(record, field_name)
        if value is None:
            return
        if violates(value):
            errors.append(message)

    return check


def _numeric_threshold(ctx: RuleContext) -> Any:
    raw = _require_value(ctx)
    if not isinstance(ctx.shape, ScalarShape):
        raise _error(SchemaDefinitionError, ctx, "Unsupported field type")
    try:
        threshold = parse_scalar(ctx.shape.kind, raw)
        return fit_field(ctx.record_type.model_fields[ctx.field_name], threshold)
    except LiteralParseError as exc:
        raise _error(InvalidLiteralError, ctx, str(exc)) from exc


def _require_value(ctx: RuleContext, what: str = "threshold value") -> str:
    if not ctx.rule.value:
        raise _error(MissingRuleValueError, ctx, f"Missing {what}")
    return ctx.rule.value


def _error(
    error_type: type[SchemaDefinitionError], ctx: RuleContext, message: str
) -> SchemaDefinitionError:
    return error_type(
        f"{message} for rule '{ctx.rule}'",
        record=ctx.record_name,
        field=ctx.field_name,
        operator=ctx.rule.operator,
    )
