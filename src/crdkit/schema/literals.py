"""Parsing of rule operands and default literals into scalar kinds."""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Annotated, Any

from pydantic import TypeAdapter, ValidationError
from pydantic.fields import FieldInfo

from crdkit.schema.shapes import ScalarKind, ScalarShape

_INTEGER_PATTERN = re.compile(r"[+-]?\d+")
_BOOL_LITERALS = {"true": True, "false": False}


class LiteralParseError(ValueError):
    """Raised when a literal does not fit the requested kind."""


def parse_scalar(kind: ScalarKind, raw: Any) -> Any:
    """Parse `raw` (a Python value or its lexical form) into `kind`."""
    if kind in (ScalarKind.SIGNED_INT, ScalarKind.UNSIGNED_INT):
        value = _parse_int(raw)
        if kind is ScalarKind.UNSIGNED_INT and value < 0:
            raise LiteralParseError(f"{raw!r} is not an unsigned integer")
        return value
    if kind is ScalarKind.FLOAT:
        return _parse_float(raw)
    if kind is ScalarKind.BOOL:
        return _parse_bool(raw)
    if kind is ScalarKind.STRING:
        if not isinstance(raw, str):
            raise LiteralParseError(f"{raw!r} is not a string")
        return raw
    raise LiteralParseError(f"no literal form for {kind.value} values")


def fit_field(field_info: FieldInfo, value: Any) -> Any:
    """Check `value` against the field's own type and constraints.

    Width bounds of the sized integer aliases and any `Field` constraints are
    part of the field annotation, so a value that passes here can be assigned
    to the field under `validate_assignment`.
    """
    annotation = field_info.annotation
    if field_info.metadata:
        annotation = Annotated[(annotation, *field_info.metadata)]
    try:
        return TypeAdapter(annotation).validate_python(value)
    except ValidationError as exc:
        reasons = "; ".join(error["msg"] for error in exc.errors())
        raise LiteralParseError(f"{value!r} does not fit the field: {reasons}") from exc


def parse_size(raw: Any) -> int:
    """Parse a length/size threshold."""
    value = _parse_int(raw)
    if value < 0:
        raise LiteralParseError(f"{raw!r} is not a valid size")
    return value


def resolve_variant(shape: ScalarShape, name: Any) -> Any:
    """Resolve an enum variant by member, member name, or value."""
    variants = shape.variants
    if isinstance(variants, type) and issubclass(variants, Enum):
        if isinstance(name, variants):
            return name
        if isinstance(name, str) and name in variants.__members__:
            return variants[name]
        try:
            return variants(name)
        except ValueError as exc:
            raise LiteralParseError(
                f"{name!r} is not a variant of {variants.__name__}"
            ) from exc
    if isinstance(variants, tuple):
        for option in variants:
            if option == name or str(option) == str(name):
                return option
        raise LiteralParseError(f"{name!r} is not one of {list(variants)}")
    raise LiteralParseError("field has no enumerated variants")


def _parse_int(raw: Any) -> int:
    if isinstance(raw, bool):
        raise LiteralParseError(f"{raw!r} is not an integer")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str) and _INTEGER_PATTERN.fullmatch(raw.strip()):
        return int(raw.strip())
    raise LiteralParseError(f"{raw!r} is not an integer")


def _parse_float(raw: Any) -> float:
    if isinstance(raw, bool):
        raise LiteralParseError(f"{raw!r} is not a number")
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError as exc:
            raise LiteralParseError(f"{raw!r} is not a number") from exc
    else:
        raise LiteralParseError(f"{raw!r} is not a number")
    if math.isnan(value):
        raise LiteralParseError("NaN is not a usable literal")
    return value


def _parse_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.strip() in _BOOL_LITERALS:
        return _BOOL_LITERALS[raw.strip()]
    raise LiteralParseError(f"{raw!r} is not a boolean")
