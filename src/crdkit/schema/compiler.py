"""Compile record declarations into traversal plans.

Compilation is where every declaration is checked: shapes are inferred,
defaults are parsed into the field's kind, and each rule is matched against
the registry and the field shape before a check is built for it. Any
mismatch raises a `SchemaDefinitionError` subclass, so a `RecordSchema`
that exists is always safe to run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic.fields import FieldInfo

from crdkit.errors import (
    DuplicateRuleError,
    IncompatibleRuleError,
    InvalidDefaultError,
    InvalidLiteralError,
    UnknownRuleError,
    UnsupportedFieldError,
)
from crdkit.schema.base import Record
from crdkit.schema.declarations import (
    ENUM_PREFIX,
    NO_DEFAULT,
    Default,
    Rule,
    collect_defaults,
    collect_rules,
)
from crdkit.schema.literals import (
    LiteralParseError,
    fit_field,
    parse_scalar,
    resolve_variant,
)
from crdkit.schema.rules import Check, RuleContext, RuleRegistry
from crdkit.schema.shapes import (
    LITERAL_KINDS,
    FieldShape,
    OptionalShape,
    ScalarKind,
    ScalarShape,
    contains_record,
    infer_shape,
    iter_record_shapes,
)

LOGGER = logging.getLogger(__name__)


class DefaultMode(str, Enum):
    LITERAL = "literal"
    ENUM_VARIANT = "enum"
    NONE = "none"


@dataclass(frozen=True)
class ResolvedDefault:
    mode: DefaultMode
    value: Any = None


@dataclass(frozen=True)
class CompiledRule:
    rule: Rule
    check: Check


@dataclass(frozen=True)
class FieldPlan:
    """Compiled behavior of one declared field."""

    name: str
    shape: FieldShape
    default: ResolvedDefault | None = None
    rules: tuple[CompiledRule, ...] = ()
    recurses: bool = False
    skipped: bool = False

    @property
    def assigns_default(self) -> bool:
        return self.default is not None and self.default.mode is not DefaultMode.NONE

    @property
    def default_value(self) -> Any:
        """Value written into an absent field, `None` when nothing is assigned."""
        if self.default is None or self.default.mode is DefaultMode.NONE:
            return None
        return self.default.value


@dataclass(frozen=True)
class RecordSchema:
    record_type: type[Record]
    fields: tuple[FieldPlan, ...]

    @property
    def name(self) -> str:
        return self.record_type.__name__

    def field(self, name: str) -> FieldPlan:
        for plan in self.fields:
            if plan.name == name:
                return plan
        raise KeyError(name)

    def nested_record_types(self) -> list[type[Record]]:
        """Record types reachable from non-skipped fields, in field order."""
        found: list[type[Record]] = []
        for plan in self.fields:
            if plan.skipped:
                continue
            for shape in iter_record_shapes(plan.shape):
                if shape.record_type not in found:
                    found.append(shape.record_type)
        return found


def compile_record_schema(
    record_type: type[Record], registry: RuleRegistry
) -> RecordSchema:
    """Check the declarations of `record_type` and build its plan."""
    if not (isinstance(record_type, type) and issubclass(record_type, Record)):
        raise TypeError(f"{record_type!r} is not a Record type")
    plans = tuple(
        _compile_field(record_type, name, field_info, registry)
        for name, field_info in record_type.model_fields.items()
    )
    LOGGER.debug(
        "Compiled schema for %s: %d field(s), %d rule(s)",
        record_type.__name__,
        len(plans),
        sum(len(plan.rules) for plan in plans),
    )
    return RecordSchema(record_type=record_type, fields=plans)


def _compile_field(
    record_type: type[Record],
    name: str,
    field_info: FieldInfo,
    registry: RuleRegistry,
) -> FieldPlan:
    record_name = record_type.__name__
    metadata = list(field_info.metadata)
    shape = infer_shape(field_info.annotation, metadata)
    if name == record_type.metadata_field:
        return FieldPlan(name=name, shape=shape, skipped=True)

    for nested in iter_record_shapes(shape):
        if not nested.is_record:
            raise UnsupportedFieldError(
                f"Nested type {nested.describe()} does not derive from Record",
                record=record_name,
                field=name,
            )

    default = _resolve_default(
        record_name, name, field_info, shape, collect_defaults(metadata)
    )
    rules = _compile_rules(record_type, name, shape, collect_rules(metadata), registry)
    return FieldPlan(
        name=name,
        shape=shape,
        default=default,
        rules=rules,
        recurses=contains_record(shape),
    )


def _compile_rules(
    record_type: type[Record],
    name: str,
    shape: FieldShape,
    rules: list[Rule],
    registry: RuleRegistry,
) -> tuple[CompiledRule, ...]:
    record_name = record_type.__name__
    seen: set[str] = set()
    compiled: list[CompiledRule] = []
    for rule in rules:
        if rule.operator in seen:
            raise DuplicateRuleError(
                f"Duplicate validation rule '{rule.operator}'",
                record=record_name,
                field=name,
                operator=rule.operator,
            )
        seen.add(rule.operator)

        info = registry.lookup(rule.operator)
        if info is None:
            raise UnknownRuleError(
                f"Unknown validation rule '{rule.operator}'",
                record=record_name,
                field=name,
                operator=rule.operator,
            )
        accepted, inner, is_option = info.accepts(shape)
        if not accepted:
            raise IncompatibleRuleError(
                f"Rule '{rule.operator}' does not apply to {shape.describe()} fields",
                record=record_name,
                field=name,
                operator=rule.operator,
            )
        context = RuleContext(
            rule=rule,
            record_name=record_name,
            field_name=name,
            shape=inner,
            is_option=is_option,
            record_type=record_type,
        )
        compiled.append(CompiledRule(rule=rule, check=info.handler(context)))
    return tuple(compiled)


def _resolve_default(
    record_name: str,
    name: str,
    field_info: FieldInfo,
    shape: FieldShape,
    defaults: list[Default],
) -> ResolvedDefault | None:
    if not defaults:
        return None
    if len(defaults) > 1:
        raise InvalidDefaultError(
            "Only one default may be declared", record=record_name, field=name
        )
    raw = defaults[0].value
    if not isinstance(shape, OptionalShape):
        raise InvalidDefaultError(
            f"Defaults apply only to optional fields, not {shape.describe()}",
            record=record_name,
            field=name,
        )
    inner = shape.inner

    if isinstance(inner, ScalarShape) and inner.kind in LITERAL_KINDS:
        try:
            value = fit_field(field_info, parse_scalar(inner.kind, raw))
            return ResolvedDefault(DefaultMode.LITERAL, value)
        except LiteralParseError as exc:
            raise InvalidLiteralError(
                f"Invalid default {raw!r}: {exc}", record=record_name, field=name
            ) from exc

    if isinstance(raw, Enum) or (isinstance(raw, str) and raw.startswith(ENUM_PREFIX)):
        if not (isinstance(inner, ScalarShape) and inner.kind is ScalarKind.ENUM):
            raise InvalidDefaultError(
                f"Enum default {raw!r} needs an enumerated field, not {inner.describe()}",
                record=record_name,
                field=name,
            )
        variant = raw if isinstance(raw, Enum) else raw[len(ENUM_PREFIX) :]
        try:
            return ResolvedDefault(
                DefaultMode.ENUM_VARIANT, resolve_variant(inner, variant)
            )
        except LiteralParseError as exc:
            raise InvalidLiteralError(
                f"Invalid enum default {raw!r}: {exc}", record=record_name, field=name
            ) from exc

    if raw == NO_DEFAULT:
        return ResolvedDefault(DefaultMode.NONE)

    raise InvalidDefaultError(
        f"Unsupported default {raw!r} for {shape.describe()} field",
        record=record_name,
        field=name,
    )
