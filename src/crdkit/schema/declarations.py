"""Annotation markers used to declare defaults and validation rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from crdkit.errors import SchemaDefinitionError

NO_DEFAULT = "none"
ENUM_PREFIX = "enum="


@dataclass(frozen=True)
class Default:
    """Default declaration for an optional field.

    `value` is a literal (or its lexical form), `"enum=<Variant>"`, an enum
    member, or `"none"` to declare no default while still recursing.
    """

    value: Any


@dataclass(frozen=True)
class Rule:
    """A single `(operator, value)` validation rule."""

    operator: str
    value: str | None = None

    def __post_init__(self) -> None:
        if not self.operator:
            raise SchemaDefinitionError("Validation rule operator must not be empty")
        if self.value is not None and not isinstance(self.value, str):
            object.__setattr__(self, "value", str(self.value))

    def __str__(self) -> str:
        if self.value is None:
            return self.operator
        return f"{self.operator}={self.value}"


class Validate:
    """Marker carrying rules parsed from `"op[=value], op[=value], ..."`.

    Strings are split on every comma, so an operand that itself contains a
    comma, such as the regex `^[a-z]{1,3}$`, must be passed as a `Rule`:
    `Validate(Rule("pattern", "^[a-z]{1,3}$"), "required")`.
    """

    __slots__ = ("rules",)

    def __init__(self, *specs: str | Rule) -> None:
        rules: list[Rule] = []
        for spec in specs:
            if isinstance(spec, Rule):
                rules.append(spec)
            else:
                rules.extend(parse_rules(spec))
        self.rules: tuple[Rule, ...] = tuple(rules)

    def __repr__(self) -> str:
        return f"Validate({', '.join(str(rule) for rule in self.rules)!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Validate) and other.rules == self.rules

    def __hash__(self) -> int:
        return hash(self.rules)


def parse_rules(text: str) -> list[Rule]:
    """Split a rule string on commas; each entry splits on its first `=`."""
    rules: list[Rule] = []
    for entry in text.split(","):
        entry = entry.strip()
        if not entry:
            raise SchemaDefinitionError(f"Empty validation rule in {text!r}")
        operator, separator, value = entry.partition("=")
        rules.append(
            Rule(operator=operator.strip(), value=value.strip() if separator else None)
        )
    return rules


def collect_rules(metadata: list[Any]) -> list[Rule]:
    """Return the rules declared in field metadata, in declaration order."""
    rules: list[Rule] = []
    for item in metadata:
        if isinstance(item, Rule):
            rules.append(item)
        elif isinstance(item, Validate):
            rules.extend(item.rules)
    return rules


def collect_defaults(metadata: list[Any]) -> list[Default]:
    return [item for item in metadata if isinstance(item, Default)]
