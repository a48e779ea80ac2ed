"""Rule metadata and the immutable rule registry."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping

from crdkit.schema.declarations import Rule
from crdkit.schema.shapes import ContainerKind, FieldShape, ScalarKind, unwrap_optional

Check = Callable[[Any, list[str]], None]


@dataclass(frozen=True)
class RuleContext:
    """Everything a handler needs to build the check for one field."""

    rule: Rule
    record_name: str
    field_name: str
    shape: FieldShape
    is_option: bool
    record_type: type


RuleHandler = Callable[[RuleContext], Check]


@dataclass(frozen=True)
class RuleInfo:
    """Registry entry describing where a rule applies and how it is checked."""

    handler: RuleHandler
    supported_kinds: frozenset[ScalarKind | ContainerKind] = frozenset()
    option_only: bool = False
    any_type: bool = False

    def __post_init__(self) -> None:
        modes = sum((bool(self.supported_kinds), self.option_only, self.any_type))
        if modes != 1:
            raise ValueError(
                "RuleInfo needs exactly one of supported_kinds, option_only or any_type"
            )

    def accepts(self, shape: FieldShape) -> tuple[bool, FieldShape, bool]:
        """Check `shape` after unwrapping one level of optionality."""
        inner, is_option = unwrap_optional(shape)
        if self.any_type:
            return True, inner, is_option
        if self.option_only:
            return is_option, inner, is_option
        return inner.tag in self.supported_kinds, inner, is_option


class RuleRegistry:
    """Read-only mapping of operator names to `RuleInfo`."""

    def __init__(self, rules: Mapping[str, RuleInfo]) -> None:
        self._rules: Mapping[str, RuleInfo] = MappingProxyType(dict(rules))

    def lookup(self, operator: str) -> RuleInfo | None:
        return self._rules.get(operator)

    def operators(self) -> tuple[str, ...]:
        return tuple(sorted(self._rules))

    def without(self, *operators: str) -> RuleRegistry:
        """Return a registry lacking the given operators."""
        unknown = sorted(set(operators) - set(self._rules))
        if unknown:
            raise KeyError(f"Unknown rule operators: {', '.join(unknown)}")
        return RuleRegistry(
            {name: info for name, info in self._rules.items() if name not in operators}
        )

    def __contains__(self, operator: object) -> bool:
        return operator in self._rules

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry({', '.join(self.operators())})"
