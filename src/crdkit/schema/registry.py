"""The standard rule table."""

from __future__ import annotations

from crdkit.schema.handlers import (
    handle_custom_function,
    handle_length_comparison,
    handle_numeric_comparison,
    handle_pattern,
    handle_required,
)
from crdkit.schema.rules import RuleInfo, RuleRegistry
from crdkit.schema.shapes import NUMERIC_KINDS, ContainerKind, ScalarKind

NUMERIC_OPERATORS = ("mo", "ge", "gt", "le", "lt")
STRING_LENGTH_OPERATORS = ("minLength", "maxLength")
COLLECTION_SIZE_OPERATORS = ("minItems", "maxItems")


def build_default_registry() -> RuleRegistry:
    """Construct the built-in operator table."""
    rules: dict[str, RuleInfo] = {
        "required": RuleInfo(handler=handle_required, option_only=True),
    }
    for name in NUMERIC_OPERATORS:
        rules[name] = RuleInfo(
            handler=handle_numeric_comparison, supported_kinds=NUMERIC_KINDS
        )
    for name in STRING_LENGTH_OPERATORS:
        rules[name] = RuleInfo(
            handler=handle_length_comparison,
            supported_kinds=frozenset({ScalarKind.STRING}),
        )
    for name in COLLECTION_SIZE_OPERATORS:
        rules[name] = RuleInfo(
            handler=handle_length_comparison,
            supported_kinds=frozenset({ContainerKind.SEQUENCE, ContainerKind.MAP}),
        )
    rules["pattern"] = RuleInfo(
        handler=handle_pattern, supported_kinds=frozenset({ScalarKind.STRING})
    )
    rules["fn"] = RuleInfo(handler=handle_custom_function, any_type=True)
    return RuleRegistry(rules)


DEFAULT_REGISTRY = build_default_registry()
