"""Record declarations, shape inference, rule registry and schema compilation."""

from crdkit.schema.base import Record, StrictSchemaModel
from crdkit.schema.catalog import SchemaCatalog, get_default_catalog
from crdkit.schema.compiler import (
    DefaultMode,
    FieldPlan,
    RecordSchema,
    ResolvedDefault,
    compile_record_schema,
)
from crdkit.schema.declarations import Default, Rule, Validate, parse_rules
from crdkit.schema.registry import DEFAULT_REGISTRY, build_default_registry
from crdkit.schema.rules import RuleContext, RuleInfo, RuleRegistry
from crdkit.schema.shapes import (
    ContainerKind,
    FieldShape,
    Kind,
    MapShape,
    OptionalShape,
    RecordShape,
    ScalarKind,
    ScalarShape,
    SequenceShape,
    infer_shape,
)
from crdkit.schema.types import Int, Int32, Int64, UInt, UInt32, UInt64

__all__ = [
    "ContainerKind",
    "DEFAULT_REGISTRY",
    "Default",
    "DefaultMode",
    "FieldPlan",
    "FieldShape",
    "Int",
    "Int32",
    "Int64",
    "Kind",
    "MapShape",
    "OptionalShape",
    "Record",
    "RecordSchema",
    "RecordShape",
    "ResolvedDefault",
    "Rule",
    "RuleContext",
    "RuleInfo",
    "RuleRegistry",
    "ScalarKind",
    "ScalarShape",
    "SchemaCatalog",
    "SequenceShape",
    "StrictSchemaModel",
    "UInt",
    "UInt32",
    "UInt64",
    "Validate",
    "build_default_registry",
    "compile_record_schema",
    "get_default_catalog",
    "infer_shape",
    "parse_rules",
]
