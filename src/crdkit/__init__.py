"""crdkit: declarative defaulting and validation for typed resources."""

from crdkit.constants import PACKAGE_VERSION
from crdkit.engine import Engine, ValidationReport, apply_defaults, validate
from crdkit.errors import RecordValidationError, SchemaDefinitionError
from crdkit.meta import (
    Condition,
    ConditionStatus,
    GroupVersion,
    GroupVersionKind,
    GroupVersionResource,
    ObjectMeta,
    ObjectReference,
    OwnerReference,
    ParseGroupVersionError,
    RelationReference,
    TypeMeta,
)
from crdkit.resource import Resource, to_plural
from crdkit.schema import (
    DEFAULT_REGISTRY,
    Default,
    Int,
    Int32,
    Int64,
    Kind,
    Record,
    Rule,
    RuleRegistry,
    ScalarKind,
    SchemaCatalog,
    UInt,
    UInt32,
    UInt64,
    Validate,
)

__all__ = [
    "Condition",
    "ConditionStatus",
    "DEFAULT_REGISTRY",
    "Default",
    "Engine",
    "GroupVersion",
    "GroupVersionKind",
    "GroupVersionResource",
    "Int",
    "Int32",
    "Int64",
    "Kind",
    "ObjectMeta",
    "ObjectReference",
    "OwnerReference",
    "ParseGroupVersionError",
    "Record",
    "RecordValidationError",
    "RelationReference",
    "Resource",
    "Rule",
    "RuleRegistry",
    "ScalarKind",
    "SchemaCatalog",
    "SchemaDefinitionError",
    "TypeMeta",
    "UInt",
    "UInt32",
    "UInt64",
    "Validate",
    "ValidationReport",
    "__version__",
    "apply_defaults",
    "to_plural",
    "validate",
]
__version__ = PACKAGE_VERSION
