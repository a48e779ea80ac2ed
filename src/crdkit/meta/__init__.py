"""Resource identity and metadata types."""

from crdkit.meta.condition import Condition, ConditionStatus
from crdkit.meta.gvk import (
    GroupVersion,
    GroupVersionKind,
    GroupVersionResource,
    ParseGroupVersionError,
    join_api_version,
    split_api_version,
)
from crdkit.meta.object_meta import ObjectMeta, OwnerReference, TypeMeta
from crdkit.meta.references import ObjectReference, RelationReference

__all__ = [
    "Condition",
    "ConditionStatus",
    "GroupVersion",
    "GroupVersionKind",
    "GroupVersionResource",
    "ObjectMeta",
    "ObjectReference",
    "OwnerReference",
    "ParseGroupVersionError",
    "RelationReference",
    "TypeMeta",
    "join_api_version",
    "split_api_version",
]
