"""Identity and bookkeeping metadata stored with every resource.

These are plain data models: the defaulting and validation engines never
traverse them.
"""

from __future__ import annotations

from datetime import datetime

from crdkit.meta.references import CAMEL_CONFIG, RelationReference
from crdkit.schema.base import StrictSchemaModel


class CamelModel(StrictSchemaModel):
    model_config = CAMEL_CONFIG


class TypeMeta(CamelModel):
    """The `apiVersion`/`kind` envelope of a serialized object."""

    api_version: str
    kind: str


class OwnerReference(CamelModel):
    """Identifies an owning object; owned objects are collected with it."""

    api_version: str
    kind: str
    name: str
    uid: str
    controller: bool | None = None
    block_owner_deletion: bool | None = None


class ObjectMeta(CamelModel):
    """Metadata every persisted resource carries."""

    name: str | None = None
    generate_name: str | None = None
    namespace: str | None = None
    uid: str | None = None
    resource_version: str | None = None
    generation: int | None = None
    self_link: str | None = None
    creation_timestamp: datetime | None = None
    deletion_timestamp: datetime | None = None
    deletion_grace_period_seconds: int | None = None
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None
    finalizers: list[str] | None = None
    owner_references: list[OwnerReference] | None = None
    relation_references: list[RelationReference] | None = None

    def label(self, key: str) -> str | None:
        return (self.labels or {}).get(key)

    def annotation(self, key: str) -> str | None:
        return (self.annotations or {}).get(key)

    def set_label(self, key: str, value: str) -> None:
        self.labels = {**(self.labels or {}), key: value}

    def set_annotation(self, key: str, value: str) -> None:
        self.annotations = {**(self.annotations or {}), key: value}

    def add_owner(self, owner: OwnerReference) -> None:
        """Append `owner` unless a reference with the same uid exists."""
        existing = list(self.owner_references or [])
        if any(reference.uid == owner.uid for reference in existing):
            return
        self.owner_references = [*existing, owner]
