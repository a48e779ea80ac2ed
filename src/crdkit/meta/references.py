"""Object and relation references carried in resource metadata."""

from __future__ import annotations

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from crdkit.schema.base import Record

CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ObjectReference(Record):
    """Points at another object by apiVersion, kind, name and uid."""

    model_config = CAMEL_CONFIG

    api_version: str | None = None
    kind: str | None = None
    name: str | None = None
    uid: str | None = None


class RelationReference(Record):
    """A typed, labelled relation from one object to another."""

    model_config = CAMEL_CONFIG

    object_reference: ObjectReference
    type: str | None = None
    labels: dict[str, str] | None = None
