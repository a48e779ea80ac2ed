"""Typed resources: identity, metadata, spec and status."""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Self

import orjson
import yaml
from pydantic import Field

from crdkit.meta.gvk import GroupVersionKind, GroupVersionResource
from crdkit.meta.object_meta import ObjectMeta, OwnerReference
from crdkit.meta.references import CAMEL_CONFIG, ObjectReference
from crdkit.schema.base import Record

LOGGER = logging.getLogger(__name__)

_ES_SUFFIXES = ("s", "x", "z", "ch", "sh")
_VOWELS = frozenset("aeiou")


def to_plural(word: str) -> str:
    """Pluralize a lowercase English noun the way resource names are."""
    if word.endswith(_ES_SUFFIXES):
        return f"{word}es"
    if len(word) > 1 and word.endswith("y") and word[-2] not in _VOWELS:
        return f"{word[:-1]}ies"
    return f"{word}s"


class Resource(Record):
    """Base class for typed resources.

    Subclasses set `identity` and declare a `spec` field (and usually an
    optional `status`). The `metadata` field is never traversed by the
    defaulting or validation engines.
    """

    model_config = CAMEL_CONFIG

    identity: ClassVar[GroupVersionKind]
    plural_name: ClassVar[str | None] = None
    singular_name: ClassVar[str | None] = None
    default_labels: ClassVar[dict[str, str]] = {}
    default_annotations: ClassVar[dict[str, str]] = {}

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        if not isinstance(getattr(cls, "identity", None), GroupVersionKind):
            raise TypeError(f"{cls.__name__} must set `identity` to a GroupVersionKind")
        if "spec" not in cls.model_fields:
            raise TypeError(f"{cls.__name__} must declare a `spec` field")

    @classmethod
    def new(cls, name: str, spec: Any) -> Self:
        """Build a named resource with the class's default labels and annotations."""
        metadata = ObjectMeta(
            name=name,
            labels=dict(cls.default_labels) or None,
            annotations=dict(cls.default_annotations) or None,
        )
        return cls(metadata=metadata, spec=spec)

    @classmethod
    def group_version_kind(cls) -> GroupVersionKind:
        return cls.identity

    @classmethod
    def api_version(cls) -> str:
        return cls.identity.api_version()

    @classmethod
    def kind(cls) -> str:
        return cls.identity.kind

    @classmethod
    def group(cls) -> str:
        return cls.identity.group

    @classmethod
    def version(cls) -> str:
        return cls.identity.version

    @classmethod
    def singular(cls) -> str:
        return cls.singular_name or cls.identity.kind.lower()

    @classmethod
    def plural(cls) -> str:
        return cls.plural_name or to_plural(cls.singular())

    @classmethod
    def group_version_resource(cls) -> GroupVersionResource:
        return cls.identity.group_version().with_resource(cls.plural())

    @property
    def name(self) -> str | None:
        return self.metadata.name

    @property
    def namespace(self) -> str | None:
        return self.metadata.namespace

    def object_reference(self) -> ObjectReference:
        return ObjectReference(
            api_version=self.api_version(),
            kind=self.kind(),
            name=self.metadata.name,
            uid=self.metadata.uid,
        )

    def owner_reference(self, *, controller: bool = True) -> OwnerReference:
        """Reference this resource as the owner of another object."""
        if not self.metadata.name or not self.metadata.uid:
            raise ValueError(
                f"{self.kind()} needs metadata.name and metadata.uid to own objects"
            )
        return OwnerReference(
            api_version=self.api_version(),
            kind=self.kind(),
            name=self.metadata.name,
            uid=self.metadata.uid,
            controller=controller,
            block_owner_deletion=True,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the `apiVersion`/`kind` envelope, omitting absent fields."""
        payload: dict[str, Any] = {"apiVersion": self.api_version(), "kind": self.kind()}
        payload.update(self.model_dump(mode="json", by_alias=True, exclude_none=True))
        return payload

    def to_json(self, *, indent: bool = False) -> str:
        option = orjson.OPT_INDENT_2 if indent else 0
        return orjson.dumps(self.to_dict(), option=option).decode("utf-8")

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Parse a serialized resource, checking any envelope it carries."""
        body = dict(data)
        api_version = body.pop("apiVersion", None)
        kind = body.pop("kind", None)
        if api_version is not None and api_version != cls.api_version():
            raise ValueError(
                f"apiVersion mismatch for {cls.__name__}: "
                f"expected {cls.api_version()!r}, got {api_version!r}"
            )
        if kind is not None and kind != cls.kind():
            raise ValueError(
                f"kind mismatch for {cls.__name__}: expected {cls.kind()!r}, got {kind!r}"
            )
        return cls.model_validate(body)

    @classmethod
    def from_json(cls, payload: str | bytes) -> Self:
        data = orjson.loads(payload)
        if not isinstance(data, dict):
            raise ValueError("Resource JSON must be an object")
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls, payload: str) -> Self:
        data = yaml.safe_load(payload)
        if not isinstance(data, dict):
            raise ValueError("Resource YAML must deserialize to a mapping")
        return cls.from_dict(data)
