"""Group/Version/Kind addressing.

`apiVersion` is `group/version`, or just `version` for the empty (core)
group. Lenient parsing splits on the first `/` and reads a bare version as
the empty group, so the core group cannot be told apart from a missing one.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from crdkit.meta.object_meta import OwnerReference, TypeMeta
from crdkit.meta.references import ObjectReference, RelationReference


class ParseGroupVersionError(ValueError):
    """Raised when an apiVersion string lacks the `group/version` form."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"failed to parse group version: {value}")


def join_api_version(group: str, version: str) -> str:
    return f"{group}/{version}" if group else version


def split_api_version(api_version: str) -> tuple[str, str]:
    """Split on the first `/`; no slash means the empty group."""
    group, separator, version = api_version.partition("/")
    if not separator:
        return "", api_version
    return group, version


class IdentityModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class GroupVersion(IdentityModel):
    """A family of API resources."""

    group: str = ""
    version: str

    @classmethod
    def parse(cls, text: str) -> GroupVersion:
        """Parse `group/version` strictly; a bare version is rejected."""
        group, separator, version = text.partition("/")
        if not separator:
            raise ParseGroupVersionError(text)
        return cls(group=group, version=version)

    def api_version(self) -> str:
        return join_api_version(self.group, self.version)

    def with_kind(self, kind: str) -> GroupVersionKind:
        return GroupVersionKind(group=self.group, version=self.version, kind=kind)

    def with_resource(self, resource: str) -> GroupVersionResource:
        return GroupVersionResource(
            group=self.group, version=self.version, resource=resource
        )


class GroupVersionKind(IdentityModel):
    """The identity triple naming a resource type."""

    group: str = ""
    version: str
    kind: str

    @classmethod
    def of(cls, group: str, version: str, kind: str) -> GroupVersionKind:
        return cls(group=group, version=version, kind=kind)

    @classmethod
    def from_api_version(cls, api_version: str, kind: str) -> GroupVersionKind:
        group, version = split_api_version(api_version)
        return cls(group=group, version=version, kind=kind)

    @classmethod
    def from_type_meta(cls, type_meta: TypeMeta) -> GroupVersionKind:
        """Strict conversion; raises `ParseGroupVersionError` on a bare version."""
        return GroupVersion.parse(type_meta.api_version).with_kind(type_meta.kind)

    @classmethod
    def from_owner_reference(cls, owner: OwnerReference) -> GroupVersionKind:
        return cls.from_api_version(owner.api_version, owner.kind)

    @classmethod
    def from_object_reference(cls, reference: ObjectReference) -> GroupVersionKind:
        """Absent apiVersion or kind read as empty strings."""
        return cls.from_api_version(reference.api_version or "", reference.kind or "")

    @classmethod
    def from_relation_reference(cls, relation: RelationReference) -> GroupVersionKind:
        return cls.from_object_reference(relation.object_reference)

    def api_version(self) -> str:
        return join_api_version(self.group, self.version)

    def group_version(self) -> GroupVersion:
        return GroupVersion(group=self.group, version=self.version)

    def type_meta(self) -> TypeMeta:
        return TypeMeta(api_version=self.api_version(), kind=self.kind)

    def __str__(self) -> str:
        return f"{self.api_version()}, Kind={self.kind}"


class GroupVersionResource(IdentityModel):
    """A resource collection addressed by its plural name."""

    group: str = ""
    version: str
    resource: str
    api_version: str = ""

    @model_validator(mode="before")
    @classmethod
    def fill_api_version(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("api_version"):
            data = {
                **data,
                "api_version": join_api_version(
                    data.get("group", ""), data.get("version", "")
                ),
            }
        return data
