"""Resource base tests."""

from __future__ import annotations

from typing import Annotated

import pytest
from pydantic import Field

from crdkit import (
    Condition,
    ConditionStatus,
    Default,
    GroupVersionKind,
    GroupVersionResource,
    ObjectMeta,
    OwnerReference,
    Record,
    Resource,
    UInt32,
    Validate,
    to_plural,
)


class WidgetSpec(Record):
    image: Annotated[str, Validate("minLength=1")]
    replicas: Annotated[UInt32 | None, Default(1), Validate("le=10")] = None


class WidgetStatus(Record):
    ready: bool = False
    conditions: list[Condition] = Field(default_factory=list)


class Widget(Resource):
    identity = GroupVersionKind.of("example.com", "v1", "Widget")
    default_labels = {"app.kubernetes.io/managed-by": "crdkit"}

    spec: WidgetSpec
    status: WidgetStatus | None = None


class Policy(Resource):
    identity = GroupVersionKind.of("", "v1", "Policy")
    default_annotations = {"owner": "platform"}

    spec: WidgetSpec


@pytest.mark.parametrize(
    ("word", "plural"),
    [
        ("widget", "widgets"),
        ("policy", "policies"),
        ("day", "days"),
        ("box", "boxes"),
        ("status", "statuses"),
        ("mesh", "meshes"),
        ("batch", "batches"),
        ("quiz", "quizes"),
        ("y", "ys"),
    ],
)
def test_to_plural(word: str, plural: str) -> None:
    """Plurals follow the simple English suffix rules."""
    assert to_plural(word) == plural


def test_identity_accessors() -> None:
    """Class-level identity drives the derived names."""
    assert Widget.api_version() == "example.com/v1"
    assert Widget.kind() == "Widget"
    assert Widget.group() == "example.com"
    assert Widget.version() == "v1"
    assert Widget.singular() == "widget"
    assert Widget.plural() == "widgets"
    assert Policy.api_version() == "v1"
    assert Policy.plural() == "policies"
    assert Widget.group_version_resource() == GroupVersionResource(
        group="example.com", version="v1", resource="widgets"
    )


def test_new_sets_name_and_default_labels() -> None:
    """new() fills metadata from the class defaults and leaves status absent."""
    widget = Widget.new("web", WidgetSpec(image="nginx"))
    policy = Policy.new("p", WidgetSpec(image="x"))

    assert widget.name == "web"
    assert widget.metadata.labels == {"app.kubernetes.io/managed-by": "crdkit"}
    assert widget.metadata.annotations is None
    assert widget.status is None
    assert policy.metadata.labels is None
    assert policy.metadata.annotation("owner") == "platform"

    widget.metadata.set_label("tier", "web")
    assert "tier" not in Widget.default_labels


def test_engines_cover_spec_and_status() -> None:
    """Defaults and rules reach spec and status but never metadata."""
    widget = Widget.new("web", WidgetSpec(image="nginx"))
    widget.status = WidgetStatus(conditions=[Condition(type="Ready", status="Maybe")])

    widget.apply_defaults()
    report = widget.validate_fields()

    assert widget.spec.replicas == 1
    assert len(report.errors) == 1
    assert report.errors[0].startswith("Field 'status' failed validation")
    assert "conditions[0]" in report.errors[0]
    assert "Field 'status' does not match the required pattern" in report.errors[0]


def test_subclasses_must_declare_identity_and_spec() -> None:
    """A resource without identity or spec fails at definition."""
    with pytest.raises(TypeError):

        class Nameless(Resource):
            spec: WidgetSpec

    with pytest.raises(TypeError):

        class Specless(Resource):
            identity = GroupVersionKind.of("example.com", "v1", "Specless")


def test_to_dict_carries_the_envelope() -> None:
    """Serialized resources start with apiVersion and kind and omit absent fields."""
    widget = Widget.new("web", WidgetSpec(image="nginx"))

    payload = widget.to_dict()

    assert list(payload) == ["apiVersion", "kind", "metadata", "spec"]
    assert payload["apiVersion"] == "example.com/v1"
    assert payload["kind"] == "Widget"
    assert payload["metadata"]["name"] == "web"
    assert payload["spec"] == {"image": "nginx"}


def test_json_and_yaml_round_trip() -> None:
    """Resources parse back from their own JSON and YAML."""
    widget = Widget.new("web", WidgetSpec(image="nginx", replicas=3))
    widget.status = WidgetStatus(ready=True)

    assert Widget.from_json(widget.to_json()) == widget
    assert Widget.from_json(widget.to_json(indent=True)) == widget
    assert Widget.from_yaml(widget.to_yaml()) == widget


def test_from_dict_checks_the_envelope() -> None:
    """A foreign apiVersion or kind is rejected; a missing envelope is accepted."""
    payload = Widget.new("web", WidgetSpec(image="nginx")).to_dict()

    with pytest.raises(ValueError):
        Widget.from_dict({**payload, "kind": "Gadget"})
    with pytest.raises(ValueError):
        Widget.from_dict({**payload, "apiVersion": "example.com/v2"})
    with pytest.raises(ValueError):
        Widget.from_yaml("- not\n- a mapping\n")

    body = {
        key: value for key, value in payload.items() if key not in ("apiVersion", "kind")
    }
    assert Widget.from_dict(body).name == "web"


def test_metadata_uses_camel_case_aliases() -> None:
    """Metadata reads and writes Kubernetes-style keys."""
    meta = ObjectMeta.model_validate(
        {"name": "web", "generateName": "web-", "ownerReferences": []}
    )

    assert meta.generate_name == "web-"
    assert meta.model_dump(by_alias=True, exclude_none=True) == {
        "name": "web",
        "generateName": "web-",
        "ownerReferences": [],
    }


def test_owner_references() -> None:
    """Owners need a name and uid and are added once."""
    widget = Widget.new("web", WidgetSpec(image="nginx"))
    with pytest.raises(ValueError):
        widget.owner_reference()

    widget.metadata.uid = "uid-1"
    owner = widget.owner_reference()
    child = ObjectMeta(name="child")
    child.add_owner(owner)
    child.add_owner(owner)

    assert owner == OwnerReference(
        api_version="example.com/v1",
        kind="Widget",
        name="web",
        uid="uid-1",
        controller=True,
        block_owner_deletion=True,
    )
    assert child.owner_references == [owner]
    assert widget.object_reference().kind == "Widget"


def test_condition_status_replaces_by_type() -> None:
    """Setting a condition replaces the one of the same type."""
    status = ConditionStatus()
    status.set_condition(Condition(type="Ready", status="False"))
    status.set_condition(Condition(type="Ready", status="True"))
    status.set_condition(Condition(type="Synced"))

    assert [condition.type for condition in status.conditions] == ["Ready", "Synced"]
    assert status.condition("Ready").status == "True"
    assert status.condition("Missing") is None
    assert Condition(status="True", observed_generation=-1).validate_fields().errors == [
        "Field 'observed_generation' must be >= 0."
    ]
