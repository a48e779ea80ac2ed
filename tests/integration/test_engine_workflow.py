"""End-to-end defaulting and validation workflows."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Annotated, ClassVar

import pytest
from pydantic import Field

from crdkit import (
    DEFAULT_REGISTRY,
    Condition,
    Engine,
    GroupVersionKind,
    Record,
    Resource,
    RuleRegistry,
    ScalarKind,
    SchemaCatalog,
    UInt32,
    Validate,
    apply_defaults,
    validate,
)
from crdkit.config import EngineConfig, RegistrySettings, load_engine_config
from crdkit.errors import UnknownRuleError
from crdkit.schema import Default, RuleInfo
from crdkit.schema.handlers import field_check
from crdkit.schema.rules import Check, RuleContext


class DummySpec(Record):
    val: Annotated[UInt32 | None, Default(20), Validate("le=10")] = None


class DummyStatus(Record):
    conditions: list[Condition] = Field(default_factory=list)


class Dummy(Resource):
    identity = GroupVersionKind.of("example.com", "v1", "Dummy")

    spec: DummySpec
    status: DummyStatus | None = None


def _handle_non_blank(ctx: RuleContext) -> Check:
    return field_check(ctx, lambda value: not value.strip(), "must not be blank.")


class Labelled(Record):
    compile_on_definition: ClassVar[bool] = False

    label: Annotated[str, Validate("nonBlank, maxLength=8")] = ""


def test_applied_default_is_not_assumed_compliant() -> None:
    """A default that violates the field's rule is still applied and reported."""
    spec = DummySpec()

    apply_defaults(spec)
    report = validate(spec)

    assert spec.val == 20
    assert len(report.errors) == 1
    assert "val' must be <= 10" in report.errors[0]


def test_resource_prepare_defaults_then_validates() -> None:
    """Engine.prepare runs both passes over a whole resource."""
    dummy = Dummy.new("dummy", DummySpec())

    report = Engine().prepare(dummy)

    assert dummy.spec.val == 20
    assert report.record_type == "Dummy"
    assert report.errors == [
        "Field 'spec' failed validation 'Field 'val' must be <= 10.'"
    ]
    dummy.spec.val = 5
    assert Engine().validate(dummy).ok


def test_round_trip_through_json_keeps_defaults() -> None:
    """Defaulted resources survive serialization."""
    dummy = Engine().apply_defaults(Dummy.new("dummy", DummySpec()))

    restored = Dummy.from_json(dummy.to_json())

    assert restored.spec.val == 20
    assert restored == dummy


def test_engine_from_config_disables_rules(tmp_path: Path) -> None:
    """Disabled operators make schemas that use them unusable."""
    config_path = tmp_path / "crdkit.yaml"
    config_path.write_text(
        "registry:\n  disabled_rules: [pattern]\nvalidation:\n  error_separator: ' / '\n",
        encoding="utf-8",
    )
    engine = Engine.from_config(load_engine_config(config_path, env={}))

    engine.register(DummySpec)
    assert DummySpec in engine.catalog
    with pytest.raises(UnknownRuleError):
        engine.register(Dummy)
    assert engine.validator.error_separator == " / "


def test_engine_from_default_config_shares_the_default_catalog() -> None:
    """Without disabled rules the process-wide catalog is reused."""
    engine = Engine.from_config(EngineConfig())

    assert engine.catalog is Engine().catalog
    assert engine.catalog.registry is DEFAULT_REGISTRY


def test_engine_from_config_sets_the_package_log_level() -> None:
    """The configured level is applied to the crdkit logger."""
    logger = logging.getLogger("crdkit")
    previous = logger.level
    try:
        Engine.from_config(EngineConfig.model_validate({"logging": {"level": "debug"}}))
        assert logger.level == logging.DEBUG
    finally:
        logger.setLevel(previous)


def test_schema_compilation_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    """Compiling and registering schemas emits debug records."""
    caplog.set_level(logging.DEBUG, logger="crdkit")

    Engine(SchemaCatalog()).register(Dummy)

    assert "Compiled schema for Dummy" in caplog.text
    assert "Registered Dummy" in caplog.text


def test_custom_registry_extends_the_operator_table() -> None:
    """Records can be checked against an injected registry with extra rules."""
    registry = RuleRegistry(
        {
            **{name: DEFAULT_REGISTRY.lookup(name) for name in DEFAULT_REGISTRY},
            "nonBlank": RuleInfo(
                handler=_handle_non_blank,
                supported_kinds=frozenset({ScalarKind.STRING}),
            ),
        }
    )
    engine = Engine(SchemaCatalog(registry))

    report = engine.validate(Labelled(label="   "))

    assert report.errors == ["Field 'label' must not be blank."]
    assert engine.validate(Labelled(label="ok")).ok
    assert engine.validate(Labelled(label="far too long")).errors == [
        "Field 'label' length must be <= 8."
    ]
    with pytest.raises(UnknownRuleError):
        Labelled().validate_fields()


def test_disabled_rules_config_is_validated() -> None:
    """Configuration cannot disable operators that do not exist."""
    with pytest.raises(ValueError):
        RegistrySettings(disabled_rules=["between"])


def test_concurrent_validation_of_distinct_records() -> None:
    """Independent records can be defaulted and validated in parallel."""
    engine = Engine(SchemaCatalog())
    records = [Dummy.new(f"dummy-{index}", DummySpec(val=index)) for index in range(32)]

    with ThreadPoolExecutor(max_workers=8) as pool:
        reports = list(pool.map(engine.prepare, records))

    assert [report.ok for report in reports] == [index <= 10 for index in range(32)]
