"""Shared schema base classes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict

from crdkit.constants import DEFAULT_METADATA_FIELD

if TYPE_CHECKING:
    from crdkit.engine.validation import ValidationReport


class StrictSchemaModel(BaseModel):
    """Base model with strict validation defaults."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True, frozen=False)


class Record(StrictSchemaModel):
    """Base class for records that carry defaulting and validation behavior.

    Fields declare their behavior with `typing.Annotated` markers
    (`Default`, `Validate`, `Rule`, `Kind`). Each subclass is compiled into a
    `RecordSchema` as soon as pydantic has fully resolved it, so declaration
    mistakes surface when the class statement runs.

    Schemas must be acyclic through required fields; traversal recurses into
    every present nested record and has no depth limit of its own.
    """

    metadata_field: ClassVar[str | None] = DEFAULT_METADATA_FIELD
    # Off for records checked against a custom registry only.
    compile_on_definition: ClassVar[bool] = True

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        if not (cls.__pydantic_complete__ and cls.compile_on_definition):
            return
        from crdkit.schema.catalog import get_default_catalog

        get_default_catalog().schema_for(cls)

    def apply_defaults(self) -> None:
        """Fill absent optional fields from their declared defaults."""
        from crdkit.engine.defaulting import apply_defaults

        apply_defaults(self)

    def validate_fields(self) -> ValidationReport:
        """Run every declared rule and return the aggregated report."""
        from crdkit.engine.validation import validate

        return validate(self)
