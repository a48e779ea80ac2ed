"""In-place defaulting of records."""

from __future__ import annotations

import logging
from typing import TypeVar

from crdkit.schema.base import Record
from crdkit.schema.catalog import SchemaCatalog, get_default_catalog
from crdkit.schema.shapes import iter_nested_records

LOGGER = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=Record)


class Defaulter:
    """Fill absent optional fields and recurse into nested records.

    A default is only written when the field is absent, so applying twice
    leaves the record as applying once did. Defaults are not checked against
    the field's validation rules.
    """

    def __init__(self, catalog: SchemaCatalog | None = None) -> None:
        self._catalog = get_default_catalog() if catalog is None else catalog

    def apply(self, record: RecordT) -> RecordT:
        schema = self._catalog.schema_for(type(record))
        for plan in schema.fields:
            if plan.skipped:
                continue
            if plan.assigns_default:
                if getattr(record, plan.name) is None:
                    setattr(record, plan.name, plan.default_value)
                    LOGGER.debug("Defaulted %s.%s", schema.name, plan.name)
                continue
            if plan.recurses:
                value = getattr(record, plan.name)
                for _, nested in iter_nested_records(plan.shape, value, plan.name):
                    self.apply(nested)
        return record


def apply_defaults(record: RecordT, *, catalog: SchemaCatalog | None = None) -> RecordT:
    """Apply declared defaults to `record` in place and return it."""
    return Defaulter(catalog).apply(record)
