"""Compiled-schema cache keyed by record type."""

from __future__ import annotations

import logging
import threading

from crdkit.schema.base import Record
from crdkit.schema.compiler import RecordSchema, compile_record_schema
from crdkit.schema.registry import DEFAULT_REGISTRY
from crdkit.schema.rules import RuleRegistry

LOGGER = logging.getLogger(__name__)


class SchemaCatalog:
    """Compiles each record type once against one registry.

    Lookups of already compiled types take no lock; compilation is
    serialized so concurrent first uses agree on a single schema.
    """

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        self.registry = DEFAULT_REGISTRY if registry is None else registry
        self._schemas: dict[type[Record], RecordSchema] = {}
        self._lock = threading.RLock()

    def schema_for(self, record_type: type[Record]) -> RecordSchema:
        """Return the compiled schema, compiling it on first use."""
        schema = self._schemas.get(record_type)
        if schema is not None:
            return schema
        with self._lock:
            schema = self._schemas.get(record_type)
            if schema is None:
                if not getattr(record_type, "__pydantic_complete__", True):
                    record_type.model_rebuild()
                schema = compile_record_schema(record_type, self.registry)
                self._schemas[record_type] = schema
        return schema

    def register(self, record_type: type[Record]) -> RecordSchema:
        """Compile `record_type` and every record type reachable from it."""
        root = self.schema_for(record_type)
        visited = {record_type}
        pending = root.nested_record_types()
        while pending:
            nested_type = pending.pop()
            if nested_type in visited:
                continue
            visited.add(nested_type)
            pending.extend(self.schema_for(nested_type).nested_record_types())
        LOGGER.debug(
            "Registered %s with %d reachable record type(s)",
            record_type.__name__,
            len(visited),
        )
        return root

    def __contains__(self, record_type: object) -> bool:
        return record_type in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)


_DEFAULT_CATALOG = SchemaCatalog(DEFAULT_REGISTRY)


def get_default_catalog() -> SchemaCatalog:
    return _DEFAULT_CATALOG
