"""Engine facade combining defaulting and validation over one catalog."""

from __future__ import annotations

import logging
from typing import TypeVar

from crdkit.config.log_setup import configure_logging
from crdkit.config.models import EngineConfig
from crdkit.constants import DEFAULT_ERROR_SEPARATOR
from crdkit.engine.defaulting import Defaulter
from crdkit.engine.validation import ValidationReport, Validator
from crdkit.schema.base import Record
from crdkit.schema.catalog import SchemaCatalog, get_default_catalog
from crdkit.schema.compiler import RecordSchema
from crdkit.schema.registry import DEFAULT_REGISTRY

LOGGER = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=Record)


class Engine:
    """Runs the defaulting and validation passes against one catalog."""

    def __init__(
        self,
        catalog: SchemaCatalog | None = None,
        *,
        error_separator: str = DEFAULT_ERROR_SEPARATOR,
    ) -> None:
        self.catalog = get_default_catalog() if catalog is None else catalog
        self.defaulter = Defaulter(self.catalog)
        self.validator = Validator(self.catalog, error_separator=error_separator)

    @classmethod
    def from_config(cls, config: EngineConfig) -> Engine:
        """Build an engine from validated configuration."""
        configure_logging(config.logging)
        disabled = config.registry.disabled_rules
        if disabled:
            catalog = SchemaCatalog(DEFAULT_REGISTRY.without(*disabled))
            LOGGER.info("Rule operators disabled: %s", ", ".join(sorted(disabled)))
        else:
            catalog = get_default_catalog()
        return cls(catalog, error_separator=config.validation.error_separator)

    def register(self, *record_types: type[Record]) -> list[RecordSchema]:
        """Compile record types up front so schema errors surface early."""
        return [self.catalog.register(record_type) for record_type in record_types]

    def apply_defaults(self, record: RecordT) -> RecordT:
        return self.defaulter.apply(record)

    def validate(self, record: Record) -> ValidationReport:
        return self.validator.validate(record)

    def prepare(self, record: Record) -> ValidationReport:
        """Apply defaults, then validate the defaulted record."""
        self.defaulter.apply(record)
        return self.validator.validate(record)
