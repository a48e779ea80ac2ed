"""Status conditions."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import Field

from crdkit.meta.references import CAMEL_CONFIG
from crdkit.schema.base import Record
from crdkit.schema.declarations import Default, Validate
from crdkit.schema.types import Int64

CONDITION_STATUSES = ("True", "False", "Unknown")


class Condition(Record):
    """One aspect of the current state of a resource."""

    model_config = CAMEL_CONFIG

    type: str = ""
    status: Annotated[str, Validate("pattern=^(True|False|Unknown)$")] = "Unknown"
    reason: str = ""
    message: str = ""
    observed_generation: Annotated[Int64 | None, Validate("ge=0")] = None
    last_transition_time: Annotated[datetime | None, Default("none")] = None


class ConditionStatus(Record):
    """Status block holding a list of conditions."""

    conditions: list[Condition] = Field(default_factory=list)

    def condition(self, condition_type: str) -> Condition | None:
        for condition in self.conditions:
            if condition.type == condition_type:
                return condition
        return None

    def set_condition(self, condition: Condition) -> None:
        """Replace the condition of the same type, or append it."""
        for index, existing in enumerate(self.conditions):
            if existing.type == condition.type:
                self.conditions[index] = condition
                return
        self.conditions.append(condition)
