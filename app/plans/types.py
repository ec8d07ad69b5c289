"""Canonical weekly workout plan schema.

A normalized plan is an ordered list of DayPlan records. Every record is
fully populated: missing source fields are filled with defaults during
normalization, and `isRest` is always derived, never read from the source.
"""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ExerciseEntry(BaseModel):
    """One prescribed exercise.

    Attributes:
        name: Exercise display name
        sets: Number of sets
        reps: Repetitions as text ("8-12", "10 per leg", "Maximum", ...)
    """

    name: str = "Exercise"
    sets: int = 0
    reps: str = "0"


class DayPlan(BaseModel):
    """One day of a weekly plan.

    `is_rest` is exposed as `isRest` in the stored JSON document.
    """

    model_config = ConfigDict(populate_by_name=True)

    day: str
    focus: str = "General"
    exercises: list[ExerciseEntry] = Field(default_factory=list)
    is_rest: bool = Field(default=False, alias="isRest")


# Ordered sequence of days, in the order the model produced them
NormalizedPlan = list[DayPlan]


def dump_plan(plan: NormalizedPlan) -> list[dict[str, Any]]:
    """Convert a normalized plan to its JSON-ready document form."""
    return [day.model_dump(by_alias=True) for day in plan]


def dumps_plan(plan: NormalizedPlan) -> str:
    """Serialize a normalized plan to JSON text."""
    return json.dumps(dump_plan(plan), ensure_ascii=False)
