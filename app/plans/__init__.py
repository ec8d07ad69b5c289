"""Plans module - canonical weekly workout plans.

This module provides:
- The canonical DayPlan / ExerciseEntry schema
- Normalization of generative-model output into that schema
- Persistence of normalized plans (app.plans.store)
- AI plan generation (app.plans.generation)
"""

from app.plans.errors import NormalizationError, ParseError, ShapeError
from app.plans.normalizer import normalize, normalize_or_raise
from app.plans.types import DayPlan, ExerciseEntry, NormalizedPlan, dump_plan, dumps_plan

__all__ = [
    "DayPlan",
    "ExerciseEntry",
    "NormalizationError",
    "NormalizedPlan",
    "ParseError",
    "ShapeError",
    "dump_plan",
    "dumps_plan",
    "normalize",
    "normalize_or_raise",
]
