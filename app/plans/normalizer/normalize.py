"""Plan normalizer.

Turns whatever the generative model returned (text, a parsed list, a single
day object, or a `{"raw": ...}` wrapper left behind by an earlier failed
parse) into a canonical list of DayPlan records.

Pipeline:
1. Shape dispatch
2. Textual cleanup (see repair.py)
3. Parse, with a single fallback retry
4. Field normalization with bilingual keys and rest-day inference

`normalize()` never raises. It returns None on failure and logs the
original text when parsing fails.
"""

import math
import re
from typing import Any

from loguru import logger

from app.plans.errors import NormalizationError, ParseError, ShapeError
from app.plans.normalizer.keys import looks_like_day, lookup
from app.plans.normalizer.repair import parse_model_text
from app.plans.types import DayPlan, ExerciseEntry, NormalizedPlan

REST_MARKERS: tuple[str, ...] = ("rest", "descanso", "recovery", "recuperación")

_LEADING_INT_RE = re.compile(r"-?\d+")


def is_rest_day(focus: str, exercises: list[Any]) -> bool:
    """A day is a rest day if its focus mentions rest or it has no exercises."""
    focus_lower = focus.lower()
    if any(marker in focus_lower for marker in REST_MARKERS):
        return True
    return not exercises


def _coerce_sets(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT_RE.search(value)
        if match:
            try:
                return int(match.group(0))
            except ValueError:
                # past the interpreter's int digit limit
                return 0
    return 0


def _coerce_reps(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_exercise(record: Any) -> ExerciseEntry:
    """Build an ExerciseEntry from a raw exercise record."""
    if not isinstance(record, dict):
        record = {}
    return ExerciseEntry(
        name=str(lookup(record, "name", "Exercise")),
        sets=_coerce_sets(lookup(record, "sets", 0)),
        reps=_coerce_reps(lookup(record, "reps", "0")),
    )


def normalize_day(record: Any, index: int) -> DayPlan:
    """Build a DayPlan from a raw day record.

    Args:
        record: Raw day mapping (anything else is treated as an empty record)
        index: Zero-based position of the day, used for the default label

    Returns:
        Fully populated DayPlan
    """
    if not isinstance(record, dict):
        record = {}

    raw_exercises = lookup(record, "exercises", [])
    if not isinstance(raw_exercises, list):
        raw_exercises = []

    exercises = [normalize_exercise(item) for item in raw_exercises]
    focus = str(lookup(record, "focus", "General"))

    return DayPlan(
        day=str(lookup(record, "day", f"Day {index + 1}")),
        focus=focus,
        exercises=exercises,
        is_rest=is_rest_day(focus, exercises),
    )


def _normalize_days(days: list[Any]) -> NormalizedPlan:
    if not days:
        raise ShapeError("EMPTY_PLAN", ["model returned no days"])
    return [normalize_day(record, index) for index, record in enumerate(days)]


def _days_from_parsed(parsed: Any) -> list[Any]:
    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict):
        return [parsed]
    raise ShapeError("UNEXPECTED_ROOT", [f"parsed value is {type(parsed).__name__}"])


def normalize_or_raise(raw: Any) -> NormalizedPlan:
    """Normalize a model response, raising on failure.

    Args:
        raw: Model response as text, a list of day records, a single day
            record, or a mapping with a `raw` text field

    Returns:
        Non-empty list of DayPlan

    Raises:
        ShapeError: If the input or parsed root has an unrecognized shape
        ParseError: If text cannot be parsed after the fallback retry
    """
    if isinstance(raw, list):
        return _normalize_days(raw)

    if isinstance(raw, dict):
        nested = raw.get("raw")
        if isinstance(nested, str):
            return _normalize_days(_days_from_parsed(parse_model_text(nested)))
        if looks_like_day(raw):
            return _normalize_days([raw])
        raise ShapeError("UNRECOGNIZED_SHAPE", [f"mapping keys: {list(raw)[:10]}"])

    if isinstance(raw, str):
        return _normalize_days(_days_from_parsed(parse_model_text(raw)))

    raise ShapeError("UNRECOGNIZED_SHAPE", [f"input type: {type(raw).__name__}"])


def normalize(raw: Any) -> NormalizedPlan | None:
    """Normalize a model response into a plan.

    Returns:
        Non-empty list of DayPlan, or None if the response is unusable
    """
    try:
        return normalize_or_raise(raw)
    except ParseError as e:
        logger.warning(
            "Plan normalization failed: response is not parseable",
            code=e.code,
            details=e.details,
            raw_text=e.raw_text,
        )
    except NormalizationError as e:
        logger.warning("Plan normalization failed", code=e.code, details=e.details)
    return None
