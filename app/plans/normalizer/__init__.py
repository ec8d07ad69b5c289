"""Normalization of generative-model plan output into canonical DayPlan lists."""

from app.plans.normalizer.keys import FIELD_KEYS, lookup
from app.plans.normalizer.normalize import is_rest_day, normalize, normalize_or_raise
from app.plans.normalizer.repair import clean_model_text

__all__ = [
    "FIELD_KEYS",
    "clean_model_text",
    "is_rest_day",
    "lookup",
    "normalize",
    "normalize_or_raise",
]
