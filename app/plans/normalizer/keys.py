"""Bilingual field lookup for model-produced plan records.

Models answer with either English or Spanish keys. Each canonical field has
an ordered tuple of candidate keys; English is always consulted first.
"""

from typing import Any

FIELD_KEYS: dict[str, tuple[str, ...]] = {
    "day": ("day", "dia"),
    "focus": ("focus", "enfoque"),
    "exercises": ("exercises", "ejercicios"),
    "name": ("name", "nombre"),
    "sets": ("sets", "series"),
    "reps": ("reps", "repeticiones"),
}

_MISSING = object()


def lookup(record: dict[str, Any], field: str, default: Any = None) -> Any:
    """Resolve a canonical field from a record using its candidate keys.

    A key holding `None` counts as absent, so the next candidate is tried.

    Args:
        record: Raw day or exercise mapping
        field: Canonical field name (a key of FIELD_KEYS)
        default: Value returned when no candidate key holds a value

    Returns:
        First non-null value found, else `default`

    Raises:
        KeyError: If `field` is not a known canonical field
    """
    for key in FIELD_KEYS[field]:
        value = record.get(key, _MISSING)
        if value is not _MISSING and value is not None:
            return value
    return default


def looks_like_day(record: dict[str, Any]) -> bool:
    """Check whether a mapping resembles a single day record."""
    return any(key in record for key in FIELD_KEYS["day"])
