import pytest

from app.plans.normalizer.keys import FIELD_KEYS, looks_like_day, lookup


def test_every_field_checks_english_before_spanish():
    assert FIELD_KEYS == {
        "day": ("day", "dia"),
        "focus": ("focus", "enfoque"),
        "exercises": ("exercises", "ejercicios"),
        "name": ("name", "nombre"),
        "sets": ("sets", "series"),
        "reps": ("reps", "repeticiones"),
    }


def test_lookup_prefers_english():
    assert lookup({"series": 5, "sets": 3}, "sets") == 3


def test_lookup_falls_back_to_spanish():
    assert lookup({"nombre": "Sentadilla"}, "name") == "Sentadilla"


def test_lookup_default_when_missing():
    assert lookup({}, "focus", "General") == "General"
    assert lookup({}, "focus") is None


def test_lookup_keeps_falsy_non_null_values():
    assert lookup({"sets": 0, "series": 4}, "sets") == 0
    assert lookup({"exercises": [], "ejercicios": [{"nombre": "x"}]}, "exercises") == []


def test_lookup_unknown_field():
    with pytest.raises(KeyError):
        lookup({"day": "Monday"}, "weekday")


def test_looks_like_day():
    assert looks_like_day({"day": "Monday"})
    assert looks_like_day({"dia": "Lunes"})
    assert not looks_like_day({"overview": "..."})
