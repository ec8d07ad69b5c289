"""Tests for model-output text repair.

Tests cover:
- Fence stripping anywhere in the text
- Reps quote repair (ranges, qualifiers, keywords) and what it leaves alone
- Trailing comma removal
- Bracket completion
- The single fallback parse retry
"""

import pytest

from app.plans.errors import ParseError
from app.plans.normalizer.repair import (
    clean_model_text,
    complete_brackets,
    parse_model_text,
    quote_unquoted_reps,
    strip_fences,
    strip_trailing_commas,
)


def test_strip_fences_removes_every_marker():
    text = '```json\n[1]\n```\nand ```Json\n[2]\n```'

    assert "```" not in strip_fences(text)
    assert "json" not in strip_fences(text).lower()


def test_quote_range():
    assert quote_unquoted_reps('{"reps": 8-12}') == '{"reps": "8-12"}'


def test_quote_range_with_spaces():
    assert quote_unquoted_reps('{"reps":10 - 12,"x":1}') == '{"reps":"10 - 12","x":1}'


def test_quote_spanish_key_with_qualifier():
    assert quote_unquoted_reps('{"repeticiones": 12-15 por pierna}') == '{"repeticiones": "12-15 por pierna"}'


def test_quote_number_with_minutes():
    assert quote_unquoted_reps('{"reps": 20 minutes}') == '{"reps": "20 minutes"}'


@pytest.mark.parametrize("word", ["Maximum", "Máximo", "maximo"])
def test_quote_keywords(word: str):
    assert quote_unquoted_reps(f'{{"reps": {word}]') == f'{{"reps": "{word}"]'


@pytest.mark.parametrize(
    "text",
    [
        '{"reps": "8-12"}',
        '{"reps": 12}',
        '{"sets": 3-4}',
        '{"notes": 8-12}',
    ],
)
def test_quote_leaves_other_values_alone(text: str):
    assert quote_unquoted_reps(text) == text


def test_quote_repairs_every_occurrence():
    text = '[{"reps": 8-12}, {"reps": 6-8}, {"repeticiones": Máximo}]'

    assert quote_unquoted_reps(text) == '[{"reps": "8-12"}, {"reps": "6-8"}, {"repeticiones": "Máximo"}]'


def test_strip_trailing_commas():
    assert strip_trailing_commas('[{"a": 1,}, {"b": [1, 2,\n]},\n]') == '[{"a": 1}, {"b": [1, 2]}]'


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ('{"day": "Day 1"}', '{"day": "Day 1"}'),
        ('[{"day": "Day 1"}]', '[{"day": "Day 1"}]'),
        ('[{"day": "Day 1"}', '[{"day": "Day 1"}]'),
        ('"day": "Day 1"', '["day": "Day 1"]'),
        ("", "[]"),
    ],
)
def test_complete_brackets(text: str, expected: str):
    assert complete_brackets(text) == expected


def test_clean_model_text_full_sequence():
    raw = '  \n```json\n[{"day": "Day 1", "exercises": [{"reps": 8-12,},],}\n```  '

    assert clean_model_text(raw) == '[{"day": "Day 1", "exercises": [{"reps": "8-12"}]}]'


def test_parse_model_text_returns_parsed_value():
    assert parse_model_text('```json\n{"day": "Day 1"}\n```') == {"day": "Day 1"}


def test_parse_model_text_raises_after_single_retry():
    with pytest.raises(ParseError) as exc_info:
        parse_model_text("[{'day': 'single quotes are not JSON'}]")

    assert len(exc_info.value.details) == 2
    assert exc_info.value.raw_text == "[{'day': 'single quotes are not JSON'}]"
