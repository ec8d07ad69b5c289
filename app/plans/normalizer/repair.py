"""Best-effort repair of JSON-ish model output.

Generative models regularly return plans that are almost JSON: wrapped in
markdown fences, with unquoted rep ranges (`"reps": 8-12`), unquoted words
(`"reps": Maximum`), trailing commas, or a missing closing bracket.

This module is the only place that patches text. Everything here is plain
regex substitution, applied globally and in a fixed order:

1. trim
2. strip code fences (anywhere, case-insensitive)
3. trim
4. quote unquoted reps values
5. drop trailing commas
6. complete brackets

Parsing gets exactly one fallback retry (trailing commas stripped again).
"""

import json
import re
from typing import Any

from loguru import logger

from app.plans.errors import ParseError

FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)

# "per leg" / "por pierna" / "min", "minutes", "minutos"
_QUALIFIER = r"(?:per\s+leg|por\s+pierna|min(?:ute|uto)?s?)"
_UNQUOTED_REPS_VALUE = (
    rf"\d+\s*-\s*\d+(?:\s*{_QUALIFIER})?"
    rf"|\d+\s*{_QUALIFIER}"
    r"|M[aá]ximo|Maximum"
)
UNQUOTED_REPS_RE = re.compile(
    rf'(?P<key>"(?:reps|repeticiones)"\s*:\s*)(?P<value>{_UNQUOTED_REPS_VALUE})(?=\s*[,}}\]])',
    re.IGNORECASE,
)

TRAILING_COMMA_RE = re.compile(r",\s*([\]}])")


def strip_fences(text: str) -> str:
    """Remove every ```json / ``` marker from the text."""
    return FENCE_RE.sub("", text)


def quote_unquoted_reps(text: str) -> str:
    """Wrap unquoted reps/repeticiones values in double quotes.

    `"reps": 8-12` -> `"reps": "8-12"`
    `"repeticiones": 10-12 por pierna` -> `"repeticiones": "10-12 por pierna"`
    `"reps": Maximum` -> `"reps": "Maximum"`
    """
    return UNQUOTED_REPS_RE.sub(lambda m: f'{m.group("key")}"{m.group("value")}"', text)


def strip_trailing_commas(text: str) -> str:
    """Remove any comma directly preceding a closing bracket or brace."""
    return TRAILING_COMMA_RE.sub(r"\1", text)


def complete_brackets(text: str) -> str:
    """Close or wrap the text so it reads as a JSON array or object.

    Text that does not open with `[` or `{` is wrapped in `[...]`. An array
    missing its final `]` (truncated output) gets one appended.
    """
    if not text.startswith(("[", "{")):
        return f"[{text}]"
    if text.startswith("[") and not text.endswith("]"):
        return f"{text}]"
    return text


def clean_model_text(text: str) -> str:
    """Apply the full cleanup sequence to raw model text."""
    cleaned = text.strip()
    cleaned = strip_fences(cleaned)
    cleaned = cleaned.strip()
    cleaned = quote_unquoted_reps(cleaned)
    cleaned = strip_trailing_commas(cleaned)
    return complete_brackets(cleaned)


def parse_model_text(text: str) -> Any:
    """Clean and parse raw model text.

    Args:
        text: Raw model text

    Returns:
        Parsed JSON value

    Raises:
        ParseError: If the text still fails to parse after the fallback retry
    """
    cleaned = clean_model_text(text)
    try:
        return json.loads(cleaned)
    except (ValueError, RecursionError) as first_error:
        logger.debug(
            "Plan text failed to parse, retrying after trailing comma repair",
            error=str(first_error),
        )
        try:
            return json.loads(strip_trailing_commas(cleaned))
        except (ValueError, RecursionError) as second_error:
            raise ParseError(
                [f"first attempt: {first_error}", f"retry: {second_error}"],
                raw_text=text,
            ) from second_error
