"""Plan normalization error types.

Error codes:
- UNRECOGNIZED_SHAPE: input is neither text, a day list, a `raw` wrapper nor a single day
- UNPARSEABLE_TEXT: cleaned text is still not valid JSON after the fallback retry
- UNEXPECTED_ROOT: parsed JSON is a scalar instead of an array or object

These errors never escape `normalize()`. They exist so the pipeline stages
can report a precise cause, and so `normalize_or_raise()` can expose it.
"""


class NormalizationError(ValueError):
    """Raised when a model response cannot be turned into a plan.

    Attributes:
        code: Error code (e.g., "UNRECOGNIZED_SHAPE", "UNPARSEABLE_TEXT")
        details: List of error detail strings
    """

    def __init__(self, code: str, details: list[str]):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")


class ShapeError(NormalizationError):
    """Input (or parsed root) matches none of the recognized shapes."""


class ParseError(NormalizationError):
    """Cleaned text could not be parsed, even after the fallback repair.

    Attributes:
        raw_text: The original text, kept for operator diagnosis
    """

    def __init__(self, details: list[str], raw_text: str):
        self.raw_text = raw_text
        super().__init__("UNPARSEABLE_TEXT", details)
