"""Field rules for doubts and answers.

Lengths are measured after stripping surrounding whitespace, and the stripped
value is what gets stored.
"""
from typing import Optional

from doubtdesk.core.exceptions import ValidationFailed

TITLE_MIN, TITLE_MAX = 5, 100
DOUBT_CONTENT_MIN, DOUBT_CONTENT_MAX = 10, 1000
ANSWER_CONTENT_MIN, ANSWER_CONTENT_MAX = 10, 2000


def _bounded(value: Optional[str], field: str, label: str, low: int, high: int) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationFailed(field, "required", f"{label} is required.")
    if len(text) < low:
        raise ValidationFailed(field, "min_length", f"{label} must be at least {low} characters long.")
    if len(text) > high:
        raise ValidationFailed(field, "max_length", f"{label} must not exceed {high} characters.")
    return text


def validate_title(title: Optional[str]) -> str:
    return _bounded(title, "title", "Title", TITLE_MIN, TITLE_MAX)


def validate_doubt_content(content: Optional[str]) -> str:
    return _bounded(content, "content", "Content", DOUBT_CONTENT_MIN, DOUBT_CONTENT_MAX)


def validate_answer_content(content: Optional[str]) -> str:
    return _bounded(content, "content", "Answer", ANSWER_CONTENT_MIN, ANSWER_CONTENT_MAX)


def validate_doubt(title: Optional[str], content: Optional[str]) -> tuple[str, str]:
    """Validate a doubt's title and content, returning both trimmed."""
    return validate_title(title), validate_doubt_content(content)
