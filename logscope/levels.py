"""Severity helpers — vocabulary coercion and the substring heuristic."""

from logscope.models import LEVELS


def coerce_level(value) -> str | None:
    """Upper-case *value* and keep it only if it is one of LEVELS."""
    if not value:
        return None
    level = str(value).upper()
    return level if level in LEVELS else None


def detect_level(text: str) -> str | None:
    """Guess a level from free text.

    Returns the highest-priority level name that appears anywhere in the
    upper-cased text, even inside another word ("INFORMATION" -> INFO,
    "TERRORS" -> ERROR). This is an approximation and false positives are
    expected.
    """
    upper = text.upper()
    for level in LEVELS:
        if level in upper:
            return level
    return None
