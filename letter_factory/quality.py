"""Quality gate for generated demand letters.

Rules are checked in order and the first failure is reported:

1. ``too_short``: fewer than 500 characters.
2. ``too_long``: more than 15,000 characters.
3. ``missing_sections``: fewer than two of the four topical signals
   (facts, liability, damages, demand).
4. ``gibberish``: one character other than a line terminator repeated 11
   or more times in a row.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from core.constants import (
    MAX_LETTER_CHARS,
    MAX_REPEATED_CHARS,
    MIN_LETTER_CHARS,
    MIN_SECTION_SIGNALS,
)
from core.exceptions import ContentQualityError

# Each signal is satisfied by any one of its stems (case-insensitive)
SECTION_SIGNALS: dict[str, tuple[str, ...]] = {
    "facts": ("fact", "incident"),
    "liability": ("liabilit", "responsible"),
    "damages": ("damage", "injur"),
    "demand": ("demand", "settlement"),
}

# Line terminators never count as a repeated character
_REPEATED_CHARS = re.compile(r"([^\n\r\u2028\u2029])\1{%d,}" % MAX_REPEATED_CHARS)


@dataclass(slots=True)
class QualityReport:
    valid: bool
    rule: str | None = None
    error: str | None = None


def count_section_signals(content: str) -> int:
    lowered = content.lower()
    return sum(
        1 for stems in SECTION_SIGNALS.values() if any(stem in lowered for stem in stems)
    )


def check_letter_content(content: str) -> QualityReport:
    """Run the quality rules without raising."""
    if len(content) < MIN_LETTER_CHARS:
        return QualityReport(
            False, "too_short", f"Generated content too short (< {MIN_LETTER_CHARS} characters)"
        )

    if len(content) > MAX_LETTER_CHARS:
        return QualityReport(
            False, "too_long", f"Generated content too long (> {MAX_LETTER_CHARS:,} characters)"
        )

    if count_section_signals(content) < MIN_SECTION_SIGNALS:
        return QualityReport(False, "missing_sections", "Generated content missing key sections")

    if _REPEATED_CHARS.search(content):
        return QualityReport(False, "gibberish", "Generated content contains gibberish")

    return QualityReport(True)


def validate_letter_content(content: str) -> None:
    """Raise if the generated letter fails any quality rule.

    Raises:
        ContentQualityError: Naming the first rule that failed.
    """
    report = check_letter_content(content)
    if not report.valid:
        raise ContentQualityError(report.rule, report.error)
