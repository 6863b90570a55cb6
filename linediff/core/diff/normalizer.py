"""
Line normalization for comparison.

Normalized keys are only used for equality tests; diff units always
keep the original line.
"""

from __future__ import annotations

from typing import Sequence

from linediff.core.models import DiffOptions


def normalize_line(line: str, options: DiffOptions) -> str:
    """Normalize a line according to options."""
    result = line

    # Only leading and trailing whitespace, internal runs are kept
    if options.ignore_whitespace:
        result = result.strip()

    if options.ignore_case:
        result = result.lower()

    return result


def normalize_lines(lines: Sequence[str], options: DiffOptions) -> list[str]:
    """Normalize every line of a document."""
    if not options.ignore_whitespace and not options.ignore_case:
        return list(lines)
    return [normalize_line(line, options) for line in lines]
