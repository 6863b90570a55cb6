"""
Statistics and text reports for diff results.

Rendering is pure formatting: the same result and options always
produce the same string.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from linediff.core.models import (
    DiffOptions,
    DiffResult,
    DiffStatistics,
    DiffUnit,
    DiffUnitType,
)


REPORT_TITLE = "# Text Diff Report"


def calculate_statistics(units: Iterable[DiffUnit]) -> DiffStatistics:
    """Count units by type."""
    counts = {unit_type: 0 for unit_type in DiffUnitType}
    for unit in units:
        counts[unit.kind] += 1

    return DiffStatistics(
        added=counts[DiffUnitType.ADDED],
        removed=counts[DiffUnitType.REMOVED],
        modified=counts[DiffUnitType.MODIFIED],
        unchanged=counts[DiffUnitType.UNCHANGED],
    )


# =============================================================================
# Hunks
# =============================================================================

@dataclass(frozen=True)
class DiffHunk:
    """
    A run of changed units plus surrounding unchanged context.

    Start values are 1-indexed; a side with no lines in the hunk reports
    the line just before it, as unified diffs do.
    """
    units: tuple[DiffUnit, ...]
    old_start: int
    old_count: int
    new_start: int
    new_count: int

    @property
    def header(self) -> str:
        """Unified diff style hunk header."""
        return (f"@@ -{self.old_start},{self.old_count} "
                f"+{self.new_start},{self.new_count} @@")

    @property
    def change_count(self) -> int:
        """Count of units that are not unchanged context."""
        return sum(1 for unit in self.units
                   if unit.kind is not DiffUnitType.UNCHANGED)


def group_hunks(result: DiffResult, context_lines: int) -> list[DiffHunk]:
    """
    Group changed units into hunks with up to `context_lines` unchanged
    units on each side.

    Changes separated by more than twice the context are split into
    separate hunks.
    """
    units = result.units
    changes = [index for index, unit in enumerate(units)
               if unit.kind is not DiffUnitType.UNCHANGED]
    if not changes:
        return []

    # Lines consumed on each side before each unit
    old_before: list[int] = []
    new_before: list[int] = []
    old_seen = new_seen = 0
    for unit in units:
        old_before.append(old_seen)
        new_before.append(new_seen)
        if unit.old_line_number is not None:
            old_seen += 1
        if unit.new_line_number is not None:
            new_seen += 1

    spans: list[tuple[int, int]] = []
    start = max(0, changes[0] - context_lines)
    previous = changes[0]
    for index in changes[1:]:
        if index - previous - 1 > 2 * context_lines:
            spans.append((start, min(len(units), previous + context_lines + 1)))
            start = max(0, index - context_lines)
        previous = index
    spans.append((start, min(len(units), previous + context_lines + 1)))

    return [
        _create_hunk(units[first:last], old_before[first], new_before[first])
        for first, last in spans
    ]


def _create_hunk(
    units: Sequence[DiffUnit],
    old_before: int,
    new_before: int
) -> DiffHunk:
    """Create a DiffHunk from a slice of units."""
    old_count = sum(1 for unit in units if unit.old_line_number is not None)
    new_count = sum(1 for unit in units if unit.new_line_number is not None)

    return DiffHunk(
        units=tuple(units),
        old_start=old_before + 1 if old_count else old_before,
        old_count=old_count,
        new_start=new_before + 1 if new_count else new_before,
        new_count=new_count,
    )


# =============================================================================
# Rendering
# =============================================================================

def _line_number_prefix(unit: DiffUnit, options: DiffOptions) -> str:
    if not options.show_line_numbers:
        return ""
    old = unit.old_line_number
    new = unit.new_line_number
    return f"{old if old is not None else '-'}:{new if new is not None else '-'} "


def format_unit(unit: DiffUnit, options: DiffOptions) -> list[str]:
    """Render one unit as one line, or two for a modified pair."""
    prefix = _line_number_prefix(unit, options)

    if unit.kind is DiffUnitType.ADDED:
        return [f"+ {prefix}{unit.content}"]
    elif unit.kind is DiffUnitType.REMOVED:
        return [f"- {prefix}{unit.content}"]
    elif unit.kind is DiffUnitType.MODIFIED:
        return [
            f"- {prefix}{unit.old_content}",
            f"+ {prefix}{unit.new_content}",
        ]
    return [f"  {prefix}{unit.content}"]


def _render_header(stats: DiffStatistics) -> list[str]:
    return [
        REPORT_TITLE,
        "",
        "## Statistics",
        f"- Added lines: {stats.added}",
        f"- Removed lines: {stats.removed}",
        f"- Modified lines: {stats.modified}",
        f"- Unchanged lines: {stats.unchanged}",
        "",
        "## Details",
        "",
    ]


def render_report(result: DiffResult, options: Optional[DiffOptions] = None) -> str:
    """
    Render the full report: statistics header, then every unit in order.

    Lines are joined with newlines and there is no trailing newline.
    """
    options = options or DiffOptions()
    lines = _render_header(result.stats)

    for unit in result.units:
        lines.extend(format_unit(unit, options))

    return "\n".join(lines)


def render_context_report(
    result: DiffResult,
    options: Optional[DiffOptions] = None
) -> str:
    """
    Render the statistics header followed only by the changed hunks,
    each with up to `options.context_lines` lines of unchanged context.
    """
    options = options or DiffOptions()
    lines = _render_header(result.stats)

    for hunk in group_hunks(result, options.context_lines):
        lines.append(hunk.header)
        for unit in hunk.units:
            lines.extend(format_unit(unit, options))

    return "\n".join(lines)
