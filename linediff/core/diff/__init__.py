"""
Diff module for line comparison operations.

Provides:
- Line normalization (whitespace and case handling)
- The bounded-lookahead text diff engine
- Statistics, hunk grouping and text reports
"""

from linediff.core.diff.normalizer import (
    normalize_line,
    normalize_lines,
)
from linediff.core.diff.report import (
    DiffHunk,
    calculate_statistics,
    format_unit,
    group_hunks,
    render_context_report,
    render_report,
)
from linediff.core.diff.text_diff import (
    LOOKAHEAD_WINDOW,
    TextDiffEngine,
    compute_diff,
)

__all__ = [
    # Normalizer
    'normalize_line',
    'normalize_lines',
    # Engine
    'LOOKAHEAD_WINDOW',
    'TextDiffEngine',
    'compute_diff',
    # Report
    'DiffHunk',
    'calculate_statistics',
    'format_unit',
    'group_hunks',
    'render_context_report',
    'render_report',
]
