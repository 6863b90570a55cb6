"""
LineDiff: line-level text comparison.

Typical use:

    from linediff import DiffOptions, compute_diff, render_report

    result = compute_diff(old_text, new_text, DiffOptions(ignore_case=True))
    print(result.stats)
    print(render_report(result))
"""

from linediff.core.models import (
    Added,
    DiffOptions,
    DiffResult,
    DiffStatistics,
    DiffUnit,
    DiffUnitType,
    Document,
    InvalidOptions,
    Modified,
    Removed,
    Unchanged,
)
from linediff.core.diff import (
    LOOKAHEAD_WINDOW,
    DiffHunk,
    TextDiffEngine,
    calculate_statistics,
    compute_diff,
    group_hunks,
    normalize_line,
    render_context_report,
    render_report,
)

__version__ = "1.0.0"

__all__ = [
    # Models
    'Added',
    'DiffOptions',
    'DiffResult',
    'DiffStatistics',
    'DiffUnit',
    'DiffUnitType',
    'Document',
    'InvalidOptions',
    'Modified',
    'Removed',
    'Unchanged',
    # Engine and reports
    'LOOKAHEAD_WINDOW',
    'DiffHunk',
    'TextDiffEngine',
    'calculate_statistics',
    'compute_diff',
    'group_hunks',
    'normalize_line',
    'render_context_report',
    'render_report',
]
