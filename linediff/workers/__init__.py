"""
Background workers for comparisons.

A DiffWorker reads two documents and aligns them on a QThread, reporting
each step through Qt signals. `run_in_background` drives one worker to
completion from a thread without an event loop, such as the CLI's.
"""

from linediff.workers.diff_worker import (
    DiffCancelled,
    DiffSignals,
    DiffState,
    DiffThread,
    DiffWorker,
    run_in_background,
)
from linediff.workers.compare_worker import (
    FileDiffWorker,
    TextDiffWorker,
)

__all__ = [
    'DiffCancelled',
    'DiffSignals',
    'DiffState',
    'DiffThread',
    'DiffWorker',
    'run_in_background',
    'FileDiffWorker',
    'TextDiffWorker',
]
