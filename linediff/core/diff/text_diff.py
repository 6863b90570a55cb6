"""
Text diff engine.

Aligns two documents line by line with a bounded-lookahead greedy walk:
- Matching lines are reported as unchanged
- A mismatch is resolved as an insertion if the old line reappears within
  the next few new lines, otherwise as a deletion if the new line reappears
  within the next few old lines
- Anything else is reported as a modified line pair

This is not a minimal edit script. It runs in linear time and can
over-report modified pairs when blocks move further than the lookahead
window.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from linediff.core.diff.normalizer import normalize_lines
from linediff.core.diff.report import calculate_statistics
from linediff.core.models import (
    Added,
    DiffOptions,
    DiffResult,
    DiffUnit,
    Document,
    Modified,
    Removed,
    Unchanged,
)


# Lines scanned past a mismatch when looking for a realignment point
LOOKAHEAD_WINDOW = 5


class TextDiffEngine:
    """
    Engine for comparing two documents.

    Holds only its options; every call to `compare` is independent,
    so one engine can be shared between threads.
    """

    def __init__(self, options: Optional[DiffOptions] = None):
        self.options = options or DiffOptions()

    def compare(
        self,
        old_lines: Sequence[str],
        new_lines: Sequence[str]
    ) -> DiffResult:
        """
        Compare two sequences of lines.

        Args:
            old_lines: Lines from the old/original document
            new_lines: Lines from the new/modified document

        Returns:
            DiffResult with the ordered units and their statistics
        """
        old = list(old_lines)
        new = list(new_lines)

        units = tuple(self._align(old, new))
        stats = calculate_statistics(units)

        logging.debug(
            f"TextDiffEngine - Compared {len(old)} old / {len(new)} new lines: {stats}"
        )

        return DiffResult(units=units, stats=stats)

    def compare_documents(self, old: Document, new: Document) -> DiffResult:
        """Compare two Document instances."""
        return self.compare(old.lines, new.lines)

    def _align(self, old: list[str], new: list[str]) -> list[DiffUnit]:
        """Walk both documents and emit units in order."""
        old_keys = normalize_lines(old, self.options)
        new_keys = normalize_lines(new, self.options)

        units: list[DiffUnit] = []
        i = 0
        j = 0

        while i < len(old) or j < len(new):
            if i >= len(old):
                # Remaining new lines are insertions
                units.append(Added(new_line_number=j + 1, content=new[j]))
                j += 1
            elif j >= len(new):
                # Remaining old lines are deletions
                units.append(Removed(old_line_number=i + 1, content=old[i]))
                i += 1
            elif old_keys[i] == new_keys[j]:
                units.append(Unchanged(
                    old_line_number=i + 1,
                    new_line_number=j + 1,
                    content=old[i]
                ))
                i += 1
                j += 1
            else:
                # Insertion is tried before deletion
                k = self._find_ahead(new_keys, j, old_keys[i])
                if k:
                    for offset in range(k):
                        units.append(Added(
                            new_line_number=j + offset + 1,
                            content=new[j + offset]
                        ))
                    j += k
                    continue

                k = self._find_ahead(old_keys, i, new_keys[j])
                if k:
                    for offset in range(k):
                        units.append(Removed(
                            old_line_number=i + offset + 1,
                            content=old[i + offset]
                        ))
                    i += k
                    continue

                units.append(Modified(
                    old_line_number=i + 1,
                    new_line_number=j + 1,
                    old_content=old[i],
                    new_content=new[j]
                ))
                i += 1
                j += 1

        return units

    @staticmethod
    def _find_ahead(keys: list[str], start: int, target: str) -> int:
        """
        Find the first offset k in 1..LOOKAHEAD_WINDOW with
        keys[start + k] == target.

        Returns 0 when there is no match inside the window.
        """
        end = min(start + LOOKAHEAD_WINDOW, len(keys) - 1)
        for index in range(start + 1, end + 1):
            if keys[index] == target:
                return index - start
        return 0


def compute_diff(
    old_text: str,
    new_text: str,
    options: Optional[DiffOptions] = None
) -> DiffResult:
    """
    Compare two texts line by line.

    Both texts are split on line breaks before alignment. Any pair of
    strings is valid input; this function does not raise.
    """
    engine = TextDiffEngine(options)
    return engine.compare_documents(
        Document.from_text(old_text),
        Document.from_text(new_text)
    )
