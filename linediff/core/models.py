"""
Core data models for the line diff engine.

This module defines all data structures shared by the engine and its callers:
- Input documents and comparison options
- Diff units (one classified line of the alignment)
- Statistics and the complete diff result

All models are designed to be:
- UI-agnostic (can be used with any frontend)
- Immutable (frozen dataclasses, tuples instead of lists)
- Type-hinted for IDE support
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from enum import Enum, auto
from typing import Any, ClassVar, Iterator, Mapping, Optional, Sequence, Union


# =============================================================================
# Exceptions
# =============================================================================

class InvalidOptions(ValueError):
    """Raised when diff options fail validation."""
    pass


# =============================================================================
# Enumerations
# =============================================================================

class DiffUnitType(Enum):
    """Classification of one unit in a diff result."""
    ADDED = auto()      # Line exists only in the new document
    REMOVED = auto()    # Line exists only in the old document
    UNCHANGED = auto()  # Line matches on both sides
    MODIFIED = auto()   # Line pair changed between documents


# =============================================================================
# Input Models
# =============================================================================

_LINE_BREAK = re.compile(r'\r\n|\r|\n')


@dataclass(frozen=True)
class Document:
    """
    An ordered, immutable sequence of raw lines.

    Lines never include their line break characters.
    """
    lines: tuple[str, ...] = ()

    @classmethod
    def from_text(cls, text: str) -> 'Document':
        """
        Split text on line breaks.

        Empty text yields an empty document. A trailing line break
        yields a trailing empty line.
        """
        if not text:
            return cls()
        return cls(tuple(_LINE_BREAK.split(text)))

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> 'Document':
        return cls(tuple(lines))

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    def __getitem__(self, index: int) -> str:
        return self.lines[index]


@dataclass(frozen=True)
class DiffOptions:
    """
    Options for a single comparison.

    Validated on construction; bad values raise InvalidOptions
    instead of being clamped.
    """
    ignore_whitespace: bool = False
    ignore_case: bool = False
    show_line_numbers: bool = True
    context_lines: int = 3

    def __post_init__(self) -> None:
        for name in ('ignore_whitespace', 'ignore_case', 'show_line_numbers'):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise InvalidOptions(
                    f"{name} must be a bool, got {type(value).__name__}: {value!r}"
                )

        # bool is an int subclass, reject it explicitly
        if isinstance(self.context_lines, bool) or not isinstance(self.context_lines, int):
            raise InvalidOptions(
                f"context_lines must be an int, got "
                f"{type(self.context_lines).__name__}: {self.context_lines!r}"
            )
        if self.context_lines < 0:
            raise InvalidOptions(
                f"context_lines must be non-negative, got {self.context_lines}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'DiffOptions':
        """Build options from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidOptions(f"Unknown diff option(s): {', '.join(unknown)}")
        return cls(**dict(data))

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


# =============================================================================
# Diff Units
# =============================================================================

@dataclass(frozen=True)
class Added:
    """A line present only in the new document."""
    kind: ClassVar[DiffUnitType] = DiffUnitType.ADDED

    new_line_number: int
    content: str

    @property
    def old_line_number(self) -> Optional[int]:
        return None


@dataclass(frozen=True)
class Removed:
    """A line present only in the old document."""
    kind: ClassVar[DiffUnitType] = DiffUnitType.REMOVED

    old_line_number: int
    content: str

    @property
    def new_line_number(self) -> Optional[int]:
        return None


@dataclass(frozen=True)
class Unchanged:
    """
    A line that matches on both sides.

    Content is taken from the old document, so it may differ from the
    new line in case or surrounding whitespace when those are ignored.
    """
    kind: ClassVar[DiffUnitType] = DiffUnitType.UNCHANGED

    old_line_number: int
    new_line_number: int
    content: str


@dataclass(frozen=True)
class Modified:
    """An old line replaced by a new line with no nearby realignment point."""
    kind: ClassVar[DiffUnitType] = DiffUnitType.MODIFIED

    old_line_number: int
    new_line_number: int
    old_content: str
    new_content: str


DiffUnit = Union[Added, Removed, Unchanged, Modified]


# =============================================================================
# Results
# =============================================================================

@dataclass(frozen=True)
class DiffStatistics:
    """Counts of each unit type in a diff result."""
    added: int = 0
    removed: int = 0
    modified: int = 0
    unchanged: int = 0

    @property
    def total(self) -> int:
        """Total number of units."""
        return self.added + self.removed + self.modified + self.unchanged

    @property
    def total_changes(self) -> int:
        """Number of units that are not unchanged."""
        return self.added + self.removed + self.modified

    @property
    def similarity_ratio(self) -> float:
        """
        Share of unchanged units (0.0 to 1.0).

        1.0 means identical, including two empty documents.
        """
        if self.total == 0:
            return 1.0
        return self.unchanged / self.total

    def to_dict(self) -> dict[str, int]:
        return {
            'added': self.added,
            'removed': self.removed,
            'modified': self.modified,
            'unchanged': self.unchanged,
            'total': self.total,
        }

    def __str__(self) -> str:
        return (f"+{self.added} -{self.removed} "
                f"~{self.modified} ={self.unchanged}")


@dataclass(frozen=True)
class DiffResult:
    """
    Complete result of one comparison.

    Treat as an immutable value; the engine builds a fresh one per call.
    """
    units: tuple[DiffUnit, ...]
    stats: DiffStatistics

    @property
    def is_identical(self) -> bool:
        """True when every unit is unchanged (or there are none)."""
        return self.stats.total_changes == 0

    @property
    def has_differences(self) -> bool:
        return not self.is_identical

    def iter_changes(self) -> Iterator[DiffUnit]:
        """Iterate over the units that are not unchanged."""
        for unit in self.units:
            if unit.kind is not DiffUnitType.UNCHANGED:
                yield unit

    def __len__(self) -> int:
        return len(self.units)
