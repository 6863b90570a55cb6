"""
Diff workers for in-memory texts and for files on disk.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject

from linediff.core.models import DiffOptions, Document
from linediff.services.file_io import FileContent, FileIOService
from linediff.workers.diff_worker import DiffWorker


class TextDiffWorker(DiffWorker):
    """Compares two texts that are already in memory."""

    def __init__(
        self,
        old_text: str,
        new_text: str,
        options: Optional[DiffOptions] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(options, parent)
        self.old_text = old_text
        self.new_text = new_text

    def read_old(self) -> Document:
        return Document.from_text(self.old_text)

    def read_new(self) -> Document:
        return Document.from_text(self.new_text)


class FileDiffWorker(DiffWorker):
    """
    Compares two text files.

    Files are read through FileIOService. A missing, oversized or binary
    file fails the worker with OSError. The decoded contents stay
    available in `contents`, keyed by "old" and "new".
    """

    def __init__(
        self,
        old_path: str | Path,
        new_path: str | Path,
        options: Optional[DiffOptions] = None,
        encoding: Optional[str] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(options, parent)
        self.old_path = Path(old_path)
        self.new_path = Path(new_path)
        self.encoding = encoding
        self.file_io = FileIOService()
        self.contents: dict[str, FileContent] = {}

    def read_old(self) -> Document:
        return self._read_document(self.old_path, "old")

    def read_new(self) -> Document:
        return self._read_document(self.new_path, "new")

    def _read_document(self, path: Path, side: str) -> Document:
        read_result = self.file_io.read_file(path, encoding=self.encoding)
        if not read_result.success:
            if read_result.is_binary:
                raise OSError(f"File appears to be binary and cannot be compared as text: {path}")
            raise OSError(f"Failed to read {side} file: {read_result.error}")

        content = read_result.content
        logging.info(
            f"FileDiffWorker - Read {path} ({content.encoding}, "
            f"{content.line_ending.name}, {content.size} bytes)"
        )
        self.contents[side] = content
        return content.document
