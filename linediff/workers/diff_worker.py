"""
Qt worker base for running a comparison off the calling thread.

A diff worker runs three steps: read the old document, read the new
document, align them. Each step is announced through ``signals.step``
and a cancel request is honoured before the next step starts. The
alignment itself is never interrupted.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum, auto
from typing import Callable, Optional

from PyQt6.QtCore import QCoreApplication, QObject, QThread, Qt, pyqtSignal, pyqtSlot

from linediff.core.diff.text_diff import TextDiffEngine
from linediff.core.models import DiffOptions, DiffResult, Document


STEP_COUNT = 3

# How often the waiting thread wakes up to notice Ctrl-C
POLL_INTERVAL_MS = 100

_application: Optional[QCoreApplication] = None


class DiffState(Enum):
    """Lifecycle of a diff worker."""
    PENDING = auto()
    RUNNING = auto()
    COMPLETED = auto()
    FAILED = auto()
    CANCELLED = auto()


class DiffSignals(QObject):
    """Signals emitted by a diff worker, from the worker's thread."""
    # (step, STEP_COUNT, description)
    step = pyqtSignal(int, int, str)

    # DiffResult
    completed = pyqtSignal(object)

    # The exception raised by a step
    failed = pyqtSignal(object)

    cancelled = pyqtSignal()


class DiffCancelled(Exception):
    """Raised when a comparison is cancelled between steps."""


class DiffWorker(QObject):
    """
    Base for workers that produce a DiffResult.

    The worker owns the engine and the step sequence. Subclasses only
    say where the two documents come from by implementing `read_old`
    and `read_new`.
    """

    def __init__(self, options: Optional[DiffOptions] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.options = options or DiffOptions()
        self.engine = TextDiffEngine(self.options)
        self.signals = DiffSignals()
        self.state = DiffState.PENDING
        self.result: Optional[DiffResult] = None
        self.exception: Optional[Exception] = None
        self._cancel_requested = threading.Event()

    def read_old(self) -> Document:
        raise NotImplementedError

    def read_new(self) -> Document:
        raise NotImplementedError

    @property
    def is_cancelled(self) -> bool:
        return self._cancel_requested.is_set()

    def cancel(self) -> None:
        """Ask the worker to stop before its next step. Safe from any thread."""
        self._cancel_requested.set()

    @pyqtSlot()
    def run(self) -> None:
        """Run all steps and emit exactly one of completed, failed or cancelled."""
        self.state = DiffState.RUNNING

        try:
            self._begin_step(1, "Reading old document")
            old_document = self.read_old()

            self._begin_step(2, "Reading new document")
            new_document = self.read_new()

            self._begin_step(3, "Computing differences")
            result = self.engine.compare_documents(old_document, new_document)
        except DiffCancelled as e:
            logging.info(f"{type(self).__name__} - {e}")
            self.state = DiffState.CANCELLED
            self.signals.cancelled.emit()
            return
        except Exception as e:
            logging.debug(f"{type(self).__name__} - Step failed: {e}")
            self.exception = e
            self.state = DiffState.FAILED
            self.signals.failed.emit(e)
            return

        self.result = result
        self.state = DiffState.COMPLETED
        self.signals.completed.emit(result)

    def _begin_step(self, step: int, description: str) -> None:
        if self.is_cancelled:
            raise DiffCancelled(f"Cancelled before step {step}/{STEP_COUNT}: {description}")
        self.signals.step.emit(step, STEP_COUNT, description)


class DiffThread(QThread):
    """Runs one diff worker in its own thread and stops when the worker does."""

    def __init__(self, worker: DiffWorker, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.worker = worker
        self.worker.moveToThread(self)
        self.started.connect(self.worker.run)

        # quit() is thread-safe; a direct connection works without
        # an event loop in the owning thread
        direct = Qt.ConnectionType.DirectConnection
        for outcome in (worker.signals.completed, worker.signals.failed, worker.signals.cancelled):
            outcome.connect(self.quit, type=direct)


def _ensure_application() -> QCoreApplication:
    global _application
    app = QCoreApplication.instance()
    if app is None:
        _application = app = QCoreApplication([])
    return app


def run_in_background(
    worker: DiffWorker,
    on_step: Optional[Callable[[int, int, str], None]] = None
) -> DiffResult:
    """
    Run a worker on a DiffThread and block until it is done.

    Args:
        worker: A worker that has not run yet
        on_step: Called with (step, total, description), from the worker thread

    Returns:
        The worker's DiffResult

    Raises:
        DiffCancelled: if the worker was cancelled before finishing
        Exception: whatever a step raised, re-raised in the caller's thread
    """
    _ensure_application()

    if on_step is not None:
        worker.signals.step.connect(on_step, type=Qt.ConnectionType.DirectConnection)

    thread = DiffThread(worker)
    thread.start()

    try:
        while not thread.wait(POLL_INTERVAL_MS):
            pass
    except KeyboardInterrupt:
        worker.cancel()
        thread.wait()
        raise

    if worker.exception is not None:
        raise worker.exception
    if worker.state is not DiffState.COMPLETED:
        raise DiffCancelled("Comparison was cancelled")

    return worker.result
