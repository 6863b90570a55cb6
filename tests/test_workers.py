"""Tests for the Qt diff workers."""

import pytest

from linediff import DiffOptions, DiffResult, Modified, Unchanged
from linediff.workers import (
    DiffCancelled,
    DiffState,
    FileDiffWorker,
    TextDiffWorker,
    run_in_background,
)
from linediff.workers.diff_worker import STEP_COUNT


def collect(worker):
    """Record every outcome signal of a worker."""
    events = []
    worker.signals.completed.connect(lambda result: events.append(("completed", result)))
    worker.signals.failed.connect(lambda error: events.append(("failed", error)))
    worker.signals.cancelled.connect(lambda: events.append(("cancelled",)))
    return events


class TestTextDiffWorker:

    def test_run_emits_result(self):
        worker = TextDiffWorker("a\nB", "a\nb", DiffOptions(ignore_case=True))
        events = collect(worker)
        worker.run()

        assert len(events) == 1
        kind, result = events[0]
        assert kind == "completed"
        assert isinstance(result, DiffResult)
        assert result.units == (Unchanged(1, 1, "a"), Unchanged(2, 2, "B"))
        assert worker.state is DiffState.COMPLETED
        assert worker.result is result

    def test_steps(self):
        worker = TextDiffWorker("x", "y")
        steps = []
        worker.signals.step.connect(lambda step, total, description: steps.append((step, total)))
        worker.run()
        assert steps == [(1, STEP_COUNT), (2, STEP_COUNT), (3, STEP_COUNT)]

    def test_worker_owns_engine_with_options(self):
        options = DiffOptions(ignore_whitespace=True)
        worker = TextDiffWorker("a", "a", options)
        assert worker.engine.options is options

    def test_cancel_before_run(self):
        worker = TextDiffWorker("x", "y")
        events = collect(worker)
        worker.cancel()
        worker.run()

        assert events == [("cancelled",)]
        assert worker.state is DiffState.CANCELLED
        assert worker.result is None


class TestFileDiffWorker:

    def test_compares_files(self, write_file):
        old = write_file("old.txt", "foo\nsame\n")
        new = write_file("new.txt", "bar\nsame\n")
        worker = FileDiffWorker(old, new)
        worker.run()

        assert worker.state is DiffState.COMPLETED
        assert worker.result.units[0] == Modified(1, 1, "foo", "bar")
        assert worker.result.stats.unchanged == 2
        assert worker.contents["old"].encoding == "utf-8"
        assert set(worker.contents) == {"old", "new"}

    def test_missing_file_fails(self, write_file, tmp_path):
        old = write_file("old.txt", "a")
        worker = FileDiffWorker(old, tmp_path / "missing.txt")
        events = collect(worker)
        worker.run()

        assert worker.state is DiffState.FAILED
        assert events[-1][0] == "failed"
        assert isinstance(worker.exception, OSError)
        assert "Failed to read new file" in str(worker.exception)

    def test_binary_file_fails(self, write_file, tmp_path):
        binary = tmp_path / "blob.bin"
        binary.write_bytes(b"\x00\x01\x02")
        worker = FileDiffWorker(binary, write_file("new.txt", "a"))
        worker.run()

        assert worker.state is DiffState.FAILED
        assert "binary" in str(worker.exception)
        assert "new" not in worker.contents


class TestRunInBackground:

    def test_returns_result(self):
        result = run_in_background(TextDiffWorker("a\nb", "a\nx\nb"))
        assert result.stats.added == 1
        assert result.stats.unchanged == 2

    def test_step_callback(self):
        steps = []
        run_in_background(
            TextDiffWorker("a", "b"),
            on_step=lambda step, total, description: steps.append(description)
        )
        assert steps == ["Reading old document", "Reading new document", "Computing differences"]

    def test_reraises_step_error(self, tmp_path):
        worker = FileDiffWorker(tmp_path / "a.txt", tmp_path / "b.txt")
        with pytest.raises(OSError, match="File not found"):
            run_in_background(worker)

    def test_cancelled_worker_raises(self):
        worker = TextDiffWorker("a", "b")
        worker.cancel()
        with pytest.raises(DiffCancelled):
            run_in_background(worker)

