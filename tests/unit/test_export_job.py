"""Unit tests for the export state machine."""

import asyncio
import threading
import time

import pytest

from folio.contexts.export import ExportJob, ExportOptions, ExportState
from folio.contexts.export.export_job import FAILURE_MESSAGE, START_MESSAGE, SUCCESS_MESSAGE
from folio.contexts.rendering import render_view
from folio.exceptions import ExportFailure
from folio.utils.event_logging import get_recent_events
from folio.utils.notifications import RecordingNotifier


class FakeWriter:
    """Writer that records its calls and writes nothing."""

    def __init__(self, tmp_path):
        self.tmp_path = tmp_path
        self.calls = []

    def write(self, snapshot, filename, options):
        self.calls.append((snapshot, filename, options))
        return self.tmp_path / filename


class FailingWriter:
    def write(self, snapshot, filename, options):
        raise ExportFailure("Image could not be rasterized")


class CrashingWriter:
    def write(self, snapshot, filename, options):
        raise RuntimeError("renderer crashed")


class SlowWriter:
    def __init__(self, seconds):
        self.seconds = seconds

    def write(self, snapshot, filename, options):
        time.sleep(self.seconds)
        return filename


class GatedWriter:
    """Writer that blocks until released, to hold an export in flight."""

    def __init__(self, tmp_path):
        self.tmp_path = tmp_path
        self.release = threading.Event()
        self.calls = 0

    def write(self, snapshot, filename, options):
        self.calls += 1
        self.release.wait(timeout=5)
        return self.tmp_path / filename


class BrokenNotifier(RecordingNotifier):
    """Notifier whose delivery of the given levels raises."""

    def __init__(self, *broken_levels):
        super().__init__()
        self.broken_levels = broken_levels

    def info(self, message, identifier=None):
        self._deliver("info", message, identifier)

    def success(self, message, identifier=None):
        self._deliver("success", message, identifier)

    def error(self, message, identifier=None):
        self._deliver("error", message, identifier)

    def _deliver(self, level, message, identifier):
        if level in self.broken_levels:
            raise OSError(f"{level} channel closed")
        getattr(super(), level)(message, identifier)


@pytest.fixture
def tree(full_document, raw_projects):
    return render_view(full_document, raw_projects, identifier="ada").tree


def _job(writer, notifier, **kwargs):
    return ExportJob("ada", writer=writer, options=ExportOptions(**kwargs), notifier=notifier, record_events=False)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_successful_export(tree, notifier, tmp_path):
    """Test Idle -> Generating -> Succeeded with start and success notifications."""
    writer = FakeWriter(tmp_path)
    job = _job(writer, notifier)

    assert job.state is ExportState.IDLE
    assert await job.start(tree) is True

    assert job.state is ExportState.SUCCEEDED
    assert job.result.success
    assert job.result.artifact_name == "ada-portfolio"
    assert job.result.artifact_path == tmp_path / "ada-portfolio.pdf"
    assert writer.calls[0][1] == "ada-portfolio.pdf"
    assert [n.message for n in notifier.notifications] == [START_MESSAGE, SUCCESS_MESSAGE]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_writer_receives_snapshot_of_live_tree(tree, notifier, tmp_path):
    """Test that the writer gets a copy equal to the displayed tree."""
    writer = FakeWriter(tmp_path)
    job = _job(writer, notifier)

    await job.start(tree)

    snapshot = writer.calls[0][0]
    assert snapshot == tree
    assert snapshot is not tree


@pytest.mark.unit
@pytest.mark.asyncio
async def test_concurrent_starts_run_one_export(tree, notifier, tmp_path):
    """Test that a second start while one is in flight is ignored."""
    writer = FakeWriter(tmp_path)
    job = _job(writer, notifier)

    results = await asyncio.gather(job.start(tree), job.start(tree), job.start(tree))

    assert results == [True, False, False]
    assert len(writer.calls) == 1
    assert notifier.levels() == ["info", "success"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_start_ignored_while_generating(tree, notifier, tmp_path):
    """Test the in-flight guard while the writer is still running."""
    writer = GatedWriter(tmp_path)
    job = _job(writer, notifier)

    first = asyncio.create_task(job.start(tree))
    await asyncio.sleep(0)
    assert job.in_flight

    assert await job.start(tree) is False

    writer.release.set()
    assert await first is True
    assert writer.calls == 1
    assert job.state is ExportState.SUCCEEDED


@pytest.mark.unit
@pytest.mark.asyncio
async def test_start_ignored_in_terminal_state_until_dismissed(tree, notifier, tmp_path):
    """Test that a finished job must be dismissed before exporting again."""
    writer = FakeWriter(tmp_path)
    job = _job(writer, notifier)

    await job.start(tree)
    assert await job.start(tree) is False

    assert job.dismiss() is True
    assert job.state is ExportState.IDLE
    assert job.result is None

    assert await job.start(tree) is True
    assert len(writer.calls) == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_writer_failure(tree, notifier):
    """Test Generating -> Failed with exactly one error notification."""
    job = _job(FailingWriter(), notifier)

    assert await job.start(tree) is True

    assert job.state is ExportState.FAILED
    assert job.result.success is False
    assert job.result.error == "Image could not be rasterized"
    assert notifier.levels() == ["info", "error"]
    assert notifier.notifications[-1].message.startswith(FAILURE_MESSAGE)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_unexpected_writer_error_fails_job(tree, notifier):
    """Test that any writer exception ends in Failed, never stuck in Generating."""
    job = _job(CrashingWriter(), notifier)

    await job.start(tree)

    assert job.state is ExportState.FAILED
    assert job.result.error == "renderer crashed"
    assert notifier.levels() == ["info", "error"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_writer_timeout(tree, notifier):
    """Test that a writer that never finishes is reported as failed."""
    job = _job(SlowWriter(0.5), notifier, timeout_s=0.05)

    await job.start(tree)

    assert job.state is ExportState.FAILED
    assert "timed out" in job.result.error
    assert notifier.levels() == ["info", "error"]


@pytest.mark.unit
def test_dismiss_from_idle_is_noop(notifier, tmp_path):
    """Test that dismiss outside a terminal state does nothing."""
    job = _job(FakeWriter(tmp_path), notifier)

    assert job.dismiss() is False
    assert job.state is ExportState.IDLE


@pytest.mark.unit
@pytest.mark.asyncio
async def test_state_changes_recorded_as_events(tree, notifier, tmp_path):
    """Test that transitions are appended to the pipeline event log."""
    events_file = tmp_path / "events.log"
    job = ExportJob(
        "ada",
        writer=FakeWriter(tmp_path),
        options=ExportOptions(),
        notifier=notifier,
        events_file=events_file,
    )

    await job.start(tree)
    job.dismiss()

    events = get_recent_events(n=10, event_type="export_state_change", events_file=events_file)
    assert [(e["old_state"], e["new_state"]) for e in events] == [
        ("idle", "generating"),
        ("generating", "succeeded"),
        ("succeeded", "idle"),
    ]
    assert events[0]["image_quality"] == 0.98


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failing_start_notification_still_exports(tree, tmp_path):
    """Test that a notifier raising on the start message neither aborts nor wedges the job."""
    notifier = BrokenNotifier("info")
    writer = FakeWriter(tmp_path)
    job = _job(writer, notifier)

    assert await job.start(tree) is True

    assert job.state is ExportState.SUCCEEDED
    assert len(writer.calls) == 1
    assert notifier.levels() == ["success"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failing_outcome_notification_reaches_terminal_state(tree, tmp_path):
    """Test that a notifier raising on every message still leaves a dismissable terminal state."""
    notifier = BrokenNotifier("info", "success", "error")
    writer = FakeWriter(tmp_path)
    job = _job(writer, notifier)

    await job.start(tree)
    assert job.state is ExportState.SUCCEEDED
    assert job.dismiss() is True

    assert await job.start(tree) is True
    assert job.state is ExportState.SUCCEEDED
    assert len(writer.calls) == 2
    assert notifier.notifications == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_unwritable_event_log_does_not_wedge_job(tree, notifier, tmp_path):
    """Test that a broken event log path leaves the job able to finish, dismiss and restart."""
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("plain file")
    job = ExportJob(
        "ada",
        writer=FakeWriter(tmp_path),
        options=ExportOptions(),
        notifier=notifier,
        events_file=blocker / "events.log",
    )

    await job.start(tree)
    assert job.state is ExportState.SUCCEEDED
    assert job.dismiss() is True
    assert job.state is ExportState.IDLE

    assert await job.start(tree) is True
    assert notifier.levels() == ["info", "success", "info", "success"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_snapshot_failure_fails_job(notifier, tmp_path, monkeypatch):
    """Test that a tree that cannot be snapshotted ends in Failed without calling the writer."""

    def refuse_copy(tree):
        raise TypeError("cannot pickle '_thread.lock' object")

    monkeypatch.setattr("folio.contexts.export.export_job.snapshot_tree", refuse_copy)
    writer = FakeWriter(tmp_path)
    job = _job(writer, notifier)

    await job.start(render_view({}).tree)

    assert job.state is ExportState.FAILED
    assert "cannot pickle" in job.result.error
    assert writer.calls == []
    assert notifier.levels() == ["error"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_cancelled_export_ends_failed(tree, notifier, tmp_path):
    """Test that cancelling the awaiting task still settles the job into Failed."""
    writer = GatedWriter(tmp_path)
    job = _job(writer, notifier)

    task = asyncio.create_task(job.start(tree))
    while writer.calls == 0:
        await asyncio.sleep(0.01)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    writer.release.set()

    assert job.state is ExportState.FAILED
    assert job.result.error == "Export cancelled"
    assert job.dismiss() is True
