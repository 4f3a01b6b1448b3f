"""
Export Job

One user-initiated export: snapshots the live render tree and hands it to the
document writer, reporting progress and outcome through the notifier.

States:
    Idle --start--> Generating --success--> Succeeded
                    Generating --failure--> Failed
    Succeeded | Failed --dismiss--> Idle

Only one export per job is ever in flight: start() outside Idle is a no-op. Every
accepted start() reaches Succeeded or Failed, including on writer timeout.
"""

import asyncio
import copy
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from folio.contexts.export.logger import (
    _log_debug,
    _log_exception,
    _log_warning,
    log_export_result,
    log_export_start,
)
from folio.contexts.export.options import (
    ExportOptions,
    artifact_filename,
    artifact_name,
    load_export_options,
)
from folio.contexts.export.pdf_writer import DocumentWriter, PdfDocumentWriter, image_options_summary
from folio.contexts.rendering.engine import RenderNode
from folio.exceptions import ExportFailure
from folio.utils.event_logging import log_pipeline_event
from folio.utils.notifications import LoggingNotifier, Notifier

START_MESSAGE = "Generating PDF, please wait..."
SUCCESS_MESSAGE = "Portfolio downloaded successfully!"
FAILURE_MESSAGE = "Failed to generate PDF. Please try again."


class ExportState(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


TERMINAL_STATES = (ExportState.SUCCEEDED, ExportState.FAILED)


@dataclass(frozen=True)
class ExportResult:
    """
    Outcome of one export.

    Attributes:
        success: Whether the artifact was written
        artifact_name: Deterministic name derived from the owner identifier
        artifact_path: Written file (None if failed)
        error: Human-readable failure cause (None if succeeded)
        elapsed_s: Seconds from start to terminal state
    """

    success: bool
    artifact_name: str
    artifact_path: Optional[Path] = None
    error: Optional[str] = None
    elapsed_s: float = 0.0


def snapshot_tree(tree: RenderNode) -> RenderNode:
    """Frozen copy of the live tree as it is at this moment."""
    return copy.deepcopy(tree)


class ExportJob:
    """
    Export state machine for one rendered view.

    Args:
        identifier: Public identifier of the document owner (names the artifact)
        writer: Document-generation collaborator (default: PdfDocumentWriter)
        options: Passthrough export options (default: load_export_options())
        notifier: User notification channel (default: LoggingNotifier)
        record_events: Append state changes to the pipeline event log
        events_file: Override for the pipeline event log path

    Example:
        job = ExportJob("ada")
        await job.start(view.tree)
        if job.state is ExportState.SUCCEEDED:
            print(job.result.artifact_path)
        job.dismiss()
    """

    def __init__(
        self,
        identifier: Optional[str],
        writer: DocumentWriter = None,
        options: ExportOptions = None,
        notifier: Notifier = None,
        record_events: bool = True,
        events_file: Optional[Path] = None,
    ):
        self.identifier = identifier
        self.writer = writer or PdfDocumentWriter()
        self.options = options or load_export_options()
        self.notifier = notifier or LoggingNotifier(events_file=events_file, record_events=record_events)
        self.record_events = record_events
        self.events_file = events_file

        self.state = ExportState.IDLE
        self.result: Optional[ExportResult] = None
        self.snapshot: Optional[RenderNode] = None

    @property
    def artifact_name(self) -> str:
        return artifact_name(self.identifier)

    @property
    def in_flight(self) -> bool:
        return self.state is ExportState.GENERATING

    def _transition(self, new_state: ExportState, **extra_fields) -> None:
        old_state = self.state
        self.state = new_state
        _log_debug(f"{self.artifact_name}: {old_state.value} -> {new_state.value}")
        if not self.record_events:
            return
        try:
            log_pipeline_event(
                event_type="export_state_change",
                identifier=self.identifier,
                source="export",
                events_file=self.events_file,
                old_state=old_state.value,
                new_state=new_state.value,
                **extra_fields,
            )
        except OSError as e:
            # The state has already changed; a lost event must not undo it
            _log_warning(f"Could not record {new_state.value} event: {e}")

    def _notify(self, level: str, message: str) -> None:
        try:
            getattr(self.notifier, level)(message, self.identifier)
        except Exception as e:
            _log_exception(e, f"Notifier failed to deliver {level} message: {message}")

    def _finish(self, result: ExportResult) -> None:
        self.result = result
        if result.success:
            self._transition(ExportState.SUCCEEDED, artifact_path=str(result.artifact_path))
            log_export_result(self.artifact_name, result)
            self._notify("success", SUCCESS_MESSAGE)
        else:
            self._transition(ExportState.FAILED, error=result.error)
            log_export_result(self.artifact_name, result)
            self._notify("error", f"{FAILURE_MESSAGE} ({result.error})")

    async def start(self, tree: RenderNode) -> bool:
        """
        Export the given live tree.

        Every accepted call ends in Succeeded or Failed, whatever the writer, the
        notifier or the event log do.

        Args:
            tree: The tree currently shown to the user; it is snapshotted, not re-rendered

        Returns:
            True if this call ran an export, False if it was ignored (not Idle)
        """
        if self.state is not ExportState.IDLE:
            _log_debug(f"{self.artifact_name}: start ignored while {self.state.value}")
            return False

        # Claim the job before the first suspension point
        filename = artifact_filename(self.identifier)
        self._transition(ExportState.GENERATING, **image_options_summary(self.options))

        start_time = time.time()
        path = None
        written = False
        error = None
        try:
            self.snapshot = snapshot_tree(tree)
            self._notify("info", START_MESSAGE)
            log_export_start(self.artifact_name, filename, self.options)

            path = await asyncio.wait_for(
                asyncio.to_thread(self.writer.write, self.snapshot, filename, self.options),
                timeout=self.options.timeout_s,
            )
            written = True
        except asyncio.TimeoutError:
            error = f"Export timed out after {self.options.timeout_s:g}s"
        except asyncio.CancelledError:
            error = "Export cancelled"
            raise
        except ExportFailure as e:
            error = e.message
        except Exception as e:
            _log_exception(e, f"Export raised for {self.artifact_name}")
            error = str(e) or e.__class__.__name__
        finally:
            if not written and error is None:
                error = "Export interrupted"
            self._finish(
                ExportResult(
                    success=written,
                    artifact_name=self.artifact_name,
                    artifact_path=Path(path) if written and path is not None else None,
                    error=error,
                    elapsed_s=time.time() - start_time,
                )
            )
        return True

    def dismiss(self) -> bool:
        """
        Return to Idle after the user has seen the outcome.

        Returns:
            True if the job was in a terminal state and is now Idle, False otherwise
        """
        if self.state not in TERMINAL_STATES:
            _log_debug(f"{self.artifact_name}: dismiss ignored while {self.state.value}")
            return False
        self._transition(ExportState.IDLE)
        self.result = None
        self.snapshot = None
        return True
