"""
Export Context

Responsibilities:
- Runs one export per user action as an async state machine
- Snapshots the live render tree and hands it to the document writer
- Reports start and outcome exactly once through the notifier

Owns: ExportJob, export options, PDF writer
Never: Re-resolves or re-renders the document being exported
"""

from folio.contexts.export.export_job import ExportJob, ExportResult, ExportState, snapshot_tree
from folio.contexts.export.options import (
    ExportOptions,
    artifact_filename,
    artifact_name,
    load_export_options,
)
from folio.contexts.export.pdf_writer import DocumentWriter, PdfDocumentWriter

__all__ = [
    "ExportJob",
    "ExportResult",
    "ExportState",
    "snapshot_tree",
    "ExportOptions",
    "load_export_options",
    "artifact_name",
    "artifact_filename",
    "DocumentWriter",
    "PdfDocumentWriter",
]
