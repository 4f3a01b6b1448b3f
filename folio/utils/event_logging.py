"""
Pipeline event logging utilities for FOLIO.

Appends fetch outcomes, export transitions and user notifications to a JSON Lines
event log, one JSON object per line. This is the cross-context record of what
happened to which document; detailed within-context logging lives in
folio.utils.logger and the per-context logger modules.

Usage:
    from folio.utils.event_logging import log_pipeline_event

    log_pipeline_event(
        event_type="export_state_change",
        identifier="ada",
        source="export",
        old_state="idle",
        new_state="generating",
    )
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

from folio.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
PIPELINE_EVENTS_FILE = Path(
    os.getenv("PIPELINE_EVENTS_FILE", str(LOGS_PATH / "portfolio_events.log"))
)


def log_pipeline_event(
    event_type: str,
    identifier: Optional[str],
    source: str,
    events_file: Optional[Path] = None,
    **extra_fields,
) -> Dict:
    """
    Log an event to the pipeline event log.

    Args:
        event_type: Type of event (e.g., "fetch_outcome", "export_state_change", "notification")
        identifier: Public identifier of the document involved (None when unknown)
        source: Event source context (e.g., "fetch", "export", "notify")
        events_file: Override for the event log path (default: PIPELINE_EVENTS_FILE)
        **extra_fields: Additional event-specific fields

    Returns:
        The event dict that was written
    """
    events_file = Path(events_file) if events_file is not None else PIPELINE_EVENTS_FILE
    events_file.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "identifier": identifier,
        "source": source,
        **extra_fields,
    }

    with open(events_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(event, default=str) + "\n")

    return event


def get_recent_events(
    n: int = 10,
    identifier: Optional[str] = None,
    event_type: Optional[str] = None,
    events_file: Optional[Path] = None,
) -> List[Dict]:
    """
    Get the last n events from the pipeline log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        identifier: Filter to only events for this document identifier (optional)
        event_type: Filter to only events of this type (optional)
        events_file: Override for the event log path (default: PIPELINE_EVENTS_FILE)

    Returns:
        List of event dicts (most recent last)
    """
    events_file = Path(events_file) if events_file is not None else PIPELINE_EVENTS_FILE
    if not events_file.exists():
        return []

    events = []
    with open(events_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if identifier:
        events = [e for e in events if e.get("identifier") == identifier]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events
