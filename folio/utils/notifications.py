"""
User-visible notifications.

Only the triggering contract lives here: callers emit exactly one notification per
logical step (info when an action starts, success or error when it ends). Delivery
is up to the Notifier implementation.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Protocol

from loguru import logger

from folio.utils.event_logging import log_pipeline_event

INFO = "info"
SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class Notification:
    """A single user-visible message."""

    level: str
    message: str
    identifier: Optional[str] = None


class Notifier(Protocol):
    def info(self, message: str, identifier: Optional[str] = None) -> None: ...

    def success(self, message: str, identifier: Optional[str] = None) -> None: ...

    def error(self, message: str, identifier: Optional[str] = None) -> None: ...


class LoggingNotifier:
    """
    Notifier that surfaces messages through loguru and records each one as a
    "notification" pipeline event.

    Args:
        events_file: Override for the pipeline event log path
        record_events: Write pipeline events (default: True)
    """

    def __init__(self, events_file: Optional[Path] = None, record_events: bool = True):
        self.events_file = events_file
        self.record_events = record_events

    def _emit(self, level: str, message: str, identifier: Optional[str]) -> None:
        if level == SUCCESS:
            logger.success(f"[notify] {message}")
        elif level == ERROR:
            logger.error(f"[notify] {message}")
        else:
            logger.info(f"[notify] {message}")

        if self.record_events:
            log_pipeline_event(
                event_type="notification",
                identifier=identifier,
                source="notify",
                events_file=self.events_file,
                level=level,
                message=message,
            )

    def info(self, message: str, identifier: Optional[str] = None) -> None:
        self._emit(INFO, message, identifier)

    def success(self, message: str, identifier: Optional[str] = None) -> None:
        self._emit(SUCCESS, message, identifier)

    def error(self, message: str, identifier: Optional[str] = None) -> None:
        self._emit(ERROR, message, identifier)


class RecordingNotifier:
    """Notifier that keeps every notification in memory, in order."""

    def __init__(self):
        self.notifications: List[Notification] = []

    def info(self, message: str, identifier: Optional[str] = None) -> None:
        self.notifications.append(Notification(INFO, message, identifier))

    def success(self, message: str, identifier: Optional[str] = None) -> None:
        self.notifications.append(Notification(SUCCESS, message, identifier))

    def error(self, message: str, identifier: Optional[str] = None) -> None:
        self.notifications.append(Notification(ERROR, message, identifier))

    def levels(self) -> List[str]:
        return [n.level for n in self.notifications]
