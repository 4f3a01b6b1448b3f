"""
Public Document Fetcher

Retrieves (document, projects) for a public identifier and classifies the outcome
as Loading, Success, NotFound or Error for the render pipeline.

Fetches run once per distinct identifier. Each fetch carries a generation token;
a response that arrives after a newer fetch has started is discarded, so a slow
response for an old identifier can never overwrite the current one.
"""

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Protocol, Tuple

from folio.contexts.retrieval.logger import _log_debug, _log_error, _log_exception, _log_info
from folio.exceptions import DocumentNotFoundError, FetchTransportError
from folio.utils.event_logging import log_pipeline_event
from folio.utils.notifications import LoggingNotifier, Notifier

MISSING_IDENTIFIER_MESSAGE = "Username not provided"
EMPTY_DOCUMENT_MESSAGE = "Portfolio data not found"
FETCH_FAILED_MESSAGE = "Failed to load portfolio"


class FetchStatus(str, Enum):
    LOADING = "loading"
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class FetchOutcome:
    """
    Classified result of a fetch.

    Attributes:
        status: FetchStatus
        identifier: Identifier the outcome belongs to
        document: Raw document mapping (SUCCESS only)
        projects: Raw project mappings (SUCCESS only)
        message: Human-readable explanation (NOT_FOUND and ERROR)
    """

    status: FetchStatus
    identifier: Optional[str] = None
    document: Optional[Mapping] = None
    projects: Tuple[Any, ...] = ()
    message: Optional[str] = None

    @classmethod
    def loading(cls, identifier: Optional[str]) -> "FetchOutcome":
        return cls(FetchStatus.LOADING, identifier)

    @classmethod
    def success(cls, identifier: str, document: Mapping, projects=()) -> "FetchOutcome":
        return cls(FetchStatus.SUCCESS, identifier, document=document, projects=tuple(projects))

    @classmethod
    def not_found(cls, identifier: Optional[str], message: str) -> "FetchOutcome":
        return cls(FetchStatus.NOT_FOUND, identifier, message=message)

    @classmethod
    def error(cls, identifier: Optional[str], message: str) -> "FetchOutcome":
        return cls(FetchStatus.ERROR, identifier, message=message)

    @property
    def is_terminal(self) -> bool:
        return self.status is not FetchStatus.LOADING


class DocumentSource(Protocol):
    async def fetch_public_document(self, identifier: str) -> Any: ...


def classify_payload(identifier: str, body: Any) -> FetchOutcome:
    """
    Classify a successful response body.

    An empty or null document is NotFound, never a successful empty render.
    """
    document = body.get("portfolio") if isinstance(body, Mapping) else None
    if not isinstance(document, Mapping) or not document:
        return FetchOutcome.not_found(identifier, EMPTY_DOCUMENT_MESSAGE)

    projects = body.get("projects") or ()
    if isinstance(projects, (str, Mapping)):
        projects = ()
    return FetchOutcome.success(identifier, document, projects)


class PublicDocumentFetcher:
    """
    Fetch state for one viewer.

    Args:
        source: Persistence collaborator (e.g. PortfolioApiClient)
        notifier: User notification channel (default: LoggingNotifier)
        record_events: Append terminal outcomes to the pipeline event log
        events_file: Override for the pipeline event log path
    """

    def __init__(
        self,
        source: DocumentSource,
        notifier: Notifier = None,
        record_events: bool = True,
        events_file: Optional[Path] = None,
    ):
        self.source = source
        self.notifier = notifier or LoggingNotifier(events_file=events_file, record_events=record_events)
        self.record_events = record_events
        self.events_file = events_file

        self.outcome = FetchOutcome.loading(None)
        self._generation = 0
        self._requested = False
        self._identifier: Optional[str] = None

    @property
    def identifier(self) -> Optional[str]:
        return self._identifier

    async def load(self, identifier: Optional[str]) -> Optional[FetchOutcome]:
        """
        Fetch for identifier unless it is already the current one.

        Returns:
            The applied outcome, the current outcome if identifier is unchanged, or
            None if this response was superseded by a newer fetch
        """
        if self._requested and identifier == self._identifier:
            _log_debug(f"Identifier unchanged ({identifier}), not re-fetching")
            return self.outcome
        return await self.refresh(identifier)

    async def refresh(self, identifier: Optional[str] = None) -> Optional[FetchOutcome]:
        """Fetch unconditionally (explicit user retry). Defaults to the current identifier."""
        if identifier is None:
            identifier = self._identifier

        self._requested = True
        self._identifier = identifier
        self._generation += 1
        generation = self._generation

        if identifier is None or not str(identifier).strip():
            return self._settle(
                generation, FetchOutcome.not_found(identifier, MISSING_IDENTIFIER_MESSAGE)
            )

        self.outcome = FetchOutcome.loading(identifier)
        _log_info(f"Fetching portfolio for: {identifier}")

        try:
            body = await self.source.fetch_public_document(identifier)
        except DocumentNotFoundError as e:
            outcome = FetchOutcome.not_found(identifier, e.message)
        except FetchTransportError as e:
            outcome = FetchOutcome.error(identifier, e.message)
        except asyncio.CancelledError:
            if generation == self._generation:
                # Nothing settled this identifier; the next load must fetch again
                self._requested = False
            raise
        except Exception as e:
            _log_exception(e, f"Source raised for {identifier}")
            outcome = FetchOutcome.error(identifier, str(e) or FETCH_FAILED_MESSAGE)
        else:
            outcome = classify_payload(identifier, body)

        return self._settle(generation, outcome)

    def _settle(self, generation: int, outcome: FetchOutcome) -> Optional[FetchOutcome]:
        if generation != self._generation:
            _log_debug(
                f"Discarding stale response for {outcome.identifier} "
                f"(generation {generation}, current {self._generation})"
            )
            return None

        self.outcome = outcome
        if outcome.status is FetchStatus.SUCCESS:
            _log_info(f"Fetched {outcome.identifier}: {len(outcome.projects)} projects")
        else:
            _log_error(f"Fetch {outcome.status.value} for {outcome.identifier}: {outcome.message}")
            try:
                self.notifier.error(outcome.message, outcome.identifier)
            except Exception as e:
                _log_exception(e, f"Notifier failed to deliver: {outcome.message}")

        if self.record_events:
            try:
                log_pipeline_event(
                    event_type="fetch_outcome",
                    identifier=outcome.identifier,
                    source="fetch",
                    events_file=self.events_file,
                    status=outcome.status.value,
                    message=outcome.message,
                )
            except OSError as e:
                _log_error(f"Could not record fetch outcome event: {e}")
        return outcome
