"""Exceptions shared across FOLIO contexts."""

from typing import Optional


class FolioError(Exception):
    """Base class for all FOLIO errors."""


class DocumentNotFoundError(FolioError):
    """
    Raised by the persistence client when no document exists for an identifier.

    Attributes:
        identifier: The public identifier that was requested
    """

    def __init__(self, identifier: Optional[str], message: str = "Portfolio data not found"):
        self.identifier = identifier
        self.message = message
        super().__init__(message)


class FetchTransportError(FolioError):
    """
    Raised when the persistence collaborator cannot be reached or answers with a
    server-side failure.

    Attributes:
        message: Human-readable cause, preferring the server's own message
        status_code: HTTP status code, when a response was received
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ExportFailure(FolioError):
    """
    Raised by a document writer when the export artifact cannot be produced.

    Attributes:
        message: Human-readable cause
        original_error: The underlying error, if any
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error

        parts = [message]
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))


class InvalidEditError(FolioError, ValueError):
    """Raised when an editing diff names a section or field the document does not have."""
