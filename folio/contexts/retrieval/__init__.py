"""
Retrieval Context

Responsibilities:
- Talks to the persistence service for public documents
- Classifies fetch outcomes (Loading, Success, NotFound, Error)
- Discards stale responses when the viewed identifier changes mid-flight
- Holds session credentials behind a CredentialStore

Owns: PortfolioApiClient, PublicDocumentFetcher, credential stores
Never: Resolves or renders documents
"""

from folio.contexts.retrieval.client import PortfolioApiClient
from folio.contexts.retrieval.credentials import (
    CredentialStore,
    FileCredentialStore,
    InMemoryCredentialStore,
    auth_headers,
    get_token,
)
from folio.contexts.retrieval.fetcher import (
    FetchOutcome,
    FetchStatus,
    PublicDocumentFetcher,
    classify_payload,
)

__all__ = [
    "PortfolioApiClient",
    "PublicDocumentFetcher",
    "FetchOutcome",
    "FetchStatus",
    "classify_payload",
    "CredentialStore",
    "InMemoryCredentialStore",
    "FileCredentialStore",
    "get_token",
    "auth_headers",
]
