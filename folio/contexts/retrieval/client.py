"""
Persistence API client.

Retrieves public documents from the persistence service over HTTP and separates
"no such document" from transport or server failures.
"""

import os
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx
from dotenv import load_dotenv

from folio.contexts.retrieval.credentials import CredentialStore, auth_headers
from folio.contexts.retrieval.logger import _log_debug
from folio.exceptions import DocumentNotFoundError, FetchTransportError

load_dotenv()
API_URL = os.getenv("FOLIO_API_URL", "http://localhost:5000/api")
HTTP_TIMEOUT_S = float(os.getenv("FOLIO_HTTP_TIMEOUT_S", "10"))

PUBLIC_DOCUMENT_PATH = "/portfolios/public/{identifier}"


def _server_message(response: httpx.Response) -> Optional[str]:
    """The server's own error message from a JSON body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None


class PortfolioApiClient:
    """
    Async client for the persistence service.

    Args:
        base_url: Service root (default: FOLIO_API_URL)
        credentials: Credential store supplying the bearer token (optional)
        timeout: Request timeout in seconds (default: FOLIO_HTTP_TIMEOUT_S)
        transport: httpx transport override (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str = API_URL,
        credentials: Optional[CredentialStore] = None,
        timeout: float = HTTP_TIMEOUT_S,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.credentials = credentials
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=auth_headers(self.credentials),
            transport=self.transport,
        )

    async def fetch_public_document(self, identifier: str) -> Dict[str, Any]:
        """
        Fetch {portfolio, projects} for a public identifier.

        Args:
            identifier: Public identifier (username) of the document owner

        Returns:
            Decoded JSON body

        Raises:
            DocumentNotFoundError: On HTTP 404
            FetchTransportError: On network failure, other HTTP errors or invalid JSON
        """
        path = PUBLIC_DOCUMENT_PATH.format(identifier=quote(identifier, safe=""))
        _log_debug(f"GET {self.base_url}{path}")

        async with self._client() as client:
            try:
                response = await client.get(path)
            except httpx.TimeoutException as e:
                raise FetchTransportError(f"Request timed out after {self.timeout:g}s") from e
            except httpx.HTTPError as e:
                raise FetchTransportError(str(e) or "Failed to load portfolio") from e

        if response.status_code == 404:
            raise DocumentNotFoundError(identifier, _server_message(response) or "Portfolio not found")
        if response.is_error:
            raise FetchTransportError(
                _server_message(response) or f"Server returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise FetchTransportError("Server returned invalid JSON") from e
