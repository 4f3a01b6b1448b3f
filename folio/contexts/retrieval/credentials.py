"""
Credential storage.

Session credentials (the signed-in user record and its bearer token) live behind a
CredentialStore with get/set/clear semantics instead of global mutable state.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from dotenv import load_dotenv

load_dotenv()
CREDENTIALS_PATH = Path(os.getenv("FOLIO_CREDENTIALS_PATH", "outs/credentials.json"))


class CredentialStore(Protocol):
    def get(self) -> Optional[Dict[str, Any]]: ...

    def set(self, credentials: Dict[str, Any]) -> None: ...

    def clear(self) -> None: ...


class InMemoryCredentialStore:
    """Credentials held for the lifetime of the process."""

    def __init__(self, credentials: Optional[Dict[str, Any]] = None):
        self._credentials = dict(credentials) if credentials else None

    def get(self) -> Optional[Dict[str, Any]]:
        return dict(self._credentials) if self._credentials else None

    def set(self, credentials: Dict[str, Any]) -> None:
        if not credentials.get("username"):
            raise ValueError("Credentials must include a username")
        self._credentials = dict(credentials)

    def clear(self) -> None:
        self._credentials = None


class FileCredentialStore:
    """
    Credentials persisted as a JSON file between runs.

    Args:
        path: JSON file location (default: FOLIO_CREDENTIALS_PATH)
    """

    def __init__(self, path: Path = None):
        self.path = Path(path) if path is not None else CREDENTIALS_PATH

    def get(self) -> Optional[Dict[str, Any]]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            return None
        return data if isinstance(data, dict) and data else None

    def set(self, credentials: Dict[str, Any]) -> None:
        if not credentials.get("username"):
            raise ValueError("Credentials must include a username")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(credentials), encoding="utf-8")

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


def get_token(store: Optional[CredentialStore]) -> Optional[str]:
    """Bearer token from the store, if signed in."""
    if store is None:
        return None
    credentials = store.get()
    return credentials.get("token") if credentials else None


def auth_headers(store: Optional[CredentialStore]) -> Dict[str, str]:
    """Authorization header for the stored token; empty when signed out."""
    token = get_token(store)
    return {"Authorization": f"Bearer {token}"} if token else {}
