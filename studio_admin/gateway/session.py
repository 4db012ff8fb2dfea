"""
Session credential slots for outgoing requests.

Why: The gateway must attach a bearer token without reaching into ambient
global state. Callers inject a store; the gateway snapshots both slots on
every request and applies one precedence rule.

Slots:
    admin-token   – written by the administrator login
    client-token  – written by the client-portal (parent/student) login

Precedence: a populated client slot always wins over the admin slot. Empty
strings count as unset, so a blank token never produces a header.

Security: Never log token values. The file store restricts the credentials
file to the current user where the platform allows it.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Protocol
import json
import logging
import os

ADMIN_SLOT = "admin-token"
CLIENT_SLOT = "client-token"
SLOTS = (ADMIN_SLOT, CLIENT_SLOT)

logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    def get(self, slot: str) -> Optional[str]: ...

    def set(self, slot: str, token: str) -> None: ...

    def delete(self, slot: str) -> None: ...


def _check_slot(slot: str) -> None:
    if slot not in SLOTS:
        raise ValueError(f"unknown credential slot: {slot}")


@dataclass(frozen=True)
class SessionCredentials:
    """Snapshot of both credential slots."""

    admin_token: Optional[str] = None
    client_token: Optional[str] = None

    @classmethod
    def from_store(cls, store: CredentialStore) -> "SessionCredentials":
        return cls(admin_token=store.get(ADMIN_SLOT), client_token=store.get(CLIENT_SLOT))

    def bearer_token(self) -> Optional[str]:
        return self.client_token or self.admin_token or None

    @property
    def active_slot(self) -> Optional[str]:
        if self.client_token:
            return CLIENT_SLOT
        if self.admin_token:
            return ADMIN_SLOT
        return None

    def authorization_header(self) -> Dict[str, str]:
        token = self.bearer_token()
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}


class InMemoryCredentialStore:
    """Dict-backed store for tests and embedding."""

    def __init__(self, *, admin_token: Optional[str] = None, client_token: Optional[str] = None):
        self._data: Dict[str, str] = {}
        if admin_token:
            self._data[ADMIN_SLOT] = admin_token
        if client_token:
            self._data[CLIENT_SLOT] = client_token

    def get(self, slot: str) -> Optional[str]:
        _check_slot(slot)
        return self._data.get(slot) or None

    def set(self, slot: str, token: str) -> None:
        _check_slot(slot)
        self._data[slot] = token

    def delete(self, slot: str) -> None:
        _check_slot(slot)
        self._data.pop(slot, None)


class FileCredentialStore:
    """Persist both slots in a small JSON file that survives process restarts.

    A missing or unreadable file reads as empty. Every call re-reads the file
    so that a login in one process is visible to the next request in another.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def _load(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            logger.warning("credential file unreadable path=%s err=%s", self.path, exc.__class__.__name__)
            return {}
        try:
            data = json.loads(raw or "{}")
        except ValueError:
            logger.warning("credential file is not valid JSON path=%s", self.path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if k in SLOTS and isinstance(v, str) and v}

    def _save(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        # Created user-only from the start; a stale temp file would keep its old mode.
        tmp.unlink(missing_ok=True)
        fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(json.dumps(data, indent=2, sort_keys=True))
        os.replace(tmp, self.path)

    def get(self, slot: str) -> Optional[str]:
        _check_slot(slot)
        return self._load().get(slot)

    def set(self, slot: str, token: str) -> None:
        _check_slot(slot)
        data = self._load()
        data[slot] = token
        self._save(data)

    def delete(self, slot: str) -> None:
        _check_slot(slot)
        data = self._load()
        if slot in data:
            data.pop(slot)
            self._save(data)


__all__ = [
    "ADMIN_SLOT",
    "CLIENT_SLOT",
    "SLOTS",
    "CredentialStore",
    "FileCredentialStore",
    "InMemoryCredentialStore",
    "SessionCredentials",
]
