"""
Credential Store

Read-only observation handles over the set of valid users. The gate never
writes to a store; it asks for the current snapshot on every verification,
so changes made between requests are seen by the next request.

Users format: ``name:secret`` entries separated by newlines or commas,
split on the first ':'. Blank entries and ``#`` comment lines are ignored.
"""

import os
import threading
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Protocol

from core.logger import get_logger

logger = get_logger(__name__)

_EMPTY: Mapping[str, str] = MappingProxyType({})


class CredentialStore(Protocol):
    def snapshot(self) -> Mapping[str, str]:
        """Return the latest immutable username -> secret mapping."""
        ...


def parse_users(text: str) -> dict[str, str]:
    """
    Parse users from settings or a users file.

    Args:
        text: Entries separated by newlines or commas

    Returns:
        Mapping of username to stored secret

    Raises:
        ValueError: If an entry has no ':' or an empty username
    """
    users: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        for entry in line.split(","):
            entry = entry.strip()
            if not entry:
                continue
            username, sep, secret = entry.partition(":")
            if not sep or not username:
                raise ValueError(f"Invalid user entry (expected name:secret): {username or entry!r}")
            users[username] = secret
    return users


class StaticCredentialStore:
    """In-memory store whose contents can be swapped between requests."""

    def __init__(self, users: Mapping[str, str] | None = None):
        self._users: Mapping[str, str] = MappingProxyType(dict(users or {}))

    def snapshot(self) -> Mapping[str, str]:
        return self._users

    def replace(self, users: Mapping[str, str]) -> None:
        # Rebinding keeps snapshots already handed out unchanged
        self._users = MappingProxyType(dict(users))


class FileCredentialStore:
    def __init__(self, path: str | Path):
        """
        Initialize a store backed by a users file.

        The file is re-read whenever its modification time changes.

        Args:
            path: Path to the users file
        """
        self.path = Path(path)
        self._users: Mapping[str, str] = _EMPTY
        self._mtime_ns: int | None = None
        self._missing = False
        self._lock = threading.Lock()

    def snapshot(self) -> Mapping[str, str]:
        try:
            mtime_ns = os.stat(self.path).st_mtime_ns
        except FileNotFoundError:
            with self._lock:
                if not self._missing:
                    logger.warning(f"Users file not found: {self.path}")
                    self._missing = True
                self._users = _EMPTY
                self._mtime_ns = None
            return _EMPTY

        if mtime_ns == self._mtime_ns:
            return self._users

        with self._lock:
            if mtime_ns != self._mtime_ns:
                users = parse_users(self.path.read_text(encoding="utf-8"))
                self._users = MappingProxyType(users)
                self._mtime_ns = mtime_ns
                self._missing = False
                logger.info(f"Loaded {len(users)} user(s) from {self.path}")
            return self._users
