from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Callable

from motoin.ports.security import TokenBlacklist


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryTokenBlacklist(TokenBlacklist):
    """
    Process-local revocation list.

    Entries expire with their token and are purged on every access, so the
    store never holds more than the tokens that are still valid. Shared by
    all request threads of one application instance.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._entries: dict[str, datetime] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def revoke(self, token: str, expires_at: datetime) -> None:
        with self._lock:
            self._purge_expired()
            if expires_at > self._clock():
                self._entries[token] = expires_at

    def is_revoked(self, token: str) -> bool:
        with self._lock:
            self._purge_expired()
            return token in self._entries

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired()
            return len(self._entries)

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [token for token, expires_at in self._entries.items() if expires_at <= now]
        for token in expired:
            del self._entries[token]
