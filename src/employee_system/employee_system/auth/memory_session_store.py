from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import utc_now
from ..core.constants import DEFAULT_SESSION_TTL_HOURS
from ..users.model import Principal
from .session_store import SessionStore, new_token


@dataclass(frozen=True)
class _Entry:
    principal: Principal
    expires_at: datetime


class MemorySessionStore(SessionStore):
    """Process-local session store (single worker / tests)."""

    def __init__(
        self,
        *,
        ttl: timedelta = timedelta(hours=DEFAULT_SESSION_TTL_HOURS),
        clock: Callable[[], datetime] = utc_now,
    ):
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def create(self, principal: Principal) -> str:
        token = new_token()
        now = self._clock()
        with self._lock:
            expired = [t for t, e in self._entries.items() if e.expires_at <= now]
            for t in expired:
                del self._entries[t]
            self._entries[token] = _Entry(principal=principal, expires_at=now + self._ttl)
        return token

    def get(self, token: str) -> Optional[Principal]:
        with self._lock:
            entry = self._entries.get(token)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[token]
                return None
            return entry.principal

    def update(self, token: str, principal: Principal) -> None:
        with self._lock:
            entry = self._entries.get(token)
            if entry is not None:
                self._entries[token] = _Entry(principal=principal, expires_at=entry.expires_at)

    def destroy(self, token: str) -> None:
        with self._lock:
            self._entries.pop(token, None)
