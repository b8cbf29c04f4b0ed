"""Per-session storage of the latest AnalysisResult."""

import logging
import threading
import time
from collections.abc import Callable
from typing import Protocol

from config import settings
from models.responses import AnalysisResult

logger = logging.getLogger(__name__)


class AnalysisStore(Protocol):
    def save(self, session_key: str, result: AnalysisResult) -> None:
        ...

    def get(self, session_key: str) -> AnalysisResult | None:
        ...


class InMemoryAnalysisStore:
    """Dict-backed store; entries expire ttl_seconds after they were saved."""

    def __init__(self, ttl_seconds: float = 24 * 3600, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, AnalysisResult]] = {}
        self._lock = threading.Lock()

    def save(self, session_key: str, result: AnalysisResult) -> None:
        with self._lock:
            self._purge_expired()
            self._entries[session_key] = (self._clock() + self.ttl_seconds, result)

    def get(self, session_key: str) -> AnalysisResult | None:
        with self._lock:
            self._purge_expired()
            entry = self._entries.get(session_key)
        return entry[1] if entry else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [key for key, (expires_at, _) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Purged %d expired analyses", len(expired))


_store: InMemoryAnalysisStore | None = None


def get_analysis_store() -> InMemoryAnalysisStore:
    global _store
    if _store is None:
        _store = InMemoryAnalysisStore(ttl_seconds=settings.session_ttl_hours * 3600)
    return _store
