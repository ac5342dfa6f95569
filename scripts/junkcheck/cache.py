"""Time-limited cache of aggregate verdicts, keyed by relay host."""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

CACHE_EXPIRY = 3600.0  # seconds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Cached verdict for one host."""

    junk: bool
    created: float

    def is_expired(self, now: float, expiry: float) -> bool:
        return now - self.created > expiry


class ResultCache:
    """
    Verdict cache shared by all callers of a checker.

    Entries reflect the block lists enabled when they were computed, so the
    whole cache must be cleared whenever enablement changes. Every read,
    write and clear holds the same lock.
    """

    def __init__(
        self,
        expiry: float = CACHE_EXPIRY,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.expiry = expiry
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, host: str) -> Optional[bool]:
        """Return the cached verdict, or None if absent or expired."""
        key = host.lower()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock(), self.expiry):
                del self._entries[key]
                return None
            return entry.junk

    def put(self, host: str, junk: bool) -> None:
        with self._lock:
            self._entries[host.lower()] = CacheEntry(junk=junk, created=self._clock())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
        logger.debug("Result cache cleared")

    def purge_expired(self) -> int:
        """Drop expired entries and return how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [
                key
                for key, entry in self._entries.items()
                if entry.is_expired(now, self.expiry)
            ]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, host: object) -> bool:
        return isinstance(host, str) and self.get(host) is not None
