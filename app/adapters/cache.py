"""In-process response cache shared by adapters.

Board responses change slowly, so a parsed JSON body is reused for a fixed
horizon (30 minutes by default) keyed by request URL. Entries may therefore
be stale by up to the TTL.
"""

import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple


class ResponseCache:
    """Thread-safe TTL cache of parsed JSON responses keyed by URL."""

    def __init__(self, ttl_seconds: int = 1800, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None if absent or expired."""
        if not self.enabled:
            return None
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if self._clock() - stored_at >= self.ttl_seconds:
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any) -> None:
        """Store a value, first dropping every entry that has expired."""
        if not self.enabled:
            return
        with self._lock:
            now = self._clock()
            expired = [
                k for k, (stored_at, _) in self._entries.items() if now - stored_at >= self.ttl_seconds
            ]
            for k in expired:
                del self._entries[k]
            self._entries[key] = (now, value)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
