"""
In-memory lyrics cache with a time-to-live.

Lookups hit the network twice at least (search + lyric fetch), so a
successful result is kept for a while and served again for the same
track and sub-lyrics mode.

Thread Safety:
    All public methods acquire self._lock. The cache can be shared by
    threads running lookups concurrently.
"""

import threading
import time
from typing import Callable

from online_lyrics.core.config import DEFAULT_CACHE_TTL_SECONDS, SubLyricsMode
from online_lyrics.matching.models import LyricsQuery


def build_cache_key(query: LyricsQuery, mode: SubLyricsMode) -> str:
    """
    Build the cache key for a lookup.

    Title, artist and album are lowercased, so lookups differing only in
    case share an entry. The mode is part of the key because the merged
    text differs per mode.

    Example:
        build_cache_key(LyricsQuery("Hello", "Adele", "25"), SubLyricsMode.NONE)
        -> "hello|adele|25|NONE"
    """
    return "|".join((
        query.title.lower(),
        query.artist.lower(),
        query.album.lower(),
        mode.name,
    ))


class LyricsCache:
    """
    Thread-safe TTL cache mapping lookup keys to lyrics text.

    Attributes:
        ttl_seconds: Age after which an entry is considered stale.
                     An entry exactly ttl_seconds old is still served.

    Example:
        cache = LyricsCache(ttl_seconds=600)
        cache.put(key, lyrics)
        cached = cache.get(key)  # lyrics, or None when missing/expired
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic
    ) -> None:
        """
        Args:
            ttl_seconds: Entry lifetime in seconds.
            clock: Time source returning seconds; injectable for tests.
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        """Return the cached text, evicting it if it has expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            lyrics, stored_at = entry
            if self._clock() - stored_at <= self.ttl_seconds:
                return lyrics

            del self._entries[key]
            return None

    def put(self, key: str, lyrics: str) -> None:
        with self._lock:
            self._entries[key] = (lyrics, self._clock())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
