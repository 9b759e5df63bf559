"""
Lyrics lookup service for online-lyrics.

This module is the entry point used by the CLI (and by any embedding
player): it takes a track's metadata and returns display-ready LRC text.

Lookup Workflow:
    1. Validate the request (a title is required)
    2. Return None if online lookups are disabled
    3. Serve from cache when a fresh entry exists
    4. Ask each registered provider in order:
       a. Exceptions are logged and the provider is skipped
       b. The first result with a non-blank base text wins
    5. Merge the companion transcript selected by sub_lyrics_mode
    6. Cache and return the merged text

Only successful lookups are cached; a miss is retried on the next call.

Usage:
    service = OnlineLyricsService(load_config())
    lrc = service.lookup("夜に駆ける", "YOASOBI")
    if lrc is None:
        print("No lyrics")
"""

from online_lyrics.core.cache import LyricsCache, build_cache_key
from online_lyrics.core.config import OnlineLyricsConfig, SubLyricsMode
from online_lyrics.core.logger import get_logger
from online_lyrics.lrc.merge import merge_timelines
from online_lyrics.matching.models import LyricsQuery
from online_lyrics.providers.base import LyricsProvider, LyricsResult
from online_lyrics.providers.registry import ProviderRegistry, default_registry


logger = get_logger(__name__)


def build_lyrics_text(result: LyricsResult, mode: SubLyricsMode) -> str | None:
    """
    Assemble the final LRC text from a provider result.

    Args:
        result: Raw texts returned by a provider.
        mode: Which companion transcript to merge under the original.

    Returns:
        None if the base text is blank; the base text unchanged if the mode
        is NONE or the chosen companion is missing/blank; otherwise the
        merged timeline.
    """
    base = result.lrc
    if not base or not base.strip():
        return None

    if mode is SubLyricsMode.ROMAJI:
        companion = result.romaji_lrc
    elif mode is SubLyricsMode.TRANSLATION:
        companion = result.translation_lrc
    else:
        companion = None

    if not companion or not companion.strip():
        return base

    return merge_timelines(base, [companion])


class OnlineLyricsService:
    """
    Looks up lyrics across registered providers, with caching.

    Attributes:
        config: Lookup configuration.
        registry: Providers, tried in registration order.
        cache: TTL cache of merged lyrics.

    Thread Safety:
        get_lyrics() can be called from several threads. The registry and
        cache synchronize internally; each lookup iterates over a registry
        snapshot.

    Example:
        service = OnlineLyricsService(config)
        service.register_provider(MyProvider())
        lrc = service.lookup("Lemon", "米津玄師", "STRAY SHEEP")
    """

    def __init__(
        self,
        config: OnlineLyricsConfig | None = None,
        registry: ProviderRegistry | None = None,
        cache: LyricsCache | None = None
    ) -> None:
        """
        Args:
            config: Lookup configuration. Defaults to OnlineLyricsConfig().
            registry: Provider registry. Defaults to one NetEase provider.
            cache: Result cache. Defaults to a cache using config.cache_ttl_seconds.
        """
        self.config = config or OnlineLyricsConfig()
        self.registry = registry if registry is not None else default_registry()
        self.cache = cache if cache is not None else LyricsCache(self.config.cache_ttl_seconds)

    def lookup(self, title: str | None, artist: str | None = "", album: str | None = "") -> str | None:
        """
        Look up lyrics from raw metadata.

        Returns:
            LRC text, or None when the title is blank or nothing was found.
        """
        query = LyricsQuery.from_metadata(title, artist, album)
        if query is None:
            logger.debug("Skipping lookup: track has no title")
            return None
        return self.get_lyrics(query)

    def get_lyrics(self, query: LyricsQuery) -> str | None:
        """
        Look up lyrics for a query.

        Args:
            query: Track metadata.

        Returns:
            LRC text (merged per sub_lyrics_mode), or None if lookups are
            disabled or no provider had lyrics.
        """
        config = self.config
        if not config.enabled:
            return None

        cache_key = build_cache_key(query, config.sub_lyrics_mode)
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit: {query.artist} - {query.title}")
            return cached

        for provider in self.registry.snapshot():
            try:
                result = provider.fetch(query, config)
            except Exception as e:
                logger.warning(
                    f"Provider '{provider.name}' failed for "
                    f"{query.artist} - {query.title}: {e}"
                )
                continue

            if result is None:
                continue

            lyrics = build_lyrics_text(result, config.sub_lyrics_mode)
            if lyrics is not None:
                logger.info(
                    f"Lyrics found for: {query.artist} - {query.title} "
                    f"(source: {result.source or provider.name})"
                )
                self.cache.put(cache_key, lyrics)
                return lyrics

        return None

    def register_provider(self, provider: LyricsProvider) -> bool:
        """Add a provider after the existing ones. Same instance is not added twice."""
        return self.registry.register(provider)

    def unregister_provider(self, provider: LyricsProvider) -> bool:
        return self.registry.unregister(provider)
