"""
Lyrics providers for online-lyrics.

Components:
    - LyricsProvider / LyricsResult: Provider interface and its result type
    - NeteaseClient / NeteaseLyricsProvider: NetEase Cloud Music source
    - ProviderRegistry: Ordered, thread-safe provider list

Adding a Source:
    class MyProvider(LyricsProvider):
        name = "mine"

        def fetch(self, query, config):
            ...

    service.register_provider(MyProvider())
"""

from online_lyrics.providers.base import LyricsProvider, LyricsResult
from online_lyrics.providers.netease import NeteaseClient, NeteaseLyricsProvider
from online_lyrics.providers.registry import ProviderRegistry, default_registry

__all__ = [
    "LyricsProvider",
    "LyricsResult",
    "NeteaseClient",
    "NeteaseLyricsProvider",
    "ProviderRegistry",
    "default_registry",
]
