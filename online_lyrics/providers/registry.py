"""
Ordered registry of lyrics providers.

The registry is owned by the lookup service (one per service instance),
not module-level state. Providers are tried in registration order.

Thread Safety:
    register() and unregister() take self._lock. Readers iterate over
    snapshot(), an immutable tuple, so a lookup in progress is never
    affected by concurrent registration changes.
"""

import threading
from typing import Iterable

from online_lyrics.providers.base import LyricsProvider
from online_lyrics.providers.netease import NeteaseLyricsProvider


class ProviderRegistry:
    """
    Ordered, de-duplicated collection of providers.

    Example:
        registry = ProviderRegistry([NeteaseLyricsProvider()])
        registry.register(MyProvider())
        for provider in registry.snapshot():
            ...
    """

    def __init__(self, providers: Iterable[LyricsProvider] = ()) -> None:
        self._providers: list[LyricsProvider] = []
        self._lock = threading.Lock()
        for provider in providers:
            self.register(provider)

    def register(self, provider: LyricsProvider) -> bool:
        """
        Append a provider.

        Returns:
            False if this same instance was already registered (no change).
        """
        with self._lock:
            if provider in self._providers:
                return False
            self._providers.append(provider)
            return True

    def unregister(self, provider: LyricsProvider) -> bool:
        """
        Remove a provider.

        Returns:
            False if the provider was not registered.
        """
        with self._lock:
            if provider not in self._providers:
                return False
            self._providers.remove(provider)
            return True

    def snapshot(self) -> tuple[LyricsProvider, ...]:
        """Current providers in lookup order."""
        with self._lock:
            return tuple(self._providers)

    def __len__(self) -> int:
        with self._lock:
            return len(self._providers)

    def __contains__(self, provider: object) -> bool:
        with self._lock:
            return provider in self._providers


def default_registry() -> ProviderRegistry:
    """Registry with the built-in NetEase provider."""
    return ProviderRegistry([NeteaseLyricsProvider()])
