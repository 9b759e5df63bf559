"""
Lyrics provider interface.

A provider turns a LyricsQuery into raw LRC texts. New sources are added
by subclassing LyricsProvider and registering an instance with the
lookup service; providers are tried in registration order until one
returns a result.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from online_lyrics.core.config import OnlineLyricsConfig
from online_lyrics.matching.models import LyricsQuery


@dataclass(frozen=True)
class LyricsResult:
    """
    Raw lyrics returned by a provider.

    Attributes:
        lrc: Original-language LRC text. Never blank for results returned
             by a provider.
        translation_lrc: Translated LRC text aligned to the same timestamps,
                         None when the source has none.
        romaji_lrc: Romanized LRC text, None when the source has none.
        source: Provider name, for logging.
    """

    lrc: str
    translation_lrc: str | None = None
    romaji_lrc: str | None = None
    source: str = ""


class LyricsProvider(ABC):
    """
    Base class for lyrics sources.

    Subclasses set `name` and implement fetch(). Network and parsing
    failures may be raised; the lookup service logs them and moves on
    to the next provider.
    """

    name: str = "provider"

    @abstractmethod
    def fetch(self, query: LyricsQuery, config: OnlineLyricsConfig) -> LyricsResult | None:
        """
        Find lyrics for a track.

        Args:
            query: Metadata of the track.
            config: Current lookup configuration (threshold, limits, timeout).

        Returns:
            LyricsResult, or None if this provider has no lyrics for the track.
        """
