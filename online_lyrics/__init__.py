"""
online-lyrics: Find synced lyrics for a playing track and merge translations.

This package looks up a track on NetEase Cloud Music, picks the search
result that best matches the track's title/artist/album, downloads its
LRC lyrics and, optionally, interleaves the translated or romanized
transcript under each original line.

Architecture:
    matching/   - Similarity scores and candidate ranking (pure)
    lrc/        - LRC parsing and timeline merging (pure)
    providers/  - Provider interface, NetEase client, provider registry
    core/       - Configuration, logging, exceptions, result cache
    service.py  - Lookup orchestration (cache + providers + merge)
    cli.py      - Command-line interface

Usage:
    Command Line:
        online-lyrics --title "Lemon" --artist "米津玄師"
        online-lyrics --title "Lemon" --artist "米津玄師" --sub translation -o lemon.lrc
        online-lyrics --batch tracks.yaml --output-dir lyrics/

    Python API:
        from online_lyrics import OnlineLyricsService, load_config

        service = OnlineLyricsService(load_config())
        lrc = service.lookup("Lemon", "米津玄師", "STRAY SHEEP")

        from online_lyrics import merge_timelines
        merged = merge_timelines(original_lrc, [translation_lrc])

Dependencies:
    - requests: HTTP client for the NetEase API
    - pyyaml: Configuration file parsing
    - rich-click: CLI framework with colored help
    - tqdm: Progress bar for batch lookups
"""

__version__ = "0.1.1"
__license__ = "GPL-3.0"

from online_lyrics.core import (
    ConfigError,
    OnlineLyricsConfig,
    OnlineLyricsError,
    ProviderError,
    SubLyricsMode,
    get_logger,
    load_config,
    setup_logging,
)
from online_lyrics.lrc import TimedLyricsDocument, merge_timelines, parse_timed_lyrics
from online_lyrics.matching import (
    LyricsQuery,
    ScoredCandidate,
    SearchCandidate,
    artist_list_similarity,
    rank_candidates,
    text_similarity,
)
from online_lyrics.providers import LyricsProvider, LyricsResult, ProviderRegistry
from online_lyrics.service import OnlineLyricsService

__all__ = [
    # Version
    "__version__",
    # Core
    "OnlineLyricsConfig",
    "SubLyricsMode",
    "load_config",
    "setup_logging",
    "get_logger",
    # Exceptions
    "OnlineLyricsError",
    "ConfigError",
    "ProviderError",
    # Matching
    "LyricsQuery",
    "SearchCandidate",
    "ScoredCandidate",
    "text_similarity",
    "artist_list_similarity",
    "rank_candidates",
    # LRC
    "TimedLyricsDocument",
    "parse_timed_lyrics",
    "merge_timelines",
    # Providers / service
    "LyricsProvider",
    "LyricsResult",
    "ProviderRegistry",
    "OnlineLyricsService",
]
