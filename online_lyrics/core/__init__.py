"""
Core module for online-lyrics.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging system with console and file outputs
    - cache: Thread-safe TTL cache for lookup results

Usage:
    from online_lyrics.core import (
        OnlineLyricsConfig, load_config,
        setup_logging, get_logger,
        OnlineLyricsError, ConfigError
    )
"""

from online_lyrics.core.exceptions import (
    ConfigError,
    OnlineLyricsError,
    ProviderError,
)
from online_lyrics.core.config import (
    OnlineLyricsConfig,
    SubLyricsMode,
    load_config,
    parse_config,
)
from online_lyrics.core.logger import (
    get_logger,
    log_lyrics_failure,
    setup_logging,
    shutdown_logging,
)
from online_lyrics.core.cache import LyricsCache, build_cache_key

__all__ = [
    # Config
    "OnlineLyricsConfig",
    "SubLyricsMode",
    "load_config",
    "parse_config",
    # Cache
    "LyricsCache",
    "build_cache_key",
    # Exceptions
    "OnlineLyricsError",
    "ConfigError",
    "ProviderError",
    # Logger
    "setup_logging",
    "get_logger",
    "log_lyrics_failure",
    "shutdown_logging",
]
