"""
Configuration management for online-lyrics.

This module handles loading, validating, and providing access to the
lookup configuration stored in config.yaml.

The configuration file contains:
    - Master switch for online lookups
    - Which secondary transcript (translation or romanization) to merge
    - Candidate filtering for NetEase search results (threshold, Top-N)
    - HTTP timeout
    - Result cache lifetime

Configuration File Location:
    By default config.yaml is looked up in the current working directory.
    Unlike an explicit --config path, a missing default file is not an
    error: built-in defaults are used instead.

Example config.yaml:
    enabled: true

    netease:
      sub_lyrics: translation   # none | romaji | translation
      min_similarity: 0.2
      max_candidates: 3
      timeout_ms: 8000

    cache:
      ttl_seconds: 600

Legacy Keys:
    Older configs used two booleans instead of 'sub_lyrics':
        netease:
          enable_translation: true
          enable_romaji: false
    They are honored when 'sub_lyrics' is absent; translation wins if both
    are set.
"""

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from online_lyrics.core.exceptions import ConfigError


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "config.yaml"

DEFAULT_MIN_SIMILARITY = 0.2
DEFAULT_MAX_CANDIDATES = 3
DEFAULT_TIMEOUT_MS = 8000
DEFAULT_CACHE_TTL_SECONDS = 10 * 60


class SubLyricsMode(Enum):
    """
    Secondary transcript merged under each original line.

    At a shared timestamp the original line is always emitted first and
    the translation/romanization line second.
    """

    NONE = "none"
    ROMAJI = "romaji"
    TRANSLATION = "translation"

    @classmethod
    def from_config_value(cls, value: Any) -> "SubLyricsMode":
        """
        Map a user-supplied value to a mode.

        Matching is case-insensitive and ignores surrounding whitespace.
        Unknown values fall back to NONE rather than failing.

        Examples:
            "Translation" -> TRANSLATION
            "rm"          -> ROMAJI
            "翻译"         -> TRANSLATION
            "whatever"    -> NONE
        """
        normalized = str(value).strip().lower()
        if normalized in ("romaji", "roma", "rm", "罗马字"):
            return cls.ROMAJI
        if normalized in ("translation", "trans", "tl", "翻译"):
            return cls.TRANSLATION
        return cls.NONE


@dataclass(frozen=True)
class OnlineLyricsConfig:
    """
    Complete lookup configuration.

    Attributes:
        enabled: Master switch. When False every lookup returns None.
        sub_lyrics_mode: Secondary transcript to merge into the base lyrics.
        min_similarity: Candidates scoring below this ratio (0..1) are dropped.
                        Higher values mean fewer wrong matches but more misses.
        max_candidates: How many top-ranked candidates to try fetching lyrics for.
                        The ranker clamps this into 1..10.
        timeout_ms: HTTP connect/read timeout in milliseconds.
        cache_ttl_seconds: How long a successful lookup is served from cache.
    """
    enabled: bool = True
    sub_lyrics_mode: SubLyricsMode = SubLyricsMode.NONE
    min_similarity: float = DEFAULT_MIN_SIMILARITY
    max_candidates: int = DEFAULT_MAX_CANDIDATES
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    cache_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS

    def with_sub_lyrics_mode(self, mode: SubLyricsMode) -> "OnlineLyricsConfig":
        """Return a copy with a different sub-lyrics mode (used by CLI overrides)."""
        return replace(self, sub_lyrics_mode=mode)


def load_config(config_path: Path | None = None) -> OnlineLyricsConfig:
    """
    Load and validate configuration from config.yaml.

    Args:
        config_path: Optional explicit path to config file.
                     If None, looks for config.yaml in current working directory
                     and falls back to defaults when it is not there.

    Returns:
        OnlineLyricsConfig: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If an explicit config file is not found, cannot be read,
                     has invalid YAML syntax, or contains invalid values.

    Behavior:
        1. Locate config file (explicit path or CWD/config.yaml)
        2. Read and parse YAML content (an empty file means "all defaults")
        3. Validate top-level structure
        4. Parse 'netease' section, including legacy sub-lyrics keys
        5. Parse 'cache' section
        6. Create and return frozen OnlineLyricsConfig
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME
        if not config_path.exists():
            return OnlineLyricsConfig()
    elif not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except IOError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    if raw_config is None:
        return OnlineLyricsConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return parse_config(raw_config)


def parse_config(raw_config: dict[str, Any]) -> OnlineLyricsConfig:
    """
    Build a validated config from an already-parsed mapping.

    Args:
        raw_config: Dictionary parsed from config.yaml.

    Returns:
        OnlineLyricsConfig with defaults applied for missing fields.

    Raises:
        ConfigError: If a section is not a mapping or a field has a bad value.
    """
    enabled = raw_config.get("enabled", True)
    if not isinstance(enabled, bool):
        raise ConfigError(
            "'enabled' must be true or false",
            details={"field": "enabled", "value": enabled}
        )

    netease = _section(raw_config, "netease")
    cache = _section(raw_config, "cache")

    return OnlineLyricsConfig(
        enabled=enabled,
        sub_lyrics_mode=_parse_sub_lyrics_mode(netease),
        min_similarity=_parse_min_similarity(netease),
        max_candidates=_parse_max_candidates(netease),
        timeout_ms=_parse_timeout_ms(netease),
        cache_ttl_seconds=_parse_cache_ttl(cache),
    )


def _section(raw_config: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a config section, {} when absent."""
    section = raw_config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{name}' must be a dictionary",
            details={"section": name}
        )
    return section


def _parse_sub_lyrics_mode(netease: dict[str, Any]) -> SubLyricsMode:
    """
    Resolve the sub-lyrics mode, honoring the legacy boolean keys.

    Args:
        netease: The 'netease' section.

    Returns:
        SubLyricsMode from 'sub_lyrics', or from 'enable_translation' /
        'enable_romaji' when 'sub_lyrics' is absent.
    """
    raw_mode = netease.get("sub_lyrics")
    if raw_mode is not None:
        return SubLyricsMode.from_config_value(raw_mode)

    if netease.get("enable_translation") is True:
        return SubLyricsMode.TRANSLATION
    if netease.get("enable_romaji") is True:
        return SubLyricsMode.ROMAJI
    return SubLyricsMode.NONE


def _parse_min_similarity(netease: dict[str, Any]) -> float:
    value = netease.get("min_similarity", DEFAULT_MIN_SIMILARITY)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
        raise ConfigError(
            "'netease.min_similarity' must be a number between 0 and 1",
            details={"field": "netease.min_similarity", "value": value}
        )
    return float(value)


def _parse_max_candidates(netease: dict[str, Any]) -> int:
    value = netease.get("max_candidates", DEFAULT_MAX_CANDIDATES)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(
            "'netease.max_candidates' must be an integer",
            details={"field": "netease.max_candidates", "value": value}
        )
    return value


def _parse_timeout_ms(netease: dict[str, Any]) -> int:
    value = netease.get("timeout_ms", DEFAULT_TIMEOUT_MS)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(
            "'netease.timeout_ms' must be a positive integer",
            details={"field": "netease.timeout_ms", "value": value}
        )
    return value


def _parse_cache_ttl(cache: dict[str, Any]) -> float:
    value = cache.get("ttl_seconds", DEFAULT_CACHE_TTL_SECONDS)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise ConfigError(
            "'cache.ttl_seconds' must be a non-negative number",
            details={"field": "cache.ttl_seconds", "value": value}
        )
    return float(value)
