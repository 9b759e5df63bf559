"""
LRC (timestamped lyrics) handling for online-lyrics.

Components:
    - parser: Splits LRC text into header lines and timestamped lines
    - merge: Interleaves original, translation and romanization transcripts

Usage:
    from online_lyrics.lrc import merge_timelines, parse_timed_lyrics

    merged = merge_timelines(original_lrc, [translation_lrc])
"""

from online_lyrics.lrc.parser import (
    TIMESTAMP_PATTERN,
    TimedLyricsDocument,
    parse_timed_lyrics,
    split_lines,
    timestamp_sort_key,
)
from online_lyrics.lrc.merge import MergeRequest, merge, merge_timelines

__all__ = [
    # Parser
    "TIMESTAMP_PATTERN",
    "TimedLyricsDocument",
    "parse_timed_lyrics",
    "split_lines",
    "timestamp_sort_key",
    # Merge
    "MergeRequest",
    "merge",
    "merge_timelines",
]
