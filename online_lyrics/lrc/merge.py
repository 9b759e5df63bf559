"""
Merging of several LRC transcripts into one timeline.

Catalogs usually deliver the original lyrics, a translation and a
romanization as separate LRC texts sharing the same timestamps. Players
show a second line under the original when two lines carry the same
timestamp, so the merged output interleaves them:

    [00:12.30]夜に駆ける          <- base (original)
    [00:12.30]Racing into the night  <- companion (translation)

Merge Rules:
    1. No usable companion: return the base text untouched
    2. Base header lines (ID tags etc.) come first, in original order
    3. Every timestamp seen in any document, in time order
    4. Per timestamp: the base line first, then each companion in the
       given order, skipping companion lines identical to the base line
    5. Lines joined with "\\n", no trailing line break

Only timestamped lines of companions are used; their tags are dropped.
"""

from dataclasses import dataclass
from typing import Iterable

from online_lyrics.lrc.parser import (
    TimedLyricsDocument,
    parse_timed_lyrics,
    timestamp_sort_key,
)


@dataclass(frozen=True)
class MergeRequest:
    """
    Documents to merge.

    Attributes:
        base: Original-language transcript; anchors the output.
        companions: Secondary transcripts. Order decides the output order
                    of lines sharing a timestamp.
    """

    base: TimedLyricsDocument
    companions: tuple[TimedLyricsDocument, ...] = ()


def merge(request: MergeRequest, chronological: bool = True) -> str:
    """
    Merge base and companion documents into one LRC text.

    Args:
        request: Parsed base and companion documents.
        chronological: Order timestamps by time (default). False orders
                       them as plain strings, which is only correct when
                       every timestamp has the same digit widths.

    Returns:
        Merged LRC text, or request.base.raw_text unchanged when no
        companion has any timestamped line.
    """
    if all(companion.is_empty for companion in request.companions):
        return request.base.raw_text

    base_lines = request.base.lines
    result_lines = list(request.base.header_lines)

    all_timestamps = set(base_lines)
    for companion in request.companions:
        all_timestamps.update(companion.lines)

    sort_key = timestamp_sort_key if chronological else None
    for token in sorted(all_timestamps, key=sort_key):
        base = base_lines.get(token)
        if base:
            result_lines.append(token + base)

        for companion in request.companions:
            extra = companion.lines.get(token)
            if extra and extra != base:
                result_lines.append(token + extra)

    return "\n".join(result_lines)


def merge_timelines(
    base_raw_text: str,
    companion_raw_texts: Iterable[str],
    chronological: bool = True
) -> str:
    """
    Merge raw LRC texts.

    Args:
        base_raw_text: Original-language LRC text.
        companion_raw_texts: Translation/romanization LRC texts, in output order.
                             Blank texts are ignored.
        chronological: See merge().

    Returns:
        Merged LRC text; base_raw_text itself when there is nothing to merge.

    Example:
        merge_timelines("[00:01.00]Hello", ["[00:01.00]Hola"])
        -> "[00:01.00]Hello\\n[00:01.00]Hola"
    """
    companions = [text for text in companion_raw_texts if text.strip()]
    if not companions:
        return base_raw_text

    request = MergeRequest(
        base=parse_timed_lyrics(base_raw_text),
        companions=tuple(parse_timed_lyrics(text) for text in companions),
    )
    return merge(request, chronological=chronological)
