"""
Candidate ranking for catalog search results.

Given the playing track's metadata and the songs returned by a catalog
search, this module computes a composite similarity per song, drops the
weak ones and returns a short, ordered list of songs worth fetching
lyrics for.

Scoring Algorithm:
    1. title_ratio  = best text_similarity(query.title, name) over the
                      song's primary name and aliases (0.0 if none)
    2. artist_ratio = artist_list_similarity(query.artist, song artists)
    3. album_ratio  = text_similarity(query.album, song album)
    4. ratio        = sqrt(title_ratio * (artist_ratio + album_ratio) / 2)

    The title acts as a gate (multiplicative); artist and album average
    each other out, so a wrong album can be compensated by a good artist
    match and vice versa.

Selection:
    - Drop candidates with ratio < min_similarity
    - Stable sort by ratio, highest first (ties keep search order)
    - Keep the first max_candidates (clamped into 1..10)

Consumption:
    The caller fetches lyrics for the shortlist strictly in order and
    stops at the first candidate that has lyrics.

The ranker is pure: no network access, no shared state.
"""

import math
from typing import Iterable

from online_lyrics.core.logger import get_logger
from online_lyrics.matching.models import LyricsQuery, ScoredCandidate, SearchCandidate
from online_lyrics.matching.similarity import artist_list_similarity, text_similarity


logger = get_logger(__name__)


# =============================================================================
# SHORTLIST LIMITS
# =============================================================================

# Bounds for max_candidates; each shortlisted song may cost one HTTP request
MIN_CANDIDATES = 1
MAX_CANDIDATES = 10


def clamp_max_candidates(max_candidates: int) -> int:
    """Clamp a configured shortlist size into [MIN_CANDIDATES, MAX_CANDIDATES]."""
    return max(MIN_CANDIDATES, min(MAX_CANDIDATES, max_candidates))


def score_candidate(query: LyricsQuery, candidate: SearchCandidate) -> float:
    """
    Composite similarity of a search result to the query.

    Args:
        query: Metadata of the playing track.
        candidate: One catalog search result.

    Returns:
        Ratio in [0.0, 1.0]. See the module docstring for the formula.
    """
    names = candidate.name_pool
    title_ratio = max(
        (text_similarity(query.title, name) for name in names),
        default=0.0
    )
    artist_ratio = artist_list_similarity(query.artist, candidate.artist_names)
    album_ratio = text_similarity(query.album, candidate.album)

    ratio = math.sqrt(title_ratio * (artist_ratio + album_ratio) / 2.0)

    logger.debug(
        f"Candidate {candidate.track_id} '{candidate.name}': "
        f"title={title_ratio:.3f} artist={artist_ratio:.3f} "
        f"album={album_ratio:.3f} -> {ratio:.3f}"
    )
    return ratio


def select_shortlist(
    scored: Iterable[ScoredCandidate],
    min_similarity: float,
    max_candidates: int
) -> list[ScoredCandidate]:
    """
    Filter, order and truncate already-scored candidates.

    Args:
        scored: Scored candidates in search order.
        min_similarity: Candidates with ratio below this are dropped.
        max_candidates: Shortlist size, clamped into 1..10.

    Returns:
        Candidates with ratio >= min_similarity, highest ratio first.
        Equal ratios keep their input order (sorted() is stable,
        including with reverse=True).
    """
    kept = [s for s in scored if s.ratio >= min_similarity]
    kept = sorted(kept, key=lambda s: s.ratio, reverse=True)
    return kept[:clamp_max_candidates(max_candidates)]


def rank_candidates(
    query: LyricsQuery,
    candidates: Iterable[SearchCandidate],
    min_similarity: float,
    max_candidates: int
) -> list[ScoredCandidate]:
    """
    Score search results against the query and return the shortlist.

    Args:
        query: Metadata of the playing track.
        candidates: Catalog search results in the order returned.
        min_similarity: Minimum composite ratio to be considered (0..1).
        max_candidates: Maximum shortlist size, clamped into 1..10.

    Returns:
        Ordered shortlist, possibly empty. Never raises for empty input.

    Example:
        shortlist = rank_candidates(query, candidates, 0.2, 3)
        for scored in shortlist:
            lyrics = client.fetch_lyrics(scored.track_id, timeout_ms)
            if lyrics:
                break
    """
    scored = [
        ScoredCandidate(candidate=candidate, ratio=score_candidate(query, candidate))
        for candidate in candidates
    ]
    shortlist = select_shortlist(scored, min_similarity, max_candidates)

    logger.debug(
        f"Ranked {len(scored)} candidates for '{query.title}': "
        f"{len(shortlist)} kept (min_similarity={min_similarity})"
    )
    return shortlist
