"""
Track matching module for online-lyrics.

This module decides which catalog search result is the playing track.

Components:
    - LyricsQuery: Metadata of the track to look up
    - SearchCandidate / ScoredCandidate: Catalog results before/after scoring
    - similarity: Text and artist-list similarity scores
    - ranker: Composite scoring, threshold filtering and shortlist selection

Usage:
    from online_lyrics.matching import LyricsQuery, rank_candidates

    query = LyricsQuery.from_metadata("Lemon", "米津玄師", "STRAY SHEEP")
    shortlist = rank_candidates(query, candidates, min_similarity=0.2, max_candidates=3)
"""

from online_lyrics.matching.models import LyricsQuery, ScoredCandidate, SearchCandidate
from online_lyrics.matching.similarity import (
    artist_list_similarity,
    artist_similarity,
    duplicate_rate,
    longest_common_substring_length,
    similarity,
    split_artists,
    text_similarity,
)
from online_lyrics.matching.ranker import (
    clamp_max_candidates,
    rank_candidates,
    score_candidate,
    select_shortlist,
)

__all__ = [
    # Models
    "LyricsQuery",
    "SearchCandidate",
    "ScoredCandidate",
    # Similarity
    "text_similarity",
    "artist_list_similarity",
    "similarity",
    "artist_similarity",
    "longest_common_substring_length",
    "duplicate_rate",
    "split_artists",
    # Ranker
    "score_candidate",
    "select_shortlist",
    "rank_candidates",
    "clamp_max_candidates",
]
