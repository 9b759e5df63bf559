"""
String similarity for matching track metadata against search results.

The scores here are tuned to be "good enough" for picking the right song
out of a catalog result page. They are not a general fuzzy matching
algorithm.

text_similarity combines two signals:
    - common ratio: longest common (contiguous) substring length divided
      by the length of the query text
    - duplicate rate: Jaccard index of the two distinct-character sets

    score = common_ratio * sqrt(duplicate_rate) ** (1 / 1.5)

The query side is always the first argument. An empty query field means
"unknown" and scores a neutral 0.5 so that, for example, a missing album
neither rewards nor disqualifies a candidate.
"""

import math
import re


# Separators between artist names: ASCII and full-width comma, backslash,
# ampersand, space, plus, pipe, ideographic comma and slash
ARTIST_SEPARATOR_PATTERN = re.compile(r"[,\\& +|、，/]+")

# Returned when the query side of a comparison is empty
UNKNOWN_FIELD_SCORE = 0.5


def longest_common_substring_length(a: str, b: str) -> int:
    """
    Length of the longest contiguous run of characters shared by a and b.

    Dynamic programming over two rolling rows sized by the shorter string,
    so memory is O(min(len(a), len(b))).

    Examples:
        longest_common_substring_length("abcdef", "zcdez") -> 3  ("cde")
        longest_common_substring_length("abc", "xyz")      -> 0
    """
    if not a or not b:
        return 0

    # Keep the shorter string on the inner loop
    if len(b) > len(a):
        a, b = b, a

    n = len(b)
    previous = [0] * (n + 1)
    current = [0] * (n + 1)
    max_length = 0

    for ca in a:
        for j in range(1, n + 1):
            if ca == b[j - 1]:
                current[j] = previous[j - 1] + 1
                if current[j] > max_length:
                    max_length = current[j]
            else:
                current[j] = 0
        previous, current = current, previous

    return max_length


def duplicate_rate(a: str, b: str) -> float:
    """
    Jaccard index of the distinct characters of a and b.

    Returns:
        1.0 if both strings are empty, 0.0 if exactly one is empty,
        otherwise |chars(a) & chars(b)| / |chars(a) | chars(b)|.
    """
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0

    set_a = set(a)
    set_b = set(b)
    return len(set_a & set_b) / len(set_a | set_b)


def text_similarity(a: str, b: str) -> float:
    """
    Similarity of candidate text b to query text a, in [0.0, 1.0].

    Args:
        a: Query-side text (title, album or a single artist token).
        b: Candidate-side text.

    Returns:
        0.5 if a is empty, 0.0 if b is empty, otherwise the case-insensitive
        score described in the module docstring.
    """
    if not a:
        return UNKNOWN_FIELD_SCORE
    if not b:
        return 0.0

    a = a.lower()
    b = b.lower()

    common_ratio = longest_common_substring_length(a, b) / len(a)
    return common_ratio * math.sqrt(duplicate_rate(a, b)) ** (1 / 1.5)


def split_artists(text: str) -> list[str]:
    """
    Split an artist string into individual names.

    Example:
        split_artists("YOASOBI、Ayase / ikura") -> ["YOASOBI", "Ayase", "ikura"]
    """
    return [token for token in ARTIST_SEPARATOR_PATTERN.split(text) if token.strip()]


def artist_list_similarity(a: str, b: str) -> float:
    """
    How well the candidate's artists b cover the query's artists a.

    Each query token is scored against its best-matching candidate token
    and the scores are averaged over the query tokens. The comparison is
    asymmetric: extra candidate artists do not lower the score.

    Args:
        a: Query artist string.
        b: Candidate artist string (names joined by spaces).

    Returns:
        0.5 if a is empty, 0.0 if either side has no tokens after splitting,
        otherwise the mean best-match score in [0.0, 1.0].
    """
    if not a:
        return UNKNOWN_FIELD_SCORE

    query_tokens = split_artists(a)
    candidate_tokens = split_artists(b)
    if not query_tokens or not candidate_tokens:
        return 0.0

    total = 0.0
    for token in query_tokens:
        total += max(text_similarity(token, candidate) for candidate in candidate_tokens)
    return total / len(query_tokens)


# Short names matching the public entry points
similarity = text_similarity
artist_similarity = artist_list_similarity
