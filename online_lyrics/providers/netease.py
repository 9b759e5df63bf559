"""
NetEase Cloud Music lyrics provider.

This module talks to the public music.163.com web API: search for the
track, rank the results against the query, then fetch lyrics for the
best candidates until one has them.

API Endpoints:
    Search: /api/cloudsearch/pc?s=<query>&type=1&offset=0&limit=100
        -> result.songs[] with id, name, alia[], ar[].name, al.name
    Lyrics: /api/song/lyric?id=<id>&lv=1&tv=1&rv=1
        -> lrc.lyric      original
        -> tlyric.lyric   translation (optional)
        -> romalrc.lyric  romanization (optional)

Matching Workflow:
    1. Search with "title artist album" (blank fields left out)
    2. Convert songs to SearchCandidate objects
    3. rank_candidates() with the configured threshold and Top-N
    4. Fetch lyrics for each shortlisted song in order
    5. Return the first non-blank result, or None

Dependencies:
    - requests: HTTP session, timeouts, gzip decoding

Usage:
    provider = NeteaseLyricsProvider()
    result = provider.fetch(query, config)
    if result:
        print(result.lrc)
"""

from typing import Any

import requests

from online_lyrics.core.config import OnlineLyricsConfig
from online_lyrics.core.exceptions import ProviderError
from online_lyrics.core.logger import get_logger
from online_lyrics.matching.models import LyricsQuery, SearchCandidate
from online_lyrics.matching.ranker import rank_candidates
from online_lyrics.providers.base import LyricsProvider, LyricsResult


logger = get_logger(__name__)


# =============================================================================
# API CONFIGURATION
# =============================================================================

BASE_URL = "https://music.163.com"
SEARCH_URL = f"{BASE_URL}/api/cloudsearch/pc"
LYRIC_URL = f"{BASE_URL}/api/song/lyric"

# Songs requested per search; ranking happens locally
SEARCH_LIMIT = 100

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/129.0.0.0 Safari/537.36 Edg/129.0.0.0"
)

DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Origin": BASE_URL,
    "Referer": BASE_URL,
    "X-Real-IP": "118.88.88.88",
    "Accept": "application/json",
    "Accept-Encoding": "gzip",
}

# HTTP status codes worth retrying later
TRANSIENT_STATUS_CODES = (429, 500, 502, 503, 504)


class NeteaseClient:
    """
    Thin HTTP client for the NetEase search and lyric endpoints.

    Every failure (connection, timeout, HTTP status, invalid JSON) is
    raised as ProviderError; deciding whether to continue is left to the
    caller.

    Attributes:
        _session: requests.Session carrying the NetEase headers.
    """

    def __init__(self, session: requests.Session | None = None) -> None:
        """
        Args:
            session: Optional pre-built session (tests pass a mock).
                     A new session with DEFAULT_HEADERS is created otherwise.
        """
        if session is None:
            session = requests.Session()
            session.headers.update(DEFAULT_HEADERS)
        self._session = session

    def search(self, query_text: str, timeout_ms: int) -> list[SearchCandidate]:
        """
        Search songs by free text.

        Args:
            query_text: Search string, typically "title artist album".
            timeout_ms: Connect/read timeout in milliseconds.

        Returns:
            Candidates in the order NetEase returned them. Empty when the
            response has no songs.

        Raises:
            ProviderError: On network, HTTP or decoding failure.
        """
        payload = self._get_json(
            SEARCH_URL,
            params={"s": query_text, "type": 1, "offset": 0, "limit": SEARCH_LIMIT},
            timeout_ms=timeout_ms,
        )

        result = payload.get("result") or {}
        songs = result.get("songs") if isinstance(result, dict) else None
        if not isinstance(songs, list):
            return []

        candidates = []
        for song in songs:
            if not isinstance(song, dict) or song.get("id") is None:
                continue
            candidates.append(SearchCandidate.from_netease_song(song))
        return candidates

    def fetch_lyrics(self, track_id: Any, timeout_ms: int) -> LyricsResult | None:
        """
        Fetch original, translated and romanized lyrics for one song.

        Args:
            track_id: NetEase song id.
            timeout_ms: Connect/read timeout in milliseconds.

        Returns:
            LyricsResult, or None if the song has no original lyrics.

        Raises:
            ProviderError: On network, HTTP or decoding failure.
        """
        payload = self._get_json(
            LYRIC_URL,
            params={"id": track_id, "lv": 1, "tv": 1, "rv": 1},
            timeout_ms=timeout_ms,
        )

        lrc = _lyric_field(payload, "lrc")
        if not lrc or not lrc.strip():
            return None

        return LyricsResult(
            lrc=lrc,
            translation_lrc=_lyric_field(payload, "tlyric"),
            romaji_lrc=_lyric_field(payload, "romalrc"),
            source=NeteaseLyricsProvider.name,
        )

    def _get_json(self, url: str, params: dict[str, Any], timeout_ms: int) -> dict[str, Any]:
        """
        GET a URL and decode the JSON object body.

        Raises:
            ProviderError: With is_transient set for timeouts, connection
                           errors, 429 and 5xx responses.
        """
        timeout = timeout_ms / 1000.0

        try:
            response = self._session.get(url, params=params, timeout=timeout)
        except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as e:
            raise ProviderError(
                f"NetEase request failed: {e}",
                details={"url": url, "original_error": str(e)},
                is_transient=True
            ) from e
        except requests.exceptions.RequestException as e:
            raise ProviderError(
                f"NetEase request failed: {e}",
                details={"url": url, "original_error": str(e)}
            ) from e

        if not 200 <= response.status_code < 300:
            raise ProviderError(
                f"NetEase returned HTTP {response.status_code}",
                details={"url": url, "status_code": response.status_code},
                is_transient=response.status_code in TRANSIENT_STATUS_CODES
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(
                f"NetEase returned invalid JSON: {e}",
                details={"url": url, "original_error": str(e)}
            ) from e

        if not isinstance(data, dict):
            raise ProviderError(
                "NetEase returned an unexpected JSON document",
                details={"url": url}
            )
        return data


def _lyric_field(payload: dict[str, Any], key: str) -> str | None:
    """Read payload[key]['lyric'], tolerating missing or null levels."""
    section = payload.get(key)
    if not isinstance(section, dict):
        return None
    lyric = section.get("lyric")
    return lyric if isinstance(lyric, str) else None


class NeteaseLyricsProvider(LyricsProvider):
    """
    Lyrics provider backed by NetEase Cloud Music.

    Thread Safety:
        fetch() keeps no per-call state on the instance. requests.Session
        is shared, which is fine for plain GET requests.

    Example:
        provider = NeteaseLyricsProvider()
        result = provider.fetch(LyricsQuery("晴天", "周杰伦", "叶惠美"), config)
    """

    name = "netease"

    def __init__(self, client: NeteaseClient | None = None) -> None:
        self._client = client or NeteaseClient()

    def fetch(self, query: LyricsQuery, config: OnlineLyricsConfig) -> LyricsResult | None:
        """
        Search, rank and fetch lyrics for the best matching song.

        Args:
            query: Metadata of the track.
            config: Supplies min_similarity, max_candidates and timeout_ms.

        Returns:
            First LyricsResult found among the shortlisted songs, or None.

        Raises:
            ProviderError: If the search request itself fails. Failures
                           fetching a single candidate's lyrics are logged
                           and that candidate is skipped.
        """
        logger.debug(f"NetEase search: {query.search_text}")
        candidates = self._client.search(query.search_text, config.timeout_ms)
        if not candidates:
            logger.debug(f"NetEase search returned no songs for: {query.search_text}")
            return None

        shortlist = rank_candidates(
            query,
            candidates,
            min_similarity=config.min_similarity,
            max_candidates=config.max_candidates,
        )
        if not shortlist:
            logger.info(
                f"No NetEase result above similarity {config.min_similarity} "
                f"for: {query.artist} - {query.title}"
            )
            return None

        for scored in shortlist:
            try:
                result = self._client.fetch_lyrics(scored.track_id, config.timeout_ms)
            except ProviderError as e:
                logger.warning(f"Skipping NetEase song {scored.track_id}: {e}")
                continue

            if result is not None:
                logger.debug(
                    f"Lyrics found on NetEase: {scored.candidate.name} "
                    f"(id={scored.track_id}, ratio={scored.ratio:.3f})"
                )
                return result

            logger.debug(f"NetEase song {scored.track_id} has no lyrics")

        return None
