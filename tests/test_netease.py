"""Test the NetEase client and provider"""

from unittest.mock import Mock

import pytest
import requests

from online_lyrics.core.config import OnlineLyricsConfig
from online_lyrics.core.exceptions import ProviderError
from online_lyrics.matching.models import LyricsQuery, SearchCandidate
from online_lyrics.providers.base import LyricsResult
from online_lyrics.providers.netease import (
    LYRIC_URL,
    SEARCH_URL,
    NeteaseClient,
    NeteaseLyricsProvider,
)


class TestNeteaseClientSearch:
    """Test NeteaseClient.search"""

    def test_request_parameters(self, mock_session, make_response):
        mock_session.get.return_value = make_response(payload={"result": {"songs": []}})
        client = NeteaseClient(session=mock_session)

        client.search("Lemon 米津玄師", timeout_ms=8000)

        mock_session.get.assert_called_once_with(
            SEARCH_URL,
            params={"s": "Lemon 米津玄師", "type": 1, "offset": 0, "limit": 100},
            timeout=8.0,
        )

    def test_parses_songs_in_order(self, mock_session, make_response, netease_songs):
        mock_session.get.return_value = make_response(payload={"result": {"songs": netease_songs}})
        client = NeteaseClient(session=mock_session)

        candidates = client.search("Lemon", timeout_ms=8000)

        assert [c.track_id for c in candidates] == [1001, 536622304, 1003]
        assert candidates[1] == SearchCandidate.from_netease_song(netease_songs[1])

    def test_skips_songs_without_id(self, mock_session, make_response):
        songs = [{"name": "No id"}, {"id": 5, "name": "Has id"}, "garbage"]
        mock_session.get.return_value = make_response(payload={"result": {"songs": songs}})
        client = NeteaseClient(session=mock_session)

        candidates = client.search("x", timeout_ms=1000)

        assert [c.track_id for c in candidates] == [5]

    @pytest.mark.parametrize("payload", [{}, {"result": None}, {"result": {}}, {"result": {"songs": None}}])
    def test_no_songs(self, mock_session, make_response, payload):
        mock_session.get.return_value = make_response(payload=payload)
        client = NeteaseClient(session=mock_session)

        assert client.search("x", timeout_ms=1000) == []


class TestNeteaseClientFetchLyrics:
    """Test NeteaseClient.fetch_lyrics"""

    def test_request_parameters(self, mock_session, make_response):
        mock_session.get.return_value = make_response(payload={"lrc": {"lyric": "[00:01.00]A"}})
        client = NeteaseClient(session=mock_session)

        client.fetch_lyrics(536622304, timeout_ms=2500)

        mock_session.get.assert_called_once_with(
            LYRIC_URL,
            params={"id": 536622304, "lv": 1, "tv": 1, "rv": 1},
            timeout=2.5,
        )

    def test_all_transcripts(self, mock_session, make_response):
        mock_session.get.return_value = make_response(payload={
            "lrc": {"lyric": "[00:01.00]夢"},
            "tlyric": {"lyric": "[00:01.00]梦"},
            "romalrc": {"lyric": "[00:01.00]yume"},
        })
        client = NeteaseClient(session=mock_session)

        result = client.fetch_lyrics(1, timeout_ms=1000)

        assert result == LyricsResult(
            lrc="[00:01.00]夢",
            translation_lrc="[00:01.00]梦",
            romaji_lrc="[00:01.00]yume",
            source="netease",
        )

    def test_missing_companions_are_none(self, mock_session, make_response):
        mock_session.get.return_value = make_response(payload={
            "lrc": {"lyric": "[00:01.00]A"},
            "tlyric": None,
        })
        client = NeteaseClient(session=mock_session)

        result = client.fetch_lyrics(1, timeout_ms=1000)

        assert result.translation_lrc is None
        assert result.romaji_lrc is None

    @pytest.mark.parametrize("payload", [
        {"nolyric": True},
        {"lrc": None},
        {"lrc": {"lyric": ""}},
        {"lrc": {"lyric": "  \n"}},
        {"lrc": {"lyric": None}},
    ])
    def test_no_original_lyrics(self, mock_session, make_response, payload):
        mock_session.get.return_value = make_response(payload=payload)
        client = NeteaseClient(session=mock_session)

        assert client.fetch_lyrics(1, timeout_ms=1000) is None


class TestNeteaseClientErrors:
    """Test error mapping to ProviderError"""

    @pytest.mark.parametrize("error", [
        requests.exceptions.Timeout("timed out"),
        requests.exceptions.ConnectionError("refused"),
    ])
    def test_transient_network_errors(self, mock_session, error):
        mock_session.get.side_effect = error
        client = NeteaseClient(session=mock_session)

        with pytest.raises(ProviderError) as exc_info:
            client.search("x", timeout_ms=1000)

        assert exc_info.value.is_transient is True
        assert exc_info.value.details["url"] == SEARCH_URL

    def test_other_request_errors(self, mock_session):
        mock_session.get.side_effect = requests.exceptions.TooManyRedirects("loop")
        client = NeteaseClient(session=mock_session)

        with pytest.raises(ProviderError) as exc_info:
            client.fetch_lyrics(1, timeout_ms=1000)

        assert exc_info.value.is_transient is False

    @pytest.mark.parametrize("status,transient", [(404, False), (403, False), (429, True), (503, True)])
    def test_http_status(self, mock_session, make_response, status, transient):
        mock_session.get.return_value = make_response(status_code=status)
        client = NeteaseClient(session=mock_session)

        with pytest.raises(ProviderError) as exc_info:
            client.search("x", timeout_ms=1000)

        assert exc_info.value.is_transient is transient
        assert exc_info.value.details["status_code"] == status

    def test_invalid_json(self, mock_session, make_response):
        mock_session.get.return_value = make_response(json_error=ValueError("Expecting value"))
        client = NeteaseClient(session=mock_session)

        with pytest.raises(ProviderError, match="invalid JSON"):
            client.search("x", timeout_ms=1000)

    def test_json_not_an_object(self, mock_session, make_response):
        mock_session.get.return_value = make_response(payload=[1, 2, 3])
        client = NeteaseClient(session=mock_session)

        with pytest.raises(ProviderError):
            client.fetch_lyrics(1, timeout_ms=1000)


class TestNeteaseClientSession:
    """Test default session setup"""

    def test_default_headers(self):
        client = NeteaseClient()

        assert client._session.headers["X-Real-IP"] == "118.88.88.88"
        assert client._session.headers["Referer"] == "https://music.163.com"


class TestNeteaseLyricsProvider:
    """Test search, rank, fetch workflow"""

    @pytest.fixture
    def client(self, netease_songs):
        client = Mock(spec=NeteaseClient)
        client.search.return_value = [SearchCandidate.from_netease_song(s) for s in netease_songs]
        return client

    def test_fetches_best_candidate(self, client, lemon_query, default_config, sample_result):
        client.fetch_lyrics.return_value = sample_result
        provider = NeteaseLyricsProvider(client=client)

        result = provider.fetch(lemon_query, default_config)

        assert result is sample_result
        client.search.assert_called_once_with("Lemon 米津玄師 Lemon", 8000)
        client.fetch_lyrics.assert_called_once_with(536622304, 8000)

    def test_failed_candidate_is_skipped(self, client, lemon_query, sample_result):
        client.fetch_lyrics.side_effect = [ProviderError("boom"), sample_result]
        config = OnlineLyricsConfig(min_similarity=0.0)
        provider = NeteaseLyricsProvider(client=client)

        result = provider.fetch(lemon_query, config)

        assert result is sample_result
        assert client.fetch_lyrics.call_count == 2

    def test_candidate_without_lyrics_is_skipped(self, client, lemon_query, sample_result):
        client.fetch_lyrics.side_effect = [None, sample_result]
        config = OnlineLyricsConfig(min_similarity=0.0)
        provider = NeteaseLyricsProvider(client=client)

        assert provider.fetch(lemon_query, config) is sample_result

    def test_stops_after_max_candidates(self, client, lemon_query):
        client.fetch_lyrics.return_value = None
        config = OnlineLyricsConfig(min_similarity=0.0, max_candidates=2)
        provider = NeteaseLyricsProvider(client=client)

        assert provider.fetch(lemon_query, config) is None
        assert client.fetch_lyrics.call_count == 2

    def test_no_search_results(self, client, lemon_query, default_config):
        client.search.return_value = []
        provider = NeteaseLyricsProvider(client=client)

        assert provider.fetch(lemon_query, default_config) is None
        client.fetch_lyrics.assert_not_called()

    def test_nothing_above_threshold(self, client, default_config):
        query = LyricsQuery(title="Completely Different", artist="Unknown Band")
        client.search.return_value = [SearchCandidate(track_id=9, name="zzz", artists=("qqq",))]
        provider = NeteaseLyricsProvider(client=client)

        assert provider.fetch(query, default_config) is None
        client.fetch_lyrics.assert_not_called()

    def test_search_error_propagates(self, client, lemon_query, default_config):
        client.search.side_effect = ProviderError("down", is_transient=True)
        provider = NeteaseLyricsProvider(client=client)

        with pytest.raises(ProviderError):
            provider.fetch(lemon_query, default_config)

    def test_name(self):
        assert NeteaseLyricsProvider.name == "netease"
