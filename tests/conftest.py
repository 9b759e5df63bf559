"""Test configuration and fixtures"""

import logging
from unittest.mock import Mock

import pytest

from online_lyrics.core.config import OnlineLyricsConfig, SubLyricsMode
from online_lyrics.core.logger import LyricsFailedTrackHandler, TqdmLoggingHandler
from online_lyrics.matching.models import LyricsQuery, SearchCandidate
from online_lyrics.providers.base import LyricsProvider, LyricsResult


class FakeProvider(LyricsProvider):
    """Provider returning a canned result and recording its calls"""

    def __init__(self, name="fake", result=None, error=None):
        self.name = name
        self.result = result
        self.error = error
        self.calls = []

    def fetch(self, query, config):
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return self.result


class FakeClock:
    """Manually advanced time source for cache tests"""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture(autouse=True)
def close_log_handlers():
    """Close handlers left on the root logger by setup_logging()"""
    yield
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        if isinstance(handler, (TqdmLoggingHandler, LyricsFailedTrackHandler, logging.FileHandler)):
            handler.close()
            root_logger.removeHandler(handler)


@pytest.fixture
def default_config():
    """Configuration with all defaults"""
    return OnlineLyricsConfig()


@pytest.fixture
def translation_config():
    """Configuration merging the translation"""
    return OnlineLyricsConfig(sub_lyrics_mode=SubLyricsMode.TRANSLATION)


@pytest.fixture
def lemon_query():
    """Query for a well-known track"""
    return LyricsQuery(title="Lemon", artist="米津玄師", album="Lemon")


@pytest.fixture
def netease_songs():
    """Songs as returned in result.songs by the NetEase cloudsearch endpoint"""
    return [
        {
            "id": 1001,
            "name": "Lemon (Cover)",
            "alia": [],
            "ar": [{"id": 1, "name": "Someone Else"}],
            "al": {"id": 10, "name": "Covers"},
        },
        {
            "id": 536622304,
            "name": "Lemon",
            "alia": ["柠檬"],
            "ar": [{"id": 2, "name": "米津玄師"}],
            "al": {"id": 20, "name": "Lemon"},
        },
        {
            "id": 1003,
            "name": "Orange",
            "alia": None,
            "ar": [{"id": 3, "name": "Nobody"}],
            "al": None,
        },
    ]


@pytest.fixture
def lemon_candidate():
    """Exact match for lemon_query"""
    return SearchCandidate(
        track_id=536622304,
        name="Lemon",
        aliases=("柠檬",),
        artists=("米津玄師",),
        album="Lemon",
    )


@pytest.fixture
def sample_result():
    """Provider result with translation and romanization"""
    return LyricsResult(
        lrc="[ti:Lemon]\n[00:01.00]夢ならばどれほどよかったでしょう\n[00:05.00]未だにあなたのことを夢にみる",
        translation_lrc="[00:01.00]如果这一切都是梦境该有多好\n[00:05.00]至今仍能与你在梦中相遇",
        romaji_lrc="[00:01.00]yume naraba dore hodo yokatta deshou\n[00:05.00]imada ni anata no koto wo yume ni miru",
        source="netease",
    )


@pytest.fixture
def fake_provider_factory():
    """Build FakeProvider instances"""
    return FakeProvider


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def make_response():
    """Build mock requests.Response objects"""
    def _make_response(status_code=200, payload=None, json_error=None):
        response = Mock()
        response.status_code = status_code
        if json_error is not None:
            response.json.side_effect = json_error
        else:
            response.json.return_value = payload
        return response
    return _make_response


@pytest.fixture
def mock_session():
    """Mock requests.Session; set .get.return_value or .get.side_effect per test"""
    return Mock()
