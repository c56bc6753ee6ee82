"""
Shared pytest fixtures for the smarters test suite.
"""

import os

# Kivy parses sys.argv on import unless told not to.
os.environ.setdefault("KIVY_NO_ARGS", "1")
os.environ.setdefault("KIVY_NO_CONSOLELOG", "1")
os.environ.setdefault("KIVY_NO_FILELOG", "1")

from typing import Callable, Dict, List

import pytest

from smarters.errors import TransportFailure
from smarters.session import PlaylistSession


SAMPLE_PLAYLIST = """#EXTM3U
#EXTINF:-1 tvg-id="cnn" tvg-logo="http://logos/cnn.png" group-title="News",CNN
http://streams/cnn.m3u8
#EXTINF:-1 group-title="Sports",ESPN
#EXTVLCOPT:http-user-agent=VLC
http://streams/espn.m3u8
http://streams/bare.ts
"""


class FakeFetcher:
    """Returns canned bodies or raises canned errors per URL."""

    def __init__(self, responses: Dict[str, object] | None = None):
        self.responses: Dict[str, object] = dict(responses or {})
        self.calls: List[str] = []

    def fetch(self, url: str) -> str:
        self.calls.append(url)
        result = self.responses.get(url)
        if result is None:
            raise TransportFailure("Failed to load playlist: 404", status_code=404)
        if isinstance(result, Exception):
            raise result
        return result


class DeferredRunner:
    """Queues background jobs so tests decide when each one completes."""

    def __init__(self):
        self.jobs: List[Callable[[], None]] = []

    def __call__(self, job: Callable[[], None]) -> None:
        self.jobs.append(job)

    def run(self, index: int) -> None:
        self.jobs[index]()


@pytest.fixture
def sample_playlist() -> str:
    return SAMPLE_PLAYLIST


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def session(fake_fetcher: FakeFetcher) -> PlaylistSession:
    """
    Session that runs loads inline on the calling thread.
    """
    return PlaylistSession(fetcher=fake_fetcher, runner=lambda job: job())


@pytest.fixture
def deferred_runner() -> DeferredRunner:
    return DeferredRunner()


@pytest.fixture
def deferred_session(fake_fetcher: FakeFetcher, deferred_runner: DeferredRunner) -> PlaylistSession:
    return PlaylistSession(fetcher=fake_fetcher, runner=deferred_runner)
