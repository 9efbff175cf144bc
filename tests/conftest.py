"""
Shared pytest fixtures and configuration.
"""
import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from app.main import app
from app.config import CustomSettings
from app.dependencies import get_access_gate, get_playlist_cache
from app.services.access_gate import AccessGate
from app.services.playlist_cache_service import PlaylistCache


SOURCE_URL = "http://upstream.example/playlist.m3u"

SAMPLE_PLAYLIST = (
    "#EXTM3U\n"
    '#EXTINF:-1 tvg-id="news.id" tvg-name="News" tvg-logo="http://logo/news.png" group-title="News",News HD\n'
    "http://stream/1\n"
    '#EXTINF:-1 tvg-id="sport.id",Sport {{username}}\n'
    "http://stream/2?u={{username}}&p={{password}}\n"
)


class FakeClock:
    """Controllable millisecond clock."""

    def __init__(self, now_ms: int = 1_000_000):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fetcher():
    """Stub upstream returning the sample playlist."""
    return AsyncMock(return_value=(200, SAMPLE_PLAYLIST))


@pytest.fixture
def playlist_cache(fetcher, clock):
    return PlaylistCache(SOURCE_URL, fetcher, ttl_ms=60_000, clock=clock)


@pytest.fixture
def open_gate():
    return AccessGate({})


@pytest.fixture
def restricted_gate():
    return AccessGate({"alice": "secret"})


@pytest.fixture
def override_dependencies(playlist_cache):
    """Override FastAPI dependencies for testing; yields a setter for the gate."""
    gates = {"gate": AccessGate({})}

    app.dependency_overrides[get_playlist_cache] = lambda: playlist_cache
    app.dependency_overrides[get_access_gate] = lambda: gates["gate"]

    def set_gate(gate: AccessGate) -> None:
        gates["gate"] = gate

    yield set_gate

    # Clean up
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def sample_playlist():
    return SAMPLE_PLAYLIST


@pytest.fixture
def unconfigured_cache(fetcher, clock):
    """Cache with no source URL, as built when SOURCE_M3U_URL is missing."""
    return PlaylistCache(None, fetcher, clock=clock)


@pytest.fixture
def unconfigured_settings(monkeypatch):
    monkeypatch.delenv("SOURCE_M3U_URL", raising=False)
    return CustomSettings(_env_file=None, source_m3u_url=None)
