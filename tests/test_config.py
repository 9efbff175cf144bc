"""
Unit tests for settings validation.
"""
import pytest
from pydantic import ValidationError

from app.config import CustomSettings, ensure_source_configured
from app.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SOURCE_M3U_URL", "ALLOW_USERS", "CACHE_TTL_MS", "UPSTREAM_TIMEOUT_SEC", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = CustomSettings(_env_file=None)

    assert config.source_m3u_url is None
    assert config.allow_users == ""
    assert config.cache_ttl_ms == 300_000
    assert config.upstream_timeout_sec == 30.0
    assert config.log_level == "INFO"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("SOURCE_M3U_URL", "https://example.com/list.m3u")
    monkeypatch.setenv("CACHE_TTL_MS", "1000")
    monkeypatch.setenv("ALLOW_USERS", "alice:secret")

    config = CustomSettings(_env_file=None)

    assert config.source_m3u_url == "https://example.com/list.m3u"
    assert config.cache_ttl_ms == 1000
    assert config.allow_users == "alice:secret"


def test_blank_source_url_is_not_configured():
    config = CustomSettings(_env_file=None, source_m3u_url="   ")

    assert config.source_m3u_url is None
    with pytest.raises(ConfigurationError):
        ensure_source_configured(config)


def test_source_url_is_trimmed():
    config = CustomSettings(_env_file=None, source_m3u_url=" http://example.com/a.m3u ")

    assert ensure_source_configured(config) == "http://example.com/a.m3u"


def test_non_http_source_url_rejected():
    with pytest.raises(ValidationError):
        CustomSettings(_env_file=None, source_m3u_url="ftp://example.com/list.m3u")


def test_negative_cache_ttl_rejected():
    with pytest.raises(ValidationError):
        CustomSettings(_env_file=None, cache_ttl_ms=-1)


def test_zero_cache_ttl_allowed():
    assert CustomSettings(_env_file=None, cache_ttl_ms=0).cache_ttl_ms == 0


def test_non_positive_timeout_rejected():
    with pytest.raises(ValidationError):
        CustomSettings(_env_file=None, upstream_timeout_sec=0)


def test_log_level_normalized():
    assert CustomSettings(_env_file=None, log_level="debug").log_level == "DEBUG"


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        CustomSettings(_env_file=None, log_level="verbose")
