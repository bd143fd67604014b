"""Tests for ClientConfig, CacheConfig and ApliiqSettings."""

import pydantic
import pytest

from apliiq.core.config import (
    DEFAULT_ENDPOINT,
    DEFAULT_MAX_ENTRIES,
    DEFAULT_TIMEOUT_MS,
    ApliiqSettings,
    CacheConfig,
    ClientConfig,
)


def test_defaults():
    config = ClientConfig(app_id="app", shared_secret="secret")
    assert config.endpoint == DEFAULT_ENDPOINT
    assert config.timeout_ms == DEFAULT_TIMEOUT_MS
    assert config.timeout_seconds == 15.0
    assert config.cache is None
    assert config.cache_enabled is False


def test_camel_case_keys_are_accepted():
    config = ClientConfig.model_validate(
        {
            "appId": "app",
            "sharedSecret": "secret",
            "timeoutMs": 2000,
            "cache": {"enabled": True, "maxEntries": 10, "productTtlMs": 1000, "productBatchTtlMs": 3000},
        }
    )
    assert config.app_id == "app"
    assert config.timeout_ms == 2000
    assert config.cache.max_entries == 10
    assert config.cache.product_ttl_ms == 1000
    assert config.cache.product_batch_ttl_ms == 3000
    assert config.cache_enabled is True


def test_legacy_cache_option_names():
    cache = CacheConfig.model_validate({"enabled": True, "max": 50, "ttl": 60_000})
    assert cache.max_entries == 50
    assert cache.default_ttl_ms == 60_000


def test_cache_defaults():
    cache = CacheConfig()
    assert cache.enabled is False
    assert cache.max_entries == DEFAULT_MAX_ENTRIES
    assert cache.default_ttl_ms is None
    assert cache.stale_while_revalidate is False


def test_config_is_immutable():
    config = ClientConfig(app_id="app", shared_secret="secret")
    with pytest.raises(pydantic.ValidationError):
        config.app_id = "other"


def test_non_positive_ttl_rejected():
    with pytest.raises(pydantic.ValidationError):
        CacheConfig(enabled=True, default_ttl_ms=0)


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("APLIIQ_APP_ID", "env-app")
    monkeypatch.setenv("APLIIQ_SHARED_SECRET", "env-secret")
    monkeypatch.setenv("APLIIQ_TIMEOUT_MS", "5000")
    monkeypatch.setenv("APLIIQ_CACHE_ENABLED", "true")
    monkeypatch.setenv("APLIIQ_CACHE_PRODUCT_TTL_MS", "1000")

    config = ApliiqSettings(_env_file=None).to_client_config()

    assert config.app_id == "env-app"
    assert config.shared_secret == "env-secret"
    assert config.timeout_ms == 5000
    assert config.cache_enabled is True
    assert config.cache.product_ttl_ms == 1000
    assert config.cache.product_batch_ttl_ms is None
