"""Tests for cache key derivation and TTL tier selection."""

from apliiq.core.config import FALLBACK_TTL_MS, CacheConfig
from apliiq.infrastructure.cache.policy import (
    PRODUCTS_ALL_KEY,
    ResourceClass,
    product_key,
    select_ttl,
)


def test_keys():
    assert product_key(162) == "product:162"
    assert PRODUCTS_ALL_KEY == "products:all"


def test_per_call_override_wins():
    config = CacheConfig(enabled=True, default_ttl_ms=10, product_ttl_ms=20)
    assert select_ttl(config, ResourceClass.PRODUCT, override_ms=5) == 5


def test_resource_class_override_beats_default():
    config = CacheConfig(enabled=True, default_ttl_ms=10, product_ttl_ms=20, product_batch_ttl_ms=30)
    assert select_ttl(config, ResourceClass.PRODUCT) == 20
    assert select_ttl(config, ResourceClass.PRODUCT_LIST) == 30


def test_default_ttl_when_no_class_override():
    config = CacheConfig(enabled=True, default_ttl_ms=10, product_ttl_ms=20)
    assert select_ttl(config, ResourceClass.PRODUCT_LIST) == 10


def test_fallback_is_five_minutes():
    assert FALLBACK_TTL_MS == 300_000
    assert select_ttl(CacheConfig(enabled=True), ResourceClass.PRODUCT) == FALLBACK_TTL_MS
    assert select_ttl(None, ResourceClass.PRODUCT_LIST) == FALLBACK_TTL_MS
