"""Caching for Apliiq catalog reads."""

from apliiq.infrastructure.cache.memory_cache import CacheEntry, ResponseCache
from apliiq.infrastructure.cache.policy import (
    PRODUCT_KEY_PREFIX,
    PRODUCTS_ALL_KEY,
    ResourceClass,
    product_key,
    select_ttl,
)

__all__ = [
    "CacheEntry",
    "PRODUCT_KEY_PREFIX",
    "PRODUCTS_ALL_KEY",
    "ResourceClass",
    "ResponseCache",
    "product_key",
    "select_ttl",
]
