"""
Cache keys and TTL tiers for catalog reads.

Keys share one namespace: ``product:<id>`` for single products and
``products:all`` for the full list. Product IDs are integers, so they
never collide with the literal ``all``.

TTL precedence, highest first: per-call override, resource-class override
(``product_ttl_ms`` / ``product_batch_ttl_ms``), ``default_ttl_ms``,
then five minutes.
"""
from enum import Enum
from typing import Optional, Union

from apliiq.core.config import FALLBACK_TTL_MS, CacheConfig

PRODUCT_KEY_PREFIX = "product:"
PRODUCTS_ALL_KEY = "products:all"


class ResourceClass(str, Enum):
    PRODUCT = "product"
    PRODUCT_LIST = "product_list"


def product_key(product_id: Union[int, str]) -> str:
    return f"{PRODUCT_KEY_PREFIX}{product_id}"


def select_ttl(
    config: Optional[CacheConfig],
    resource: ResourceClass,
    override_ms: Optional[int] = None,
) -> int:
    """
    Pick the TTL for an entry.

    Args:
        config: Cache block of the client configuration
        resource: Kind of entry being cached
        override_ms: Per-call TTL override

    Returns:
        TTL in milliseconds
    """
    if override_ms is not None:
        return override_ms
    if config is None:
        return FALLBACK_TTL_MS

    if resource is ResourceClass.PRODUCT and config.product_ttl_ms is not None:
        return config.product_ttl_ms
    if resource is ResourceClass.PRODUCT_LIST and config.product_batch_ttl_ms is not None:
        return config.product_batch_ttl_ms
    if config.default_ttl_ms is not None:
        return config.default_ttl_ms
    return FALLBACK_TTL_MS
