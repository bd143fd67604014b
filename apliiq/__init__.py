"""
Apliiq client - typed async client for the Apliiq print-on-demand API.

Signs every request, validates catalog and order payloads, and caches
catalog reads in memory.
"""

from apliiq.client import ApliiqClient
from apliiq.core.config import ApliiqSettings, CacheConfig, ClientConfig
from apliiq.core.exceptions import (
    ApliiqError,
    ConfigurationError,
    TransportError,
    UnknownError,
    ValidationError,
)
from apliiq.domain.models import ApliiqOrder, ApliiqOrderResponse, Product

__version__ = "0.1.0"

__all__ = [
    "ApliiqClient",
    "ApliiqError",
    "ApliiqOrder",
    "ApliiqOrderResponse",
    "ApliiqSettings",
    "CacheConfig",
    "ClientConfig",
    "ConfigurationError",
    "Product",
    "TransportError",
    "UnknownError",
    "ValidationError",
]
