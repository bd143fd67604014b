import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from apliiq.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ENDPOINT = "https://api.apliiq.com/v1"
DEFAULT_TIMEOUT_MS = 15_000
DEFAULT_MAX_ENTRIES = 1000
FALLBACK_TTL_MS = 5 * 60 * 1000


class CacheConfig(BaseModel):
    """Cache block of the client configuration.

    TTL tiers: ``default_ttl_ms`` applies to every entry, ``product_ttl_ms``
    overrides it for single-product entries and ``product_batch_ttl_ms`` for
    the product-list entry.
    """

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    max_entries: int = Field(
        default=DEFAULT_MAX_ENTRIES,
        gt=0,
        validation_alias=AliasChoices("max_entries", "maxEntries", "max"),
    )
    default_ttl_ms: Optional[int] = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("default_ttl_ms", "defaultTtlMs", "ttl"),
    )
    stale_while_revalidate: bool = Field(
        default=False,
        validation_alias=AliasChoices("stale_while_revalidate", "staleWhileRevalidate"),
    )
    product_ttl_ms: Optional[int] = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("product_ttl_ms", "productTtlMs"),
    )
    product_batch_ttl_ms: Optional[int] = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("product_batch_ttl_ms", "productBatchTtlMs"),
    )


class ClientConfig(BaseModel):
    """Immutable configuration owned by an ``ApliiqClient`` for its lifetime."""

    model_config = ConfigDict(frozen=True)

    app_id: str = Field(validation_alias=AliasChoices("app_id", "appId"))
    shared_secret: str = Field(validation_alias=AliasChoices("shared_secret", "sharedSecret"))
    endpoint: str = DEFAULT_ENDPOINT
    timeout_ms: int = Field(
        default=DEFAULT_TIMEOUT_MS,
        gt=0,
        validation_alias=AliasChoices("timeout_ms", "timeoutMs", "timeout"),
    )
    cache: Optional[CacheConfig] = None

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @property
    def cache_enabled(self) -> bool:
        return self.cache is not None and self.cache.enabled


class ApliiqSettings(BaseSettings):
    """Client settings loaded from ``APLIIQ_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="APLIIQ_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Credentials
    app_id: str = ""
    shared_secret: str = ""

    # Transport
    endpoint: str = DEFAULT_ENDPOINT
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    # Cache
    cache_enabled: bool = False
    cache_max_entries: int = DEFAULT_MAX_ENTRIES
    cache_default_ttl_ms: Optional[int] = None
    cache_product_ttl_ms: Optional[int] = None
    cache_product_batch_ttl_ms: Optional[int] = None
    cache_stale_while_revalidate: bool = False

    # Logging
    log_level: str = "INFO"
    structured_logging: bool = True

    def to_client_config(self) -> ClientConfig:
        """
        Build the immutable client configuration from these settings.

        Returns:
            ClientConfig: Configuration ready to hand to ``ApliiqClient``
        """
        cache = CacheConfig(
            enabled=self.cache_enabled,
            max_entries=self.cache_max_entries,
            default_ttl_ms=self.cache_default_ttl_ms,
            product_ttl_ms=self.cache_product_ttl_ms,
            product_batch_ttl_ms=self.cache_product_batch_ttl_ms,
            stale_while_revalidate=self.cache_stale_while_revalidate,
        )
        return ClientConfig(
            app_id=self.app_id,
            shared_secret=self.shared_secret,
            endpoint=self.endpoint,
            timeout_ms=self.timeout_ms,
            cache=cache,
        )


def load_env_file(env_file: str = ".env") -> None:
    """
    Load environment variables from the specified .env file.

    Args:
        env_file: Path to the .env file. Defaults to ".env".
    """
    env_path = os.path.join(os.getcwd(), env_file)
    if os.path.exists(env_path):
        load_dotenv(env_path)
    else:
        logger.debug(f"Environment file {env_path} not found")


@lru_cache()
def get_settings() -> ApliiqSettings:
    """
    Get client settings, cached for the lifetime of the process.

    Returns:
        ApliiqSettings: Settings instance
    """
    load_env_file()
    return ApliiqSettings()
