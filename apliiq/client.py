import json
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

import httpx
from pydantic import ValidationError as SchemaValidationError

from apliiq.adapters.normalizer import ResponseNormalizer
from apliiq.adapters.validation import (
    validate_order,
    validate_order_response,
    validate_product,
    validate_products,
)
from apliiq.core.config import ClientConfig, get_settings
from apliiq.core.exceptions import ApliiqError, ConfigurationError
from apliiq.core.logging import get_logger, set_request_id
from apliiq.core.result import Err
from apliiq.domain.models.order import ApliiqOrder, ApliiqOrderResponse
from apliiq.domain.models.product import Product
from apliiq.infrastructure.auth.signer import RequestSigner, SignatureAuth
from apliiq.infrastructure.cache.memory_cache import ResponseCache, monotonic_ms
from apliiq.infrastructure.cache.policy import (
    PRODUCT_KEY_PREFIX,
    PRODUCTS_ALL_KEY,
    ResourceClass,
    product_key,
    select_ttl,
)
from apliiq.infrastructure.error.handler import ErrorDetails, ErrorMapper
from apliiq.infrastructure.http.transport import HttpTransport, TransportResponse

logger = get_logger(__name__)

PRODUCTS_PATH = "/api/Product"
ORDER_PATH = "/Order"


class ApliiqClient:
    """
    Async client for the Apliiq print-on-demand API.

    Every request is signed. Catalog reads go through the response cache
    when caching is enabled; order creation never does. All failures are
    raised as ``ApliiqError`` subclasses.
    """

    def __init__(
        self,
        config: Union[ClientConfig, Mapping[str, Any]],
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_order_accepted: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[ErrorDetails], None]] = None,
        clock: Callable[[], float] = time.time,
        cache_clock: Callable[[], float] = monotonic_ms,
    ):
        """
        Initialize the client.

        Args:
            config: Client configuration, or a mapping accepted by ``ClientConfig``
            transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests
            on_order_accepted: Hook called with the body of a 202 order response
            on_error: Hook called with the details of every mapped error
            clock: Wall clock (Unix seconds) used for signing
            cache_clock: Millisecond clock used for cache expiry

        Raises:
            ConfigurationError: If the configuration is invalid or lacks credentials
        """
        if not isinstance(config, ClientConfig):
            try:
                config = ClientConfig.model_validate(config)
            except SchemaValidationError as e:
                raise ConfigurationError(f"Invalid Apliiq client configuration: {e}") from e
        self.config = config

        self.signer = RequestSigner(config.app_id, config.shared_secret, clock=clock)

        self.cache: Optional[ResponseCache[Any]] = None
        if config.cache_enabled:
            self.cache = ResponseCache(
                max_entries=config.cache.max_entries,
                allow_stale=config.cache.stale_while_revalidate,
                clock=cache_clock,
            )

        self.normalizer = ResponseNormalizer()
        self.errors = ErrorMapper(logger=logger, notify_callback=on_error)
        self.on_order_accepted = on_order_accepted
        self.transport = HttpTransport(
            config.endpoint,
            timeout=config.timeout_seconds,
            auth=SignatureAuth(self.signer),
            transport=transport,
        )

        logger.debug(
            f"Apliiq client initialized for {config.endpoint} "
            f"(cache {'enabled' if self.cache else 'disabled'})"
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> "ApliiqClient":
        """Build a client from ``APLIIQ_*`` environment variables."""
        return cls(get_settings().to_client_config(), **kwargs)

    async def __aenter__(self) -> "ApliiqClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.transport.aclose()

    # ======================
    # PRODUCT METHODS
    # ======================

    async def get_products(self, *, ttl_ms: Optional[int] = None, refresh: bool = False) -> List[Product]:
        """
        Fetch the full product list.

        A successful fetch caches the list and also each product under its
        own key, so later single-product reads are served from the cache.

        Args:
            ttl_ms: TTL override for the list entry
            refresh: Skip the cache read; the cache is still repopulated

        Returns:
            List of products in upstream order
        """
        try:
            return await self._get_products(ttl_ms, refresh)
        except ApliiqError:
            raise
        except Exception as e:
            raise self.errors.map_exception(e, "get_products") from e

    async def _get_products(self, ttl_ms: Optional[int], refresh: bool) -> List[Product]:
        if not refresh:
            cached = self._cache_get(PRODUCTS_ALL_KEY)
            if cached is not None:
                return list(cached)

        response = await self._send("GET", PRODUCTS_PATH)

        items = self.normalizer.normalize_list(response.body)
        if isinstance(items, Err):
            raise self.errors.from_violations(items, "get_products")

        result = validate_products(items.value)
        if isinstance(result, Err):
            raise self.errors.from_violations(result, "get_products")
        products = result.value

        if self.cache is not None:
            cache_config = self.config.cache
            self.cache.set(
                PRODUCTS_ALL_KEY,
                tuple(products),
                select_ttl(cache_config, ResourceClass.PRODUCT_LIST, ttl_ms),
            )
            product_ttl = select_ttl(cache_config, ResourceClass.PRODUCT)
            for product in products:
                self.cache.set(product_key(product.id), product, product_ttl)

        logger.debug(f"Fetched {len(products)} products")
        return products

    async def get_product(
        self,
        product_id: int,
        *,
        ttl_ms: Optional[int] = None,
        refresh: bool = False,
    ) -> Product:
        """
        Fetch a single product by its identifier.

        Args:
            product_id: Apliiq product ``Id``
            ttl_ms: TTL override for this entry
            refresh: Skip the cache read; the cache is still repopulated

        Returns:
            Product
        """
        try:
            return await self._get_product(product_id, ttl_ms, refresh)
        except ApliiqError:
            raise
        except Exception as e:
            raise self.errors.map_exception(e, "get_product") from e

    async def _get_product(self, product_id: int, ttl_ms: Optional[int], refresh: bool) -> Product:
        key = product_key(product_id)
        if not refresh:
            cached = self._cache_get(key)
            if cached is not None:
                return cached

        response = await self._send("GET", f"{PRODUCTS_PATH}/{product_id}")

        result = validate_product(self.normalizer.normalize_entity(response.body))
        if isinstance(result, Err):
            raise self.errors.from_violations(result, "get_product")
        product = result.value

        if self.cache is not None:
            self.cache.set(key, product, select_ttl(self.config.cache, ResourceClass.PRODUCT, ttl_ms))

        return product

    # ======================
    # ORDER METHODS
    # ======================

    async def create_order(
        self, order: Union[ApliiqOrder, Mapping[str, Any]]
    ) -> ApliiqOrderResponse:
        """
        Validate and submit an order. Never cached.

        A 202 response means Apliiq accepted the order for asynchronous
        processing; it is returned like any success, logged as a warning
        and passed to ``on_order_accepted``.

        Args:
            order: Order model or mapping

        Returns:
            ApliiqOrderResponse
        """
        try:
            return await self._create_order(order)
        except ApliiqError:
            raise
        except Exception as e:
            raise self.errors.map_exception(e, "create_order") from e

    async def _create_order(self, order: Union[ApliiqOrder, Mapping[str, Any]]) -> ApliiqOrderResponse:
        parsed = validate_order(order)
        if isinstance(parsed, Err):
            raise self.errors.from_violations(parsed, "create_order")

        payload = parsed.value.model_dump(mode="json", exclude_none=True)
        response = await self._send("POST", ORDER_PATH, payload)

        if response.status == 202:
            logger.warning(
                "Order accepted but not processed",
                extra={"data": {"order_number": parsed.value.order_number, "response": response.body}},
            )
            self._notify_accepted(response.body)

        result = validate_order_response(response.body, accepted=response.status == 202)
        if isinstance(result, Err):
            raise self.errors.from_violations(result, "create_order")
        return result.value

    def _notify_accepted(self, body: Any) -> None:
        if self.on_order_accepted is None:
            return
        try:
            self.on_order_accepted(body)
        except Exception as e:
            logger.error(f"on_order_accepted hook failed: {str(e)}")

    # ======================
    # CACHE MANAGEMENT
    # ======================

    def clear_cache(self) -> None:
        if self.cache is not None:
            self.cache.clear()

    def clear_product_cache(self, product_id: int) -> None:
        """Drop one product's entry; the list entry is left alone."""
        if self.cache is not None:
            self.cache.delete(product_key(product_id))

    def clear_products_cache(self) -> None:
        """Drop the list entry and every single-product entry."""
        if self.cache is not None:
            self.cache.delete(PRODUCTS_ALL_KEY)
            self.cache.delete_by_prefix(PRODUCT_KEY_PREFIX)

    def get_cache_stats(self) -> Optional[Dict[str, Any]]:
        """Cache statistics, or None when caching is disabled."""
        if self.cache is None:
            return None
        return self.cache.get_stats()

    # ======================
    # PRIVATE METHODS
    # ======================

    def _cache_get(self, key: str) -> Any:
        if self.cache is None:
            return None
        return self.cache.get(key)

    async def _send(self, method: str, path: str, payload: Any = None) -> TransportResponse:
        # The signer reads these exact bytes from the request
        body = None
        if payload is not None:
            body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")

        set_request_id()
        response = await self.transport.request(method, path, body=body)
        return response.raise_for_status()
