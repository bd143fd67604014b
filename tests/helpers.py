"""Payload factories, a fake clock and a recording mock transport."""

import asyncio
import json
from typing import Any, Dict, List, Optional, Tuple

import httpx

APP_ID = "test-app"
SHARED_SECRET = "test-secret"
ENDPOINT = "https://api.apliiq.test/v1"


def make_product(product_id: int = 1, **overrides: Any) -> Dict[str, Any]:
    product = {
        "Id": product_id,
        "Name": f"Product {product_id}",
        "Code": f"P{product_id}",
        "SKU": f"SKU-{product_id}",
        "Sizes": [{"Id": 1, "Name": "M", "Weight": "0.5", "PlusSize_Fee": 0}],
        "Price": 12.5,
    }
    product.update(overrides)
    return product


def make_line_item(**overrides: Any) -> Dict[str, Any]:
    item = {
        "id": "li-1",
        "title": "Classic Tee",
        "quantity": 2,
        "price": "45.50",
        "sku": "APQ-1998244S7A1",
    }
    item.update(overrides)
    return item


def make_address(**overrides: Any) -> Dict[str, Any]:
    address = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "address1": "1 Main St",
        "city": "Austin",
        "zip": "78701",
        "province": "Texas",
        "country": "United States",
        "country_code": "US",
        "province_code": "TX",
    }
    address.update(overrides)
    return address


def make_order(**overrides: Any) -> Dict[str, Any]:
    order = {
        "number": 1001,
        "name": "#1001",
        "order_number": 1001,
        "line_items": [make_line_item()],
        "shipping_address": make_address(),
    }
    order.update(overrides)
    return order


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, amount: float) -> None:
        self.now += amount


class RecordingHandler:
    """Routes requests by (method, path) and records every request it sees."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], httpx.Response] = {}
        self.requests: List[httpx.Request] = []
        self.error: Optional[Exception] = None

    def add(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method, f"/v1{path}")] = httpx.Response(status, json=body)

    def add_raw(self, method: str, path: str, status: int, content: bytes) -> None:
        self.routes[(method, f"/v1{path}")] = httpx.Response(status, content=content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        response = self.routes.get((request.method, request.url.path))
        if response is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(
            response.status_code,
            content=response.content,
            headers={"Content-Type": "application/json"},
        )

    def calls(self, method: str, path: str) -> int:
        return sum(
            1 for r in self.requests if r.method == method and r.url.path == f"/v1{path}"
        )

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def yielding_transport(self) -> httpx.MockTransport:
        """Like ``transport`` but yields to the event loop before responding."""

        async def handle(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0)
            return self(request)

        return httpx.MockTransport(handle)
