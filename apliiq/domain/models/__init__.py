"""Structural schemas for Apliiq catalog and order payloads."""

from apliiq.domain.models.order import (
    AcceptedOrderResponse,
    ApliiqOrder,
    ApliiqOrderResponse,
    LineItem,
    ShippingAddress,
    ShippingLine,
)
from apliiq.domain.models.product import Product, ProductSize

__all__ = [
    "AcceptedOrderResponse",
    "ApliiqOrder",
    "ApliiqOrderResponse",
    "LineItem",
    "Product",
    "ProductSize",
    "ShippingAddress",
    "ShippingLine",
]
