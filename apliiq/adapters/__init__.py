"""
Adapters package for the Apliiq client.

Turns raw upstream bodies into typed values:
- Normalizer for the inconsistent collection envelopes
- Validation against the structural schemas and order rules
"""

from .normalizer import ResponseNormalizer
from .validation import validate, validate_order, validate_product, validate_products

__all__ = [
    "ResponseNormalizer",
    "validate",
    "validate_order",
    "validate_product",
    "validate_products",
]
