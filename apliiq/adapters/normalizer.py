"""
Response normalization for Apliiq collection and entity endpoints.

The collection envelope differs between Apliiq deployments. Every known
envelope is matched here, once, so the rest of the client only sees a
plain list of product payloads.

Matching order for a list response (first match wins):

1. ``NestedArray``: a top-level array whose first element holds the list
   under one of ``LIST_FIELDS``, e.g. ``[{"Products": [...]}]``
2. ``FlatArray``: a top-level array of objects, e.g. ``[{"Id": 1}, ...]``
3. ``Envelope``: an object holding the list under one of ``LIST_FIELDS``,
   e.g. ``{"products": [...]}``
4. ``Unrecognized``: anything else; always a normalization failure
"""
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple, Union

from apliiq.core.logging import get_logger
from apliiq.core.result import Err, Ok, Result, Violation

logger = get_logger(__name__)

# Probe order is significant: the first field holding a list wins.
LIST_FIELDS: Tuple[str, ...] = ("Products", "products", "data", "items", "Items", "results")

ENTITY_FIELD = "data"


@dataclass(frozen=True)
class NestedArray:
    field: str
    items: List[Any]


@dataclass(frozen=True)
class FlatArray:
    items: List[Any]


@dataclass(frozen=True)
class Envelope:
    field: str
    items: List[Any]


@dataclass(frozen=True)
class Unrecognized:
    raw_type: str


ListShape = Union[NestedArray, FlatArray, Envelope, Unrecognized]


def describe_type(value: Any) -> str:
    """Name a decoded JSON value by its JSON type."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


class ResponseNormalizer:
    """Extracts canonical product payloads from raw response bodies."""

    def __init__(self, list_fields: Sequence[str] = LIST_FIELDS):
        self.list_fields = tuple(list_fields)

    def _find_list_field(self, container: Any) -> Optional[Tuple[str, List[Any]]]:
        if not isinstance(container, dict):
            return None
        for field in self.list_fields:
            candidate = container.get(field)
            if isinstance(candidate, list):
                return field, candidate
        return None

    def match_list_shape(self, body: Any) -> ListShape:
        """
        Classify a list response body.

        Args:
            body: Decoded response body

        Returns:
            ListShape: The matched variant
        """
        if isinstance(body, list):
            if body:
                nested = self._find_list_field(body[0])
                if nested is not None:
                    return NestedArray(field=nested[0], items=nested[1])
            if all(isinstance(item, dict) for item in body):
                return FlatArray(items=body)
            return Unrecognized(raw_type="array of non-objects")

        enveloped = self._find_list_field(body)
        if enveloped is not None:
            return Envelope(field=enveloped[0], items=enveloped[1])

        return Unrecognized(raw_type=describe_type(body))

    def normalize_list(self, body: Any) -> Result[List[Any]]:
        """
        Extract the ordered list of product payloads from a list response.

        Args:
            body: Decoded response body

        Returns:
            Ok with the list, or Err naming the unexpected top-level shape
        """
        shape = self.match_list_shape(body)

        if isinstance(shape, NestedArray):
            logger.debug(f"List response matched nested array under '{shape.field}'")
            return Ok(list(shape.items))
        if isinstance(shape, FlatArray):
            logger.debug("List response matched flat array")
            return Ok(list(shape.items))
        if isinstance(shape, Envelope):
            logger.debug(f"List response matched envelope field '{shape.field}'")
            return Ok(list(shape.items))

        message = (
            f"Unexpected product list response: expected an array or an object "
            f"with one of {list(self.list_fields)}, got {shape.raw_type}"
        )
        logger.warning(message)
        return Err((Violation(message=message),))

    def normalize_entity(self, body: Any) -> Any:
        """Prefer a nested ``data`` field when present, else the body itself."""
        if isinstance(body, dict) and body.get(ENTITY_FIELD) is not None:
            return body[ENTITY_FIELD]
        return body
