from typing import Any, List, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from apliiq.core.logging import get_logger
from apliiq.core.result import Err, Ok, Result, Violation, combine
from apliiq.domain.models.order import (
    ORDER_RULES,
    AcceptedOrderResponse,
    ApliiqOrder,
    ApliiqOrderResponse,
)
from apliiq.domain.models.product import Product

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


def _violation(error: Any) -> Violation:
    path = tuple(error["loc"])
    if not path:
        return Violation(message=error["msg"])
    location = ".".join(str(part) for part in path)
    return Violation(message=f"{location}: {error['msg']}", path=path)


def validate(schema: Type[M], value: Any) -> Result[M]:
    """
    Validate a payload against a structural schema.

    Args:
        schema: Pydantic model class describing the payload
        value: Decoded payload or an existing instance of ``schema``

    Returns:
        Ok with the typed value, or Err listing every violation found
    """
    if isinstance(value, schema):
        return Ok(value)
    try:
        return Ok(schema.model_validate(value))
    except SchemaValidationError as exc:
        violations = tuple(
            _violation(error) for error in exc.errors()
        )
        logger.debug(f"{schema.__name__} failed validation with {len(violations)} violation(s)")
        return Err(violations)


def validate_product(value: Any) -> Result[Product]:
    return validate(Product, value)


def validate_products(values: List[Any]) -> Result[List[Product]]:
    """Validate each element independently; one bad element fails the batch."""
    return combine([validate_product(value) for value in values])


def validate_order(value: Any) -> Result[ApliiqOrder]:
    """
    Validate an outbound order: structure first, then the cross-field rules.

    Args:
        value: Order mapping or ``ApliiqOrder`` instance

    Returns:
        Ok with the order, or Err listing every violation found
    """
    result = validate(ApliiqOrder, value)
    if isinstance(result, Err):
        return result

    violations: List[Violation] = []
    for rule in ORDER_RULES:
        violations.extend(rule(result.value))
    if violations:
        return Err(tuple(violations))
    return result


def validate_order_response(value: Any, accepted: bool = False) -> Result[ApliiqOrderResponse]:
    """
    Validate an order creation response.

    A 202 (``accepted``) body may lack ``id`` and may be empty.
    """
    if accepted:
        return validate(AcceptedOrderResponse, {} if value is None else value)
    return validate(ApliiqOrderResponse, value)
