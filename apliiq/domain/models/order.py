"""
Order payloads sent to and received from the Apliiq order endpoint.

The models carry the structural checks. Rules that span several fields
are plain predicates in ``ORDER_RULES``; each returns the violations it
finds instead of raising.
"""
from typing import Any, Callable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from apliiq.core.result import Violation

SKU_PREFIX = "APQ-"
PRICE_PATTERN = r"^\d+\.\d{2}$"


class LineItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: Optional[str] = None
    name: Optional[str] = None
    quantity: Union[int, float]
    price: str = Field(pattern=PRICE_PATTERN)
    sku: str
    grams: Optional[Union[int, float]] = None

    @field_validator("quantity")
    @classmethod
    def quantity_is_positive(cls, v: Union[int, float]) -> Union[int, float]:
        if v <= 0:
            raise PydanticCustomError("greater_than", "Input should be greater than 0")
        return v

    @field_validator("sku")
    @classmethod
    def sku_has_prefix(cls, v: str) -> str:
        if not v.startswith(SKU_PREFIX):
            raise PydanticCustomError(
                "sku_prefix",
                "SKU must start with {prefix}",
                {"prefix": SKU_PREFIX},
            )
        return v


class ShippingAddress(BaseModel):
    model_config = ConfigDict(frozen=True)

    first_name: str
    last_name: str
    address1: str
    address2: Optional[str] = None
    city: str
    zip: str
    province: str
    country: str
    country_code: str = Field(min_length=2, max_length=2)
    province_code: Optional[str] = None


class ShippingLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: Literal["standard", "upgraded", "rush"]


class ApliiqOrder(BaseModel):
    """An order as submitted to Apliiq. Identity is ``order_number``."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(gt=0)
    name: str
    order_number: int = Field(gt=0)
    line_items: List[LineItem] = Field(min_length=1)
    billing_address: Optional[Any] = None
    shipping_address: ShippingAddress
    shipping_lines: Optional[List[ShippingLine]] = None


class ApliiqOrderResponse(BaseModel):
    """Order creation response. Identity is ``id``; other keys are kept."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int


class AcceptedOrderResponse(ApliiqOrderResponse):
    """A 202 body. The order is queued upstream and may not have an ``id`` yet."""

    id: Optional[int] = None


def line_items_have_title_or_name(order: ApliiqOrder) -> List[Violation]:
    return [
        Violation("Line item requires either title or name", ("line_items", index))
        for index, item in enumerate(order.line_items)
        if not item.title and not item.name
    ]


def us_address_has_province_code(order: ApliiqOrder) -> List[Violation]:
    address = order.shipping_address
    if address.country_code == "US" and not address.province_code:
        return [
            Violation(
                "province_code required for US addresses",
                ("shipping_address", "province_code"),
            )
        ]
    return []


OrderRule = Callable[[ApliiqOrder], List[Violation]]

ORDER_RULES: List[OrderRule] = [
    line_items_have_title_or_name,
    us_address_has_province_code,
]
