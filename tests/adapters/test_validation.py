"""Tests for schema validation and order business rules."""

import pytest

from apliiq.adapters.validation import (
    validate,
    validate_order,
    validate_order_response,
    validate_product,
    validate_products,
)
from apliiq.core.result import Err, Ok
from apliiq.domain.models import ApliiqOrder, Product

from tests.helpers import make_address, make_line_item, make_order, make_product


# -- Products ------------------------------------------------------------------

def test_valid_product_is_typed():
    result = validate_product(make_product(162, Colors=[{"Id": 3, "Name": "Black"}]))
    assert isinstance(result, Ok)
    product = result.value
    assert isinstance(product, Product)
    assert product.id == 162
    assert product.colors[0].name == "Black"


def test_product_ignores_unknown_keys():
    result = validate_product(make_product(1, Unexpected="x"))
    assert isinstance(result, Ok)
    assert "Unexpected" not in result.value.model_dump(by_alias=True)


def test_product_missing_required_fields_lists_all_violations():
    payload = make_product(1)
    del payload["Name"]
    del payload["SKU"]
    result = validate_product(payload)
    assert isinstance(result, Err)
    paths = {v.path for v in result.violations}
    assert ("Name",) in paths
    assert ("SKU",) in paths
    assert sorted(result.messages) == ["Name: Field required", "SKU: Field required"]


def test_one_bad_product_fails_the_batch():
    bad = make_product(2, Id="not-a-number")
    result = validate_products([make_product(1), bad, make_product(3)])
    assert isinstance(result, Err)
    assert all(v.path[0] == 1 for v in result.violations)


def test_batch_of_valid_products_keeps_order():
    result = validate_products([make_product(3), make_product(1)])
    assert [p.id for p in result.value] == [3, 1]


def test_validate_accepts_existing_instance():
    product = validate_product(make_product(1)).value
    assert validate(Product, product).value is product


# -- Orders --------------------------------------------------------------------

def test_valid_order():
    result = validate_order(make_order())
    assert isinstance(result, Ok)
    assert isinstance(result.value, ApliiqOrder)


@pytest.mark.parametrize("price, ok", [("45.5", False), ("45.50", True), ("45", False), ("4a.50", False)])
def test_price_needs_two_decimals(price, ok):
    result = validate_order(make_order(line_items=[make_line_item(price=price)]))
    assert isinstance(result, Ok) is ok


@pytest.mark.parametrize("sku, ok", [("1998244S7A1", False), ("APQ-1998244S7A1", True)])
def test_sku_needs_prefix(sku, ok):
    result = validate_order(make_order(line_items=[make_line_item(sku=sku)]))
    assert isinstance(result, Ok) is ok
    if not ok:
        assert result.messages == ["line_items.0.sku: SKU must start with APQ-"]


def test_fractional_quantity_is_accepted():
    result = validate_order(make_order(line_items=[make_line_item(quantity=1.5)]))
    assert isinstance(result, Ok)
    assert result.value.line_items[0].quantity == 1.5


@pytest.mark.parametrize("quantity", [0, -1])
def test_quantity_must_be_positive(quantity):
    result = validate_order(make_order(line_items=[make_line_item(quantity=quantity)]))
    assert isinstance(result, Err)
    assert result.violations[0].path == ("line_items", 0, "quantity")


def test_line_item_needs_title_or_name():
    item = make_line_item()
    del item["title"]
    result = validate_order(make_order(line_items=[item]))
    assert isinstance(result, Err)
    assert result.messages == ["Line item requires either title or name"]

    named = dict(item, name="Classic Tee")
    assert isinstance(validate_order(make_order(line_items=[named])), Ok)


def test_us_address_needs_province_code():
    address = make_address()
    del address["province_code"]
    result = validate_order(make_order(shipping_address=address))
    assert isinstance(result, Err)
    assert result.messages == ["province_code required for US addresses"]

    assert isinstance(validate_order(make_order(shipping_address=make_address())), Ok)


def test_non_us_address_does_not_need_province_code():
    address = make_address(country="Canada", country_code="CA")
    del address["province_code"]
    assert isinstance(validate_order(make_order(shipping_address=address)), Ok)


def test_country_code_must_be_two_letters():
    result = validate_order(make_order(shipping_address=make_address(country_code="USA")))
    assert isinstance(result, Err)


def test_empty_line_items_rejected():
    assert isinstance(validate_order(make_order(line_items=[])), Err)


def test_unknown_shipping_line_code_rejected():
    result = validate_order(make_order(shipping_lines=[{"code": "overnight"}]))
    assert isinstance(result, Err)
    assert isinstance(validate_order(make_order(shipping_lines=[{"code": "rush"}])), Ok)


def test_rules_report_every_failing_line_item():
    first = make_line_item(id="a")
    second = make_line_item(id="b")
    del first["title"]
    del second["title"]
    address = make_address()
    del address["province_code"]
    result = validate_order(make_order(line_items=[first, second], shipping_address=address))
    assert isinstance(result, Err)
    assert len(result.violations) == 3


def test_order_response_keeps_extra_keys():
    result = validate_order_response({"id": 55, "status": "queued"})
    assert result.value.id == 55
    assert result.value.model_extra == {"status": "queued"}


def test_order_response_requires_id():
    assert isinstance(validate_order_response({"status": "queued"}), Err)


def test_accepted_order_response_may_omit_id():
    result = validate_order_response({"message": "Order queued for processing"}, accepted=True)
    assert isinstance(result, Ok)
    assert result.value.id is None
    assert result.value.model_extra == {"message": "Order queued for processing"}

    assert isinstance(validate_order_response(None, accepted=True), Ok)
