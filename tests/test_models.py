from datetime import date, time
from decimal import Decimal

import pytest
from pydantic import ValidationError

from punti.domain.models import Receipt
from punti.errors import InvalidReceiptError


def _error_message(payload):
    with pytest.raises(ValidationError) as excinfo:
        Receipt.model_validate(payload)
    return InvalidReceiptError.from_validation_error(excinfo.value).message


def test_parses_wire_format(target_payload):
    r = Receipt.model_validate(target_payload)
    assert r.id is None
    assert r.purchase_date == date(2022, 1, 1)
    assert r.purchase_time == time(13, 1)
    assert r.total == Decimal("35.35")
    assert r.items[1].short_description == "Emils Cheese Pizza"
    assert r.items[1].price == Decimal("12.25")


def test_receipt_is_immutable(target_payload):
    r = Receipt.model_validate(target_payload)
    with pytest.raises(ValidationError):
        r.retailer = "Other"


def test_missing_retailer(target_payload):
    target_payload["retailer"] = ""
    assert _error_message(target_payload) == "Retailer name is required."


def test_bad_date_format(target_payload):
    target_payload["purchaseDate"] = "01/01/2022"
    assert _error_message(target_payload) == "Purchase date must be in the format yyyy-MM-dd"


def test_bad_time_format(target_payload):
    target_payload["purchaseTime"] = "1:01 PM"
    assert _error_message(target_payload) == "Purchase time must be in the format HH:mm"


def test_empty_items(target_payload):
    target_payload["items"] = []
    target_payload["total"] = "0.00"
    assert _error_message(target_payload) == "At least one item is required."


def test_empty_description(target_payload):
    target_payload["items"][0]["shortDescription"] = ""
    assert _error_message(target_payload) == "Item description is required."


def test_negative_price(target_payload):
    target_payload["items"][0]["price"] = "-1.00"
    assert _error_message(target_payload) == "Item price must not be negative."


def test_zero_price_is_accepted(target_payload):
    target_payload["items"][0]["price"] = "0.00"
    target_payload["total"] = "28.86"
    assert Receipt.model_validate(target_payload).items[0].price == 0


def test_total_must_match_items(target_payload):
    target_payload["total"] = "5.00"
    assert _error_message(target_payload) == "Total amount does not match the sum of item prices."


def test_negative_total(target_payload):
    target_payload["total"] = "-35.35"
    assert _error_message(target_payload) == "Total amount must not be negative."


def test_missing_field_mentions_location(target_payload):
    del target_payload["purchaseTime"]
    assert "purchaseTime" in _error_message(target_payload)


@pytest.mark.parametrize("value", ["9:5", "9:05", "09:5", "09:05:00", " 09:05"])
def test_time_needs_two_digit_fields(target_payload, value):
    target_payload["purchaseTime"] = value
    assert _error_message(target_payload) == "Purchase time must be in the format HH:mm"


@pytest.mark.parametrize("value", ["2022-1-1", "2022-01-1", "22-01-01", "2022-02-30"])
def test_date_needs_full_iso_shape(target_payload, value):
    target_payload["purchaseDate"] = value
    assert _error_message(target_payload) == "Purchase date must be in the format yyyy-MM-dd"


def test_two_digit_time_and_date_are_accepted(target_payload):
    target_payload["purchaseTime"] = "09:05"
    target_payload["purchaseDate"] = "2022-01-09"
    r = Receipt.model_validate(target_payload)
    assert r.purchase_time == time(9, 5)
    assert r.purchase_date == date(2022, 1, 9)


def _single_item(price, total):
    return {
        "retailer": "A",
        "purchaseDate": "2022-01-02",
        "purchaseTime": "09:00",
        "items": [{"shortDescription": "ab", "price": price}],
        "total": total,
    }


@pytest.mark.parametrize(
    "price",
    ["1e30", "12345678901234567890123456789.00", "10000000000000.01", "1.005"],
)
def test_amounts_outside_limits_are_rejected(price):
    with pytest.raises(ValidationError):
        Receipt.model_validate(_single_item(price, price))


def test_total_sum_is_exact_at_the_limit():
    payload = _single_item("4999999999999.99", "5000000000000.00")
    payload["items"].append({"shortDescription": "cd", "price": "0.01"})
    assert Receipt.model_validate(payload).total == Decimal("5000000000000.00")

    payload["total"] = "5000000000000.01"
    assert _error_message(payload) == "Total amount does not match the sum of item prices."


def test_huge_mismatched_total_is_rejected():
    payload = _single_item("1000000000000000000000000000.01", "1000000000000000000000000000.00")
    payload["items"].append({"shortDescription": "cd", "price": "0.01"})
    with pytest.raises(ValidationError):
        Receipt.model_validate(payload)
