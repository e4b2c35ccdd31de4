# tests/test_cli.py
from decimal import Decimal
from unittest.mock import Mock

import pytest

import cli

PRODUCTS = [
    {"id": 1, "name": "Laptop", "price": 999.99, "categoryId": 1},
    {"id": 5, "name": "Desk Chair", "price": 199.99, "categoryId": 2},
]


def _response(status_code, body):
    r = Mock()
    r.status_code = status_code
    r.json.return_value = body
    return r


def test_describe_success():
    ok, text = cli.describe_update_response(_response(200, {
        "success": True,
        "message": "Product updated successfully",
        "product": {"id": 5, "name": "Desk Chair", "price": 149.99, "categoryId": 2},
    }))
    assert ok
    assert text == "Product updated successfully: Desk Chair @ $149.99"


def test_describe_message_error():
    ok, text = cli.describe_update_response(_response(404, {"message": "Product with ID 9 not found"}))
    assert not ok
    assert text == "HTTP 404: Product with ID 9 not found"


def test_describe_field_errors():
    ok, text = cli.describe_update_response(_response(400, {"price": ["Price must be greater than zero"]}))
    assert not ok
    assert "price: Price must be greater than zero" in text


@pytest.mark.parametrize("entry, expected", [
    ("5", 5),
    (" desk chair ", 5),
    ("LAPTOP", 1),
    ("Toaster", None),
])
def test_resolve_product_id(entry, expected):
    assert cli.resolve_product_id(entry, PRODUCTS) == expected


def test_parse_optional_decimal():
    assert cli.parse_optional_decimal("") is None
    assert cli.parse_optional_decimal(" 12.50 ") == Decimal("12.50")
    with pytest.raises(ValueError):
        cli.parse_optional_decimal("cheap")


def test_parse_optional_category():
    assert cli.parse_optional_category("  ") is None
    assert cli.parse_optional_category(" 2 ") == 2


@pytest.mark.parametrize("raw", ["abc", "-1", "0", "1.5"])
def test_parse_optional_category_rejects_bad_input(raw):
    with pytest.raises(ValueError):
        cli.parse_optional_category(raw)


def test_ask_optional_category_reprompts(monkeypatch):
    answers = iter(["abc", "-1", "2"])
    monkeypatch.setattr(cli.Prompt, "ask", lambda *args, **kwargs: next(answers))
    assert cli.ask_optional_category("Category ID") == 2


def test_try_api_swallows_transport_errors():
    failing = Mock(side_effect=ConnectionError("refused"))
    assert cli.try_api(failing) is None
    assert cli.status_message == "Error: refused"
