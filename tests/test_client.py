# tests/test_client.py
from decimal import Decimal
from unittest.mock import Mock

import pytest

from catalog_sdk.catalogclient import CatalogClient, _filter_params, _update_payload


@pytest.fixture
def sdk(client):
    # TestClient speaks the same get/patch/json/raise_for_status surface as a requests Session
    c = CatalogClient(base_url="http://testserver")
    c.session = client
    return c


def test_filter_params_skip_missing_values():
    assert _filter_params() == {}
    assert _filter_params(name="Desk", category_id=2, min_price=Decimal("100"), max_price=250) == {
        "name": "Desk", "categoryId": "2", "minPrice": "100", "maxPrice": "250",
    }


def test_update_payload_keeps_decimal_text():
    assert _update_payload() == {}
    assert _update_payload(price=Decimal("149.99")) == {"price": "149.99"}
    assert _update_payload(name="Lamp", price=12) == {"name": "Lamp", "price": 12}


def test_api_key_sets_authorization_header():
    c = CatalogClient(api_key="s3cret")
    assert c.session.headers["Authorization"] == "Bearer s3cret"
    assert CatalogClient().auth_headers == {}


def test_filter_products_sends_query():
    c = CatalogClient(base_url="http://catalog.local/")
    response = Mock()
    response.json.return_value = []
    c.session = Mock()
    c.session.get.return_value = response

    assert c.filter_products(name="Desk", category_id=2) == []
    c.session.get.assert_called_once_with(
        "http://catalog.local/api/products",
        params={"name": "Desk", "categoryId": "2"},
        timeout=10,
    )
    response.raise_for_status.assert_called_once()


def test_sdk_against_app(sdk):
    assert sdk.health() == {"status": "ok"}
    assert [p["name"] for p in sdk.filter_products(name="Desk", category_id=2, min_price=100, max_price=250)] == ["Desk Chair"]

    r = sdk.update_product(5, price=Decimal("149.99"))
    assert r.status_code == 200
    assert sdk.filter_products(min_price=140, max_price=160)[0]["price"] == 149.99


def test_sdk_update_returns_error_responses(sdk):
    assert sdk.update_product(999, name="X").status_code == 404
    assert sdk.update_product(0, name="X").status_code == 400
    assert sdk.update_product(1).json() == {
        "message": "At least one field (Name or Price) must be provided for update"
    }
