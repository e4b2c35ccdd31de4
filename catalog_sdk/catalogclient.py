# catalog_sdk/catalogclient.py
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

import httpx
import requests

Number = Union[int, float, Decimal, str]


def _filter_params(
    name: Optional[str] = None,
    category_id: Optional[int] = None,
    min_price: Optional[Number] = None,
    max_price: Optional[Number] = None,
) -> Dict[str, str]:
    params = {}
    if name is not None:
        params["name"] = name
    if category_id is not None:
        params["categoryId"] = str(category_id)
    if min_price is not None:
        params["minPrice"] = str(min_price)
    if max_price is not None:
        params["maxPrice"] = str(max_price)
    return params


def _update_payload(name: Optional[str] = None, price: Optional[Number] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    if name is not None:
        payload["name"] = name
    if price is not None:
        # keep the exact decimal text; the server parses it into a Decimal
        payload["price"] = str(price) if isinstance(price, Decimal) else price
    return payload


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:8085", api_key: Optional[str] = None, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout
        self.auth_headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self.session.headers.update(self.auth_headers)

    def health(self):
        r = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def filter_products(
        self,
        name: Optional[str] = None,
        category_id: Optional[int] = None,
        min_price: Optional[Number] = None,
        max_price: Optional[Number] = None,
    ) -> List[Dict[str, Any]]:
        params = _filter_params(name, category_id, min_price, max_price)
        r = self.session.get(f"{self.base_url}/api/products", params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def list_products(self) -> List[Dict[str, Any]]:
        return self.filter_products()

    # do not raise_for_status() here: callers inspect 400/404 bodies
    def update_product(self, product_id: int, name: Optional[str] = None, price: Optional[Number] = None):
        payload = _update_payload(name, price)
        return self.session.patch(f"{self.base_url}/api/products/{product_id}", json=payload, timeout=self.timeout)

    async def update_product_async(self, product_id: int, name: Optional[str] = None, price: Optional[Number] = None):
        payload = _update_payload(name, price)
        async with httpx.AsyncClient(timeout=self.timeout, headers=self.auth_headers) as client:
            return await client.patch(f"{self.base_url}/api/products/{product_id}", json=payload)
