# catalog_api/database.py
import json
import logging
import threading
from decimal import Decimal
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Union

from .models import Product

# This file holds the in-memory product store and its lock.

logger = logging.getLogger(__name__)

SEED_PRODUCTS: List[Product] = [
    Product(id=1, name="Laptop", price=Decimal("999.99"), category_id=1),
    Product(id=2, name="Mouse", price=Decimal("29.99"), category_id=1),
    Product(id=3, name="Keyboard", price=Decimal("79.99"), category_id=1),
    Product(id=4, name="Monitor", price=Decimal("299.99"), category_id=1),
    Product(id=5, name="Desk Chair", price=Decimal("199.99"), category_id=2),
    Product(id=6, name="Desk Lamp", price=Decimal("49.99"), category_id=2),
]


class ProductRepository(Protocol):
    """Storage capability the orchestrator depends on."""

    def query(
        self,
        name: Optional[str] = None,
        category_id: Optional[int] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
    ) -> List[Product]:
        ...

    def get_by_id(self, product_id: int) -> Optional[Product]:
        ...

    def update(self, product_id: int, name: str, price: Decimal, category_id: int) -> bool:
        ...


class InMemoryProductStore:
    """
    Product store backed by a list kept in creation order.

    Records are frozen models; an update swaps the whole record under the
    collection lock, so readers only ever see complete records.
    """

    def __init__(self, products: Optional[Iterable[Product]] = None):
        seed = SEED_PRODUCTS if products is None else products
        self._products: List[Product] = list(seed)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def query(
        self,
        name: Optional[str] = None,
        category_id: Optional[int] = None,
        min_price: Optional[Decimal] = None,
        max_price: Optional[Decimal] = None,
    ) -> List[Product]:
        term = name.lower() if name and name.strip() else None

        with self._lock:
            snapshot = list(self._products)

        out = []
        for p in snapshot:
            if term is not None and term not in p.name.lower():
                continue
            if category_id is not None and p.category_id != category_id:
                continue
            if min_price is not None and p.price < min_price:
                continue
            if max_price is not None and p.price > max_price:
                continue
            out.append(p)
        return out

    def get_by_id(self, product_id: int) -> Optional[Product]:
        with self._lock:
            for p in self._products:
                if p.id == product_id:
                    return p
        return None

    def update(self, product_id: int, name: str, price: Decimal, category_id: int) -> bool:
        with self._lock:
            for index, p in enumerate(self._products):
                if p.id == product_id:
                    # an invalid record raises here and the old one stays
                    self._products[index] = Product(
                        id=product_id, name=name, price=price, category_id=category_id
                    )
                    return True
        return False


def load_products(path: Union[str, Path]) -> List[Product]:
    """Read a seed list from a JSON array of {id, name, price, categoryId} objects."""
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    products = [
        Product(
            id=item["id"],
            name=item["name"],
            price=Decimal(str(item["price"])),
            category_id=item["categoryId"],
        )
        for item in raw
    ]
    ids = [p.id for p in products]
    if len(ids) != len(set(ids)):
        raise ValueError(f"duplicate product ids in {path}")
    logger.info("Loaded %d products from %s", len(products), path)
    return products
