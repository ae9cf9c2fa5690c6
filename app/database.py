import uuid
from typing import Callable, List, Optional

from .models import Product

# In-memory product store. Lives for the process; nothing is persisted.

SEED_PRODUCTS = [
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop for developers",
        "price": 999.99,
        "category": "Electronics",
        "inStock": True,
    },
    {
        "id": "2",
        "name": "Coffee Mug",
        "description": "Ceramic mug for your morning coffee",
        "price": 12.99,
        "category": "Home",
        "inStock": True,
    },
    {
        "id": "3",
        "name": "Wireless Mouse",
        "description": "Ergonomic wireless mouse",
        "price": 29.99,
        "category": "Electronics",
        "inStock": False,
    },
]


def _uuid_hex() -> str:
    return uuid.uuid4().hex


class ProductStore:
    """Ordered sequence of products; insertion order is listing order."""

    def __init__(self, products: Optional[List[Product]] = None, id_factory: Callable[[], str] = _uuid_hex):
        self._products: List[Product] = list(products or [])
        self._id_factory = id_factory

    @classmethod
    def seeded(cls, id_factory: Callable[[], str] = _uuid_hex) -> "ProductStore":
        store = cls(id_factory=id_factory)
        store.reset()
        return store

    def reset(self) -> None:
        self._products = [Product.model_validate(p) for p in SEED_PRODUCTS]

    def new_id(self) -> str:
        # skip ids already held by a stored product
        while True:
            pid = self._id_factory()
            if self.find_index_by_id(pid) is None:
                return pid

    def list(self) -> List[Product]:
        return list(self._products)

    def find_by_id(self, product_id: str) -> Optional[Product]:
        idx = self.find_index_by_id(product_id)
        return None if idx is None else self._products[idx]

    def find_index_by_id(self, product_id: str) -> Optional[int]:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        return None

    def insert(self, product: Product) -> None:
        self._products.append(product)

    def replace_at(self, index: int, product: Product) -> None:
        self._products[index] = product

    def remove_at(self, index: int) -> Product:
        return self._products.pop(index)

    def __len__(self) -> int:
        return len(self._products)
