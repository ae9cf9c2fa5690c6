# app/models.py
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    price: float
    category: str
    in_stock: bool = Field(alias="inStock")

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class Pagination(BaseModel):
    currentPage: int
    totalPages: int
    totalProducts: int
    hasNext: bool
    hasPrev: bool


class ProductPage(BaseModel):
    products: List[Dict[str, Any]]
    pagination: Pagination


class ProductStats(BaseModel):
    totalProducts: int
    inStock: int
    outOfStock: int
    categories: Dict[str, int]
    averagePrice: float


def product_from_payload(product_id: str, payload: Dict[str, Any]) -> Product:
    """Build a product from an already-validated payload, trimming string fields."""
    return Product(
        id=product_id,
        name=payload["name"].strip(),
        description=payload["description"].strip(),
        price=payload["price"],
        category=payload["category"].strip(),
        in_stock=payload["inStock"],
    )
