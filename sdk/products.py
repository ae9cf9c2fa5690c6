# sdk/products.py
from typing import Any, Dict, Optional

import httpx
import requests


class ProductsApiError(Exception):
    """An error response from the Products API."""

    def __init__(self, status_code: int, name: str, message: str):
        super().__init__(f"{status_code} {name}: {message}")
        self.status_code = status_code
        self.name = name
        self.message = message


def _raise_for_error(r) -> None:
    if r.status_code < 400:
        return
    try:
        err = r.json().get("error", {})
    except ValueError:
        err = {}
    raise ProductsApiError(
        r.status_code,
        err.get("name", "Error"),
        err.get("message", r.text),
    )


def _product_payload(name: str, description: str, price: float, category: str, in_stock: bool) -> Dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "price": price,
        "category": category,
        "inStock": in_stock,
    }


def _list_params(category, in_stock, search, page, limit) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    if category:
        params["category"] = category
    if in_stock is not None:
        params["inStock"] = "true" if in_stock else "false"
    if search:
        params["search"] = search
    if page is not None:
        params["page"] = page
    if limit is not None:
        params["limit"] = limit
    return params


class ProductsClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # anything with the requests call signature works here, e.g. a TestClient
        self.session = session if session is not None else requests.Session()
        if api_key:
            self.session.headers.update({"X-API-Key": api_key})

    def root(self):
        r = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    def list_products(self, category: Optional[str] = None, in_stock: Optional[bool] = None,
                      search: Optional[str] = None, page: Optional[int] = None, limit: Optional[int] = None):
        params = _list_params(category, in_stock, search, page, limit)
        r = self.session.get(f"{self.base_url}/api/products", params=params, timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    def create_product(self, name: str, description: str, price: float, category: str, in_stock: bool = True):
        payload = _product_payload(name, description, price, category, in_stock)
        r = self.session.post(f"{self.base_url}/api/products", json=payload, timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    # Update replaces every field, so all of them are required
    def update_product(self, product_id: str, name: str, description: str, price: float,
                       category: str, in_stock: bool):
        payload = _product_payload(name, description, price, category, in_stock)
        r = self.session.put(f"{self.base_url}/api/products/{product_id}", json=payload, timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    def delete_product(self, product_id: str) -> None:
        r = self.session.delete(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        _raise_for_error(r)

    def stats(self):
        r = self.session.get(f"{self.base_url}/api/products/stats", timeout=self.timeout)
        _raise_for_error(r)
        return r.json()

    # Async listing (example)
    async def list_products_async(self, category: Optional[str] = None, in_stock: Optional[bool] = None,
                                  search: Optional[str] = None, page: Optional[int] = None,
                                  limit: Optional[int] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        params = _list_params(category, in_stock, search, page, limit)
        async with httpx.AsyncClient(timeout=self.timeout, transport=transport) as client:
            r = await client.get(f"{self.base_url}/api/products", params=params)
            _raise_for_error(r)
            return r.json()
