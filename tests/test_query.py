# tests/test_query.py
import pytest

from app.database import ProductStore
from app.query import filter_products, paginate, parse_positive_int


@pytest.mark.parametrize("raw,expected", [
    (None, 7),
    ("", 7),
    ("abc", 7),
    ("0", 7),
    ("-3", 7),
    ("3", 3),
    ("3abc", 3),
    ("2.9", 2),
    (" 4", 4),
    ("+5", 5),
    ("002", 2),
    ("9" * 5000, 7),
    ("0" * 5000 + "3", 3),
    ("1" * 19, 7),
])
def test_parse_positive_int(raw, expected):
    assert parse_positive_int(raw, 7) == expected


def test_empty_filters_keep_everything():
    products = ProductStore.seeded().list()
    assert filter_products(products, category="", in_stock="", search="") == products


def test_filter_does_not_mutate_input():
    products = ProductStore.seeded().list()
    filter_products(products, category="Home")
    assert len(products) == 3


def test_filter_order_does_not_matter():
    products = ProductStore.seeded().list()
    both = filter_products(products, category="electronics", search="mouse")
    staged = filter_products(filter_products(products, search="mouse"), category="ELECTRONICS")
    assert both == staged
    assert [p.id for p in both] == ["3"]


def test_paginate_slices_and_reports():
    products = ProductStore.seeded().list()
    items, meta = paginate(products, page=1, limit=2)
    assert [p.id for p in items] == ["1", "2"]
    assert meta.totalPages == 2
    assert meta.hasNext is True
    assert meta.hasPrev is False


def test_paginate_empty_set():
    items, meta = paginate([], page=1, limit=10)
    assert items == []
    assert meta.totalPages == 0
    assert meta.totalProducts == 0
    assert meta.hasNext is False
