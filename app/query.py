# app/query.py
import math
import re
from typing import List, Optional, Tuple

from .models import Pagination, Product

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# longer digit runs cannot be a usable page or limit
_MAX_DIGITS = 18


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """Lenient integer parse: "3", "3abc" and "3.7" all give 3. Anything unusable gives ``default``."""
    if raw is None:
        return default
    m = _LEADING_INT.match(raw)
    if not m:
        return default
    sign = m.group(1)[0]
    digits = m.group(1).lstrip("+-").lstrip("0")
    if sign == "-" or not digits or len(digits) > _MAX_DIGITS:
        return default
    return int(digits)


def filter_products(
    products: List[Product],
    category: Optional[str] = None,
    in_stock: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Product]:
    out = list(products)
    if category:
        wanted = category.lower()
        out = [p for p in out if p.category.lower() == wanted]
    if in_stock:
        flag = in_stock.lower() == "true"
        out = [p for p in out if p.in_stock == flag]
    if search:
        term = search.lower()
        out = [p for p in out if term in p.name.lower() or term in p.description.lower()]
    return out


def paginate(products: List[Product], page: int, limit: int) -> Tuple[List[Product], Pagination]:
    total = len(products)
    start = (page - 1) * limit
    end = start + limit
    pagination = Pagination(
        currentPage=page,
        totalPages=math.ceil(total / limit),
        totalProducts=total,
        hasNext=end < total,
        hasPrev=page > 1,
    )
    return products[start:end], pagination
