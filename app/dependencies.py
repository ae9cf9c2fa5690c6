# app/dependencies.py
import hmac
import json
import math
from typing import Any, Dict, Optional

from fastapi import Depends, Header, Request

from .config import Settings
from .database import ProductStore
from .errors import AuthenticationError, ValidationError

# Route-level pipeline stages. Each one either returns or raises an ApiError,
# which the registered exception handlers turn into the response.


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def json_body(request: Request) -> Dict[str, Any]:
    """Parsed JSON payload; an empty body parses to ``{}``."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        raise ValidationError("Request body must be valid JSON")
    return payload if isinstance(payload, dict) else {}


async def require_api_key(
    x_api_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_app_settings),
) -> None:
    if not x_api_key:
        raise AuthenticationError("API key is required")
    expected = settings.api_key
    if expected is None or not hmac.compare_digest(x_api_key.encode(), expected.encode()):
        raise AuthenticationError("Invalid API key")


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and len(value.strip()) > 0


def _is_non_negative_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value) and value >= 0
    except OverflowError:
        # integer too large to compare as a float
        return False


def product_errors(payload: Dict[str, Any]) -> list:
    """All rule failures for a create/update payload, in field order."""
    errors = []
    if not _is_non_empty_str(payload.get("name")):
        errors.append("Name is required and must be a non-empty string")
    if not _is_non_empty_str(payload.get("description")):
        errors.append("Description is required and must be a non-empty string")
    if not _is_non_negative_number(payload.get("price")):
        errors.append("Price is required and must be a non-negative number")
    if not _is_non_empty_str(payload.get("category")):
        errors.append("Category is required and must be a non-empty string")
    if not isinstance(payload.get("inStock"), bool):
        errors.append("inStock is required and must be a boolean")
    return errors


async def validate_product(payload: Dict[str, Any] = Depends(json_body)) -> None:
    errors = product_errors(payload)
    if errors:
        raise ValidationError(", ".join(errors))
