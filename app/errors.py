# app/errors.py
import traceback
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .logger import get_logger

logger = get_logger("app.errors")


class ApiError(Exception):
    """Base for every error the API reports with a known status code."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def name(self) -> str:
        return type(self).__name__


class NotFoundError(ApiError):
    status_code = 404


class ValidationError(ApiError):
    status_code = 400


class AuthenticationError(ApiError):
    status_code = 401


# ---------------------------
# Responder
# ---------------------------
def _error_body(request: Request, exc: BaseException, name: str, message: str, status_code: int) -> Dict[str, Any]:
    body: Dict[str, Any] = {"name": name, "message": message, "statusCode": status_code}
    settings = getattr(request.app.state, "settings", None)
    if settings is not None and settings.is_development:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return {"error": body}


def _respond(request: Request, exc: BaseException, name: str, message: str, status_code: int) -> JSONResponse:
    path = request.url.path
    if status_code >= 500:
        logger.error(
            "Error: %s %s -> %s %s", request.method, path, name, message,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
    else:
        logger.warning("Error: %s %s -> %s %s: %s", request.method, path, status_code, name, message)
    return JSONResponse(
        status_code=status_code,
        content=_error_body(request, exc, name, message, status_code),
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return _respond(request, exc, exc.name, exc.message, exc.status_code)


async def route_not_found_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # 404/405 from the router mean no route matched this request
    if exc.status_code in (404, 405):
        err = NotFoundError(f"Route {request.url.path} not found")
        return _respond(request, exc, err.name, err.message, err.status_code)
    return _respond(request, exc, "HTTPException", str(exc.detail), exc.status_code)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for e in exc.errors():
        loc = ".".join(str(part) for part in e.get("loc", ()) if part != "body")
        messages.append(f"{loc}: {e.get('msg')}" if loc else str(e.get("msg")))
    err = ValidationError(", ".join(messages) or "Invalid request")
    return _respond(request, exc, err.name, err.message, err.status_code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return _respond(request, exc, "InternalServerError", "Internal Server Error", 500)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, route_not_found_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
