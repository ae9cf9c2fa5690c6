# tests/test_errors.py
import logging

from fastapi.testclient import TestClient

from app.config import Settings
from app.database import ProductStore
from app.errors import AuthenticationError, NotFoundError, ValidationError
from app.main import create_app


def _boom():
    raise RuntimeError("kaboom")


def test_error_kinds_carry_status_and_name():
    assert NotFoundError("x").status_code == 404
    assert ValidationError("x").status_code == 400
    assert AuthenticationError("x").status_code == 401
    assert AuthenticationError("x").name == "AuthenticationError"


def test_unknown_route_is_404_naming_the_path(client):
    r = client.get("/api/nothing/here")
    assert r.status_code == 404
    assert r.json() == {
        "error": {
            "name": "NotFoundError",
            "message": "Route /api/nothing/here not found",
            "statusCode": 404,
        }
    }


def test_unsupported_method_is_404(client):
    r = client.patch("/api/products/1", json={})
    assert r.status_code == 404
    assert r.json()["error"]["message"] == "Route /api/products/1 not found"


def test_no_stack_outside_development(client):
    r = client.get("/api/products/missing")
    assert "stack" not in r.json()["error"]


def test_stack_included_in_development():
    settings = Settings(api_key="k", app_env="development", _env_file=None)
    client = TestClient(create_app(settings=settings, store=ProductStore.seeded()))
    r = client.get("/api/products/missing")
    assert r.status_code == 404
    assert "NotFoundError" in r.json()["error"]["stack"]


def test_unclassified_error_is_500(settings, store):
    app = create_app(settings=settings, store=store)
    app.add_api_route("/boom", _boom)
    client = TestClient(app, raise_server_exceptions=False)
    r = client.get("/boom")
    assert r.status_code == 500
    assert r.json()["error"] == {
        "name": "InternalServerError",
        "message": "Internal Server Error",
        "statusCode": 500,
    }


def test_errors_are_logged(client, caplog):
    with caplog.at_level(logging.WARNING, logger="app.errors"):
        client.get("/api/products/missing")
    assert any("Product not found" in rec.getMessage() for rec in caplog.records)


def test_every_request_is_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger="app.requests"):
        client.get("/api/products", params={"category": "Home"})
    lines = [rec.getMessage() for rec in caplog.records if rec.name == "app.requests"]
    assert any(line.endswith("GET /api/products?category=Home") for line in lines)
    assert lines[0].startswith("[")


def test_docs_routes_are_not_exposed(client):
    for path in ("/docs", "/redoc", "/openapi.json"):
        r = client.get(path)
        assert r.status_code == 404
        assert r.json()["error"] == {
            "name": "NotFoundError",
            "message": f"Route {path} not found",
            "statusCode": 404,
        }


def test_request_log_uses_lazy_arguments(client, caplog):
    with caplog.at_level(logging.INFO, logger="app.requests"):
        client.get("/")
    rec = next(rec for rec in caplog.records if rec.name == "app.requests")
    assert rec.msg == "[%s] %s %s"
    assert rec.args[1:] == ("GET", "/")
