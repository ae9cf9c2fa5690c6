# tests/test_cli.py
import pytest

import requests

from cli import console, main, try_api
from sdk.products import ProductsClient

from conftest import API_KEY


@pytest.fixture
def sdk(client):
    return ProductsClient(base_url="http://testserver", api_key=API_KEY, session=client)


def test_list_prints_products(sdk):
    with console.capture() as captured:
        code = main(["list", "--category", "home"], client=sdk)
    assert code == 0
    assert "Coffee Mug" in captured.get()


def test_create_and_stats(sdk, store):
    with console.capture():
        code = main([
            "create", "--name", "Notebook", "--description", "A5 dotted notebook",
            "--price", "7.5", "--category", "Stationery", "--in-stock", "false",
        ], client=sdk)
    assert code == 0
    assert len(store) == 4

    with console.capture() as captured:
        main(["stats"], client=sdk)
    assert "Stationery" in captured.get()


def test_api_error_returns_nonzero(sdk):
    with console.capture() as captured:
        code = main(["get", "missing"], client=sdk)
    assert code == 1
    assert "Product not found" in captured.get()


def test_try_api_reports_unreachable_server():
    def unreachable():
        raise requests.ConnectionError("connection refused")

    with console.capture() as captured:
        result = try_api(unreachable)
    assert result is None
    assert "connection refused" in captured.get()
