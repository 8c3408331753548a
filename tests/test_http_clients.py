"""Tests for the catalogue HTTP client."""

import asyncio

import httpx
import pytest

from pawfuel.adapters.catalog_client import HttpxCatalogClient
from pawfuel.errors import ResourceUnavailableError

_URL = "https://shop.example.com/catalog.json"


def _client(handler) -> HttpxCatalogClient:
    transport = httpx.MockTransport(handler)
    return HttpxCatalogClient(
        url=_URL, http_client=httpx.AsyncClient(transport=transport)
    )


def test_fetch_catalog_returns_dict_rows() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == _URL
        return httpx.Response(200, json=[{"product_key": "a"}, "junk", {"id": "b"}])

    client = _client(handler)

    rows = asyncio.run(client.fetch_catalog())
    asyncio.run(client.close())

    assert rows == [{"product_key": "a"}, {"id": "b"}]


def test_fetch_catalog_rejects_non_list() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"items": []})

    client = _client(handler)

    with pytest.raises(ResourceUnavailableError):
        asyncio.run(client.fetch_catalog())


def test_fetch_catalog_raises_on_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    client = _client(handler)

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.fetch_catalog())
