"""Tests for custom products and the shop catalogue."""

import asyncio

import httpx
import pytest

from pawfuel.domain.products import MacroSplit
from pawfuel.services.catalog import CatalogService, compute_default_macros
from pawfuel.services.state import StateService
from tests.conftest import FakeCatalogClient, FixedClock, InMemoryStateRepository


def _service(client: FakeCatalogClient | None = None) -> CatalogService:
    state_service = StateService(InMemoryStateRepository(), FixedClock())
    return CatalogService(state_service, client=client)


@pytest.mark.parametrize(
    ("name", "category", "expected"),
    [
        ("Beef Boneless Cubes", "raw", MacroSplit(0.90, 0.05, 0.05)),
        ("Trio Mix", "raw", MacroSplit(0.70, 0.15, 0.15)),
        ("Green Tripe", "raw", MacroSplit(0.75, 0.15, 0.10)),
        ("Whole Quail", "raw", MacroSplit(0.80, 0.10, 0.10)),
        ("Chicken Breast", "raw", MacroSplit(1.0, 0.0, 0.0)),
        ("Goat", "raw", MacroSplit(0.80, 0.10, 0.10)),
        ("Eggshell Powder", "supplement", MacroSplit(0.0, 0.0, 1.0)),
        ("Lamb Liver Bites", "treat", MacroSplit(0.0, 1.0, 0.0)),
        ("Beef Cubes", "treat", MacroSplit(1.0, 0.0, 0.0)),
        ("Kelp", "supplement", MacroSplit(0.0, 0.0, 0.0)),
    ],
)
def test_compute_default_macros(name: str, category: str, expected: MacroSplit) -> None:
    assert compute_default_macros(name, category) == expected


def test_add_custom_product_infers_macros_and_unique_id() -> None:
    service = _service()

    first = service.add_custom_product("Goat Tripe 500g", 500, "raw", "Goat")
    second = service.add_custom_product("Goat Tripe 500g", 500, "raw", "goat")

    assert first is not None
    assert first.id == "custom_goat_tripe_500g"
    assert first.protein == "goat"
    assert first.macros == MacroSplit(0.75, 0.15, 0.10)
    assert first.pantry is False
    assert second.id == "custom_goat_tripe_500g_2"
    assert service.get(first.id) == first


def test_add_custom_pantry_product() -> None:
    service = _service()

    product = service.add_custom_product(
        "Kefir", 250, "supplement", "none", macros=MacroSplit(0.0, 0.0, 0.0)
    )

    assert product.pantry is True
    assert product.brand == "Custom"


@pytest.mark.parametrize(
    ("name", "grams", "category"),
    [("", 100, "raw"), ("Duck", 0, "raw"), ("Duck", 100, "snack")],
)
def test_add_custom_product_rejects_invalid(
    name: str, grams: float, category: str
) -> None:
    service = _service()
    before = len(service.products())

    product = service.add_custom_product(name, grams, category, "duck")  # type: ignore[arg-type]
    assert product is None
    assert len(service.products()) == before


def test_load_listings_parses_rows() -> None:
    client = FakeCatalogClient(
        rows=[
            {
                "product_key": "duo400g",
                "product_name": "Duo Pack",
                "category": "raw",
                "size_weight": "400g",
                "price_amount": 6.5,
                "price_currency": "EUR",
                "description": "Duck and beef",
            },
            {"product_name": "No key"},
        ]
    )
    service = _service(client)

    listings = asyncio.run(service.load_listings())

    assert [listing.id for listing in listings] == ["duo400g"]
    listing = service.listings["duo400g"]
    assert listing.price == 6.5
    assert listing.currency == "EUR"
    assert listing.size == "400g"


def test_load_listings_failure_leaves_empty() -> None:
    client = FakeCatalogClient(error=httpx.ConnectError("offline"))
    service = _service(client)

    assert asyncio.run(service.load_listings()) == []
    assert service.listings == {}


def test_load_listings_without_client() -> None:
    assert asyncio.run(_service().load_listings()) == []
