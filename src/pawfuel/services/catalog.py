"""Product catalog service."""

import logging
import math
import re
from dataclasses import dataclass, field

from pawfuel.adapters.catalog_client import CatalogClient
from pawfuel.domain.products import (
    CatalogListing,
    MacroSplit,
    Product,
    ProductCategory,
)
from pawfuel.errors import InvalidInputError
from pawfuel.services.state import StateService

_logger = logging.getLogger(__name__)

_CATEGORIES: frozenset[str] = frozenset({"raw", "treat", "supplement", "pantry"})
_SLUG = re.compile(r"[^a-z0-9]+")


def compute_default_macros(name: str, category: str) -> MacroSplit:
    """Guess a muscle/organ/bone split from a product name."""
    lowered = (name or "").lower()
    if category != "raw":
        if "shell" in lowered:
            return MacroSplit(0.0, 0.0, 1.0)
        if any(word in lowered for word in ("liver", "tripe", "organ")):
            return MacroSplit(0.0, 1.0, 0.0)
        if any(word in lowered for word in ("muscle", "breast", "cube")):
            return MacroSplit(1.0, 0.0, 0.0)
        return MacroSplit(0.0, 0.0, 0.0)
    if "boneless" in lowered:
        return MacroSplit(0.90, 0.05, 0.05)
    if "trio" in lowered:
        return MacroSplit(0.70, 0.15, 0.15)
    if "duo" in lowered or "tripe" in lowered:
        return MacroSplit(0.75, 0.15, 0.10)
    if "cube" in lowered or "whole" in lowered:
        return MacroSplit(0.80, 0.10, 0.10)
    if "breast" in lowered or "muscle" in lowered:
        return MacroSplit(1.0, 0.0, 0.0)
    return MacroSplit(0.80, 0.10, 0.10)


def _validate_macros(macros: MacroSplit) -> None:
    values = (macros.muscle, macros.organ, macros.bone)
    if any(not math.isfinite(v) or v < 0 for v in values):
        raise InvalidInputError("Macro fractions must be finite and non-negative")


@dataclass
class CatalogService:
    """Custom products and the remote shop catalogue."""

    state_service: StateService
    client: CatalogClient | None = None
    listings: dict[str, CatalogListing] = field(default_factory=dict)

    def products(self) -> list[Product]:
        """Return planner products in catalog order."""
        return list(self.state_service.state.products.values())

    def get(self, product_id: str) -> Product | None:
        return self.state_service.state.products.get(product_id)

    def add_custom_product(  # noqa: PLR0913
        self,
        name: str,
        grams_per_pack: float,
        category: ProductCategory,
        protein: str,
        brand: str = "Custom",
        macros: MacroSplit | None = None,
    ) -> Product | None:
        """Append a user-defined product, inferring macros when missing."""
        cleaned = (name or "").strip()
        try:
            if not cleaned:
                raise InvalidInputError("Product name is required")
            if category not in _CATEGORIES:
                raise InvalidInputError(f"Unknown category {category!r}")
            if not math.isfinite(grams_per_pack) or grams_per_pack <= 0:
                raise InvalidInputError("Pack size must be a positive number")
            resolved = macros or compute_default_macros(cleaned, category)
            _validate_macros(resolved)
        except InvalidInputError as exc:
            _logger.warning("Rejected custom product %r: %s", name, exc)
            return None

        state = self.state_service.state
        product = Product(
            id=self._unique_id(cleaned),
            name=cleaned,
            brand=brand,
            grams_per_pack=grams_per_pack,
            category=category,
            protein=(protein or "none").strip().lower(),
            macros=resolved,
            pantry=category != "raw",
        )
        state.products[product.id] = product
        self.state_service.save()
        _logger.info("Custom product added: %s", product.id)
        return product

    async def load_listings(self) -> list[CatalogListing]:
        """Fetch the shop catalogue once; failures leave it empty."""
        if self.client is None:
            self.listings = {}
            return []
        try:
            rows = await self.client.fetch_catalog()
        except Exception as exc:  # noqa: BLE001
            _logger.warning("Catalogue loading failed: %s", exc)
            self.listings = {}
            return []
        listings = [_parse_listing(row) for row in rows]
        self.listings = {
            listing.id: listing for listing in listings if listing is not None
        }
        _logger.info("Catalogue loaded: %s listings", len(self.listings))
        return list(self.listings.values())

    def _unique_id(self, name: str) -> str:
        base = _SLUG.sub("_", name.lower()).strip("_") or "product"
        candidate = f"custom_{base}"
        existing = self.state_service.state.products
        suffix = 2
        while candidate in existing:
            candidate = f"custom_{base}_{suffix}"
            suffix += 1
        return candidate


def _parse_listing(row: dict[str, object]) -> CatalogListing | None:
    product_id = row.get("product_key") or row.get("id")
    if not product_id:
        return None
    price = row.get("price_amount", row.get("price"))
    return CatalogListing(
        id=str(product_id),
        name=str(row.get("product_name") or row.get("name") or product_id),
        category=str(row.get("category") or ""),
        size=str(row.get("size_weight") or row.get("size") or ""),
        price=float(price) if isinstance(price, int | float) else None,
        currency=str(row.get("price_currency") or row.get("currency") or "USD"),
        description=str(row.get("description") or ""),
    )
