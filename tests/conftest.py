"""Shared test fixtures."""

import random
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from pawfuel.config import Settings
from pawfuel.containers import AppContainer, build_container
from pawfuel.domain.dogs import DogProfile
from pawfuel.domain.inventory import InventoryEvent
from pawfuel.domain.products import MacroSplit, Product
from pawfuel.domain.state import AppState
from pawfuel.services.inventory import append_event
from pawfuel.services.state import StateRepository

NOW = datetime(2026, 3, 14, 9, 0, tzinfo=UTC)


@dataclass
class FixedClock:
    """Clock that only moves when told to."""

    current: datetime = NOW

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@dataclass
class InMemoryStateRepository(StateRepository):
    """In-memory state repository for tests."""

    stored: AppState | None = None
    fail: bool = False
    saves: int = 0
    cleared: int = 0

    def load(self) -> AppState | None:
        return self.stored

    def save(self, state: AppState) -> bool:
        self.saves += 1
        if self.fail:
            return False
        self.stored = state
        return True

    def clear(self) -> None:
        self.cleared += 1
        self.stored = None


@dataclass
class FakeCatalogClient:
    """Fake catalogue client with a fixed payload."""

    rows: list[dict[str, object]] = field(default_factory=list)
    error: Exception | None = None

    async def fetch_catalog(self) -> list[dict[str, object]]:
        if self.error is not None:
            raise self.error
        return self.rows


def make_dog(**overrides: object) -> DogProfile:
    values: dict[str, object] = {
        "id": "dog1",
        "name": "Killer",
        "breed": "Mixed",
        "sex": "Male",
        "weight_kg": 25,
        "age_years": 4,
        "energy": "normal",
        "body_condition": "ideal",
        "created_at": NOW,
        "updated_at": NOW,
    }
    values.update(overrides)
    return DogProfile(**values)  # type: ignore[arg-type]


def make_product(  # noqa: PLR0913
    product_id: str,
    grams: float = 230,
    protein: str = "chicken",
    macros: tuple[float, float, float] = (0.8, 0.1, 0.1),
    category: str = "raw",
    pantry: bool = False,
) -> Product:
    return Product(
        id=product_id,
        name=f"{product_id} {grams:g}g",
        brand="Test",
        grams_per_pack=grams,
        category=category,  # type: ignore[arg-type]
        protein=protein,
        macros=MacroSplit(*macros),
        pantry=pantry,
    )


def catalog_of(*products: Product) -> dict[str, Product]:
    return {product.id: product for product in products}


def receive(events: list[InventoryEvent], product_id: str, packs: float) -> None:
    append_event(events, product_id, "receive", packs, NOW)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(state_path=str(tmp_path / "state.json"), timezone="UTC")


@pytest.fixture
def state_repository() -> InMemoryStateRepository:
    return InMemoryStateRepository()


@pytest.fixture
def container(
    settings: Settings,
    clock: FixedClock,
    state_repository: InMemoryStateRepository,
) -> AppContainer:
    return build_container(
        settings,
        clock=clock,
        rng=random.Random(7),
        state_repository=state_repository,
    )
