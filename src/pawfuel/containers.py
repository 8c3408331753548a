"""Dependency container wiring for the application."""

import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from pawfuel.adapters.catalog_client import HttpxCatalogClient
from pawfuel.adapters.json_state_store import JsonFileStateStore
from pawfuel.config import Settings
from pawfuel.services.accounts import AccountService
from pawfuel.services.catalog import CatalogService
from pawfuel.services.clock import Clock, SystemClock
from pawfuel.services.dogs import DogService
from pawfuel.services.inventory import InventoryService
from pawfuel.services.meals import MealService
from pawfuel.services.orders import OrderService
from pawfuel.services.state import StateRepository, StateService
from pawfuel.services.stool import StoolService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    state_service: StateService
    inventory_service: InventoryService
    catalog_service: CatalogService
    account_service: AccountService
    dog_service: DogService
    meal_service: MealService
    stool_service: StoolService
    order_service: OrderService
    close_resources: Callable[[], Awaitable[None]]


def build_container(
    settings: Settings | None = None,
    *,
    clock: Clock | None = None,
    rng: random.Random | None = None,
    state_repository: StateRepository | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_clock = clock or SystemClock()
    resolved_rng = rng or random.Random()
    repository = state_repository or JsonFileStateStore(
        Path(resolved_settings.state_path)
    )
    state_service = StateService(
        repository=repository,
        clock=resolved_clock,
        founder_pro_days=resolved_settings.founder_pro_days,
    )
    catalog_client = (
        HttpxCatalogClient.create(
            resolved_settings.catalog_url,
            timeout_seconds=resolved_settings.catalog_timeout_seconds,
        )
        if resolved_settings.catalog_url
        else None
    )
    inventory_service = InventoryService(state_service, resolved_clock)
    catalog_service = CatalogService(state_service, client=catalog_client)
    account_service = AccountService(
        state_service, resolved_clock, trial_days=resolved_settings.pro_trial_days
    )
    dog_service = DogService(
        state_service, account_service, resolved_clock, resolved_rng
    )
    meal_service = MealService(
        state_service=state_service,
        inventory_service=inventory_service,
        clock=resolved_clock,
        rng=resolved_rng,
        timezone=resolved_settings.timezone,
    )
    stool_service = StoolService(
        state_service, resolved_clock, timezone=resolved_settings.timezone
    )
    order_service = OrderService(
        state_service=state_service,
        catalog_service=catalog_service,
        clock=resolved_clock,
        branch_numbers=resolved_settings.branch_numbers(),
    )

    async def close_resources() -> None:
        if catalog_client is not None:
            await catalog_client.close()

    return AppContainer(
        settings=resolved_settings,
        clock=resolved_clock,
        state_service=state_service,
        inventory_service=inventory_service,
        catalog_service=catalog_service,
        account_service=account_service,
        dog_service=dog_service,
        meal_service=meal_service,
        stool_service=stool_service,
        order_service=order_service,
        close_resources=close_resources,
    )
