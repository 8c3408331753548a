"""Inventory ledger operations."""

import logging
import math
from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime

from pawfuel.domain.inventory import EventType, InventoryEvent
from pawfuel.domain.products import Product
from pawfuel.errors import InvalidInputError
from pawfuel.services.clock import Clock
from pawfuel.services.ids import new_id
from pawfuel.services.state import StateService

_logger = logging.getLogger(__name__)

_EVENT_TYPES: frozenset[str] = frozenset({"receive", "consume"})


def current_stock(events: Iterable[InventoryEvent], product_id: str) -> float:
    """Return packs on hand for a product as the signed sum of its events."""
    return sum(event.signed_packs for event in events if event.product_id == product_id)


def stock_levels(events: Iterable[InventoryEvent]) -> dict[str, float]:
    """Return packs on hand for every product that has events."""
    levels: dict[str, float] = defaultdict(float)
    for event in events:
        levels[event.product_id] += event.signed_packs
    return dict(levels)


def stock_grams(
    events: Iterable[InventoryEvent], catalog: Mapping[str, Product]
) -> float:
    """Return grams of non-pantry food on hand; unknown products count as zero."""
    total = 0.0
    for product_id, packs in stock_levels(events).items():
        product = catalog.get(product_id)
        if product is None or product.pantry:
            continue
        total += packs * product.grams_per_pack
    return total


def validate_packs(packs: float) -> float:
    """Return the pack quantity as a float, rejecting non-finite or negative values."""
    if isinstance(packs, bool) or not isinstance(packs, int | float):
        raise InvalidInputError(f"Pack quantity must be a number, got {packs!r}")
    if not math.isfinite(packs) or packs < 0:
        raise InvalidInputError(f"Pack quantity must be finite and >= 0, got {packs}")
    return float(packs)


def append_event(
    events: list[InventoryEvent],
    product_id: str,
    event_type: EventType,
    packs: float,
    timestamp: datetime,
) -> InventoryEvent:
    """Validate and append a ledger event, returning it."""
    packs = validate_packs(packs)
    if event_type not in _EVENT_TYPES:
        raise InvalidInputError(f"Unknown inventory event type {event_type!r}")
    event = InventoryEvent(
        id=new_id("ev_"),
        product_id=product_id,
        timestamp=timestamp,
        type=event_type,
        packs=packs,
    )
    events.append(event)
    return event


@dataclass
class InventoryService:
    """Ledger access bound to the application state."""

    state_service: StateService
    clock: Clock

    def current_stock(self, product_id: str) -> float:
        """Return packs on hand for a product."""
        return current_stock(self.state_service.state.inventory_events, product_id)

    def stock_levels(self) -> dict[str, float]:
        """Return packs on hand for all products with events."""
        return stock_levels(self.state_service.state.inventory_events)

    def add_event(
        self, product_id: str, event_type: EventType, packs: float
    ) -> str | None:
        """Append an event and persist; returns None for invalid input.

        Consumption is capped at the packs on hand so stock never goes negative.
        """
        state = self.state_service.state
        try:
            if product_id not in state.products:
                raise InvalidInputError(f"Unknown product {product_id!r}")
            packs = validate_packs(packs)
            if event_type == "consume":
                on_hand = max(self.current_stock(product_id), 0.0)
                if packs > on_hand:
                    _logger.warning(
                        "Consume of %s exceeds stock (%.2f > %.2f), capping",
                        product_id,
                        packs,
                        on_hand,
                    )
                    packs = on_hand
            event = append_event(
                state.inventory_events,
                product_id,
                event_type,
                packs,
                self.clock.now(),
            )
        except InvalidInputError as exc:
            _logger.warning("Rejected inventory event for %s: %s", product_id, exc)
            return None
        self.state_service.save()
        _logger.info(
            "Inventory %s: product=%s packs=%s", event_type, product_id, event.packs
        )
        return event.id
