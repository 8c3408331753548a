"""Inventory ledger domain models."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

EventType = Literal["receive", "consume"]


@dataclass(frozen=True)
class InventoryEvent:
    """Single receive or consume transaction, measured in packs."""

    id: str
    product_id: str
    timestamp: datetime
    type: EventType
    packs: float

    @property
    def signed_packs(self) -> float:
        return self.packs if self.type == "receive" else -self.packs
