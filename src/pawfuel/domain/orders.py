"""Order domain models."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class OrderItem:
    """Requested quantity of a product."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderLine:
    """Resolved order line shown in the message."""

    name: str
    quantity: int
    size: str
    price: str


@dataclass(frozen=True)
class OrderDraft:
    """Message preview and deep link for an order."""

    branch: str
    preview: str
    url: str
    lines: list[OrderLine]


@dataclass(frozen=True)
class RecurringOrder:
    """Weekly order schedule."""

    id: str
    day: str
    time: str
    items: list[OrderItem] = field(default_factory=list)


@dataclass(frozen=True)
class OrderHistoryEntry:
    """A sent order."""

    sent_at: datetime
    branch: str
    recurring: bool
    lines: list[OrderLine] = field(default_factory=list)
    schedule_id: str | None = None
