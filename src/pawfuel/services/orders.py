"""Order composition and recurring schedules."""

import logging
from dataclasses import dataclass, field
from urllib.parse import quote

from pawfuel.domain.orders import (
    OrderDraft,
    OrderHistoryEntry,
    OrderItem,
    OrderLine,
    RecurringOrder,
)
from pawfuel.services.catalog import CatalogService
from pawfuel.services.clock import Clock
from pawfuel.services.ids import new_id
from pawfuel.services.state import StateService

_logger = logging.getLogger(__name__)

WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
_BRANCH_NAMES = {"lebanon": "Lebanon", "cyprus": "Cyprus"}


@dataclass
class OrderService:
    """Builds messaging-app order links and tracks order history."""

    state_service: StateService
    catalog_service: CatalogService
    clock: Clock
    branch_numbers: dict[str, str] = field(default_factory=dict)

    def compose(self, items: list[OrderItem]) -> OrderDraft | None:
        """Render an order for the preferred branch; None without items."""
        lines = [self._resolve_line(item) for item in items if item.quantity > 0]
        if not lines:
            return None
        branch = self.state_service.state.preferences.preferred_branch
        branch_name = _BRANCH_NAMES.get(branch, branch.title())

        bullet_lines = []
        for line in lines:
            text = f"- {line.quantity} × {line.name}"
            if line.size:
                text += f" ({line.size})"
            if line.price:
                text += f" – {line.price}"
            bullet_lines.append(text)

        preview = "\n".join(
            [f"Royal Barf {branch_name}", "", "Order summary", *bullet_lines]
        )
        message = "\n".join(
            [f"Hello Royal Barf {branch_name},", "I’d like to order:", *bullet_lines]
        )
        number = self.branch_numbers.get(branch, "")
        url = f"https://wa.me/{number}?text={quote(message)}"
        return OrderDraft(branch=branch, preview=preview, url=url, lines=lines)

    def send(self, items: list[OrderItem]) -> OrderDraft | None:
        """Compose an order and record it in the history."""
        draft = self.compose(items)
        if draft is None:
            return None
        self._record(draft, recurring=False, schedule_id=None)
        return draft

    def add_schedule(
        self, day: str, time: str, items: list[OrderItem]
    ) -> RecurringOrder | None:
        """Save a weekly schedule; None when day or quantities are invalid."""
        kept = [item for item in items if item.quantity > 0]
        if day not in WEEKDAYS or not kept:
            return None
        schedule = RecurringOrder(id=new_id("sch_"), day=day, time=time, items=kept)
        self.state_service.state.recurring_orders.append(schedule)
        self.state_service.save()
        return schedule

    def delete_schedule(self, schedule_id: str) -> bool:
        state = self.state_service.state
        before = len(state.recurring_orders)
        state.recurring_orders = [
            s for s in state.recurring_orders if s.id != schedule_id
        ]
        if len(state.recurring_orders) == before:
            return False
        self.state_service.save()
        return True

    def send_schedule(self, schedule_id: str) -> OrderDraft | None:
        """Compose a recurring order now and record it."""
        schedule = next(
            (
                s
                for s in self.state_service.state.recurring_orders
                if s.id == schedule_id
            ),
            None,
        )
        if schedule is None:
            return None
        draft = self.compose(schedule.items)
        if draft is None:
            return None
        self._record(draft, recurring=True, schedule_id=schedule.id)
        return draft

    def history(self, limit: int = 10) -> list[OrderHistoryEntry]:
        return self.state_service.state.order_history[-limit:]

    def _record(
        self, draft: OrderDraft, *, recurring: bool, schedule_id: str | None
    ) -> None:
        self.state_service.state.order_history.append(
            OrderHistoryEntry(
                sent_at=self.clock.now(),
                branch=draft.branch,
                recurring=recurring,
                lines=draft.lines,
                schedule_id=schedule_id,
            )
        )
        self.state_service.save()
        _logger.info("Order recorded: branch=%s recurring=%s", draft.branch, recurring)

    def _resolve_line(self, item: OrderItem) -> OrderLine:
        listing = self.catalog_service.listings.get(item.product_id)
        if listing is not None:
            price = (
                f"{listing.price:.2f} {listing.currency}"
                if listing.price is not None
                else ""
            )
            return OrderLine(
                name=listing.name,
                quantity=item.quantity,
                size=listing.size,
                price=price,
            )
        product = self.catalog_service.get(item.product_id)
        if product is not None:
            return OrderLine(
                name=product.name,
                quantity=item.quantity,
                size=f"{product.grams_per_pack:g}g",
                price="",
            )
        return OrderLine(
            name=item.product_id, quantity=item.quantity, size="", price=""
        )
