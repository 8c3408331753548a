"""Tests for order links and recurring schedules."""

from urllib.parse import unquote

from pawfuel.domain.orders import OrderItem
from pawfuel.domain.products import CatalogListing


def test_compose_order_uses_product_names(container) -> None:
    draft = container.order_service.compose(
        [OrderItem("duo400g", 2), OrderItem("tuna30", 0)]
    )

    assert draft.branch == "lebanon"
    assert draft.preview.splitlines()[0] == "Royal Barf Lebanon"
    assert draft.url.startswith("https://wa.me/96181678131?text=")
    message = unquote(draft.url.split("?text=", 1)[1])
    assert message == (
        "Hello Royal Barf Lebanon,\nI’d like to order:\n- 2 × Duo Pack 400g (400g)"
    )
    assert len(draft.lines) == 1


def test_compose_order_prefers_shop_listing(container) -> None:
    container.catalog_service.listings["duo400g"] = CatalogListing(
        id="duo400g",
        name="Duo Pack",
        category="raw",
        size="400g",
        price=6.5,
        currency="EUR",
        description="",
    )
    container.state_service.update_preferences(preferred_branch="cyprus")

    draft = container.order_service.compose([OrderItem("duo400g", 1)])

    assert draft.url.startswith("https://wa.me/35700000000?text=")
    assert draft.preview.splitlines()[-1] == "- 1 × Duo Pack (400g) – 6.50 EUR"


def test_compose_empty_order(container) -> None:
    assert container.order_service.compose([]) is None
    assert container.order_service.compose([OrderItem("duo400g", 0)]) is None


def test_send_records_history(container, clock) -> None:
    container.order_service.send([OrderItem("duo400g", 1)])

    history = container.order_service.history()
    assert len(history) == 1
    assert history[0].recurring is False
    assert history[0].sent_at == clock.now()


def test_recurring_schedule_lifecycle(container) -> None:
    orders = container.order_service
    assert orders.add_schedule("Funday", "09:00", [OrderItem("duo400g", 1)]) is None
    assert orders.add_schedule("Monday", "09:00", [OrderItem("duo400g", 0)]) is None

    schedule = orders.add_schedule(
        "Monday", "09:00", [OrderItem("duo400g", 1), OrderItem("tuna30", 0)]
    )

    assert schedule.items == [OrderItem("duo400g", 1)]
    draft = orders.send_schedule(schedule.id)
    assert draft is not None
    assert orders.history()[-1].schedule_id == schedule.id
    assert orders.history()[-1].recurring is True

    assert orders.delete_schedule(schedule.id) is True
    assert orders.delete_schedule(schedule.id) is False
    assert orders.send_schedule(schedule.id) is None
