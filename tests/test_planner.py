"""Tests for the meal planner."""

from datetime import date, timedelta

import pytest

from pawfuel.domain.inventory import InventoryEvent
from pawfuel.domain.meals import MacroPercentages, MealItem, MealLogEntry
from pawfuel.services.defaults import default_products
from pawfuel.services.inventory import append_event, current_stock
from pawfuel.services.planner import plan_meal, realized_macros
from tests.conftest import NOW, catalog_of, make_dog, make_product, receive

TODAY = date(2026, 3, 14)
_ZERO = MacroPercentages(0.0, 0.0, 0.0)


def _ids(plan) -> list[str]:
    return [item.product_id for item in plan.items]


def test_no_dog_returns_none() -> None:
    assert plan_meal(None, [], {}, [], today=TODAY) is None


def test_default_state_plan() -> None:
    catalog = default_products()
    events: list[InventoryEvent] = []
    for product_id in ("trio1kg", "duo400g", "rabbitWhole230", "duckWhole230"):
        receive(events, product_id, 2)
    receive(events, "boneBroth", 2)

    plan = plan_meal(make_dog(), events, catalog, [], today=TODAY)

    assert plan is not None
    assert plan.items == [
        MealItem("duo400g", 400),
        MealItem("rabbitWhole230", 230),
        MealItem("boneBroth", 80),
    ]
    assert plan.gram_target == pytest.approx(625)
    assert plan.total_grams == pytest.approx(710)
    assert plan.remaining_grams == pytest.approx(-5)
    assert plan.macros.muscle_pct == pytest.approx(484 / 710)
    assert plan.macros.organ_pct == pytest.approx(83 / 710)
    assert plan.macros.bone_pct == pytest.approx(63 / 710)


def test_single_oversized_pack_leaves_target_unfilled() -> None:
    catalog = catalog_of(
        make_product("trio1kg", grams=1000, protein="mixed", macros=(0.7, 0.15, 0.15))
    )
    events: list[InventoryEvent] = []
    receive(events, "trio1kg", 2)

    plan = plan_meal(make_dog(), events, catalog, [], today=TODAY)

    assert plan is not None
    assert plan.items == []
    assert plan.total_grams == 0
    assert plan.remaining_grams == pytest.approx(625)
    assert plan.macros == _ZERO
    assert plan.macro_gaps.muscle_g == pytest.approx(500)
    assert plan.macro_gaps.organ_g == pytest.approx(62.5)
    assert plan.macro_gaps.bone_g == pytest.approx(62.5)


def test_equal_usage_prefers_largest_stock() -> None:
    catalog = catalog_of(
        make_product("small", protein="duck"),
        make_product("bulk", protein="rabbit"),
    )
    events: list[InventoryEvent] = []
    receive(events, "small", 1)
    receive(events, "bulk", 3)

    plan = plan_meal(make_dog(), events, catalog, [], today=TODAY)

    assert _ids(plan) == ["bulk", "bulk"]
    assert plan.remaining_grams == pytest.approx(165)


def test_recently_used_protein_goes_last() -> None:
    catalog = catalog_of(
        make_product("duck", protein="duck"),
        make_product("rabbit", protein="rabbit"),
    )
    events: list[InventoryEvent] = []
    receive(events, "duck", 3)
    receive(events, "rabbit", 1)
    recent = [
        MealLogEntry(
            id="m1",
            dog_id="dog1",
            date=TODAY - timedelta(days=1),
            macros=_ZERO,
            items=[MealItem("duck", 230)],
        )
    ]

    plan = plan_meal(make_dog(), events, catalog, recent, today=TODAY)

    assert _ids(plan) == ["rabbit", "duck"]


def test_reserved_packs_are_not_reused() -> None:
    catalog = catalog_of(make_product("duck", protein="duck"))
    events: list[InventoryEvent] = []
    receive(events, "duck", 1.5)

    plan = plan_meal(make_dog(), events, catalog, [], today=TODAY)

    assert _ids(plan) == ["duck", "duck"]
    assert plan.remaining_grams == pytest.approx(165)


def test_allergies_and_empty_stock_are_excluded() -> None:
    catalog = catalog_of(
        make_product("chicken", protein="chicken"),
        make_product("duck", protein="duck"),
        make_product("rabbit", protein="rabbit"),
    )
    events: list[InventoryEvent] = []
    receive(events, "chicken", 5)
    receive(events, "duck", 1)
    append_event(events, "duck", "consume", 1, NOW)
    receive(events, "rabbit", 1)

    plan = plan_meal(
        make_dog(allergies=["Chicken"]), events, catalog, [], today=TODAY
    )

    assert _ids(plan) == ["rabbit"]


def test_mixed_protein_never_matches_allergies() -> None:
    catalog = catalog_of(make_product("duo", grams=400, protein="mixed"))
    events: list[InventoryEvent] = []
    receive(events, "duo", 1)

    plan = plan_meal(make_dog(allergies=["mixed"]), events, catalog, [], today=TODAY)

    assert _ids(plan) == ["duo"]


def test_broth_added_once_per_day() -> None:
    catalog = catalog_of(
        make_product("duck", protein="duck"),
        make_product(
            "broth", grams=250, protein="broth", category="pantry", pantry=True
        ),
    )
    events: list[InventoryEvent] = []
    receive(events, "duck", 3)
    receive(events, "broth", 1)

    first = plan_meal(make_dog(), events, catalog, [], today=TODAY)
    again = plan_meal(
        make_dog(), events, catalog, [], today=TODAY, last_broth_day=TODAY
    )

    assert MealItem("broth", 80) in first.items
    assert "broth" not in _ids(again)


def test_planning_does_not_touch_the_ledger() -> None:
    catalog = catalog_of(make_product("duck", protein="duck"))
    events: list[InventoryEvent] = []
    receive(events, "duck", 2)
    before = list(events)

    plan_meal(make_dog(), events, catalog, [], today=TODAY)

    assert events == before
    assert current_stock(events, "duck") == pytest.approx(2)


def test_realized_macros_skip_unknown_products() -> None:
    catalog = catalog_of(make_product("duck", macros=(1.0, 0.0, 0.0)))

    macros = realized_macros(
        [MealItem("duck", 100), MealItem("ghost", 100)], catalog
    )

    assert macros.muscle_pct == pytest.approx(0.5)
    assert macros.organ_pct == 0
    assert realized_macros([], catalog) == _ZERO


def test_pack_past_the_overshoot_limit_is_not_taken() -> None:
    catalog = catalog_of(
        make_product("duck", protein="duck"),
        make_product("rabbit", grams=200, protein="rabbit"),
    )
    events: list[InventoryEvent] = []
    receive(events, "duck", 2)
    receive(events, "rabbit", 1)

    plan = plan_meal(make_dog(), events, catalog, [], today=TODAY)

    # 165 g left after two duck packs; 230 > 215 is skipped, 200 fits.
    assert _ids(plan) == ["duck", "duck", "rabbit"]
    assert plan.remaining_grams == pytest.approx(-35)


@pytest.mark.parametrize(
    ("protein", "is_broth"),
    [("broth", True), (" Broth ", True), ("bone broth", False), ("beef", False)],
)
def test_broth_is_detected_by_exact_protein_tag(protein: str, is_broth: bool) -> None:
    catalog = catalog_of(
        make_product("duck", protein="duck"),
        make_product(
            "stock", grams=250, protein=protein, category="pantry", pantry=True
        ),
    )
    events: list[InventoryEvent] = []
    receive(events, "duck", 3)
    receive(events, "stock", 1)

    plan = plan_meal(make_dog(), events, catalog, [], today=TODAY)

    assert catalog["stock"].is_broth is is_broth
    assert ("stock" in _ids(plan)) is is_broth
