"""Daily meal planning from current stock.

The planner is a pure function of the dog, the ledger, the catalog and the
recent meal history. Packs chosen while planning are held in a local
reservation map so the same stock is never picked twice; the ledger itself
is only written when a plan is confirmed.
"""

from collections import Counter, defaultdict
from collections.abc import Iterable, Mapping, Sequence
from datetime import date

from pawfuel.domain.dogs import DogProfile
from pawfuel.domain.inventory import InventoryEvent
from pawfuel.domain.meals import (
    MacroGaps,
    MacroPercentages,
    MealItem,
    MealLogEntry,
    MealPlan,
)
from pawfuel.domain.products import Product
from pawfuel.services.feeding import compute_feeding_target
from pawfuel.services.inventory import stock_levels

RECENT_MEALS_WINDOW = 4
OVERSHOOT_GRAMS = 50
TOP_UP_THRESHOLD_GRAMS = 20
BROTH_GRAMS = 80


def realized_macros(
    items: Iterable[MealItem], catalog: Mapping[str, Product]
) -> MacroPercentages:
    """Return muscle/organ/bone shares of the items by weight."""
    total = muscle = organ = bone = 0.0
    for item in items:
        total += item.grams
        product = catalog.get(item.product_id)
        if product is None:
            continue
        muscle += item.grams * product.macros.muscle
        organ += item.grams * product.macros.organ
        bone += item.grams * product.macros.bone
    if total <= 0:
        return MacroPercentages(muscle_pct=0.0, organ_pct=0.0, bone_pct=0.0)
    return MacroPercentages(
        muscle_pct=muscle / total,
        organ_pct=organ / total,
        bone_pct=bone / total,
    )


def protein_usage(
    meals: Iterable[MealLogEntry], catalog: Mapping[str, Product]
) -> Counter[str]:
    """Count how often each protein tag appears across the meals' items."""
    usage: Counter[str] = Counter()
    for meal in meals:
        for item in meal.items:
            product = catalog.get(item.product_id)
            if product is not None:
                usage[product.protein] += 1
    return usage


def plan_meal(  # noqa: PLR0913
    dog: DogProfile | None,
    events: Sequence[InventoryEvent],
    catalog: Mapping[str, Product],
    recent_meals: Sequence[MealLogEntry],
    *,
    today: date,
    last_broth_day: date | None = None,
) -> MealPlan | None:
    """Suggest today's meal for a dog, or None when no dog is active."""
    if dog is None:
        return None
    target = compute_feeding_target(dog)
    usage = protein_usage(recent_meals[-RECENT_MEALS_WINDOW:], catalog)
    levels = stock_levels(events)
    reserved: dict[str, float] = defaultdict(float)

    def available(product_id: str) -> float:
        return levels.get(product_id, 0.0) - reserved[product_id]

    allergies = dog.allergy_set()
    candidates = [
        product
        for product in catalog.values()
        if levels.get(product.id, 0.0) > 0
        and not product.pantry
        and not product.matches_allergy(allergies)
    ]
    # Rarely used proteins first; among equals, the largest stock goes first.
    candidates.sort(key=lambda p: (usage.get(p.protein, 0), -levels[p.id]))

    items: list[MealItem] = []
    remaining = target.grams
    muscle_gap, organ_gap, bone_gap = target.muscle_g, target.organ_g, target.bone_g

    def take(product: Product) -> None:
        nonlocal remaining, muscle_gap, organ_gap, bone_gap
        grams = product.grams_per_pack
        items.append(MealItem(product_id=product.id, grams=grams))
        reserved[product.id] += 1
        remaining -= grams
        muscle_gap -= grams * product.macros.muscle
        organ_gap -= grams * product.macros.organ
        bone_gap -= grams * product.macros.bone

    for product in candidates:
        while remaining > 0 and available(product.id) > 0:
            if product.grams_per_pack > remaining + OVERSHOOT_GRAMS:
                break
            take(product)
        if remaining <= 0:
            break

    if last_broth_day != today:
        broth = next((p for p in catalog.values() if p.is_broth), None)
        if broth is not None and available(broth.id) > 0:
            items.append(MealItem(product_id=broth.id, grams=BROTH_GRAMS))

    # Smallest-fit top-up. With reservations this never adds a pack: the greedy
    # loop only leaves a candidate once its stock is reserved or its pack is
    # already too large, and remaining only shrinks after that.
    if remaining > TOP_UP_THRESHOLD_GRAMS:
        for product in sorted(candidates, key=lambda p: p.grams_per_pack):
            if available(product.id) <= 0:
                continue
            if product.grams_per_pack <= remaining + OVERSHOOT_GRAMS:
                take(product)
                break

    return MealPlan(
        dog_id=dog.id,
        items=items,
        gram_target=target.grams,
        total_grams=sum(item.grams for item in items),
        macros=realized_macros(items, catalog),
        remaining_grams=remaining,
        macro_gaps=MacroGaps(
            muscle_g=muscle_gap, organ_g=organ_gap, bone_g=bone_gap
        ),
    )
