"""Seven-day rotation calendar."""

import math
import random
from collections.abc import Mapping

from pawfuel.domain.dogs import DogProfile
from pawfuel.domain.meals import MealItem
from pawfuel.domain.products import Product
from pawfuel.domain.rotation import RotationDay
from pawfuel.services.feeding import compute_feeding_fraction
from pawfuel.services.planner import realized_macros
from pawfuel.services.treats import compute_daily_treats

ROTATION_DAYS = 7
MIN_ITEMS_PER_DAY = 2
MAX_ITEMS_PER_DAY = 4


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _pick_distinct(
    products: list[Product], count: int, rng: random.Random
) -> list[Product]:
    shuffled = list(products)
    rng.shuffle(shuffled)
    picked: list[Product] = []
    seen: set[str] = set()
    for product in shuffled[:count]:
        if product.id not in seen:
            picked.append(product)
            seen.add(product.id)
    # Refill from the rest of the shuffle if ids repeated in the head.
    for product in shuffled[count:]:
        if len(picked) >= count:
            break
        if product.id not in seen:
            picked.append(product)
            seen.add(product.id)
    return picked


def _allocate_grams(products: list[Product], grams_per_day: float) -> list[MealItem]:
    items: list[MealItem] = []
    remaining = grams_per_day
    share = grams_per_day / len(products)
    for index, product in enumerate(products):
        pack = product.grams_per_pack
        grams = max(_round_half_up(share / pack) * pack, pack)
        if index == len(products) - 1:
            grams = remaining
        if grams < 0:
            grams = pack
        items.append(MealItem(product_id=product.id, grams=grams))
        remaining -= grams
    return items


def generate_rotation(
    dog: DogProfile | None, catalog: Mapping[str, Product], rng: random.Random
) -> list[RotationDay]:
    """Build a fresh 7-day plan from the raw catalog without touching stock."""
    if dog is None:
        return []
    raw_products = [
        p for p in catalog.values() if p.category == "raw" and not p.pantry
    ]
    if not raw_products:
        return []
    grams_per_day = _round_half_up(
        (dog.weight_kg or 0) * 1000 * compute_feeding_fraction(dog)
    )

    rotation: list[RotationDay] = []
    for day in range(1, ROTATION_DAYS + 1):
        count = min(
            rng.randint(MIN_ITEMS_PER_DAY, MAX_ITEMS_PER_DAY), len(raw_products)
        )
        products = _pick_distinct(raw_products, count, rng)
        items = _allocate_grams(products, grams_per_day)
        rotation.append(
            RotationDay(
                day=day,
                items=items,
                snacks=compute_daily_treats(dog, catalog, rng),
                macros=realized_macros(items, catalog),
            )
        )
    return rotation
