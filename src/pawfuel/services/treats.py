"""Daily treat suggestions."""

import random
from collections.abc import Mapping

from pawfuel.domain.dogs import DogProfile
from pawfuel.domain.products import Product
from pawfuel.domain.rotation import TreatSuggestion

SMALL_DOG_KG = 10
LARGE_DOG_KG = 25
MAX_TREAT_TYPES = 2


def treat_piece_cap(weight_kg: float) -> int:
    """Return the daily treat piece budget for a body weight."""
    if weight_kg < SMALL_DOG_KG:
        return 2
    if weight_kg < LARGE_DOG_KG:
        return 3
    return 4


def compute_daily_treats(
    dog: DogProfile, catalog: Mapping[str, Product], rng: random.Random
) -> list[TreatSuggestion]:
    """Pick up to two pantry treats and split the piece budget across them."""
    pool = [p for p in catalog.values() if p.pantry and not p.is_broth]
    if not pool:
        return []
    remaining = treat_piece_cap(dog.weight_kg or 0)
    rng.shuffle(pool)
    selected = pool[:MAX_TREAT_TYPES]

    treats: list[TreatSuggestion] = []
    for index, product in enumerate(selected):
        slots_left = len(selected) - index
        if slots_left == 1:
            pieces = remaining
        else:
            pieces = max(1, remaining // slots_left)
        remaining -= pieces
        treats.append(TreatSuggestion(product_id=product.id, pieces=pieces))
    return treats
