"""Advisory messages for a planned meal."""

import math
import random
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from pawfuel.domain.dogs import DogProfile
from pawfuel.domain.inventory import InventoryEvent
from pawfuel.domain.meals import MealLogEntry, MealPlan
from pawfuel.domain.products import Product
from pawfuel.services.inventory import stock_grams
from pawfuel.services.treats import compute_daily_treats

VARIETY_WINDOW = 7
VARIETY_GOAL = 3
LOW_PCT = 0.08
HIGH_PCT = 0.12
LOW_STOCK_DAYS = 2

_PACK_SIZE_SUFFIX = re.compile(r"\s*\d+(?:\.\d+)?g$", re.IGNORECASE)


@dataclass(frozen=True)
class CoachMessage:
    """Language-neutral advisory message."""

    key: str
    params: dict[str, object] = field(default_factory=dict)


def days_of_food_left(
    events: Sequence[InventoryEvent],
    catalog: Mapping[str, Product],
    daily_grams: float,
) -> float:
    """Return how many days the non-pantry stock covers."""
    if daily_grams <= 0:
        return math.inf
    return stock_grams(events, catalog) / daily_grams


def generate_coach_messages(  # noqa: PLR0913
    plan: MealPlan,
    recent_meals: Sequence[MealLogEntry],
    events: Sequence[InventoryEvent],
    catalog: Mapping[str, Product],
    dog: DogProfile,
    rng: random.Random,
) -> list[CoachMessage]:
    """Return advice in a fixed order: variety, organ, bone, stock, treat."""
    messages: list[CoachMessage] = []

    proteins = {
        catalog[item.product_id].protein
        for meal in recent_meals[-VARIETY_WINDOW:]
        for item in meal.items
        if item.product_id in catalog
    }
    if len(proteins) >= VARIETY_GOAL:
        messages.append(CoachMessage("variety_good", {"count": len(proteins)}))
    else:
        messages.append(CoachMessage("variety_low"))

    organ_pct = plan.macros.organ_pct
    if organ_pct < LOW_PCT:
        messages.append(CoachMessage("organ_low"))
    if organ_pct > HIGH_PCT:
        messages.append(CoachMessage("organ_high"))
    bone_pct = plan.macros.bone_pct
    if bone_pct < LOW_PCT:
        messages.append(CoachMessage("bone_low"))
    if bone_pct > HIGH_PCT:
        messages.append(CoachMessage("bone_high"))

    days_left = days_of_food_left(events, catalog, plan.gram_target)
    if days_left <= LOW_STOCK_DAYS:
        messages.append(CoachMessage("low_stock", {"days": days_left}))

    treats = compute_daily_treats(dog, catalog, rng)
    if treats:
        first = treats[0]
        product = catalog.get(first.product_id)
        name = (
            _PACK_SIZE_SUFFIX.sub("", product.name) if product else first.product_id
        )
        messages.append(
            CoachMessage("treat", {"pieces": first.pieces, "product": name})
        )
    return messages


_TEMPLATES = {
    "variety_good": "Great variety! You used {count} proteins this week.",
    "variety_low": "Try adding another protein tomorrow to keep things balanced.",
    "organ_low": "Organ content is low; consider adding organ treats.",
    "organ_high": "Organ content high; reduce organs in next meal.",
    "bone_low": "Bone content low; add bone broth or meaty bone next meal.",
    "bone_high": "Too much bone may cause constipation; add muscle meat.",
    "low_stock": "Low stock: about {days} {day_word} left. Consider ordering soon.",
    "treat": "Offer {quantity} of {product} as a treat today.",
}


def render_message(message: CoachMessage) -> str:
    """Render a coach message as English text."""
    params = dict(message.params)
    if message.key == "low_stock":
        days = float(params.get("days", 0))
        params["days"] = f"{days:.1f}"
        # Singular or plural follows the unrounded count.
        params["day_word"] = "day" if days < 1 else "days"
    if message.key == "treat":
        pieces = params.get("pieces")
        params["quantity"] = "1 piece" if pieces == 1 else f"{pieces} pieces"
    template = _TEMPLATES.get(message.key, message.key)
    return template.format(**params)
