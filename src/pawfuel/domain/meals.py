"""Domain models for meal planning and logging."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class MealItem:
    """A product portion in grams."""

    product_id: str
    grams: float


@dataclass(frozen=True)
class MacroPercentages:
    """Realized muscle/organ/bone share of a set of items."""

    muscle_pct: float
    organ_pct: float
    bone_pct: float


@dataclass(frozen=True)
class FeedingTarget:
    """Daily gram target and its 80/10/10 split."""

    fraction: float
    grams: float
    muscle_g: float
    organ_g: float
    bone_g: float


@dataclass(frozen=True)
class MacroGaps:
    """Grams still missing per macro after selection."""

    muscle_g: float
    organ_g: float
    bone_g: float


@dataclass(frozen=True)
class MealPlan:
    """Suggested meal for one day; nothing is consumed until confirmed."""

    dog_id: str
    items: list[MealItem]
    gram_target: float
    total_grams: float
    macros: MacroPercentages
    remaining_grams: float
    macro_gaps: MacroGaps


@dataclass(frozen=True)
class MealLogEntry:
    """A confirmed meal."""

    id: str
    dog_id: str
    date: date
    macros: MacroPercentages
    items: list[MealItem] = field(default_factory=list)
