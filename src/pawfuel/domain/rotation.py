"""Rotation calendar domain models."""

from dataclasses import dataclass

from pawfuel.domain.meals import MacroPercentages, MealItem


@dataclass(frozen=True)
class TreatSuggestion:
    """Pieces of a pantry treat to offer in a day."""

    product_id: str
    pieces: int


@dataclass(frozen=True)
class RotationDay:
    """One day of the forward rotation plan."""

    day: int
    items: list[MealItem]
    snacks: list[TreatSuggestion]
    macros: MacroPercentages
