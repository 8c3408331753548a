"""Dog profile domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

EnergyLevel = Literal["low", "normal", "high"]
BodyCondition = Literal["lean", "ideal", "overweight"]


@dataclass(frozen=True)
class DogProfile:
    """Represents a dog the owner feeds."""

    id: str
    name: str
    breed: str
    sex: str
    weight_kg: float
    age_years: float
    energy: EnergyLevel
    body_condition: BodyCondition
    created_at: datetime
    updated_at: datetime
    allergies: list[str] = field(default_factory=list)

    def allergy_set(self) -> set[str]:
        """Return allergy tags lower-cased for matching."""
        return {tag.strip().lower() for tag in self.allergies if tag.strip()}
