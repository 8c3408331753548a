"""Stool log domain models."""

from dataclasses import dataclass
from datetime import date
from typing import Literal

StoolResult = Literal["Healthy", "Watch", "Vet"]


@dataclass(frozen=True)
class StoolLogEntry:
    """Represents a logged stool photo and its classification."""

    id: str
    dog_id: str
    date: date
    result: StoolResult
    image_data_url: str | None
