"""Application state snapshot."""

from dataclasses import dataclass, field
from datetime import date, datetime

from pawfuel.domain.account import Account
from pawfuel.domain.dogs import DogProfile
from pawfuel.domain.inventory import InventoryEvent
from pawfuel.domain.meals import MealLogEntry
from pawfuel.domain.orders import OrderHistoryEntry, RecurringOrder
from pawfuel.domain.products import Product
from pawfuel.domain.rotation import RotationDay
from pawfuel.domain.stool import StoolLogEntry


@dataclass
class Preferences:
    """Owner preferences."""

    feeding_percent: float = 0.03
    language: str = "en"
    preferred_branch: str = "lebanon"
    is_pro: bool = False


@dataclass
class AppState:
    """Everything the app persists, owned by a single state service.

    There is no concurrency control: one writer is assumed.
    """

    dogs: list[DogProfile] = field(default_factory=list)
    active_dog_id: str | None = None
    products: dict[str, Product] = field(default_factory=dict)
    inventory_events: list[InventoryEvent] = field(default_factory=list)
    meals: list[MealLogEntry] = field(default_factory=list)
    stool_logs: list[StoolLogEntry] = field(default_factory=list)
    rotation: list[RotationDay] = field(default_factory=list)
    preferences: Preferences = field(default_factory=Preferences)
    account: Account | None = None
    consent_given: bool = False
    onboarding_done: bool = False
    last_bone_broth_day: date | None = None
    pro_expiry: datetime | None = None
    pro_expiry_notified: bool = False
    recurring_orders: list[RecurringOrder] = field(default_factory=list)
    order_history: list[OrderHistoryEntry] = field(default_factory=list)
    memory_fallback: bool = False

    def active_dog(self) -> DogProfile | None:
        """Return the active dog profile, if any."""
        for dog in self.dogs:
            if dog.id == self.active_dog_id:
                return dog
        return None

    def meals_for(self, dog_id: str) -> list[MealLogEntry]:
        """Return meal logs of a dog in log order."""
        return [meal for meal in self.meals if meal.dog_id == dog_id]
