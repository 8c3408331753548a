"""Meal planning and logging service."""

import logging
import random
from dataclasses import dataclass

from pawfuel.domain.meals import MacroPercentages, MealLogEntry, MealPlan
from pawfuel.services.clock import Clock, local_today
from pawfuel.services.coaching import CoachMessage, generate_coach_messages
from pawfuel.services.ids import new_id
from pawfuel.services.inventory import InventoryService
from pawfuel.services.planner import RECENT_MEALS_WINDOW, plan_meal
from pawfuel.services.state import StateService

_logger = logging.getLogger(__name__)

INSIGHTS_WINDOW = 7


@dataclass(frozen=True)
class InsightRow:
    """Proteins fed on a logged day."""

    date: str
    proteins: list[str]


@dataclass(frozen=True)
class Insights:
    """Recent feeding history for the active dog."""

    rows: list[InsightRow]
    last_macros: MacroPercentages | None


@dataclass
class MealService:
    """Plans, confirms and reviews meals for the active dog."""

    state_service: StateService
    inventory_service: InventoryService
    clock: Clock
    rng: random.Random
    timezone: str = "UTC"

    def plan(self) -> MealPlan | None:
        """Suggest today's meal without touching the ledger."""
        state = self.state_service.state
        dog = state.active_dog()
        if dog is None:
            return None
        return plan_meal(
            dog,
            state.inventory_events,
            state.products,
            state.meals_for(dog.id)[-RECENT_MEALS_WINDOW:],
            today=local_today(self.clock, self.timezone),
            last_broth_day=state.last_bone_broth_day,
        )

    def confirm_meal(self, plan: MealPlan) -> MealLogEntry | None:
        """Consume the planned packs and log the meal."""
        state = self.state_service.state
        if not any(dog.id == plan.dog_id for dog in state.dogs):
            _logger.warning("Cannot confirm meal for unknown dog %s", plan.dog_id)
            return None
        today = local_today(self.clock, self.timezone)
        gave_broth = False
        for item in plan.items:
            product = state.products.get(item.product_id)
            if product is None or product.grams_per_pack <= 0:
                _logger.warning("Skipping unknown product %s", item.product_id)
                continue
            packs = item.grams / product.grams_per_pack
            on_hand = max(self.inventory_service.current_stock(product.id), 0.0)
            if packs > on_hand:
                _logger.warning(
                    "Plan for %s exceeds stock (%.2f > %.2f), consuming what is left",
                    product.id,
                    packs,
                    on_hand,
                )
                packs = on_hand
            self.inventory_service.add_event(product.id, "consume", packs)
            if product.is_broth:
                gave_broth = True

        entry = MealLogEntry(
            id=new_id("meal_"),
            dog_id=plan.dog_id,
            date=today,
            items=list(plan.items),
            macros=plan.macros,
        )
        state.meals.append(entry)
        if gave_broth:
            state.last_bone_broth_day = today
        self.state_service.save()
        _logger.info(
            "Meal confirmed: dog=%s items=%s grams=%s",
            plan.dog_id,
            len(plan.items),
            plan.total_grams,
        )
        return entry

    def coach(self, plan: MealPlan) -> list[CoachMessage]:
        """Return advisory messages for a plan."""
        state = self.state_service.state
        dog = next((d for d in state.dogs if d.id == plan.dog_id), None)
        if dog is None:
            return []
        return generate_coach_messages(
            plan,
            state.meals_for(dog.id),
            state.inventory_events,
            state.products,
            dog,
            self.rng,
        )

    def insights(self) -> Insights:
        """Return proteins of the last week of meals and the last meal's macros."""
        state = self.state_service.state
        dog = state.active_dog()
        if dog is None:
            return Insights(rows=[], last_macros=None)
        meals = state.meals_for(dog.id)[-INSIGHTS_WINDOW:]
        rows = [
            InsightRow(
                date=meal.date.isoformat(),
                proteins=[
                    state.products[item.product_id].protein
                    for item in meal.items
                    if item.product_id in state.products
                ],
            )
            for meal in meals
        ]
        return Insights(rows=rows, last_macros=meals[-1].macros if meals else None)
