"""Dog profile, onboarding and rotation service."""

import logging
import math
import random
from dataclasses import dataclass, replace
from typing import get_args

from pawfuel.config import parse_allergy_tags
from pawfuel.domain.dogs import BodyCondition, DogProfile, EnergyLevel
from pawfuel.domain.rotation import RotationDay, TreatSuggestion
from pawfuel.errors import InvalidInputError
from pawfuel.services.accounts import AccountService
from pawfuel.services.clock import Clock
from pawfuel.services.rotation import generate_rotation
from pawfuel.services.state import StateService
from pawfuel.services.treats import compute_daily_treats

_logger = logging.getLogger(__name__)

_ENERGY_LEVELS = set(get_args(EnergyLevel))
_BODY_CONDITIONS = set(get_args(BodyCondition))


def _validate_profile(dog: DogProfile) -> None:
    if not math.isfinite(dog.weight_kg) or dog.weight_kg <= 0:
        raise InvalidInputError("Weight must be a positive number")
    if not math.isfinite(dog.age_years) or dog.age_years < 0:
        raise InvalidInputError("Age must be zero or more")
    if dog.energy not in _ENERGY_LEVELS:
        raise InvalidInputError(f"Unknown energy level {dog.energy!r}")
    if dog.body_condition not in _BODY_CONDITIONS:
        raise InvalidInputError(f"Unknown body condition {dog.body_condition!r}")


@dataclass
class DogService:
    """Application service for the active dog."""

    state_service: StateService
    account_service: AccountService
    clock: Clock
    rng: random.Random

    def active_dog(self) -> DogProfile | None:
        return self.state_service.state.active_dog()

    def update_profile(self, **changes: object) -> DogProfile | None:
        """Apply profile edits to the active dog; None on invalid input."""
        state = self.state_service.state
        dog = state.active_dog()
        if dog is None:
            return None
        if "allergies" in changes:
            raw_allergies = changes["allergies"]
            changes["allergies"] = parse_allergy_tags(raw_allergies)  # type: ignore[arg-type]
        try:
            updated = replace(dog, **changes, updated_at=self.clock.now())
            _validate_profile(updated)
        except (InvalidInputError, TypeError) as exc:
            _logger.warning("Rejected profile update: %s", exc)
            return None
        state.dogs = [updated if d.id == dog.id else d for d in state.dogs]
        self.state_service.save()
        return updated

    def complete_onboarding(  # noqa: PLR0913
        self,
        *,
        weight_kg: float,
        age_years: float,
        energy: EnergyLevel,
        allergies: str | list[str],
        consent: bool,
    ) -> list[RotationDay] | None:
        """Save onboarding answers and regenerate the rotation.

        Returns None when consent is missing or the answers are invalid. The
        rotation is only generated while Pro is active, otherwise it is
        cleared.
        """
        if not consent:
            _logger.info("Onboarding refused without consent")
            return None
        updated = self.update_profile(
            weight_kg=weight_kg,
            age_years=age_years,
            energy=energy,
            allergies=allergies,
        )
        if updated is None:
            return None
        state = self.state_service.state
        state.consent_given = True
        state.rotation = []
        if self.account_service.refresh_pro_flag():
            state.rotation = generate_rotation(updated, state.products, self.rng)
        if state.account is not None:
            state.account = replace(state.account, onboarding_done=True)
        state.onboarding_done = True
        self.state_service.save()
        _logger.info("Onboarding complete: rotation days=%s", len(state.rotation))
        return state.rotation

    def rotation(self) -> list[RotationDay]:
        return self.state_service.state.rotation

    def daily_treats(self) -> list[TreatSuggestion]:
        """Return today's treat suggestion for the active dog."""
        state = self.state_service.state
        dog = state.active_dog()
        if dog is None:
            return []
        return compute_daily_treats(dog, state.products, self.rng)
