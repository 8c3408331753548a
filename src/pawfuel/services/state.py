"""State ownership and persistence."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from pawfuel.domain.state import AppState, Preferences
from pawfuel.services.clock import Clock
from pawfuel.services.defaults import build_default_state

_logger = logging.getLogger(__name__)


class StateRepository(Protocol):
    """Persistence interface for the application snapshot."""

    def load(self) -> AppState | None:
        """Return the stored state, or None when absent or unreadable."""

    def save(self, state: AppState) -> bool:
        """Persist the state and report success."""

    def clear(self) -> None:
        """Remove the stored state."""


@dataclass
class StateService:
    """Owns the single mutable state object and writes it through."""

    repository: StateRepository
    clock: Clock
    founder_pro_days: int = 365
    _state: AppState | None = field(default=None, init=False, repr=False)

    @property
    def state(self) -> AppState:
        """Return the current state, loading or seeding it on first use."""
        if self._state is None:
            self._state = self._load_or_default()
        return self._state

    def save(self) -> bool:
        """Persist the current state; a failure only warns once."""
        state = self.state
        if self.repository.save(state):
            return True
        if not state.memory_fallback:
            state.memory_fallback = True
            _logger.warning(
                "Storage unavailable; data will not persist between sessions"
            )
        return False

    def update_preferences(
        self, *, preferred_branch: str | None = None, language: str | None = None
    ) -> Preferences:
        preferences = self.state.preferences
        if preferred_branch is not None:
            preferences.preferred_branch = preferred_branch
        if language is not None:
            preferences.language = language
        self.save()
        return preferences

    def reset(self) -> AppState:
        """Delete stored data and start over from the default state."""
        self.repository.clear()
        self._state = build_default_state(self.clock.now(), self.founder_pro_days)
        _logger.info("All local data removed")
        self.save()
        return self._state

    def _load_or_default(self) -> AppState:
        loaded = self.repository.load()
        if loaded is not None:
            return loaded
        _logger.info("No stored state found, seeding defaults")
        return build_default_state(self.clock.now(), self.founder_pro_days)
