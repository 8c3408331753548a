"""JSON file persistence for the application state."""

import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from pawfuel.domain.state import AppState
from pawfuel.services.state import StateRepository

_logger = logging.getLogger(__name__)

_STATE_ADAPTER = TypeAdapter(AppState)


def dump_state(state: AppState) -> bytes:
    """Serialize the state snapshot to JSON."""
    return _STATE_ADAPTER.dump_json(state, indent=2)


def load_state(payload: bytes | str) -> AppState:
    """Parse a JSON snapshot; raises ``ValidationError`` on bad data."""
    return _STATE_ADAPTER.validate_json(payload)


@dataclass
class JsonFileStateStore(StateRepository):
    """Stores the whole state as one JSON document."""

    path: Path

    def load(self) -> AppState | None:
        if not self.path.exists():
            return None
        try:
            return load_state(self.path.read_bytes())
        except (OSError, ValidationError) as exc:
            _logger.warning("Stored state at %s is unreadable: %s", self.path, exc)
            return None

    def save(self, state: AppState) -> bool:
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(dump_state(state))
            tmp_path.replace(self.path)
        except OSError as exc:
            _logger.warning("Failed to write state to %s: %s", self.path, exc)
            return False
        return True

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            _logger.warning("Failed to remove state file %s: %s", self.path, exc)
