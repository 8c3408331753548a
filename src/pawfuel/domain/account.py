"""Local account domain models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Account:
    """Local-only account record; nothing is verified remotely."""

    email: str
    password_hash: str
    salt: str
    created_at: datetime
    trial_start: datetime | None
    subscription_start: datetime | None
    logged_in: bool
    onboarding_done: bool
