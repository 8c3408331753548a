"""Local account and Pro status."""

import hashlib
import hmac
import logging
import math
import secrets
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Literal

from pawfuel.domain.account import Account
from pawfuel.domain.state import AppState
from pawfuel.services.clock import Clock
from pawfuel.services.state import StateService

_logger = logging.getLogger(__name__)

_HASH_ITERATIONS = 100_000

SignInResult = Literal["ok", "not_found", "bad_credentials"]


def _hash_password(password: str, salt: str) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), salt.encode(), _HASH_ITERATIONS
    )
    return digest.hex()


def is_pro_active(state: AppState, now: datetime, trial_days: int = 30) -> bool:
    """Return True when Pro features are unlocked.

    The founder period wins; otherwise a signed-in account needs an active
    trial or a subscription, and without any account the manual flag applies.
    """
    if state.pro_expiry is not None and now < state.pro_expiry:
        return True
    account = state.account
    if account is None:
        return state.preferences.is_pro
    if not account.logged_in:
        return False
    if account.trial_start is not None:
        if now < account.trial_start + timedelta(days=trial_days):
            return True
    return account.subscription_start is not None


@dataclass(frozen=True)
class AccountStatus:
    """Account summary for display."""

    email: str | None
    logged_in: bool
    pro_active: bool
    trial_days_left: int | None


@dataclass
class AccountService:
    """Create, sign in to and sign out of the local account."""

    state_service: StateService
    clock: Clock
    trial_days: int = 30

    def create_account(self, email: str, password: str) -> Account | None:
        """Create the single local account; None when one already exists."""
        state = self.state_service.state
        if state.account is not None:
            _logger.info("Account already exists")
            return None
        cleaned = email.strip().lower()
        if not cleaned or not password:
            return None
        now = self.clock.now()
        salt = secrets.token_hex(8)
        state.account = Account(
            email=cleaned,
            password_hash=_hash_password(password, salt),
            salt=salt,
            created_at=now,
            trial_start=now,
            subscription_start=None,
            logged_in=True,
            onboarding_done=False,
        )
        self.refresh_pro_flag()
        self.state_service.save()
        return state.account

    def sign_in(self, email: str, password: str) -> SignInResult:
        """Mark the account as signed in when credentials match."""
        state = self.state_service.state
        account = state.account
        if account is None:
            return "not_found"
        expected = _hash_password(password, account.salt)
        if account.email != email.strip().lower() or not hmac.compare_digest(
            expected, account.password_hash
        ):
            return "bad_credentials"
        state.account = replace(account, logged_in=True)
        self.refresh_pro_flag()
        self.state_service.save()
        return "ok"

    def sign_out(self) -> None:
        state = self.state_service.state
        if state.account is None:
            return
        state.account = replace(state.account, logged_in=False)
        self.refresh_pro_flag()
        self.state_service.save()

    def is_pro_active(self) -> bool:
        return is_pro_active(
            self.state_service.state, self.clock.now(), self.trial_days
        )

    def refresh_pro_flag(self) -> bool:
        """Mirror the computed Pro status into the stored preference."""
        state = self.state_service.state
        active = self.is_pro_active()
        state.preferences.is_pro = active
        return active

    def founder_period_ended(self) -> bool:
        """Return True exactly once after the founder period expires."""
        state = self.state_service.state
        if state.pro_expiry is None or state.pro_expiry_notified:
            return False
        if self.clock.now() < state.pro_expiry:
            return False
        state.pro_expiry_notified = True
        self.state_service.save()
        return True

    def status(self) -> AccountStatus:
        state = self.state_service.state
        account = state.account
        trial_left: int | None = None
        if account is not None and account.trial_start is not None:
            remaining = (
                account.trial_start
                + timedelta(days=self.trial_days)
                - self.clock.now()
            )
            if remaining.total_seconds() > 0:
                trial_left = math.ceil(remaining.total_seconds() / 86400)
        return AccountStatus(
            email=account.email if account else None,
            logged_in=bool(account and account.logged_in),
            pro_active=self.is_pro_active(),
            trial_days_left=trial_left,
        )
