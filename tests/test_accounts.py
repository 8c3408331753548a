"""Tests for the local account and Pro status."""

from datetime import timedelta

from pawfuel.domain.account import Account
from pawfuel.domain.state import AppState
from pawfuel.services.accounts import is_pro_active
from tests.conftest import NOW


def _account(**overrides: object) -> Account:
    values: dict[str, object] = {
        "email": "owner@example.com",
        "password_hash": "x",
        "salt": "y",
        "created_at": NOW,
        "trial_start": NOW,
        "subscription_start": None,
        "logged_in": True,
        "onboarding_done": False,
    }
    values.update(overrides)
    return Account(**values)  # type: ignore[arg-type]


def test_pro_status_rules() -> None:
    state = AppState()
    assert is_pro_active(state, NOW) is False

    state.preferences.is_pro = True
    assert is_pro_active(state, NOW) is True

    state.account = _account()
    assert is_pro_active(state, NOW + timedelta(days=29)) is True
    assert is_pro_active(state, NOW + timedelta(days=31)) is False

    state.account = _account(subscription_start=NOW)
    assert is_pro_active(state, NOW + timedelta(days=400)) is True

    state.account = _account(logged_in=False, subscription_start=NOW)
    assert is_pro_active(state, NOW) is False

    state.pro_expiry = NOW + timedelta(days=1)
    assert is_pro_active(state, NOW) is True


def test_create_account_and_sign_in(container) -> None:
    accounts = container.account_service

    account = accounts.create_account(" Owner@Example.com ", "secret")

    assert account is not None
    assert account.email == "owner@example.com"
    assert account.password_hash != "secret"
    assert accounts.create_account("other@example.com", "pw") is None

    accounts.sign_out()
    assert accounts.status().logged_in is False
    assert accounts.sign_in("owner@example.com", "wrong") == "bad_credentials"
    assert accounts.sign_in("OWNER@example.com", "secret") == "ok"
    assert accounts.status().logged_in is True


def test_sign_in_without_account(container) -> None:
    assert container.account_service.sign_in("a@b.c", "pw") == "not_found"


def test_create_account_requires_credentials(container) -> None:
    assert container.account_service.create_account("  ", "pw") is None
    assert container.account_service.create_account("a@b.c", "") is None


def test_trial_days_left(container, clock) -> None:
    accounts = container.account_service
    container.state_service.state.pro_expiry = None
    accounts.create_account("owner@example.com", "secret")

    assert accounts.status().trial_days_left == 30
    clock.advance(days=29.5)
    status = accounts.status()
    assert status.trial_days_left == 1
    assert status.pro_active is True

    clock.advance(days=1)
    status = accounts.status()
    assert status.trial_days_left is None
    assert status.pro_active is False
    assert accounts.refresh_pro_flag() is False
    assert container.state_service.state.preferences.is_pro is False


def test_founder_period_ends_once(container, clock) -> None:
    accounts = container.account_service
    assert accounts.founder_period_ended() is False

    clock.advance(days=366)

    assert accounts.founder_period_ended() is True
    assert accounts.founder_period_ended() is False
