"""Tests for the navigation guard decision rules."""

import pytest

from freelance_shell.config.settings import RoutingSettings, StorageSettings
from freelance_shell.domain.session import SessionState
from freelance_shell.services.route_guard import (
    GuardDecision,
    PersistLastRoute,
    RouteGuard,
    RouteTarget,
    Verdict,
    authorize,
)

FINANCE = RouteTarget(
    full_path="/finance/accounts", requires_auth=True, module_id="finance"
)
CLIENTS = RouteTarget(full_path="/clients?page=2", requires_auth=True, module_id="clients")
LOGIN = RouteTarget(full_path="/login")
SPLASH = RouteTarget(full_path="/splash")


@pytest.fixture
def guard(registry):
    return RouteGuard(registry)


def test_uninitialized_session_goes_to_splash(guard):
    decision = guard.decide(CLIENTS, SessionState.UNINITIALIZED, None)
    assert decision.verdict is Verdict.REDIRECT
    assert decision.location == "/splash"
    assert decision.effects == ()


def test_unauthenticated_with_accounts_goes_to_login(guard):
    decision = guard.decide(CLIENTS, SessionState.UNAUTHENTICATED_HAS_ACCOUNTS, None)
    assert decision.location == "/login"
    assert decision.reason == "login_required"


def test_unauthenticated_without_accounts_goes_to_register(guard):
    decision = guard.decide(CLIENTS, SessionState.UNAUTHENTICATED_NO_ACCOUNTS, None)
    assert decision.location == "/register"


def test_authenticated_user_cannot_revisit_public_screens(guard):
    decision = guard.decide(LOGIN, SessionState.AUTHENTICATED, None)
    assert decision.location == "/dashboard"
    assert decision.reason == "already_authenticated"


def test_authenticated_user_may_land_on_splash(guard):
    decision = guard.decide(SPLASH, SessionState.AUTHENTICATED, None)
    assert decision.allowed
    assert decision.effects == ()


def test_disabled_module_redirects_to_dashboard(guard):
    decision = guard.decide(FINANCE, SessionState.AUTHENTICATED, {"finance": False})
    assert decision.location == "/dashboard"
    assert decision.reason == "module_disabled"
    assert decision.effects == ()


def test_default_enabled_module_is_allowed_and_persisted(guard):
    decision = guard.decide(FINANCE, SessionState.AUTHENTICATED, None)
    assert decision == GuardDecision.allow(
        effects=(PersistLastRoute(key="lastRoute", full_path="/finance/accounts"),)
    )


def test_non_toggleable_module_ignores_disable_override(guard):
    decision = guard.decide(CLIENTS, SessionState.AUTHENTICATED, {"clients": False})
    assert decision.allowed
    assert decision.effects[0].full_path == "/clients?page=2"


def test_unknown_module_id_is_allowed(guard):
    target = RouteTarget(full_path="/legacy", requires_auth=True, module_id="payroll")
    assert guard.decide(target, SessionState.AUTHENTICATED, {"payroll": False}).allowed


def test_unknown_module_id_with_closed_policy_redirects(registry):
    guard = RouteGuard(registry, unknown_module_policy="closed")
    target = RouteTarget(full_path="/legacy", requires_auth=True, module_id="payroll")
    assert guard.decide(target, SessionState.AUTHENTICATED, None).location == "/dashboard"


def test_auth_target_without_module_is_allowed(guard):
    target = RouteTarget(full_path="/profile", requires_auth=True)
    decision = guard.decide(target, SessionState.AUTHENTICATED, {"finance": False})
    assert decision.allowed


@pytest.mark.parametrize(
    "session",
    [
        SessionState.UNINITIALIZED,
        SessionState.UNAUTHENTICATED_HAS_ACCOUNTS,
        SessionState.UNAUTHENTICATED_NO_ACCOUNTS,
    ],
)
def test_public_targets_are_allowed_without_session(guard, session):
    decision = guard.decide(LOGIN, session, None)
    assert decision.allowed
    assert decision.effects == ()


def test_session_rules_take_priority_over_module_rules(guard):
    decision = guard.decide(
        FINANCE, SessionState.UNAUTHENTICATED_HAS_ACCOUNTS, {"finance": False}
    )
    assert decision.location == "/login"


def test_custom_paths_and_storage_key(registry):
    decision = authorize(
        FINANCE,
        SessionState.UNINITIALIZED,
        None,
        registry=registry,
        routing=RoutingSettings(splash_path="/boot"),
    )
    assert decision.location == "/boot"

    decision = authorize(
        FINANCE,
        SessionState.AUTHENTICATED,
        None,
        registry=registry,
        storage=StorageSettings(last_route_key="resume"),
    )
    assert decision.effects == (PersistLastRoute(key="resume", full_path="/finance/accounts"),)


def test_target_from_match_uses_chain_metadata(registry):
    target = RouteTarget.from_match(registry.resolve("/finance/import"))
    assert target == RouteTarget(
        full_path="/finance/import", requires_auth=True, module_id="finance"
    )
