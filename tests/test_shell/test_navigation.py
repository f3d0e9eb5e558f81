"""Tests for the navigation runtime around the guard."""

from types import SimpleNamespace

import pytest

from freelance_shell.config.settings import RoutingSettings, Settings
from freelance_shell.domain.session import SessionState
from freelance_shell.shell.navigation import (
    NavigationError,
    Navigator,
    clear_session,
    overrides_source_from,
    session_source_from,
)
from freelance_shell.shell.preferences import UserPreferences


def test_allowed_navigation_persists_last_route(navigator, memory_store):
    result = navigator.navigate("/clients?page=2")

    assert result.committed
    assert result.location == "/clients?page=2"
    assert memory_store.get("lastRoute") == "/clients?page=2"
    assert navigator.current.record.path == "/clients"


def test_last_route_is_overwritten_by_each_authorized_navigation(
    navigator, memory_store
):
    navigator.navigate("/clients")
    navigator.navigate("/projects/7")

    assert memory_store.get("lastRoute") == "/projects/7"


def test_root_redirects_to_dashboard(navigator):
    result = navigator.navigate("/")

    assert result.location == "/dashboard"
    assert result.ticket.hops == ("/dashboard",)


def test_index_child_redirect_is_followed(navigator, memory_store):
    result = navigator.navigate("/settings")

    assert result.location == "/settings/general"
    assert memory_store.get("lastRoute") == "/settings/general"


def test_unauthenticated_user_lands_on_login_without_persisting(
    navigator, memory_store, session_box
):
    session_box.state = SessionState.UNAUTHENTICATED_HAS_ACCOUNTS

    result = navigator.navigate("/invoices")

    assert result.location == "/login"
    assert result.redirected
    assert memory_store.get("lastRoute") is None


def test_uninitialized_session_lands_on_splash(navigator, session_box):
    session_box.state = SessionState.UNINITIALIZED

    assert navigator.navigate("/finance").location == "/splash"


def test_first_run_lands_on_register(navigator, session_box):
    session_box.state = SessionState.UNAUTHENTICATED_NO_ACCOUNTS

    assert navigator.navigate("/dashboard").location == "/register"


def test_authenticated_login_visit_redirects_to_dashboard(navigator):
    result = navigator.navigate("/login")

    assert result.location == "/dashboard"
    assert [decision.reason for decision in result.ticket.decisions] == [
        "already_authenticated",
        "",
    ]


def test_disabled_finance_redirects_to_dashboard(navigator, session_box, memory_store):
    session_box.overrides = {"finance": False}

    result = navigator.navigate("/finance/accounts")

    assert result.location == "/dashboard"
    assert memory_store.get("lastRoute") == "/dashboard"


def test_finance_allowed_without_override(navigator):
    assert navigator.navigate("/finance/accounts").location == "/finance/accounts"


def test_override_map_replaced_between_navigations(navigator, session_box):
    assert navigator.navigate("/finance").location == "/finance/overview"

    session_box.overrides = {"finance": False}

    assert navigator.navigate("/finance").location == "/dashboard"


def test_unmatched_path_sends_authenticated_user_to_dashboard(
    navigator, memory_store
):
    result = navigator.navigate("/nowhere")

    assert result.location == "/dashboard"
    assert result.ticket.hops == ("/dashboard",)
    assert result.ticket.decisions[0].reason == "already_authenticated"
    assert memory_store.get("lastRoute") == "/dashboard"


@pytest.mark.parametrize(
    "state",
    [
        SessionState.UNINITIALIZED,
        SessionState.UNAUTHENTICATED_HAS_ACCOUNTS,
        SessionState.UNAUTHENTICATED_NO_ACCOUNTS,
    ],
)
def test_unmatched_path_is_allowed_without_session(
    navigator, memory_store, session_box, state
):
    session_box.state = state

    result = navigator.navigate("/nowhere")

    assert result.location == "/nowhere"
    assert not result.redirected
    assert result.ticket.match is None
    assert navigator.current is None
    assert memory_store.get("lastRoute") is None


def test_superseded_attempt_is_discarded(navigator, memory_store):
    stale = navigator.begin("/clients")
    latest = navigator.begin("/reports")

    stale_result = navigator.commit(stale)
    latest_result = navigator.commit(latest)

    assert stale_result.superseded
    assert latest_result.committed
    assert memory_store.get("lastRoute") == "/reports"
    assert navigator.current.record.path == "/reports"


def test_redirect_limit_raises(registry, memory_store):
    config = Settings(_env_file=None, routing=RoutingSettings(max_redirects=1))
    navigator = Navigator(
        registry,
        session_source=lambda: SessionState.AUTHENTICATED,
        overrides_source=lambda: {"finance": False},
        store=memory_store,
        config=config,
    )

    # /finance -> /finance/overview -> /dashboard needs two hops
    with pytest.raises(NavigationError):
        navigator.navigate("/finance")


def test_restore_returns_to_last_route(navigator, memory_store):
    memory_store.set("lastRoute", "/timesheet")

    assert navigator.restore().location == "/timesheet"


def test_restore_without_stored_route_opens_dashboard(navigator, memory_store):
    memory_store.set("lastRoute", "/removed-feature")

    assert navigator.restore().location == "/dashboard"


def test_logout_clears_last_route_and_session_id(navigator, memory_store):
    memory_store.set("currentUserId", "1")
    memory_store.set("theme", "dark")
    navigator.navigate("/clients")

    navigator.logout()

    assert memory_store.snapshot() == {"theme": "dark"}
    assert navigator.current is None


def test_clear_session_uses_configured_keys(memory_store, test_settings):
    test_settings.storage.last_route_key = "resume"
    memory_store.set("resume", "/clients")
    memory_store.set("currentUserId", "3")

    clear_session(memory_store, test_settings)

    assert memory_store.snapshot() == {}


def test_sources_adapt_collaborator_state():
    auth = SimpleNamespace(is_initialized=True, is_authenticated=False, account_count=2)
    prefs = SimpleNamespace(
        preferences=UserPreferences.from_payload(
            {"moduleOverrides": {"finance": False, "labs": "yes"}}
        )
    )

    assert session_source_from(auth)() is SessionState.UNAUTHENTICATED_HAS_ACCOUNTS
    assert overrides_source_from(prefs)() == {"finance": False}

    prefs.preferences = None
    assert overrides_source_from(prefs)() is None
