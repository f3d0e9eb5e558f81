"""
Pytest configuration and fixtures for the application shell tests.
"""

import pytest

from freelance_shell.config.settings import LoggingSettings, Settings
from freelance_shell.domain.session import SessionState
from freelance_shell.services.registry_composer import build_registry
from freelance_shell.shell.logging import configure_event_log
from freelance_shell.shell.navigation import Navigator
from freelance_shell.shell.storage import MemoryStore


@pytest.fixture(scope="session", autouse=True)
def isolate_event_log(tmp_path_factory):
    """Keep structured shell events out of the working tree."""
    log_file = tmp_path_factory.mktemp("logs") / "shell-events.log"
    configure_event_log(LoggingSettings(file_path=str(log_file)))
    yield log_file


@pytest.fixture
def test_settings():
    """Settings built without reading the developer's .env file."""
    return Settings(_env_file=None, environment="test")


@pytest.fixture
def registry(test_settings):
    return build_registry(test_settings)


@pytest.fixture
def memory_store():
    return MemoryStore()


class SessionBox:
    """Mutable holder standing in for the auth and preference collaborators."""

    def __init__(self):
        self.state = SessionState.AUTHENTICATED
        self.overrides = None


@pytest.fixture
def session_box():
    return SessionBox()


@pytest.fixture
def navigator(registry, memory_store, session_box, test_settings):
    return Navigator(
        registry,
        session_source=lambda: session_box.state,
        overrides_source=lambda: session_box.overrides,
        store=memory_store,
        config=test_settings,
    )
