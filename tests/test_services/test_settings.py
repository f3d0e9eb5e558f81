import pytest
from pydantic import ValidationError

from freelance_shell.config.settings import (
    LoggingSettings,
    ModulePolicySettings,
    RoutingSettings,
    Settings,
)


def test_defaults_match_shell_paths(test_settings):
    assert test_settings.routing.login_path == "/login"
    assert test_settings.routing.dashboard_path == "/dashboard"
    assert test_settings.storage.last_route_key == "lastRoute"
    assert test_settings.modules.unknown_module_policy == "open"
    assert test_settings.locale.supported == ["en-US", "zh-CN"]


def test_environment_variables_override_sections(monkeypatch):
    monkeypatch.setenv("ROUTING_LOGIN_PATH", "/sign-in")
    monkeypatch.setenv("MODULES_UNKNOWN_MODULE_POLICY", "CLOSED")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = Settings(_env_file=None)

    assert config.routing.login_path == "/sign-in"
    assert config.modules.unknown_module_policy == "closed"
    assert config.logging.level == "DEBUG"


def test_relative_route_path_rejected():
    with pytest.raises(ValidationError):
        RoutingSettings(dashboard_path="dashboard")


def test_redirect_limit_must_be_positive():
    with pytest.raises(ValidationError):
        RoutingSettings(max_redirects=0)


def test_unknown_policy_value_rejected():
    with pytest.raises(ValidationError):
        ModulePolicySettings(unknown_module_policy="sometimes")


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError):
        LoggingSettings(level="chatty")


def test_invalid_environment_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, environment="qa")
