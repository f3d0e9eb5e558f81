"""
Configuration management for the freelance application shell.
Uses Pydantic Settings for type-safe configuration with environment variable support.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = "INFO"
    file_path: Optional[str] = None

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class RoutingSettings(BaseSettings):
    """Well-known shell paths used by the route guard."""

    model_config = SettingsConfigDict(env_prefix="ROUTING_")

    splash_path: str = "/splash"
    login_path: str = "/login"
    register_path: str = "/register"
    dashboard_path: str = "/dashboard"
    max_redirects: int = Field(default=10, ge=1)

    @field_validator("splash_path", "login_path", "register_path", "dashboard_path")
    @classmethod
    def validate_absolute_path(cls, v):
        if not v.startswith("/"):
            raise ValueError(f"Route path '{v}' must start with '/'")
        return v


class StorageSettings(BaseSettings):
    """Client-side session storage."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    path: str = "data/session.json"
    last_route_key: str = "lastRoute"
    session_id_key: str = "currentUserId"


class LocaleSettings(BaseSettings):
    """Locale selection settings."""

    model_config = SettingsConfigDict(env_prefix="LOCALE_")

    default_locale: str = "en-US"
    fallback_locale: str = "en-US"
    supported: List[str] = Field(default=["en-US", "zh-CN"])


class ModulePolicySettings(BaseSettings):
    """Feature-module enablement policy."""

    model_config = SettingsConfigDict(env_prefix="MODULES_")

    # Resolution for module ids that are not registered.
    unknown_module_policy: str = "open"

    @field_validator("unknown_module_policy")
    @classmethod
    def validate_policy(cls, v):
        if v.lower() not in ("open", "closed"):
            raise ValueError("Unknown module policy must be 'open' or 'closed'")
        return v.lower()


class Settings(BaseSettings):
    """Main application settings combining all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Freelance Manager"
    environment: str = "development"

    # Sub-configurations
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    routing: RoutingSettings = Field(default_factory=RoutingSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    locale: LocaleSettings = Field(default_factory=LocaleSettings)
    modules: ModulePolicySettings = Field(default_factory=ModulePolicySettings)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        valid_envs = ["development", "test", "staging", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of {valid_envs}")
        return v.lower()


# Global settings instance
settings = Settings()
