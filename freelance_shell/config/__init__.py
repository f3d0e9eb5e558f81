"""Configuration for the application shell."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
