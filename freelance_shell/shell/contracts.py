"""Typed collaborator contracts for shell dependency injection."""

from __future__ import annotations

from typing import Optional, Protocol

from .preferences import UserPreferences


class AuthState(Protocol):
    """Session signals owned by the auth collaborator."""

    @property
    def is_initialized(self) -> bool: ...

    @property
    def is_authenticated(self) -> bool: ...

    @property
    def account_count(self) -> int: ...


class PreferencesState(Protocol):
    """Live preference record owned by the preferences collaborator."""

    @property
    def preferences(self) -> Optional[UserPreferences]: ...


class KeyValueStore(Protocol):
    """String storage the navigator persists session-restore data into."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...
