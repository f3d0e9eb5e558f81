"""Session states the route guard distinguishes."""

from __future__ import annotations

from enum import Enum


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    UNAUTHENTICATED_NO_ACCOUNTS = "unauthenticated-no-accounts"
    UNAUTHENTICATED_HAS_ACCOUNTS = "unauthenticated-has-accounts"
    AUTHENTICATED = "authenticated"

    @classmethod
    def from_signals(
        cls, *, is_initialized: bool, is_authenticated: bool, account_count: int
    ) -> "SessionState":
        """Derive the state from the auth collaborator's raw signals."""
        if not is_initialized:
            return cls.UNINITIALIZED
        if is_authenticated:
            return cls.AUTHENTICATED
        if account_count > 0:
            return cls.UNAUTHENTICATED_HAS_ACCOUNTS
        return cls.UNAUTHENTICATED_NO_ACCOUNTS

    @property
    def is_authenticated(self) -> bool:
        return self is SessionState.AUTHENTICATED
