"""Runtime pieces of the application shell."""

from .navigation import (
    NavigationError,
    NavigationResult,
    NavigationTicket,
    Navigator,
    apply_effects,
    clear_session,
    overrides_source_from,
    session_source_from,
)
from .preferences import UserPreferences
from .storage import JsonFileStore, MemoryStore, open_store

__all__ = [
    "Navigator",
    "NavigationError",
    "NavigationResult",
    "NavigationTicket",
    "apply_effects",
    "clear_session",
    "session_source_from",
    "overrides_source_from",
    "UserPreferences",
    "MemoryStore",
    "JsonFileStore",
    "open_store",
]
