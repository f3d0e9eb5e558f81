"""Services package for the application shell."""

from .locale_merger import (
    LocaleCatalog,
    build_locale_messages,
    convert_placeholders,
    deep_merge,
    merge_locale_messages,
)
from .override_policy import (
    is_module_enabled,
    is_module_id_enabled,
    normalize_module_overrides,
    visible_nav_items,
)
from .registry_composer import Registry, RouteMatch, build_registry, compose
from .route_guard import GuardDecision, RouteGuard, RouteTarget, Verdict, authorize
from .startup_checks import RegistryConflictError, StartupCheckError

__all__ = [
    "Registry",
    "RouteMatch",
    "compose",
    "build_registry",
    "normalize_module_overrides",
    "is_module_enabled",
    "is_module_id_enabled",
    "visible_nav_items",
    "RouteGuard",
    "RouteTarget",
    "GuardDecision",
    "Verdict",
    "authorize",
    "LocaleCatalog",
    "build_locale_messages",
    "convert_placeholders",
    "deep_merge",
    "merge_locale_messages",
    "RegistryConflictError",
    "StartupCheckError",
]
