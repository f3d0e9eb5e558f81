"""Module descriptors and the compiled-in module catalog."""

from .catalog import (
    BUILTIN_SETTINGS_PAGES,
    builtin_settings_pages,
    feature_modules,
    settings_module,
    shell_routes,
)
from .modules import (
    MODULE_IDS,
    ModuleDescriptor,
    ModuleID,
    NavChild,
    NavItem,
    RouteMeta,
    RouteRecord,
    SettingsPage,
    ViewRef,
)

__all__ = [
    "MODULE_IDS",
    "ModuleID",
    "ModuleDescriptor",
    "NavItem",
    "NavChild",
    "RouteRecord",
    "RouteMeta",
    "SettingsPage",
    "ViewRef",
    "BUILTIN_SETTINGS_PAGES",
    "builtin_settings_pages",
    "feature_modules",
    "settings_module",
    "shell_routes",
]
