"""Per-user module enablement resolved from a sparse override map."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Mapping, Optional, Tuple

from ..domain.modules import ModuleDescriptor, ModuleID, NavItem
from .registry_composer import Registry, child_module_id

OverrideMap = Mapping[ModuleID, bool]

UNKNOWN_MODULE_OPEN = "open"
UNKNOWN_MODULE_CLOSED = "closed"


def normalize_module_overrides(raw: Any) -> Optional[Dict[ModuleID, bool]]:
    """Keep only boolean entries; ``None`` when nothing usable remains."""
    if not isinstance(raw, Mapping):
        return None
    normalized: Dict[ModuleID, bool] = {}
    for key, value in raw.items():
        if isinstance(key, str) and isinstance(value, bool):
            normalized[key] = value
    return normalized or None


def is_module_enabled(
    module: ModuleDescriptor, overrides: Optional[OverrideMap]
) -> bool:
    if not module.toggleable:
        return True
    if overrides:
        value = overrides.get(module.id)
        if isinstance(value, bool):
            return value
    return module.enabled_by_default


def is_module_id_enabled(
    registry: Registry,
    module_id: ModuleID,
    overrides: Optional[OverrideMap],
    *,
    unknown_policy: str = UNKNOWN_MODULE_OPEN,
) -> bool:
    """Resolve enablement by id; unregistered ids are enabled by default.

    A stale reference to a module that is no longer registered must not lock
    the user out, so unknown ids resolve to ``True`` unless the deployment
    opts into ``unknown_policy="closed"``.
    """
    module = registry.get_module(module_id)
    if module is None:
        return unknown_policy != UNKNOWN_MODULE_CLOSED
    return is_module_enabled(module, overrides)


def enabled_module_ids(
    registry: Registry, overrides: Optional[OverrideMap]
) -> Tuple[ModuleID, ...]:
    return tuple(
        module.id for module in registry.modules if is_module_enabled(module, overrides)
    )


def visible_nav_items(
    registry: Registry,
    overrides: Optional[OverrideMap],
    *,
    unknown_policy: str = UNKNOWN_MODULE_OPEN,
) -> Tuple[NavItem, ...]:
    """Navigation entries (and children) whose owning module is enabled."""

    def enabled(module_id: Optional[ModuleID]) -> bool:
        if not module_id:
            return True
        return is_module_id_enabled(
            registry, module_id, overrides, unknown_policy=unknown_policy
        )

    visible = []
    for item in registry.nav_items:
        if not enabled(item.module_id):
            continue
        children = tuple(
            child
            for child in item.children
            if enabled(child_module_id(item, child))
        )
        visible.append(replace(item, children=children))
    return tuple(visible)
