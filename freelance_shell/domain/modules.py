"""Module descriptor types contributed by each feature module."""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Tuple

ModuleID = str
MessageDict = Mapping[str, Any]
ModuleMessages = Mapping[str, MessageDict]


def freeze_messages(value: Any) -> Any:
    """Read-only copy of a message tree; mappings become proxies, lists tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType(
            {key: freeze_messages(item) for key, item in value.items()}
        )
    if isinstance(value, (list, tuple)):
        return tuple(freeze_messages(item) for item in value)
    return value


MODULE_IDS: Tuple[ModuleID, ...] = (
    "dashboard",
    "clients",
    "projects",
    "timesheet",
    "invoices",
    "reports",
    "finance",
    "settings",
)


@dataclass(frozen=True)
class ViewRef:
    """Renderer-agnostic reference to a view.

    ``id`` is the stable identifier used for equality. The view itself is only
    produced on demand, either through ``loader`` or by importing ``target``
    (``"package.module:attribute"``).
    """

    id: str
    target: Optional[str] = None
    loader: Optional[Callable[[], Any]] = field(
        default=None, compare=False, repr=False
    )

    def load(self) -> Any:
        if self.loader is not None:
            return self.loader()
        if self.target:
            module_name, _, attribute = self.target.partition(":")
            module = importlib.import_module(module_name)
            return getattr(module, attribute) if attribute else module
        raise LookupError(f"View '{self.id}' has no loader configured")


@dataclass(frozen=True)
class RouteMeta:
    requires_auth: bool = False
    layout: str = "main"
    module_id: Optional[ModuleID] = None


@dataclass(frozen=True)
class RouteRecord:
    """A route as declared by a module; children paths are relative."""

    path: str
    view: Optional[ViewRef] = None
    meta: RouteMeta = RouteMeta()
    redirect: Optional[str] = None
    children: Tuple["RouteRecord", ...] = ()


@dataclass(frozen=True)
class NavChild:
    key: str
    label_key: str
    module_id: Optional[ModuleID] = None


@dataclass(frozen=True)
class NavItem:
    """Top-level menu entry of a module."""

    key: str
    label_key: str
    icon: Optional[str] = None
    children: Tuple[NavChild, ...] = ()
    module_id: Optional[ModuleID] = None


@dataclass(frozen=True)
class SettingsPage:
    key: str
    label_key: str
    view: Optional[ViewRef]
    order: int
    module_id: ModuleID


@dataclass(frozen=True)
class ModuleDescriptor:
    """Unit of registration for a feature module."""

    id: ModuleID
    enabled_by_default: bool = True
    toggleable: bool = False
    nav: Optional[NavItem] = None
    routes: Tuple[RouteRecord, ...] = ()
    settings_pages: Tuple[SettingsPage, ...] = ()
    messages: Optional[ModuleMessages] = field(
        default=None, compare=False, hash=False
    )
