"""
Registry Composer - folds the ordered module list into one immutable registry.

The registry is built once at startup through an explicit ``compose`` (or
``build_registry``) call and handed to its consumers by reference. It carries
the navigation tree, the route table with its nesting preserved, the ordered
settings pages and the per-locale message contributions, frozen read-only.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from operator import attrgetter
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import structlog

from ..config.settings import Settings, settings as default_settings
from ..domain import catalog
from ..domain.modules import (
    MessageDict,
    ModuleDescriptor,
    ModuleID,
    NavChild,
    NavItem,
    RouteRecord,
    SettingsPage,
    freeze_messages,
)
from .startup_checks import RegistryConflictError, find_duplicates

logger = structlog.get_logger(__name__)


def join_path(parent: str, child: str) -> str:
    """Resolve a (possibly relative) child path against its parent's full path."""
    if child.startswith("/"):
        return child
    if not child:
        return parent or "/"
    return f"{parent.rstrip('/')}/{child}"


def normalize_path(path: str) -> str:
    path = path.split("#", 1)[0].split("?", 1)[0] or "/"
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def _match_segments(pattern: str, path: str) -> Optional[Dict[str, str]]:
    pattern_parts = [part for part in pattern.split("/") if part]
    path_parts = [part for part in path.split("/") if part]
    if len(pattern_parts) != len(path_parts):
        return None
    params: Dict[str, str] = {}
    for expected, actual in zip(pattern_parts, path_parts):
        if expected.startswith(":"):
            params[expected[1:]] = actual
        elif expected != actual:
            return None
    return params


@dataclass(frozen=True)
class RouteEntry:
    """A route record together with its full path and ancestor chain."""

    full_path: str
    chain: Tuple[RouteRecord, ...]
    module_id: Optional[ModuleID]

    @property
    def record(self) -> RouteRecord:
        return self.chain[-1]

    @property
    def is_index(self) -> bool:
        return len(self.chain) > 1 and self.record.path == ""


@dataclass(frozen=True)
class RouteMatch:
    """Result of resolving a concrete path against the route table."""

    full_path: str
    chain: Tuple[RouteRecord, ...]
    params: Dict[str, str] = field(default_factory=dict)

    @property
    def record(self) -> RouteRecord:
        return self.chain[-1]

    @property
    def requires_auth(self) -> bool:
        return any(record.meta.requires_auth for record in self.chain)

    @property
    def module_id(self) -> Optional[ModuleID]:
        """Owning module: the first matched chain entry that names one."""
        for record in self.chain:
            if record.meta.module_id:
                return record.meta.module_id
        return None

    @property
    def layout(self) -> str:
        return self.chain[0].meta.layout

    @property
    def redirect(self) -> Optional[str]:
        return self.record.redirect


def _flatten(
    records: Iterable[RouteRecord],
    module_id: Optional[ModuleID],
    parent_path: str = "",
    ancestors: Tuple[RouteRecord, ...] = (),
) -> List[RouteEntry]:
    # Children precede their parent so an index child wins over the bare parent.
    entries: List[RouteEntry] = []
    for record in records:
        full_path = join_path(parent_path, record.path)
        chain = ancestors + (record,)
        entries.extend(_flatten(record.children, module_id, full_path, chain))
        entries.append(
            RouteEntry(full_path=full_path, chain=chain, module_id=module_id)
        )
    return entries


@dataclass(frozen=True)
class Registry:
    """Immutable composed output of all registered modules."""

    modules: Tuple[ModuleDescriptor, ...]
    nav_items: Tuple[NavItem, ...]
    route_table: Tuple[RouteRecord, ...]
    settings_pages: Tuple[SettingsPage, ...]
    # Read-only; contributions are frozen at composition time.
    messages_by_locale: Mapping[str, Tuple[MessageDict, ...]] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )
    entries: Tuple[RouteEntry, ...] = field(default=(), repr=False)

    def get_module(self, module_id: ModuleID) -> Optional[ModuleDescriptor]:
        for module in self.modules:
            if module.id == module_id:
                return module
        return None

    @property
    def module_ids(self) -> Tuple[ModuleID, ...]:
        return tuple(module.id for module in self.modules)

    def resolve(self, path: str) -> Optional[RouteMatch]:
        """Match a concrete path, returning the matched chain root to leaf."""
        target = normalize_path(path)
        for entry in self.entries:
            params = _match_segments(entry.full_path, target)
            if params is not None:
                return RouteMatch(full_path=path, chain=entry.chain, params=params)
        return None

    def messages_for(self, locale: str) -> Tuple[MessageDict, ...]:
        return self.messages_by_locale.get(locale, ())


def _owned_nav_item(module: ModuleDescriptor) -> NavItem:
    nav = module.nav
    assert nav is not None
    return nav if nav.module_id else replace(nav, module_id=module.id)


def child_module_id(item: NavItem, child: NavChild) -> Optional[ModuleID]:
    """Module a nav child is authorized against; inherits the parent's id."""
    return child.module_id or item.module_id


def compose_settings_pages(
    modules: Sequence[ModuleDescriptor],
) -> Tuple[SettingsPage, ...]:
    """Built-in pages followed by contributed pages ordered by ``order``."""
    contributed = [page for module in modules for page in module.settings_pages]
    return catalog.builtin_settings_pages() + tuple(
        sorted(contributed, key=attrgetter("order"))
    )


def _collect_messages(
    modules: Sequence[ModuleDescriptor],
) -> Mapping[str, Tuple[MessageDict, ...]]:
    collected: Dict[str, List[MessageDict]] = {}
    for module in modules:
        for locale, contribution in (module.messages or {}).items():
            collected.setdefault(locale, []).append(freeze_messages(contribution))
    return MappingProxyType(
        {locale: tuple(items) for locale, items in collected.items()}
    )


def _validate(
    modules: Sequence[ModuleDescriptor], entries: Sequence[RouteEntry]
) -> None:
    problems: List[str] = []

    for module_id in find_duplicates(module.id for module in modules):
        problems.append(f"duplicate module id '{module_id}'")

    for path in find_duplicates(
        entry.full_path for entry in entries if not entry.is_index
    ):
        problems.append(f"duplicate route path '{path}'")

    toggleable = {module.id for module in modules if module.toggleable}
    for entry in entries:
        if entry.module_id not in toggleable or entry.is_index:
            continue
        requires_auth = any(record.meta.requires_auth for record in entry.chain)
        owned = any(record.meta.module_id for record in entry.chain)
        if requires_auth and not owned:
            problems.append(
                f"route '{entry.full_path}' of toggleable module "
                f"'{entry.module_id}' requires auth but names no module"
            )

    if problems:
        logger.error("Module registry composition failed", problems=problems)
        raise RegistryConflictError(problems)


def compose(
    descriptors: Sequence[ModuleDescriptor],
    *,
    shell_routes: Sequence[RouteRecord] = (),
) -> Registry:
    """Fold an ordered descriptor list into an immutable :class:`Registry`.

    The settings module is synthesized from the built-in settings pages and
    the pages contributed by ``descriptors``, and registered last. Raises
    :class:`RegistryConflictError` on duplicate module ids or route paths.
    """
    pages = compose_settings_pages(descriptors)
    modules: Tuple[ModuleDescriptor, ...] = (
        *descriptors,
        catalog.settings_module(pages),
    )

    entries: List[RouteEntry] = _flatten(shell_routes, None)
    for module in modules:
        entries.extend(_flatten(module.routes, module.id))
    _validate(modules, entries)

    registry = Registry(
        modules=modules,
        nav_items=tuple(_owned_nav_item(module) for module in modules if module.nav),
        route_table=tuple(shell_routes)
        + tuple(route for module in modules for route in module.routes),
        settings_pages=pages,
        messages_by_locale=_collect_messages(modules),
        entries=tuple(entries),
    )
    logger.info(
        "Module registry composed",
        modules=list(registry.module_ids),
        routes=len(entries),
        settings_pages=[page.key for page in pages],
    )
    return registry


def build_registry(config: Optional[Settings] = None) -> Registry:
    """Compose the application's compiled-in module list."""
    config = config or default_settings
    return compose(
        catalog.feature_modules(), shell_routes=catalog.shell_routes(config.routing)
    )
