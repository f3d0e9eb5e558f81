"""Compiled-in module catalog for the freelance business manager."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from ..config.settings import RoutingSettings
from .modules import (
    ModuleDescriptor,
    NavChild,
    NavItem,
    RouteMeta,
    RouteRecord,
    SettingsPage,
    ViewRef,
)

VIEWS_PACKAGE = "freelance_views"


def _view(name: str) -> ViewRef:
    return ViewRef(id=f"views.{name}", target=f"{VIEWS_PACKAGE}.{name}")


def _main(module_id: str) -> RouteMeta:
    return RouteMeta(requires_auth=True, layout="main", module_id=module_id)


def _simple_module(
    module_id: str, icon: str, *routes: Tuple[str, str]
) -> ModuleDescriptor:
    return ModuleDescriptor(
        id=module_id,
        enabled_by_default=True,
        toggleable=False,
        nav=NavItem(key=module_id, label_key=f"nav.{module_id}", icon=icon),
        routes=tuple(
            RouteRecord(path=path, view=_view(view), meta=_main(module_id))
            for path, view in routes
        ),
    )


# (key, order, label key) of settings pages that always exist.
BUILTIN_SETTINGS_PAGES: Tuple[Tuple[str, int, str], ...] = (
    ("general", 10, "settings.general.title"),
    ("profile", 20, "settings.profile.title"),
    ("invoice", 30, "settings.invoice.title"),
    ("email", 40, "settings.email.title"),
)


def builtin_settings_pages() -> Tuple[SettingsPage, ...]:
    return tuple(
        SettingsPage(
            key=key,
            label_key=label_key,
            view=_view(f"settings.{key}"),
            order=order,
            module_id="settings",
        )
        for key, order, label_key in BUILTIN_SETTINGS_PAGES
    )


FINANCE_SECTIONS = (
    "overview",
    "accounts",
    "transactions",
    "import",
    "categories",
    "reports",
)

FINANCE_MESSAGES = {
    "en-US": {
        "nav": {"finance": "Finance"},
        "finance": {
            "nav": {
                "overview": "Overview",
                "accounts": "Accounts",
                "transactions": "Transactions",
                "import": "Import",
                "categories": "Categories",
                "reports": "Reports",
            },
            "import": {"summary": "Imported {{count}} transactions"},
        },
        "settings": {"finance": {"title": "Finance"}},
    },
    "zh-CN": {
        "nav": {"finance": "财务"},
        "finance": {
            "nav": {
                "overview": "概览",
                "accounts": "账户",
                "transactions": "交易",
                "import": "导入",
                "categories": "分类",
                "reports": "报表",
            },
            "import": {"summary": "已导入 {{count}} 笔交易"},
        },
        "settings": {"finance": {"title": "财务"}},
    },
}


def finance_module() -> ModuleDescriptor:
    return ModuleDescriptor(
        id="finance",
        enabled_by_default=True,
        toggleable=True,
        nav=NavItem(
            key="finance",
            label_key="nav.finance",
            icon="wallet",
            children=tuple(
                NavChild(
                    key=f"finance/{section}",
                    label_key=f"finance.nav.{section}",
                    module_id="finance",
                )
                for section in FINANCE_SECTIONS
            ),
        ),
        routes=(
            RouteRecord(
                path="/finance",
                view=_view("finance.layout"),
                meta=_main("finance"),
                children=(
                    RouteRecord(path="", redirect="/finance/overview"),
                    *(
                        RouteRecord(path=section, view=_view(f"finance.{section}"))
                        for section in FINANCE_SECTIONS
                    ),
                ),
            ),
        ),
        settings_pages=(
            SettingsPage(
                key="finance",
                label_key="settings.finance.title",
                view=_view("settings.finance"),
                order=50,
                module_id="finance",
            ),
        ),
        messages=FINANCE_MESSAGES,
    )


def feature_modules() -> List[ModuleDescriptor]:
    """Feature modules in registration order; settings is built at compose time."""
    return [
        _simple_module("dashboard", "dashboard", ("/dashboard", "dashboard")),
        _simple_module("clients", "user", ("/clients", "clients")),
        _simple_module(
            "projects",
            "project",
            ("/projects", "projects"),
            ("/projects/:id", "project_detail"),
        ),
        _simple_module("timesheet", "clock-circle", ("/timesheet", "timesheet")),
        _simple_module("invoices", "file-text", ("/invoices", "invoices")),
        _simple_module("reports", "bar-chart", ("/reports", "reports")),
        finance_module(),
    ]


def settings_module(pages: Sequence[SettingsPage]) -> ModuleDescriptor:
    """Build the settings module whose children are the ordered ``pages``."""
    children = [RouteRecord(path="", redirect="/settings/general")]
    for page in pages:
        meta = (
            RouteMeta(module_id=page.module_id)
            if page.module_id != "settings"
            else RouteMeta()
        )
        children.append(RouteRecord(path=page.key, view=page.view, meta=meta))

    return ModuleDescriptor(
        id="settings",
        enabled_by_default=True,
        toggleable=False,
        nav=NavItem(
            key="settings",
            label_key="nav.settings",
            icon="setting",
            children=tuple(
                NavChild(
                    key=f"settings/{page.key}",
                    label_key=page.label_key,
                    module_id=page.module_id,
                )
                for page in pages
            ),
        ),
        routes=(
            RouteRecord(
                path="/settings",
                view=_view("settings.layout"),
                meta=_main("settings"),
                children=tuple(children),
            ),
        ),
    )


def shell_routes(routing: RoutingSettings) -> Tuple[RouteRecord, ...]:
    """Public routes owned by the application shell rather than a module."""
    blank = RouteMeta(requires_auth=False, layout="blank")
    return (
        RouteRecord(path="/", redirect=routing.dashboard_path),
        RouteRecord(path=routing.splash_path, view=_view("splash"), meta=blank),
        RouteRecord(path=routing.login_path, view=_view("auth.login"), meta=blank),
        RouteRecord(
            path=routing.register_path, view=_view("auth.register"), meta=blank
        ),
    )
