"""
Route Authorization Guard - decides every navigation attempt before it commits.

The guard is a pure function of the target route, a session snapshot and the
current override map. It returns a decision plus the effects the caller has to
apply once the navigation commits; it never touches storage itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..config.settings import RoutingSettings, StorageSettings
from ..domain.modules import ModuleID
from ..domain.session import SessionState
from .override_policy import (
    UNKNOWN_MODULE_OPEN,
    OverrideMap,
    is_module_id_enabled,
)
from .registry_composer import Registry, RouteMatch, normalize_path


class Verdict(str, Enum):
    ALLOW = "allow"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class RouteTarget:
    """What the guard needs to know about the navigation target."""

    full_path: str
    requires_auth: bool = False
    module_id: Optional[ModuleID] = None

    @property
    def path(self) -> str:
        return normalize_path(self.full_path)

    @classmethod
    def from_match(cls, match: RouteMatch) -> "RouteTarget":
        return cls(
            full_path=match.full_path,
            requires_auth=match.requires_auth,
            module_id=match.module_id,
        )


@dataclass(frozen=True)
class PersistLastRoute:
    """Store ``full_path`` under ``key``, replacing any previous value."""

    key: str
    full_path: str


Effect = PersistLastRoute


@dataclass(frozen=True)
class GuardDecision:
    verdict: Verdict
    location: Optional[str] = None
    reason: str = ""
    effects: Tuple[Effect, ...] = ()

    @property
    def allowed(self) -> bool:
        return self.verdict is Verdict.ALLOW

    @classmethod
    def allow(cls, effects: Tuple[Effect, ...] = ()) -> "GuardDecision":
        return cls(verdict=Verdict.ALLOW, effects=effects)

    @classmethod
    def redirect(cls, location: str, reason: str) -> "GuardDecision":
        return cls(verdict=Verdict.REDIRECT, location=location, reason=reason)


class RouteGuard:
    """Navigation guard bound to a registry and the shell's well-known paths."""

    def __init__(
        self,
        registry: Registry,
        *,
        routing: Optional[RoutingSettings] = None,
        storage: Optional[StorageSettings] = None,
        unknown_module_policy: str = UNKNOWN_MODULE_OPEN,
    ) -> None:
        self.registry = registry
        self.routing = routing or RoutingSettings()
        self.storage = storage or StorageSettings()
        self.unknown_module_policy = unknown_module_policy

    def decide(
        self,
        target: RouteTarget,
        session: SessionState,
        overrides: Optional[OverrideMap],
    ) -> GuardDecision:
        """Evaluate the guard rules in priority order; the first match wins."""
        routing = self.routing

        if target.requires_auth:
            if session is SessionState.UNINITIALIZED:
                return GuardDecision.redirect(routing.splash_path, "uninitialized")
            if session is SessionState.UNAUTHENTICATED_HAS_ACCOUNTS:
                return GuardDecision.redirect(routing.login_path, "login_required")
            if session is SessionState.UNAUTHENTICATED_NO_ACCOUNTS:
                return GuardDecision.redirect(
                    routing.register_path, "registration_required"
                )
        elif session.is_authenticated:
            if target.path != routing.splash_path:
                return GuardDecision.redirect(
                    routing.dashboard_path, "already_authenticated"
                )
            return GuardDecision.allow()

        if target.requires_auth and session.is_authenticated:
            if target.module_id and not is_module_id_enabled(
                self.registry,
                target.module_id,
                overrides,
                unknown_policy=self.unknown_module_policy,
            ):
                return GuardDecision.redirect(
                    routing.dashboard_path, "module_disabled"
                )
            return GuardDecision.allow(
                effects=(
                    PersistLastRoute(
                        key=self.storage.last_route_key, full_path=target.full_path
                    ),
                )
            )

        return GuardDecision.allow()


def authorize(
    target: RouteTarget,
    session: SessionState,
    overrides: Optional[OverrideMap],
    *,
    registry: Registry,
    routing: Optional[RoutingSettings] = None,
    storage: Optional[StorageSettings] = None,
    unknown_module_policy: str = UNKNOWN_MODULE_OPEN,
) -> GuardDecision:
    """Functional form of :meth:`RouteGuard.decide`."""
    guard = RouteGuard(
        registry,
        routing=routing,
        storage=storage,
        unknown_module_policy=unknown_module_policy,
    )
    return guard.decide(target, session, overrides)
