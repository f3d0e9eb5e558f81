"""Navigation runtime: resolves paths, runs the guard, commits the outcome.

The navigator is the host side of :mod:`freelance_shell.services.route_guard`.
It snapshots session and override state once per attempt, follows route
redirects and guard redirects, and applies the guard's effects only when the
attempt is still the latest one at commit time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..config.settings import Settings, settings as default_settings
from ..domain.session import SessionState
from ..services.override_policy import OverrideMap
from ..services.registry_composer import Registry, RouteMatch
from ..services.route_guard import (
    Effect,
    GuardDecision,
    PersistLastRoute,
    RouteGuard,
    RouteTarget,
)
from .contracts import AuthState, KeyValueStore, PreferencesState
from .logging import log_shell_event

SessionSource = Callable[[], SessionState]
OverridesSource = Callable[[], Optional[OverrideMap]]


class NavigationError(RuntimeError):
    """Raised when redirects do not settle within the configured hop limit."""


@dataclass(frozen=True)
class NavigationTicket:
    """A decided but not yet committed navigation attempt.

    ``match`` is ``None`` when the final location matches no route; the guard
    still decided it.
    """

    generation: int
    requested: str
    location: str
    match: Optional[RouteMatch]
    decisions: Tuple[GuardDecision, ...]
    hops: Tuple[str, ...]

    @property
    def effects(self) -> Tuple[Effect, ...]:
        return self.decisions[-1].effects if self.decisions else ()


@dataclass(frozen=True)
class NavigationResult:
    ticket: NavigationTicket
    superseded: bool = False

    @property
    def committed(self) -> bool:
        return not self.superseded

    @property
    def location(self) -> str:
        return self.ticket.location

    @property
    def redirected(self) -> bool:
        return bool(self.ticket.hops)


def session_source_from(auth: AuthState) -> SessionSource:
    def read() -> SessionState:
        return SessionState.from_signals(
            is_initialized=auth.is_initialized,
            is_authenticated=auth.is_authenticated,
            account_count=auth.account_count,
        )

    return read


def overrides_source_from(preferences: PreferencesState) -> OverridesSource:
    def read() -> Optional[OverrideMap]:
        current = preferences.preferences
        return current.module_overrides if current is not None else None

    return read


def apply_effects(effects: Tuple[Effect, ...], store: KeyValueStore) -> None:
    for effect in effects:
        if isinstance(effect, PersistLastRoute):
            store.set(effect.key, effect.full_path)


def clear_session(
    store: KeyValueStore, config: Optional[Settings] = None
) -> None:
    """Forget the restorable route and the session id together (logout)."""
    storage = (config or default_settings).storage
    store.remove(storage.last_route_key)
    store.remove(storage.session_id_key)
    log_shell_event(
        "session.cleared",
        keys=[storage.last_route_key, storage.session_id_key],
    )


class Navigator:
    """Serializes navigation attempts; only the latest attempt may commit."""

    def __init__(
        self,
        registry: Registry,
        *,
        session_source: SessionSource,
        overrides_source: OverridesSource,
        store: KeyValueStore,
        config: Optional[Settings] = None,
    ) -> None:
        self.registry = registry
        self.config = config or default_settings
        self.store = store
        self._session_source = session_source
        self._overrides_source = overrides_source
        self._guard = RouteGuard(
            registry,
            routing=self.config.routing,
            storage=self.config.storage,
            unknown_module_policy=self.config.modules.unknown_module_policy,
        )
        self._generation = 0
        self.current: Optional[RouteMatch] = None

    def begin(self, path: str) -> NavigationTicket:
        """Decide a navigation to ``path`` without committing it."""
        self._generation += 1
        generation = self._generation
        session = self._session_source()
        overrides = self._overrides_source()

        decisions: List[GuardDecision] = []
        hops: List[str] = []
        location = path
        for _ in range(self.config.routing.max_redirects + 1):
            match = self.registry.resolve(location)
            if match is not None and match.redirect:
                hops.append(match.redirect)
                location = match.redirect
                continue
            if match is not None:
                target = RouteTarget.from_match(match)
            else:
                target = RouteTarget(full_path=location)
            decision = self._guard.decide(target, session, overrides)
            decisions.append(decision)
            if decision.allowed:
                return NavigationTicket(
                    generation=generation,
                    requested=path,
                    location=location,
                    match=match,
                    decisions=tuple(decisions),
                    hops=tuple(hops),
                )
            log_shell_event(
                "navigation.redirected",
                source=location,
                target=decision.location,
                reason=decision.reason,
                session=session.value,
            )
            assert decision.location is not None
            hops.append(decision.location)
            location = decision.location

        raise NavigationError(
            f"Navigation to '{path}' exceeded "
            f"{self.config.routing.max_redirects} redirects: {hops}"
        )

    def commit(self, ticket: NavigationTicket) -> NavigationResult:
        """Commit ``ticket`` unless a newer attempt has begun since."""
        if ticket.generation != self._generation:
            log_shell_event(
                "navigation.superseded",
                requested=ticket.requested,
                generation=ticket.generation,
                latest=self._generation,
            )
            return NavigationResult(ticket=ticket, superseded=True)

        self.current = ticket.match
        apply_effects(ticket.effects, self.store)
        log_shell_event(
            "navigation.allowed",
            requested=ticket.requested,
            location=ticket.location,
            matched=ticket.match is not None,
            hops=list(ticket.hops),
        )
        return NavigationResult(ticket=ticket)

    def navigate(self, path: str) -> NavigationResult:
        return self.commit(self.begin(path))

    def restore(self) -> NavigationResult:
        """Navigate to the last authorized route, or the dashboard."""
        last_route = self.store.get(self.config.storage.last_route_key)
        if last_route and self.registry.resolve(last_route) is not None:
            return self.navigate(last_route)
        return self.navigate(self.config.routing.dashboard_path)

    def logout(self) -> None:
        clear_session(self.store, self.config)
        self.current = None
