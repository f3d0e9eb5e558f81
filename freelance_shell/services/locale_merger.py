"""
Locale Message Merger - builds one message dictionary per locale.

Each locale is assembled from the shipped base dictionary, the partial
dictionaries contributed by modules (registration order) and the third-party
validation messages. Contributors are merged key by key; anything that is not
a pair of dictionaries is replaced wholesale by the later contributor.
"""

from __future__ import annotations

import copy
import re
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import structlog

from ..config.settings import LocaleSettings
from ..domain.modules import MessageDict, freeze_messages
from ..locales import base_messages, validation_messages
from .registry_composer import Registry

logger = structlog.get_logger(__name__)

MessageDictionary = Dict[str, Any]

# {{name}}, {{ name }} and the trim-marker form {{- name}}.
_DOUBLE_BRACE_PLACEHOLDER = re.compile(r"\{\{\s*-?\s*([^{}]+?)\s*\}\}")
_SINGLE_BRACE_PLACEHOLDER = re.compile(r"\{\s*([A-Za-z_][\w.]*)\s*\}")


class NodeKind(Enum):
    TREE = "tree"
    LIST = "list"
    LEAF = "leaf"


def classify(value: Any) -> NodeKind:
    if isinstance(value, Mapping):
        return NodeKind.TREE
    if isinstance(value, (list, tuple)):
        return NodeKind.LIST
    return NodeKind.LEAF


def convert_placeholders(value: Any) -> Any:
    """Rewrite double-brace placeholders into single-brace form, recursively."""
    kind = classify(value)
    if kind is NodeKind.TREE:
        return {key: convert_placeholders(item) for key, item in value.items()}
    if kind is NodeKind.LIST:
        return _copy_node(value)
    if isinstance(value, str):
        return _DOUBLE_BRACE_PLACEHOLDER.sub(r"{\1}", value)
    return value


def _merge_into(target: MessageDictionary, source: Mapping[str, Any]) -> None:
    for key, value in source.items():
        existing = target.get(key)
        if (
            classify(existing) is NodeKind.TREE
            and classify(value) is NodeKind.TREE
        ):
            _merge_into(existing, value)
        else:
            target[key] = _copy_node(value)


def _copy_node(value: Any) -> Any:
    kind = classify(value)
    if kind is NodeKind.TREE:
        return _as_tree(value)
    if kind is NodeKind.LIST:
        return [_copy_node(item) for item in value]
    return copy.deepcopy(value)


def _as_tree(value: Mapping[str, Any]) -> MessageDictionary:
    return {key: _copy_node(item) for key, item in value.items()}


def deep_merge(
    target: Mapping[str, Any], source: Mapping[str, Any]
) -> MessageDictionary:
    """Return ``target`` merged with ``source``; neither input is modified."""
    merged = _as_tree(target)
    _merge_into(merged, source)
    return merged


def merge_locale_messages(
    base: Mapping[str, Any], extras: Iterable[Mapping[str, Any]]
) -> MessageDictionary:
    """Merge ``extras`` over ``base`` strictly in the order given."""
    merged = _as_tree(base)
    for extra in extras:
        _merge_into(merged, extra)
    return merged


def build_locale_messages(
    registry: Registry,
    locale: str,
    *,
    base: Optional[Mapping[str, Any]] = None,
    validation: Optional[Mapping[str, Any]] = None,
) -> MessageDictionary:
    """Assemble one locale: base, module contributions, validation messages."""
    if base is None:
        base = base_messages(locale)
    if validation is None:
        validation = validation_messages(locale)

    contributors: List[Mapping[str, Any]] = [
        convert_placeholders(contribution)
        for contribution in registry.messages_for(locale)
    ]
    contributors.append(convert_placeholders(validation))
    merged = merge_locale_messages(convert_placeholders(base), contributors)
    logger.debug(
        "Locale messages built",
        locale=locale,
        contributors=len(contributors),
        top_level_keys=len(merged),
    )
    return merged


def lookup(messages: Mapping[str, Any], key: str) -> Optional[Any]:
    node: Any = messages
    for part in key.split("."):
        if classify(node) is not NodeKind.TREE or part not in node:
            return None
        node = node[part]
    return node


def interpolate(template: str, params: Mapping[str, Any]) -> str:
    def replace(match: "re.Match[str]") -> str:
        name = match.group(1)
        return str(params[name]) if name in params else match.group(0)

    return _SINGLE_BRACE_PLACEHOLDER.sub(replace, template)


class LocaleCatalog:
    """Merged messages per locale, rebuilt only when the inputs change."""

    def __init__(
        self, registry: Registry, settings: Optional[LocaleSettings] = None
    ) -> None:
        self.settings = settings or LocaleSettings()
        self._registry = registry
        self._cache: Dict[str, MessageDict] = {}

    @property
    def locales(self) -> Sequence[str]:
        return tuple(self.settings.supported)

    def set_registry(self, registry: Registry) -> None:
        """Swap the module set; cached locales are rebuilt on next access."""
        if registry is not self._registry:
            self._registry = registry
            self._cache.clear()

    def messages(self, locale: str) -> MessageDict:
        """Read-only merged dictionary for ``locale``."""
        if locale not in self._cache:
            self._cache[locale] = freeze_messages(
                build_locale_messages(self._registry, locale)
            )
        return self._cache[locale]

    def translate(
        self, key: str, locale: Optional[str] = None, **params: Any
    ) -> str:
        """Look up a dotted key, falling back to the fallback locale, then the key."""
        candidates = [locale or self.settings.default_locale]
        if self.settings.fallback_locale not in candidates:
            candidates.append(self.settings.fallback_locale)
        for candidate in candidates:
            value = lookup(self.messages(candidate), key)
            if isinstance(value, str):
                return interpolate(value, params)
        return key
