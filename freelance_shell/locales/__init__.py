"""Shipped locale dictionaries and third-party validation messages."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from .en_us import MESSAGES as EN_US
from .zh_cn import MESSAGES as ZH_CN

VALIDATION_DIR = Path(__file__).resolve().parent / "validation"

BASE_MESSAGES: Dict[str, Dict[str, Any]] = {
    "en-US": EN_US,
    "zh-CN": ZH_CN,
}


def base_messages(locale: str) -> Dict[str, Any]:
    return BASE_MESSAGES.get(locale, {})


def validation_messages(locale: str) -> Dict[str, Any]:
    """Validation messages for ``locale``; empty when none ship."""
    path = VALIDATION_DIR / f"{locale}.json"
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    return payload if isinstance(payload, dict) else {}


__all__ = ["BASE_MESSAGES", "base_messages", "validation_messages"]
