"""Startup validation errors and helpers for the composed registry."""

from collections import Counter
from typing import Iterable, List


class StartupCheckError(RuntimeError):
    """Raised when startup prerequisites are not met."""


class RegistryConflictError(StartupCheckError):
    """Raised when the compiled-in module list cannot be composed."""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__(
            "Module registry is inconsistent: " + "; ".join(self.problems)
        )


def find_duplicates(values: Iterable[str]) -> List[str]:
    """Return values seen more than once, in first-seen order."""
    counts = Counter(values)
    return [value for value, count in counts.items() if count > 1]
