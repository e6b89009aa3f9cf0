"""Exceptions raised while registering or resolving candidates."""

from enum import Enum
from typing import Iterable

__all__ = ["DependencyError", "UnresolvedDependency", "AmbiguousDependency"]


class DependencyError(Exception):
    """Raised when a candidate is misdeclared or a dependency cannot be resolved."""

    pass


class UnresolvedDependency(DependencyError):
    """Raised when no candidate for a service name matches the active environment."""

    def __init__(self, name: Enum, active_env: Iterable[str]):
        self.name = name
        self.active_env = frozenset(active_env)
        super().__init__(
            f"No candidate for service '{name.name}' matches "
            f"active environment {sorted(self.active_env)}"
        )


class AmbiguousDependency(DependencyError):
    """Raised when several candidates match equally well and no tie-break applies."""

    def __init__(self, name: Enum, active_env: Iterable[str], qualifiers: Iterable[str]):
        self.name = name
        self.active_env = frozenset(active_env)
        self.qualifiers = sorted(qualifiers)
        super().__init__(
            f"Multiple candidates {self.qualifiers} for service '{name.name}' "
            f"match active environment {sorted(self.active_env)}"
        )
