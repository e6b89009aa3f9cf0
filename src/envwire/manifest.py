"""Utilities for constructing context build manifests.

A manifest records which candidate was selected for every required service
name (and, transitively, for every dependency of those candidates) and the order
in which they must be built so that each candidate's dependencies exist before
it is constructed.
"""

from collections import deque, defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Mapping, Optional

from envwire.domain import Candidate, DEFAULT_LABEL
from envwire.errors import DependencyError
from envwire.log import get_logger
from envwire.registry import CandidateRegistry

__all__ = ["ContextManifest", "ManifestBuilder"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class ContextManifest:
    """Description of how to build an :class:`~envwire.context.ApplicationContext`."""

    active_env: FrozenSet[str]
    """Environment labels the candidates were selected for."""

    selected: dict[Enum, Candidate]
    """Selected candidate keyed by service name."""

    build_order: list[Enum]
    """Ordered list of service names to build."""


class _DependencyGraph:
    """Services and the services each one is built from.

    Traversal yields every service after all of its dependencies. Whatever cannot
    be ordered is reported together with one dependency cycle found among it.
    """

    def __init__(self):
        self._dependencies: dict[Enum, set[Enum]] = {}

    def add_dependencies(self, dependee: Enum, dependencies: Iterable[Enum]):
        self._dependencies.setdefault(dependee, set()).update(dependencies)
        for dependency in self._dependencies[dependee]:
            self._dependencies.setdefault(dependency, set())

    def traverse(self):
        """
        Yields:
            Service names, dependencies first.

        Raises:
            DependencyError: If the services cannot be ordered because of a cycle.
        """
        dependents: dict[Enum, list[Enum]] = defaultdict(list)
        waiting_on = {}
        for dependee, dependencies in self._dependencies.items():
            waiting_on[dependee] = len(dependencies)
            for dependency in dependencies:
                dependents[dependency].append(dependee)

        ready = deque(name for name, count in waiting_on.items() if count == 0)
        while ready:
            name = ready.popleft()
            del waiting_on[name]
            yield name
            for dependee in dependents[name]:
                waiting_on[dependee] -= 1
                if waiting_on[dependee] == 0:
                    ready.append(dependee)

        if waiting_on:
            cycle = " -> ".join(n.name for n in self._find_cycle(set(waiting_on)))
            raise DependencyError(
                f"Unresolvable dependencies: {sorted(n.name for n in waiting_on)} "
                f"(cycle: {cycle})"
            )

    def _find_cycle(self, unordered: set[Enum]) -> list[Enum]:
        # every unordered service depends on at least one other unordered service
        path: list[Enum] = []
        current = min(unordered, key=lambda n: n.name)
        while current not in path:
            path.append(current)
            current = min(self._dependencies[current] & unordered, key=lambda n: n.name)
        return path[path.index(current):] + [current]


class ManifestBuilder:
    """Select candidates from a registry into a :class:`ContextManifest`."""

    def __init__(
        self,
        registry: CandidateRegistry,
        active_env: Iterable[str],
        fallback_label: str = DEFAULT_LABEL,
    ):
        self._registry = registry
        self._active_env = frozenset(active_env)
        self._fallback_label = fallback_label

    def build(
        self,
        required: Optional[Iterable[Enum]] = None,
        qualifiers: Optional[Mapping[Enum, str]] = None,
    ) -> ContextManifest:
        """Select a candidate for every required service name and its dependencies.

        Args:
            required: Service names that must be available in the context. If None,
                every service name known to the registry is required.
            qualifiers: Optional qualifier per required service name.

        Raises:
            UnresolvedDependency: If a required name or a dependency has no matching candidate.
            AmbiguousDependency: If a selection cannot be tie-broken.
            DependencyError: If dependencies are cyclic or request conflicting qualifiers.
        """
        if required is None:
            required = self._registry.service_names()

        selected = self._select_transitively(required, qualifiers or {})

        graph = _DependencyGraph()
        for name, candidate in selected.items():
            graph.add_dependencies(
                name, (dependency.service_name for dependency in candidate.dependencies)
            )
        build_order = list(graph.traverse())

        logger.debug(
            f"Build order for {sorted(self._active_env)}: {[n.name for n in build_order]}"
        )
        return ContextManifest(self._active_env, selected, build_order)

    def _select_transitively(
        self, required: Iterable[Enum], qualifiers: Mapping[Enum, str]
    ) -> dict[Enum, Candidate]:
        selected: dict[Enum, Candidate] = {}
        pending = deque((name, qualifiers.get(name)) for name in required)

        while pending:
            name, qualifier = pending.popleft()
            if name in selected:
                self._check_qualifier(selected[name], qualifier)
                continue

            candidate = self._registry.select(
                name, self._active_env, qualifier, self._fallback_label
            )
            selected[name] = candidate
            pending.extend(
                (dependency.service_name, dependency.qualifier)
                for dependency in candidate.dependencies
            )

        return selected

    @staticmethod
    def _check_qualifier(candidate: Candidate, qualifier: Optional[str]):
        if qualifier is not None and candidate.qualifier != qualifier:
            raise DependencyError(
                f"Service '{candidate.name.name}' is requested as '{qualifier}' "
                f"but '{candidate.qualifier}' was already selected"
            )
