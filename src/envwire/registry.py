"""Registration and selection of environment-labelled candidates."""

import inspect
from collections import defaultdict
from enum import Enum
from typing import (
    Any,
    Annotated,
    Callable,
    Iterable,
    Optional,
    get_args,
    get_origin,
    get_type_hints,
)

from envwire.domain import Candidate, Dependency, DEFAULT_LABEL, WILDCARD_LABEL
from envwire.errors import AmbiguousDependency, DependencyError, UnresolvedDependency
from envwire.log import get_logger

__all__ = [
    "Candidate",
    "CandidateRegistry",
    "Dependency",
]

logger = get_logger(__name__)

_SPECIFIC = 2
_FALLBACK = 1
_GENERIC = 0


def inferred_qualifier(target: Any) -> str:
    """Class name for classes, function name without its 'make_' prefix for factories."""
    if inspect.isclass(target):
        return target.__name__
    return target.__name__.removeprefix("make_")


class CandidateRegistry:
    """Registry of candidates keyed by logical service name.

    Candidates are kept in registration order. The registry is populated once at
    startup; selection never modifies it.
    """

    def __init__(self):
        self._candidates: dict[Enum, list[Candidate]] = defaultdict(list)

    def register(self, candidate: Candidate):
        """Register a candidate explicitly.

        Raises:
            DependencyError: If the candidate has no labels, its name is not an
                Enum member, or a candidate with the same qualifier and the same
                labels is already registered for that name.
        """
        if not isinstance(candidate.name, Enum):
            raise DependencyError(
                f"Service name {candidate.name!r} of {candidate.qualifier} is not an Enum member"
            )
        if not candidate.labels:
            raise DependencyError(
                f"Candidate {candidate.qualifier} for service '{candidate.name.name}' "
                "must declare at least one environment label"
            )
        existing = self._candidates[candidate.name]
        if any(
            c.qualifier == candidate.qualifier and c.labels == candidate.labels
            for c in existing
        ):
            raise DependencyError(
                f"Duplicate qualifier '{candidate.qualifier}' "
                f"for service '{candidate.name.name}' "
                f"with labels {sorted(candidate.labels)}"
            )
        existing.append(candidate)

    def candidate(
        self,
        name: Enum,
        labels: Iterable[str],
        qualifier: Optional[str] = None,
    ) -> Callable:
        """Decorator to register a class or function as a candidate.

        Args:
            name: Logical service name the candidate implements.
            labels: Environment labels under which the candidate is eligible.
            qualifier: Optional candidate name; defaults to the class name, or the
                function name with 'make_' prefix removed.

        Example:
            @registry.candidate(ServiceName.DATASOURCE_SETTINGS, labels=["prod"])
            class ProdDatasourceSettings:
                ...
        """
        def decorator(obj):
            if not (inspect.isclass(obj) or inspect.isfunction(obj)):
                raise DependencyError(f"{obj} is not a class or function")
            self.register(make_candidate(name, labels, obj, qualifier))
            return obj

        return decorator

    def service_names(self) -> list[Enum]:
        return [name for name, candidates in self._candidates.items() if candidates]

    def candidates(self, name: Optional[Enum] = None) -> list[Candidate]:
        """Retrieve candidates for one service name, or all candidates if name is None."""
        if name is None:
            return [c for candidates in self._candidates.values() for c in candidates]
        return list(self._candidates.get(name, ()))

    def registered_candidates(self, active_env: Iterable[str]) -> list[Candidate]:
        """Retrieve all candidates whose labels match the active environment."""
        active = frozenset(active_env)
        return [c for c in self.candidates() if _labels_match(c.labels, active)]

    def select(
        self,
        name: Enum,
        active_env: Iterable[str],
        qualifier: Optional[str] = None,
        fallback_label: str = DEFAULT_LABEL,
    ) -> Candidate:
        """Select exactly one candidate for a service name.

        Candidates whose labels match the active environment are kept, narrowed to
        ``qualifier`` if given. When several remain, a match on a specific label
        beats a match on ``fallback_label``, which beats a wildcard or
        exclusion-only match.

        Raises:
            UnresolvedDependency: If no candidate matches.
            AmbiguousDependency: If several candidates tie on the best match.
        """
        active = frozenset(active_env)
        matching = [
            c for c in self._candidates.get(name, ())
            if _labels_match(c.labels, active)
            and (qualifier is None or c.qualifier == qualifier)
        ]

        if not matching:
            raise UnresolvedDependency(name, active)
        if len(matching) == 1:
            selected = matching[0]
        else:
            selected = _tie_break(name, matching, active, fallback_label)

        logger.debug(
            f"Selected {selected.qualifier} for {name.name} in {sorted(active)}"
        )
        return selected


def make_candidate(
    name: Enum,
    labels: Iterable[str],
    factory: Callable[..., Any],
    qualifier: Optional[str] = None,
) -> Candidate:
    """Create a Candidate from a class or function, deriving its dependencies.

    A single string is accepted as a one-label set.
    """
    if isinstance(labels, str):
        labels = [labels]
    return Candidate(
        name,
        frozenset(labels),
        factory,
        tuple(_get_dependencies(factory)),
        qualifier or inferred_qualifier(factory),
    )


def _tie_break(
    name: Enum, matching: list[Candidate], active: frozenset[str], fallback_label: str
) -> Candidate:
    ranked: dict[int, list[Candidate]] = defaultdict(list)
    for candidate in matching:
        ranked[_match_rank(candidate.labels, active, fallback_label)].append(candidate)

    best = ranked[max(ranked)]
    if len(best) > 1:
        raise AmbiguousDependency(name, active, [c.qualifier for c in best])
    return best[0]


def _match_rank(labels: frozenset[str], active: frozenset[str], fallback_label: str) -> int:
    matched = labels & active
    if matched - {fallback_label}:
        return _SPECIFIC
    if fallback_label in matched:
        return _FALLBACK
    return _GENERIC


def _labels_match(stated: frozenset[str], selected: frozenset[str]) -> bool:
    """Check if a candidate's labels match the active environment.

    - Plain labels ("dev", "prod"): at least one must be active
    - Exclusion labels ("!test"): must NOT be active
    - The wildcard label ("*") matches any active environment

    Example:
        >>> _labels_match({"dev"}, {"dev"})             # True
        >>> _labels_match({"!test"}, {"dev"})           # True
        >>> _labels_match({"!test"}, {"test"})          # False
        >>> _labels_match({"prod", "uat"}, {"dev"})     # False
        >>> _labels_match({"*"}, {"staging"})           # True
    """
    provided = [p for p in stated if not p.startswith("!") and p != WILDCARD_LABEL]
    excluded = [p[1:] for p in stated if p.startswith("!")]

    if any(e in selected for e in excluded):
        return False
    if WILDCARD_LABEL in stated or not provided:
        return True
    return any(p in selected for p in provided)


def _get_dependencies(factory: Callable) -> list[Dependency]:
    """Extract dependency information from a factory's type annotations.

    Every parameter must be annotated with the service name it depends on,
    optionally followed by the qualifier of a specific candidate.

    Example:
        >>> def make_controller(
        ...     settings: Annotated[DatasourceSettingsService, ServiceName.DATASOURCE_SETTINGS],
        ...     greeter: Annotated[GreetingService, ServiceName.GREETING, "EnglishGreetingService"],
        ... ) -> DatasourceController:
        ...     pass
    """
    sig = inspect.signature(factory)
    hinted = factory.__init__ if inspect.isclass(factory) else factory
    hints = get_type_hints(hinted, include_extras=True)
    return [_make_dependency(factory, hints.get(name), name) for name in sig.parameters]


def _make_dependency(factory, annotation, name) -> Dependency:
    if get_origin(annotation) is not Annotated:
        raise DependencyError(
            f"Dependency {name} of {factory.__qualname__} is not annotated with a service name"
        )

    base_type, *metadata = get_args(annotation)
    service_name = next((m for m in metadata if isinstance(m, Enum)), None)
    if service_name is None:
        raise DependencyError(
            f"Dependency {name} of {factory.__qualname__} is not annotated with a service name"
        )
    qualifier = next(
        (m for m in metadata if isinstance(m, str) and not isinstance(m, Enum)), None
    )
    return Dependency(name, base_type, service_name, qualifier)
