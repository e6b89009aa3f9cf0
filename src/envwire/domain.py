"""Domain models used throughout the library."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional
from uuid import UUID

WILDCARD_LABEL = "*"
"""Label matching any active environment."""

DEFAULT_LABEL = "default"
"""Fallback label, preferred only when no more specific label matched."""


@dataclass(frozen=True)
class Dependency:
    """Represents a dependency required by a candidate's factory.

    Attributes:
        parameter_name: The parameter name in the factory's signature.
        declared_type: The expected type of the dependency.
        service_name: The logical service name that fulfils this dependency.
        qualifier: Optional name of the specific candidate to inject.
    """

    parameter_name: str
    declared_type: Optional[type]
    service_name: Enum
    qualifier: Optional[str] = None


@dataclass(frozen=True)
class Candidate:
    """One labelled implementation option for a logical service name.

    Attributes:
        name: The logical service name this candidate implements.
        labels: Environment labels under which the candidate is eligible.
        factory: Callable producing the implementation.
        dependencies: Constructor dependencies of the factory.
        qualifier: The candidate's own name, unique per service name.
    """

    name: Enum
    labels: frozenset[str]
    factory: Callable[..., Any]
    dependencies: tuple[Dependency, ...]
    qualifier: str


@dataclass(frozen=True)
class ResolvedComponent:
    """
    Represents a selected and instantiated candidate.

    Attributes:
        id: The unique id of this component instance.
        name: The logical service name.
        candidate: The candidate that was selected.
        component: The instantiated implementation.
        dependencies: Service names this component was built from.
    """

    id: UUID
    name: Enum
    candidate: Candidate
    component: Any
    dependencies: list[Enum]
