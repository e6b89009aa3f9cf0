"""High level entry points for selecting and building implementations."""

from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from envwire.context import ApplicationContext, ContextBuilder
from envwire.domain import DEFAULT_LABEL
from envwire.manifest import ContextManifest, ManifestBuilder
from envwire.registry import CandidateRegistry

__all__ = ["make_manifest", "make_context", "resolve"]


def make_manifest(
    registry: CandidateRegistry,
    active_env: Iterable[str],
    required: Optional[Iterable[Enum]] = None,
    qualifiers: Optional[Mapping[Enum, str]] = None,
    fallback_label: str = DEFAULT_LABEL,
) -> ContextManifest:
    """Create a :class:`ContextManifest` for the given registry.

    Args:
        registry: The registry containing the declared candidates.
        active_env: The active environment labels.
        required: Service names that must be resolved. If None, every service name
            in the registry is required.
        qualifiers: Optional mapping from required service name to the qualifier
            of the candidate to select for it.
        fallback_label: Label that only wins when no more specific label matched.

    Returns:
        The :class:`ContextManifest` describing selected candidates and build order.

    Raises:
        DependencyError: If dependencies are unresolved, ambiguous or cyclic.

    Example:
        >>> manifest = make_manifest(registry, {"prod"}, [ServiceName.DATASOURCE_SETTINGS])
        >>> print(manifest.build_order)
    """
    return ManifestBuilder(registry, active_env, fallback_label).build(required, qualifiers)


def make_context(
    registry: CandidateRegistry,
    active_env: Iterable[str],
    required: Optional[Iterable[Enum]] = None,
    qualifiers: Optional[Mapping[Enum, str]] = None,
    fallback_label: str = DEFAULT_LABEL,
) -> ApplicationContext:
    """Construct and return a fully built :class:`ApplicationContext`.

    Candidates are selected as for :func:`make_manifest`, then built in
    dependency order.

    Raises:
        DependencyError: If dependencies are unresolved, ambiguous or cyclic.
    """
    manifest = make_manifest(registry, active_env, required, qualifiers, fallback_label)
    return ContextBuilder(manifest).build()


def resolve(
    registry: CandidateRegistry,
    name: Enum,
    active_env: Iterable[str],
    qualifier: Optional[str] = None,
    fallback_label: str = DEFAULT_LABEL,
) -> Any:
    """Resolve a single service name to its implementation.

    Raises:
        UnresolvedDependency: If no candidate matches the active environment.
        AmbiguousDependency: If several candidates match equally well.
    """
    qualifiers = {name: qualifier} if qualifier is not None else None
    return make_context(registry, active_env, [name], qualifiers, fallback_label)[name]
