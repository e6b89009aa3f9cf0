"""
Materialising a manifest into an application context.

Each selected candidate is built exactly once, in manifest order, with its
dependencies passed to its factory as keyword arguments. The resulting
:class:`ApplicationContext` is read-only: nothing is re-resolved after startup.
"""

import uuid
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from envwire.domain import ResolvedComponent
from envwire.log import get_logger
from envwire.manifest import ContextManifest

__all__ = ["ApplicationContext", "ContextBuilder"]

logger = get_logger(__name__)


class ApplicationContext:
    """
    A read-only container of implementations resolved for one active environment.

    Implementations are looked up by service name. Requesting a name that was not
    resolved raises a KeyError.
    """

    def __init__(self, active_env: frozenset[str], components: Mapping[Enum, ResolvedComponent]):
        self._active_env = frozenset(active_env)
        self._components = MappingProxyType(dict(components))

    @property
    def active_env(self) -> frozenset[str]:
        return self._active_env

    @property
    def names(self) -> list[Enum]:
        return list(self._components)

    def component(self, name: Enum) -> ResolvedComponent:
        return self._components[name]

    def __getitem__(self, name: Enum) -> Any:
        return self._components[name].component

    def __contains__(self, name: Enum) -> bool:
        return name in self._components

    def __repr__(self) -> str:
        selected = {n.name: c.candidate.qualifier for n, c in self._components.items()}
        return f"ApplicationContext(active_env={sorted(self._active_env)}, selected={selected})"


class ContextBuilder:
    """Instantiate components from a :class:`ContextManifest`."""

    def __init__(self, manifest: ContextManifest):
        self._manifest = manifest

    def build(self) -> ApplicationContext:
        built: dict[Enum, ResolvedComponent] = {}

        for name in self._manifest.build_order:
            candidate = self._manifest.selected[name]
            call_kwargs = {
                dependency.parameter_name: built[dependency.service_name].component
                for dependency in candidate.dependencies
            }
            built[name] = ResolvedComponent(
                uuid.uuid4(),
                name,
                candidate,
                candidate.factory(**call_kwargs),
                [dependency.service_name for dependency in candidate.dependencies],
            )
            logger.debug(f"Built {name.name} from {candidate.qualifier}")

        return ApplicationContext(self._manifest.active_env, built)
