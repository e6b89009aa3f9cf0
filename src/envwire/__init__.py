"""envwire: environment-scoped dependency injection.

envwire selects one implementation per logical service name from a registry of
candidates, each tagged with the environment labels it serves. Selection happens
once, at startup, for the active environment; the results are injected into
consumers through their constructors and held in a read-only context. A missing
or ambiguous implementation aborts startup instead of surfacing on first use.

Key Features:
    - Explicit registration, by decorator or by a startup registration table
    - Typed service names (Enum members) instead of magic strings
    - Constructor injection using standard ``Annotated`` type hints
    - Fallback label tie-break ("default" only wins when nothing more specific matched)
    - Fail-fast startup on unresolved, ambiguous or cyclic dependencies

Basic Usage:
    >>> from envwire.registry import CandidateRegistry
    >>> from envwire.builders import resolve
    >>>
    >>> registry = CandidateRegistry()
    >>>
    >>> @registry.candidate(ServiceName.DATASOURCE_SETTINGS, labels=["prod"])
    >>> class ProdDatasourceSettings:
    ...     def get_datasource_settings(self) -> str:
    ...         return "prod"
    >>>
    >>> resolve(registry, ServiceName.DATASOURCE_SETTINGS, {"prod"}).get_datasource_settings()
    'prod'

The library consists of several core modules:
    - registry: Candidate registration and selection
    - table: Registration from a table of environment rows
    - manifest: Transitive selection and build ordering
    - context: The read-only application context
    - builders: High-level entry points
    - errors: Library-specific exceptions
"""
