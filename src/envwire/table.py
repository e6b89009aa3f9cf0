"""Startup registration table.

A registration table is a list of rows, one per environment, each naming the
implementations that environment provides::

    [
        {"environment": ["dev", "default"],
         "implementations": {ServiceName.DATASOURCE_SETTINGS: DevDatasourceSettings}},
        {"environment": "prod",
         "implementations": {ServiceName.DATASOURCE_SETTINGS: ProdDatasourceSettings}},
    ]

An optional ``qualifiers`` mapping gives implementations an explicit candidate
name; several environments may share one. Rows are validated with pydantic;
unrecognised keys are rejected.
"""

from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, InstanceOf, field_validator

from envwire.registry import CandidateRegistry, make_candidate

__all__ = ["EnvironmentRow", "registry_from_table"]


class EnvironmentRow(BaseModel):
    """One row of the registration table."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    environment: frozenset[str] = Field(min_length=1)
    implementations: dict[InstanceOf[Enum], Callable[..., Any]]
    qualifiers: dict[InstanceOf[Enum], str] = Field(default_factory=dict)

    @field_validator("environment", mode="before")
    @classmethod
    def single_label_as_set(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("environment")
    @classmethod
    def reject_blank_labels(cls, value: frozenset[str]) -> frozenset[str]:
        if any(not label.strip() for label in value):
            raise ValueError("environment labels must not be blank")
        return value


def registry_from_table(
    rows: Iterable[Union[EnvironmentRow, Mapping[str, Any]]],
    registry: Optional[CandidateRegistry] = None,
) -> CandidateRegistry:
    """Build a registry from registration table rows, in row order.

    Args:
        rows: Rows as EnvironmentRow instances or plain mappings.
        registry: Optional registry to extend; a new one is created if None.

    Raises:
        pydantic.ValidationError: If a row is malformed.
        DependencyError: If an implementation cannot be registered.
    """
    registry = registry or CandidateRegistry()
    for row in rows:
        row = EnvironmentRow.model_validate(row)
        for name, factory in row.implementations.items():
            qualifier = row.qualifiers.get(name)
            registry.register(make_candidate(name, row.environment, factory, qualifier))
    return registry
