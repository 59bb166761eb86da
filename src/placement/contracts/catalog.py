# placement/contracts/catalog.py
"""
Catalog contracts: the placement targets (resources) and the placement
subjects (entities) a board keeps track of.

Records are frozen: ids never change once created, while the tag set and
the capacity/metric mappings are filled in place.

Both records carry a set of opaque string tags. Tags are declared once;
declaring the same tag twice on a record is a caller bug and raises
``DuplicatePropertyError`` instead of being ignored.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from placement.contracts.errors import DuplicatePropertyError


@dataclass(frozen=True)
class Resource:
    """A placement target.

    Attributes:
        id: Unique identifier among resources.
        properties: Tags matched by property relations.
        capacities: Capacity per dimension name. Only consulted when the
            board runs with the ``enforce`` capacity policy.
    """

    id: str
    properties: set[str] = field(default_factory=set)
    capacities: dict[str, int] = field(default_factory=dict)

    def add_property(self, tag: str) -> None:
        if tag in self.properties:
            raise DuplicatePropertyError(self.id, tag)
        self.properties.add(tag)

    def has_property(self, tag: str) -> bool:
        return tag in self.properties

    def set_capacity(self, dimension: str, value: int) -> None:
        self.capacities[dimension] = int(value)


@dataclass(frozen=True)
class Entity:
    """A placement subject, bound to exactly one resource once registered.

    Attributes:
        id: Unique identifier among entities.
        properties: Tags matched by property relations.
        metrics: Consumption per metric name.
        move_cost: Relocation hint for rebalancers, lower moves first.
    """

    id: str
    properties: set[str] = field(default_factory=set)
    metrics: dict[str, int] = field(default_factory=dict)
    move_cost: int = 0

    def add_property(self, tag: str) -> None:
        if tag in self.properties:
            raise DuplicatePropertyError(self.id, tag)
        self.properties.add(tag)

    def has_property(self, tag: str) -> bool:
        return tag in self.properties

    def set_metric(self, name: str, value: int) -> None:
        self.metrics[name] = int(value)
