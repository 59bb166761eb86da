# placement/contracts/relations.py
"""
Relation contracts.

A relation is a declarative constraint over the current assignment. Three
record types exist, each stored in its own board mapping:

- ``IDRelation`` ties two catalog members by id (entity-entity or
  entity-resource), with affinity or anti-affinity polarity.
- ``PropertyRelation`` is a pattern: every entity carrying
  ``entity_property`` must (affinity) or must not (anti-affinity) sit on a
  resource carrying ``resource_property``.
- ``IDPropertyRelation`` applies the same property check to one entity.

Every relation evaluates itself against a ``PlacementView`` and reports the
ids of the entities that break it. An empty result means the relation holds.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterable, Protocol, runtime_checkable


class IDRelationKind(str, Enum):
    EE_AFFINITY = "ee_affinity"
    EE_ANTI_AFFINITY = "ee_anti_affinity"
    ER_AFFINITY = "er_affinity"
    ER_ANTI_AFFINITY = "er_anti_affinity"

    @property
    def is_entity_entity(self) -> bool:
        return self in (IDRelationKind.EE_AFFINITY, IDRelationKind.EE_ANTI_AFFINITY)

    @property
    def is_affinity(self) -> bool:
        return self in (IDRelationKind.EE_AFFINITY, IDRelationKind.ER_AFFINITY)


class PropertyRelationKind(str, Enum):
    AFFINITY = "affinity"
    ANTI_AFFINITY = "anti_affinity"


@runtime_checkable
class PlacementView(Protocol):
    """Read-only lookups a relation needs to evaluate itself."""

    def resource_of(self, entity_id: str) -> str: ...

    def resource_properties(self, entity_id: str) -> set[str]: ...

    def entities_with(self, tag: str) -> Iterable[str]: ...


@runtime_checkable
class Relation(Protocol):
    """Common evaluation contract for every relation record."""

    id: str
    container: ClassVar[str]

    def violations(self, view: PlacementView) -> list[str]: ...


def _property_check(
    kind: PropertyRelationKind, resource_property: str, carried: set[str]
) -> bool:
    """Return True when the placement breaks the relation."""
    if kind == PropertyRelationKind.AFFINITY:
        return resource_property not in carried
    return resource_property in carried


@dataclass(frozen=True)
class IDRelation:
    """
    Id-based relation.

    For entity-entity kinds ``id1`` and ``id2`` are entity ids. For
    entity-resource kinds ``id1`` is an entity id and ``id2`` a resource id.
    """

    container: ClassVar[str] = "id"

    id: str
    kind: IDRelationKind
    id1: str
    id2: str

    def violations(self, view: PlacementView) -> list[str]:
        home = view.resource_of(self.id1)

        if self.kind.is_entity_entity:
            together = home == view.resource_of(self.id2)
            broken = not together if self.kind.is_affinity else together
            return [self.id1, self.id2] if broken else []

        on_target = home == self.id2
        broken = not on_target if self.kind.is_affinity else on_target
        return [self.id1] if broken else []


@dataclass(frozen=True)
class PropertyRelation:
    container: ClassVar[str] = "property"

    id: str
    kind: PropertyRelationKind
    entity_property: str
    resource_property: str

    def violations(self, view: PlacementView) -> list[str]:
        return [
            entity_id
            for entity_id in view.entities_with(self.entity_property)
            if _property_check(
                self.kind, self.resource_property, view.resource_properties(entity_id)
            )
        ]


@dataclass(frozen=True)
class IDPropertyRelation:
    container: ClassVar[str] = "id_property"

    id: str
    entity_id: str
    kind: PropertyRelationKind
    resource_property: str

    def violations(self, view: PlacementView) -> list[str]:
        carried = view.resource_properties(self.entity_id)
        if _property_check(self.kind, self.resource_property, carried):
            return [self.entity_id]
        return []
