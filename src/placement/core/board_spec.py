# placement/core/board_spec.py
"""
Board specs – declarative board contents loaded from YAML.

A spec lists resources, entities (with their initial resource) and the
three relation kinds. ``build_board`` inserts them in dependency order so
that forward references are never needed.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from placement.contracts.catalog import Entity, Resource
from placement.contracts.errors import BoardSpecError
from placement.contracts.relations import (
    IDPropertyRelation,
    IDRelation,
    IDRelationKind,
    PropertyRelation,
    PropertyRelationKind,
)
from placement.core.board import Board
from placement.core.config import Settings
from placement.core.loader import load_yaml_files

logger = logging.getLogger(__name__)

SECTIONS = (
    "resources",
    "entities",
    "id_relations",
    "property_relations",
    "id_property_relations",
)


class _SpecModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


def _unique_tags(tags: list[str]) -> list[str]:
    seen: set[str] = set()
    for tag in tags:
        if tag in seen:
            raise ValueError(f"duplicate property '{tag}'")
        seen.add(tag)
    return tags


class ResourceSpec(_SpecModel):
    id: str
    properties: list[str] = Field(default_factory=list)
    capacities: dict[str, int] = Field(default_factory=dict)

    @field_validator("properties")
    @classmethod
    def check_unique_properties(cls, tags: list[str]) -> list[str]:
        return _unique_tags(tags)

    def build(self) -> Resource:
        resource = Resource(self.id)
        for tag in self.properties:
            resource.add_property(tag)
        for dimension, value in self.capacities.items():
            resource.set_capacity(dimension, value)
        return resource


class EntitySpec(_SpecModel):
    id: str
    resource: str
    properties: list[str] = Field(default_factory=list)
    metrics: dict[str, int] = Field(default_factory=dict)
    move_cost: int = 0

    @field_validator("properties")
    @classmethod
    def check_unique_properties(cls, tags: list[str]) -> list[str]:
        return _unique_tags(tags)

    def build(self) -> Entity:
        entity = Entity(self.id, move_cost=self.move_cost)
        for tag in self.properties:
            entity.add_property(tag)
        for name, value in self.metrics.items():
            entity.set_metric(name, value)
        return entity


class IDRelationSpec(_SpecModel):
    id: str
    kind: IDRelationKind
    id1: str
    id2: str

    def build(self) -> IDRelation:
        return IDRelation(id=self.id, kind=self.kind, id1=self.id1, id2=self.id2)


class PropertyRelationSpec(_SpecModel):
    id: str
    kind: PropertyRelationKind = PropertyRelationKind.AFFINITY
    entity_property: str
    resource_property: str

    def build(self) -> PropertyRelation:
        return PropertyRelation(
            id=self.id,
            kind=self.kind,
            entity_property=self.entity_property,
            resource_property=self.resource_property,
        )


class IDPropertyRelationSpec(_SpecModel):
    id: str
    entity_id: str = Field(alias="entity")
    kind: PropertyRelationKind = PropertyRelationKind.AFFINITY
    resource_property: str

    def build(self) -> IDPropertyRelation:
        return IDPropertyRelation(
            id=self.id,
            entity_id=self.entity_id,
            kind=self.kind,
            resource_property=self.resource_property,
        )


class BoardSpec(_SpecModel):
    resources: list[ResourceSpec] = Field(default_factory=list)
    entities: list[EntitySpec] = Field(default_factory=list)
    id_relations: list[IDRelationSpec] = Field(default_factory=list)
    property_relations: list[PropertyRelationSpec] = Field(default_factory=list)
    id_property_relations: list[IDPropertyRelationSpec] = Field(default_factory=list)


def merge_documents(documents: Iterable[dict[str, Any]]) -> dict[str, list[dict]]:
    """
    Merge raw YAML documents section by section.

    Items are keyed by ``id``; an item in a later document replaces the
    earlier one with the same id while keeping its original position.
    """
    merged: dict[str, dict[str, dict]] = {name: {} for name in SECTIONS}

    for doc in documents:
        unknown = set(doc) - set(SECTIONS)
        if unknown:
            raise BoardSpecError(f"Unknown board spec section(s): {sorted(unknown)}")
        for name in SECTIONS:
            for item in doc.get(name) or []:
                if not isinstance(item, dict) or "id" not in item:
                    raise BoardSpecError(f"Every item in '{name}' needs an 'id'")
                merged[name][str(item["id"])] = item

    return {name: list(items.values()) for name, items in merged.items()}


def parse_board_spec(raw: dict[str, Any]) -> BoardSpec:
    try:
        return BoardSpec.model_validate(raw)
    except ValidationError as exc:
        raise BoardSpecError(f"Invalid board spec: {exc}") from exc


def load_board_spec(patterns: Iterable[str]) -> BoardSpec:
    """
    Load a board spec from YAML files.

    Expected structure::

        resources:
          - id: node1
            properties: [red]
            capacities: {cpu: 4}
        entities:
          - id: app1
            resource: node1
            properties: [red]
            metrics: {cpu: 1}
        property_relations:
          - id: color
            kind: affinity
            entity_property: red
            resource_property: red
        id_relations:
          - id: spread
            kind: ee_anti_affinity
            id1: app1
            id2: app2
        id_property_relations:
          - id: pin
            entity: app1
            kind: anti_affinity
            resource_property: blue

    Raises:
        BoardSpecError: If a file is not a YAML mapping, references an unset
            environment variable, or does not describe a valid board.
    """
    try:
        documents = load_yaml_files(patterns)
    except (ValueError, yaml.YAMLError) as exc:
        raise BoardSpecError(f"Cannot read board spec: {exc}") from exc

    spec = parse_board_spec(merge_documents(documents))
    logger.info(
        "Loaded board spec: %d resource(s), %d entit(y/ies), %d relation(s)",
        len(spec.resources),
        len(spec.entities),
        len(spec.id_relations)
        + len(spec.property_relations)
        + len(spec.id_property_relations),
    )
    return spec


def build_board(spec: BoardSpec, settings: Settings | None = None) -> Board:
    """
    Populate a new board from a spec: resources, entities, then relations.

    Raises:
        BoardSpecError: If a resource or entity is rejected by the board.
        AlreadyExists, NotFound: Propagated from relation insertion.
    """
    board = Board(settings=settings)

    for r in spec.resources:
        if not board.add_resource(r.build()):
            raise BoardSpecError(f"Resource '{r.id}' rejected by board")

    for e in spec.entities:
        if not board.add_entity(e.resource, e.build()):
            raise BoardSpecError(
                f"Entity '{e.id}' rejected by board (resource '{e.resource}')"
            )

    for rel in spec.id_relations:
        board.add_id_relation(rel.build())
    for rel in spec.property_relations:
        board.add_property_relation(rel.build())
    for rel in spec.id_property_relations:
        board.add_id_property_relation(rel.build())

    return board


def load_board(
    patterns: Iterable[str] | None = None, settings: Settings | None = None
) -> Board:
    """Load and build a board, defaulting to ``settings.board_config_paths``."""
    settings = settings or Settings()
    if patterns is None:
        patterns = settings.board_config_paths
    return build_board(load_board_spec(patterns), settings=settings)
