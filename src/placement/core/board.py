# placement/core/board.py
"""
Board – the placement registry.

The board owns the catalog (resources and entities), the three relation
mappings and the assignment map. Every insertion is validated against the
state already present, so members must be added in dependency order:
resources, then entities (each bound to a resource), then relations.

Nothing is ever removed. Reassignment is left to an external solver, which
writes ``board.assignment`` directly and re-runs ``check_violation``.

The board only logs through module loggers; embedding processes install
output once with ``placement.core.configure_logging``.

Example:
    configure_logging(settings=settings)
    board = Board(settings=settings)
    board.add_resource(node)
    board.add_entity("node1", app)
    board.add_property_relation(rel)
    violated = board.check_violation()
"""
from __future__ import annotations

import logging

from placement.contracts.catalog import Entity, Resource
from placement.contracts.errors import AlreadyExists, BrokenAssignmentError, NotFound
from placement.contracts.relations import (
    IDPropertyRelation,
    IDRelation,
    PropertyRelation,
)
from placement.core.config import CapacityPolicy, Settings
from placement.core.violations import Violation, check_violations, violation_details

logger = logging.getLogger(__name__)


class Board:
    """Single-writer aggregate holding catalog, relations and assignment."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()

        # id -> record
        self.resources: dict[str, Resource] = {}
        self.entities: dict[str, Entity] = {}

        # relation id -> relation, one namespace per mapping
        self.id_relations: dict[str, IDRelation] = {}
        self.property_relations: dict[str, PropertyRelation] = {}
        self.id_property_relations: dict[str, IDPropertyRelation] = {}

        # entity id -> resource id
        self.assignment: dict[str, str] = {}

    # ---- catalog -------------------------------------------------

    def add_resource(self, resource: Resource) -> bool:
        if resource.id in self.resources:
            logger.warning("Rejected resource '%s': id already exists", resource.id)
            return False

        self.resources[resource.id] = resource
        logger.debug("Added resource: %s", resource.id)
        return True

    def add_entity(self, resource_id: str, entity: Entity) -> bool:
        """
        Register an entity and assign it to ``resource_id`` in one step.

        Returns:
            False if the resource is unknown, the entity is already assigned
            or registered, or (``enforce`` capacity policy) the resource
            would overflow. True otherwise.
        """
        if resource_id not in self.resources:
            logger.warning(
                "Rejected entity '%s': resource '%s' not found", entity.id, resource_id
            )
            return False
        if entity.id in self.assignment:
            logger.warning("Rejected entity '%s': already assigned", entity.id)
            return False
        if entity.id in self.entities:
            logger.warning("Rejected entity '%s': id already exists", entity.id)
            return False

        if self.settings.capacity_policy == CapacityPolicy.ENFORCE:
            overflow = self._overflowing_dimensions(resource_id, entity)
            if overflow:
                logger.warning(
                    "Rejected entity '%s': resource '%s' over capacity for %s",
                    entity.id,
                    resource_id,
                    overflow,
                )
                return False

        self.entities[entity.id] = entity
        self.assignment[entity.id] = resource_id
        logger.debug("Added entity: %s -> %s", entity.id, resource_id)
        return True

    # ---- relations -----------------------------------------------

    def add_id_relation(self, relation: IDRelation) -> None:
        """
        Register an id-based relation.

        Raises:
            AlreadyExists: If the relation id is taken among id relations.
            NotFound: If a referenced entity (or, for entity-resource
                kinds, the referenced resource) is not registered.
        """
        if relation.id in self.id_relations:
            raise AlreadyExists("IDRelation", relation.id)

        self._require_entity(relation.id1, relation.id)
        if relation.kind.is_entity_entity:
            self._require_entity(relation.id2, relation.id)
        elif relation.id2 not in self.resources:
            raise NotFound("Resource", relation.id2, referenced_by=relation.id)

        self.id_relations[relation.id] = relation
        logger.debug("Added id relation: %s (%s)", relation.id, relation.kind.value)

    def add_property_relation(self, relation: PropertyRelation) -> None:
        """
        Register a property relation.

        Property values are not checked against the catalog; the relation
        applies to whatever members carry them at evaluation time.

        Raises:
            AlreadyExists: If the relation id is taken among property relations.
        """
        if relation.id in self.property_relations:
            raise AlreadyExists("PropertyRelation", relation.id)

        self.property_relations[relation.id] = relation
        logger.debug(
            "Added property relation: %s (%s)", relation.id, relation.kind.value
        )

    def add_id_property_relation(self, relation: IDPropertyRelation) -> None:
        """
        Register an entity-to-resource-property relation.

        The relation id is not checked for uniqueness; re-using one replaces
        the stored relation.

        Raises:
            NotFound: If ``relation.entity_id`` is not registered.
        """
        self._require_entity(relation.entity_id, relation.id)

        if relation.id in self.id_property_relations:
            logger.warning("Replacing id-property relation '%s'", relation.id)
        self.id_property_relations[relation.id] = relation
        logger.debug(
            "Added id-property relation: %s (%s)", relation.id, relation.kind.value
        )

    # ---- evaluation ----------------------------------------------

    def check_violation(self) -> set[str]:
        """Return the ids of all relations the current assignment violates."""
        return check_violations(self)

    def check_violation_details(self) -> list[Violation]:
        return violation_details(self)

    # ---- lookups -------------------------------------------------

    def resource_of(self, entity_id: str) -> Resource:
        try:
            return self.resources[self.assignment[entity_id]]
        except KeyError:
            raise NotFound("Entity", entity_id) from None

    def entities_on(self, resource_id: str) -> list[str]:
        if resource_id not in self.resources:
            raise NotFound("Resource", resource_id)
        return sorted(e for e, r in self.assignment.items() if r == resource_id)

    def capacity_usage(self, resource_id: str) -> dict[str, int]:
        """
        Sum the metrics of the entities on a resource, per capacity dimension.

        Raises:
            NotFound: If the resource is not registered.
            BrokenAssignmentError: If the assignment names an entity missing
                from the catalog.
        """
        resource = self.resources.get(resource_id)
        if resource is None:
            raise NotFound("Resource", resource_id)

        usage = dict.fromkeys(resource.capacities, 0)
        for entity_id in self.entities_on(resource_id):
            entity = self.entities.get(entity_id)
            if entity is None:
                raise BrokenAssignmentError(
                    f"Assignment on resource '{resource_id}' names unknown entity '{entity_id}'"
                )
            metrics = entity.metrics
            for dimension in usage:
                usage[dimension] += metrics.get(dimension, 0)
        return usage

    # ---- internals -----------------------------------------------

    def _require_entity(self, entity_id: str, relation_id: str) -> None:
        if entity_id not in self.entities:
            raise NotFound("Entity", entity_id, referenced_by=relation_id)

    def _overflowing_dimensions(self, resource_id: str, entity: Entity) -> list[str]:
        capacities = self.resources[resource_id].capacities
        usage = self.capacity_usage(resource_id)
        return sorted(
            dim
            for dim, cap in capacities.items()
            if usage[dim] + entity.metrics.get(dim, 0) > cap
        )
