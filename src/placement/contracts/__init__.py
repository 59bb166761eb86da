"""Public contracts for the placement board."""
from placement.contracts.catalog import Entity, Resource
from placement.contracts.errors import (
    AlreadyExists,
    BoardSpecError,
    BrokenAssignmentError,
    DuplicatePropertyError,
    InvariantViolation,
    NotFound,
    PlacementError,
)
from placement.contracts.relations import (
    IDPropertyRelation,
    IDRelation,
    IDRelationKind,
    PlacementView,
    PropertyRelation,
    PropertyRelationKind,
    Relation,
)

__all__ = [
    "Entity", "Resource",
    "IDRelation", "IDRelationKind",
    "PropertyRelation", "PropertyRelationKind",
    "IDPropertyRelation",
    "PlacementView", "Relation",
    "PlacementError", "AlreadyExists", "NotFound", "BoardSpecError",
    "InvariantViolation", "DuplicatePropertyError", "BrokenAssignmentError",
]
