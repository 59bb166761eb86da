"""Placement board: catalog, relations, assignment and violation checks."""
from placement.contracts import (
    AlreadyExists,
    Entity,
    IDPropertyRelation,
    IDRelation,
    IDRelationKind,
    InvariantViolation,
    NotFound,
    PlacementError,
    PropertyRelation,
    PropertyRelationKind,
    Resource,
)
from placement.core.board import Board
from placement.core.violations import Violation

__version__ = "0.1.0"

__all__ = [
    "Board", "Violation",
    "Entity", "Resource",
    "IDRelation", "IDRelationKind",
    "PropertyRelation", "PropertyRelationKind",
    "IDPropertyRelation",
    "PlacementError", "AlreadyExists", "NotFound", "InvariantViolation",
]
