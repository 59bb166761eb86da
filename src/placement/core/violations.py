# placement/core/violations.py
"""
Violation engine.

Evaluates every relation container of a board against its current
assignment. Each relation implements ``violations(view)``; this module
supplies the shared view and unions the results.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Iterator

from placement.contracts.errors import BrokenAssignmentError
from placement.contracts.relations import Relation

if TYPE_CHECKING:
    from placement.core.board import Board

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Violation:
    """
    A relation that does not hold under the current assignment.

    Attributes:
        relation_id: Id of the violated relation.
        container: Which relation mapping it lives in
            (``id``, ``property`` or ``id_property``).
        entity_ids: Entities whose placement breaks the relation.
    """

    relation_id: str
    container: str
    entity_ids: tuple[str, ...]


class AssignmentView:
    """Entity -> resource -> property lookups over a board's state."""

    def __init__(self, board: Board) -> None:
        self._board = board

    def resource_of(self, entity_id: str) -> str:
        try:
            resource_id = self._board.assignment[entity_id]
        except KeyError:
            raise BrokenAssignmentError(
                f"Entity '{entity_id}' has no assignment"
            ) from None
        if resource_id not in self._board.resources:
            raise BrokenAssignmentError(
                f"Entity '{entity_id}' is assigned to unknown resource '{resource_id}'"
            )
        return resource_id

    def resource_properties(self, entity_id: str) -> set[str]:
        return self._board.resources[self.resource_of(entity_id)].properties

    def entities_with(self, tag: str) -> Iterable[str]:
        return sorted(
            e.id for e in self._board.entities.values() if tag in e.properties
        )


def iter_relations(board: Board) -> Iterator[Relation]:
    yield from board.id_relations.values()
    yield from board.property_relations.values()
    yield from board.id_property_relations.values()


def violation_details(board: Board) -> list[Violation]:
    """Evaluate all relations and describe each violated one."""
    view = AssignmentView(board)
    found: list[Violation] = []

    for relation in iter_relations(board):
        offenders = relation.violations(view)
        if offenders:
            found.append(
                Violation(
                    relation_id=relation.id,
                    container=relation.container,
                    entity_ids=tuple(dict.fromkeys(offenders)),
                )
            )

    logger.debug("Evaluated board: %d violated relation(s)", len(found))
    return found


def check_violations(board: Board) -> set[str]:
    """Return the distinct ids of all currently violated relations."""
    return {v.relation_id for v in violation_details(board)}
