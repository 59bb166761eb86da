# placement/contracts/errors.py
"""
Error types for the placement board.

Two tiers are kept apart on purpose:

- ``PlacementError`` and its subclasses are expected, recoverable failures
  raised while populating a board (duplicate ids, dangling references).
- ``InvariantViolation`` signals that board state is already inconsistent.
  It does not inherit from ``PlacementError`` so that callers catching
  recoverable errors never swallow it.
"""
from __future__ import annotations


class PlacementError(Exception):
    pass


class AlreadyExists(PlacementError):
    def __init__(self, kind: str, id: str) -> None:
        self.kind = kind
        self.id = id
        super().__init__(f"{kind} '{id}' already exists")


class NotFound(PlacementError):
    def __init__(self, kind: str, id: str, *, referenced_by: str | None = None) -> None:
        self.kind = kind
        self.id = id
        self.referenced_by = referenced_by
        msg = f"{kind} '{id}'"
        if referenced_by is not None:
            msg += f" referenced by relation '{referenced_by}'"
        super().__init__(msg + " not found")


class BoardSpecError(PlacementError):
    pass


class InvariantViolation(Exception):
    pass


class DuplicatePropertyError(InvariantViolation):
    def __init__(self, owner: str, tag: str) -> None:
        self.owner = owner
        self.tag = tag
        super().__init__(f"Property '{tag}' already declared on '{owner}'")


class BrokenAssignmentError(InvariantViolation):
    pass
