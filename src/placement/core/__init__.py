"""Board runtime: registry, violation engine, settings and spec loading."""
from placement.core.board import Board
from placement.core.board_spec import BoardSpec, build_board, load_board, load_board_spec
from placement.core.config import CapacityPolicy, Settings
from placement.core.logging import configure_logging
from placement.core.violations import AssignmentView, Violation, check_violations

__all__ = [
    "Board",
    "BoardSpec", "build_board", "load_board", "load_board_spec",
    "CapacityPolicy", "Settings",
    "configure_logging",
    "AssignmentView", "Violation", "check_violations",
]
