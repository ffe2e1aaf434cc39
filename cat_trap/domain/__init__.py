"""Domain layer: board model, levels, reachability, agent policy, statistics."""

from cat_trap.domain.agent import MoveDecision, MoveReason, choose_move, decide_move
from cat_trap.domain.grid import (
    NEIGHBOR_OFFSETS,
    CellState,
    Coordinate,
    Grid,
)
from cat_trap.domain.levels import (
    build_board,
    config_for,
    place_special_cells,
    seed_initial_blocks,
    validate_level,
)
from cat_trap.domain.reachability import (
    SearchTrace,
    explore,
    is_trapped,
    shortest_escape_path,
)
from cat_trap.domain.statistics import Statistics

__all__ = [
    "CellState",
    "Coordinate",
    "Grid",
    "MoveDecision",
    "MoveReason",
    "NEIGHBOR_OFFSETS",
    "SearchTrace",
    "Statistics",
    "build_board",
    "choose_move",
    "config_for",
    "decide_move",
    "explore",
    "is_trapped",
    "place_special_cells",
    "seed_initial_blocks",
    "shortest_escape_path",
    "validate_level",
]
