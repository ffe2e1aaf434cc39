"""Cat movement policy.

The cat prefers the open neighbor closest to an edge, but first discards
neighbors from which no empty path to the edge would remain. When every
neighbor looks like a dead end, the current cell is re-checked: a trapped
cat is the player's win, otherwise the cat follows its shortest escape path.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cat_trap.domain.grid import CellState, Coordinate, Grid
from cat_trap.domain.reachability import is_trapped, shortest_escape_path


class MoveReason(str, Enum):
    """Why the agent picked (or could not pick) a move."""

    BEST_SAFE = "best_safe"
    ESCAPE_ROUTE = "escape_route"
    TRAPPED = "trapped"
    STUCK = "stuck"


@dataclass(frozen=True)
class MoveDecision:
    """Agent move choice for one turn."""

    target: Coordinate | None
    reason: MoveReason
    candidates: tuple[Coordinate, ...] = ()

    @property
    def trapped(self) -> bool:
        return self.reason is MoveReason.TRAPPED


def open_neighbors(grid: Grid, position: Coordinate) -> list[Coordinate]:
    """Empty in-bounds neighbors of ``position`` in enumeration order."""
    return [n for n in grid.neighbors(*position) if grid.is_empty(*n)]


def would_be_trapped(grid: Grid, candidate: Coordinate) -> bool:
    """Look ahead: is the agent trapped after stepping to ``candidate``?

    The cell being vacated keeps its agent mark during the lookahead.
    """
    simulated = grid.clone_for_simulation()
    simulated.set_cell_state(*candidate, CellState.AGENT)
    return is_trapped(simulated, candidate)


def safe_moves(grid: Grid, position: Coordinate) -> list[Coordinate]:
    return [c for c in open_neighbors(grid, position) if not would_be_trapped(grid, c)]


def best_move(grid: Grid, candidates: list[Coordinate]) -> Coordinate:
    """Candidate nearest an edge; the first one wins ties."""
    best = candidates[0]
    best_distance = grid.distance_to_edge(*best)
    for candidate in candidates[1:]:
        distance = grid.distance_to_edge(*candidate)
        if distance < best_distance:
            best, best_distance = candidate, distance
    return best


def decide_move(grid: Grid, position: Coordinate) -> MoveDecision:
    """Pick the agent's next cell without mutating ``grid``."""
    grid.require_inside(*position)
    candidates = safe_moves(grid, position)
    if candidates:
        return MoveDecision(
            target=best_move(grid, candidates),
            reason=MoveReason.BEST_SAFE,
            candidates=tuple(candidates),
        )

    if is_trapped(grid, position):
        return MoveDecision(target=None, reason=MoveReason.TRAPPED)

    path = shortest_escape_path(grid, position)
    if path is None or len(path) < 2:
        # Already standing on the boundary with nowhere safe to go.
        return MoveDecision(target=None, reason=MoveReason.STUCK)
    return MoveDecision(target=path[1], reason=MoveReason.ESCAPE_ROUTE)


def choose_move(grid: Grid, position: Coordinate) -> Coordinate | None:
    """Next agent cell, or None when the agent cannot move."""
    return decide_move(grid, position).target
