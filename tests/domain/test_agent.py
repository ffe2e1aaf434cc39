"""Tests for cat_trap.domain.agent module."""

from __future__ import annotations

from cat_trap.domain.agent import (
    MoveReason,
    best_move,
    choose_move,
    decide_move,
    open_neighbors,
    safe_moves,
    would_be_trapped,
)
from cat_trap.domain.grid import CellState, Grid

# (3, 4) is a pocket whose only exit is back through the agent.
POCKET = [
    ".......",
    ".......",
    ".......",
    "..#C#..",
    "..#.#..",
    "..###..",
    ".......",
]


def _open_board(agent: tuple[int, int], size: int = 11) -> Grid:
    grid = Grid(size)
    grid.set_cell_state(*agent, CellState.AGENT)
    return grid


class TestLookahead:
    def test_pocket_is_a_dead_end(self) -> None:
        grid = Grid.from_rows(POCKET)
        assert would_be_trapped(grid, (3, 4))
        assert not would_be_trapped(grid, (3, 2))

    def test_lookahead_leaves_board_untouched(self) -> None:
        grid = Grid.from_rows(POCKET)
        before = grid.clone_for_simulation()
        would_be_trapped(grid, (3, 4))
        decide_move(grid, (3, 3))
        assert grid == before

    def test_safe_moves_skip_pocket(self) -> None:
        grid = Grid.from_rows(POCKET)
        assert open_neighbors(grid, (3, 3)) == [(3, 2), (3, 4), (2, 2), (4, 2)]
        assert safe_moves(grid, (3, 3)) == [(3, 2), (2, 2), (4, 2)]


class TestDecideMove:
    def test_blocked_south_moves_west(self) -> None:
        grid = _open_board((5, 5))
        grid.set_cell_state(5, 6, CellState.BLOCKED)
        assert choose_move(grid, (5, 5)) == (4, 5)

    def test_best_safe_prefers_edge(self) -> None:
        grid = _open_board((2, 5))
        decision = decide_move(grid, (2, 5))
        assert decision.reason is MoveReason.BEST_SAFE
        assert decision.target == (1, 5)
        assert len(decision.candidates) == 8

    def test_single_open_neighbor_is_the_only_candidate(self) -> None:
        grid = _open_board((2, 5))
        for x, y in grid.neighbors(2, 5):
            if (x, y) != (1, 5):
                grid.set_cell_state(x, y, CellState.BLOCKED)
        decision = decide_move(grid, (2, 5))
        assert decision.reason is MoveReason.BEST_SAFE
        assert decision.candidates == ((1, 5),)
        assert decision.target == (1, 5)

    def test_steps_onto_boundary_when_adjacent(self) -> None:
        grid = _open_board((1, 5))
        assert choose_move(grid, (1, 5)) == (0, 5)

    def test_first_candidate_wins_ties(self) -> None:
        grid = _open_board((5, 5))
        candidates = [(6, 5), (4, 5), (5, 4)]
        assert best_move(grid, candidates) == (6, 5)

    def test_pocket_board_picks_first_nearest_safe_cell(self) -> None:
        grid = Grid.from_rows(POCKET)
        decision = decide_move(grid, (3, 3))
        assert decision.target == (3, 2)
        assert decision.candidates == ((3, 2), (2, 2), (4, 2))

    def test_surrounded_agent_is_trapped(self) -> None:
        grid = _open_board((5, 5))
        for x, y in grid.neighbors(5, 5):
            grid.set_cell_state(x, y, CellState.BLOCKED)
        decision = decide_move(grid, (5, 5))
        assert decision.reason is MoveReason.TRAPPED
        assert decision.trapped
        assert decision.target is None
        assert choose_move(grid, (5, 5)) is None

    def test_enclosed_region_counts_as_trapped(self) -> None:
        grid = Grid.from_rows(
            [
                ".......",
                ".#####.",
                ".#...#.",
                ".#.C.#.",
                ".#...#.",
                ".#####.",
                ".......",
            ]
        )
        decision = decide_move(grid, (3, 3))
        assert decision.reason is MoveReason.TRAPPED

    def test_boundary_agent_without_moves_is_stuck(self) -> None:
        grid = Grid.from_rows(["#C#", "###", "..."])
        decision = decide_move(grid, (1, 0))
        assert decision.reason is MoveReason.STUCK
        assert decision.target is None
        assert not decision.trapped
