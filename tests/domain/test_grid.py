"""Tests for cat_trap.domain.grid module."""

from __future__ import annotations

import pytest

from cat_trap.domain.grid import AGENT_MOVING_TAG, NEIGHBOR_OFFSETS, CellState, Grid
from cat_trap.errors import OutOfBoundsError


def _board(*rows: str) -> Grid:
    return Grid.from_rows(list(rows))


class TestCoordinates:
    def test_boundary_ring(self) -> None:
        grid = Grid(11)
        assert grid.is_boundary(0, 5)
        assert grid.is_boundary(10, 10)
        assert grid.is_boundary(5, 0)
        assert not grid.is_boundary(1, 1)
        assert not grid.is_boundary(5, 5)

    def test_distance_to_edge(self) -> None:
        grid = Grid(11)
        assert grid.distance_to_edge(5, 5) == 5
        assert grid.distance_to_edge(4, 5) == 4
        assert grid.distance_to_edge(0, 7) == 0
        assert grid.distance_to_edge(9, 2) == 1

    def test_neighbors_follow_offset_order(self) -> None:
        grid = Grid(11)
        expected = [(5 + dx, 5 + dy) for dx, dy in NEIGHBOR_OFFSETS]
        assert list(grid.neighbors(5, 5)) == expected
        assert expected[:4] == [(4, 5), (6, 5), (5, 4), (5, 6)]

    def test_corner_neighbors_stay_in_bounds(self) -> None:
        grid = Grid(11)
        assert list(grid.neighbors(0, 0)) == [(1, 0), (0, 1), (1, 1)]

    def test_out_of_bounds_access_raises(self) -> None:
        grid = Grid(11)
        with pytest.raises(OutOfBoundsError) as info:
            grid.cell_state(11, 0)
        assert (info.value.x, info.value.y) == (11, 0)
        with pytest.raises(OutOfBoundsError):
            grid.set_cell_state(-1, 3, CellState.BLOCKED)

    def test_is_empty_is_false_outside(self) -> None:
        grid = Grid(11)
        assert grid.is_empty(3, 3)
        assert not grid.is_empty(-1, 3)


class TestCellAccess:
    def test_from_rows_round_trip(self) -> None:
        rows = [".#.", "*C.", "..#"]
        grid = Grid.from_rows(rows)
        assert grid.to_rows() == rows
        assert grid.cell_state(1, 0) is CellState.BLOCKED
        assert grid.cell_state(0, 1) is CellState.SPECIAL
        assert grid.cell_state(1, 1) is CellState.AGENT

    def test_from_rows_rejects_bad_input(self) -> None:
        with pytest.raises(ValueError):
            Grid.from_rows([])
        with pytest.raises(ValueError, match="length"):
            Grid.from_rows(["..", "."])
        with pytest.raises(ValueError, match="symbol"):
            Grid.from_rows(["..", ".x"])

    def test_cells_in_state_is_row_major(self) -> None:
        grid = _board("#..", "..#", "#..")
        assert grid.cells_in_state(CellState.BLOCKED) == [(0, 0), (2, 1), (0, 2)]
        assert grid.count(CellState.BLOCKED) == 3

    def test_move_agent_vacates_origin(self) -> None:
        grid = _board("...", ".C.", "...")
        grid.move_agent((1, 1), (2, 1))
        assert grid.cell_state(1, 1) is CellState.EMPTY
        assert grid.cell_state(2, 1) is CellState.AGENT
        assert grid.count(CellState.AGENT) == 1

    def test_move_agent_requires_agent_at_origin(self) -> None:
        grid = _board("...", ".C.", "...")
        with pytest.raises(ValueError, match="no agent"):
            grid.move_agent((0, 0), (1, 0))

    def test_clone_is_independent(self) -> None:
        grid = _board("...", ".C.", "...")
        clone = grid.clone_for_simulation()
        assert clone == grid
        clone.set_cell_state(0, 0, CellState.BLOCKED)
        assert grid.cell_state(0, 0) is CellState.EMPTY
        assert clone != grid

    def test_to_tags_marks_moving_agent(self) -> None:
        grid = _board("#..", ".C.", "..*")
        tags = grid.to_tags()
        assert tags[0] == ("blocked", "empty", "empty")
        assert tags[1][1] == "agent"
        assert tags[2][2] == "special"
        assert grid.to_tags(moving=(1, 1))[1][1] == AGENT_MOVING_TAG
