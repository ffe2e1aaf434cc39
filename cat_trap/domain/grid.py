"""Square game board backed by a numpy cell-state array.

Cells are addressed as ``(x, y)`` with ``x`` the column and ``y`` the row;
the backing array is indexed ``[y, x]``. Iteration helpers walk cells
row-major so seeded layouts replay identically.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import IntEnum

import numpy as np

from cat_trap.config.constants import GRID_SIZE
from cat_trap.errors import OutOfBoundsError

Coordinate = tuple[int, int]

# Left, right, up, down, then the four diagonals. Agent tie-breaks depend on
# this order, so it must not be reshuffled.
NEIGHBOR_OFFSETS: tuple[Coordinate, ...] = (
    (-1, 0),
    (1, 0),
    (0, -1),
    (0, 1),
    (-1, -1),
    (1, -1),
    (-1, 1),
    (1, 1),
)

ORTHOGONAL_OFFSETS: tuple[Coordinate, ...] = NEIGHBOR_OFFSETS[:4]


class CellState(IntEnum):
    """Mutually exclusive cell contents."""

    EMPTY = 0
    BLOCKED = 1
    AGENT = 2
    SPECIAL = 3

    @property
    def tag(self) -> str:
        return self.name.lower()


# Text picture symbols used by ``Grid.from_rows`` / ``Grid.to_rows``.
_SYMBOL_TO_STATE: dict[str, CellState] = {
    ".": CellState.EMPTY,
    "#": CellState.BLOCKED,
    "C": CellState.AGENT,
    "*": CellState.SPECIAL,
}
_STATE_TO_SYMBOL: dict[CellState, str] = {v: k for k, v in _SYMBOL_TO_STATE.items()}

AGENT_MOVING_TAG = "agent-moving"


class Grid:
    """Mutable square board of ``CellState`` values."""

    __slots__ = ("size", "cells")

    def __init__(self, size: int = GRID_SIZE, cells: np.ndarray | None = None) -> None:
        if size < 1:
            raise ValueError("size must be >= 1")
        if cells is None:
            cells = np.full((size, size), CellState.EMPTY, dtype=np.int8)
        elif cells.shape != (size, size):
            raise ValueError(f"cells must have shape ({size}, {size}), got {cells.shape}")
        self.size = size
        self.cells = cells

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> Grid:
        """Build a board from a text picture, one string per row.

        ``.`` empty, ``#`` blocked, ``C`` agent, ``*`` special.
        """
        size = len(rows)
        if size == 0:
            raise ValueError("rows must not be empty")
        grid = cls(size)
        for y, row in enumerate(rows):
            if len(row) != size:
                raise ValueError(f"row {y} has length {len(row)}, expected {size}")
            for x, symbol in enumerate(row):
                try:
                    grid.cells[y, x] = _SYMBOL_TO_STATE[symbol]
                except KeyError as exc:
                    raise ValueError(f"unknown cell symbol {symbol!r} at ({x}, {y})") from exc
        return grid

    def to_rows(self) -> list[str]:
        return [
            "".join(_STATE_TO_SYMBOL[CellState(int(v))] for v in self.cells[y])
            for y in range(self.size)
        ]

    # -- coordinates --------------------------------------------------------

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def require_inside(self, x: int, y: int) -> None:
        if not self.is_inside(x, y):
            raise OutOfBoundsError(x, y, self.size)

    def is_boundary(self, x: int, y: int) -> bool:
        """True for cells on the outermost ring."""
        last = self.size - 1
        return x == 0 or y == 0 or x == last or y == last

    def distance_to_edge(self, x: int, y: int) -> int:
        last = self.size - 1
        return min(x, last - x, y, last - y)

    def neighbors(self, x: int, y: int) -> Iterator[Coordinate]:
        """Yield in-bounds 8-neighbors of ``(x, y)`` in ``NEIGHBOR_OFFSETS`` order."""
        for dx, dy in NEIGHBOR_OFFSETS:
            nx_, ny_ = x + dx, y + dy
            if self.is_inside(nx_, ny_):
                yield nx_, ny_

    # -- cell access --------------------------------------------------------

    def cell_state(self, x: int, y: int) -> CellState:
        self.require_inside(x, y)
        return CellState(int(self.cells[y, x]))

    def set_cell_state(self, x: int, y: int, state: CellState) -> None:
        """Overwrite one cell. Callers keep the single-agent invariant."""
        self.require_inside(x, y)
        self.cells[y, x] = state

    def is_empty(self, x: int, y: int) -> bool:
        return self.is_inside(x, y) and self.cells[y, x] == CellState.EMPTY

    def cells_in_state(self, state: CellState) -> list[Coordinate]:
        """All cells in ``state``, row-major."""
        ys, xs = np.nonzero(self.cells == state)
        return [(int(x), int(y)) for y, x in zip(ys, xs, strict=True)]

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self.cells == state))

    def move_agent(self, origin: Coordinate, target: Coordinate) -> None:
        """Relocate the agent mark; the vacated cell becomes empty."""
        ox, oy = origin
        tx, ty = target
        self.require_inside(ox, oy)
        self.require_inside(tx, ty)
        if self.cells[oy, ox] != CellState.AGENT:
            raise ValueError(f"no agent at {origin}")
        self.cells[oy, ox] = CellState.EMPTY
        self.cells[ty, tx] = CellState.AGENT

    def clone_for_simulation(self) -> Grid:
        """Independent deep copy for speculative searches."""
        return Grid(self.size, self.cells.copy())

    def to_tags(self, moving: Coordinate | None = None) -> tuple[tuple[str, ...], ...]:
        """Row-major render tags; ``moving`` marks the agent mid-animation."""
        rows: list[tuple[str, ...]] = []
        for y in range(self.size):
            row: list[str] = []
            for x in range(self.size):
                if moving == (x, y):
                    row.append(AGENT_MOVING_TAG)
                else:
                    row.append(CellState(int(self.cells[y, x])).tag)
            rows.append(tuple(row))
        return tuple(rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self.cells, other.cells))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid(size={self.size})"
