"""Level difficulty parameters and seeded initial board layout.

Obstacles are seeded on Manhattan-distance rings around the board center:
the ring just outside the special ring is densely blocked, cells far from
the center are lightly blocked, and everything near the agent is left open.
"""

from __future__ import annotations

from random import Random

from cat_trap.config.constants import (
    AGENT_DELAY_STEP_MS,
    BASE_AGENT_MOVE_DELAY_MS,
    BASE_INITIAL_BLOCKS,
    BASE_REQUIRED_MOVES,
    GRID_SIZE,
    MAX_INITIAL_BLOCKS,
    MAX_LEVEL,
    MIN_AGENT_MOVE_DELAY_MS,
    MIN_LEVEL,
    MIN_REQUIRED_MOVES,
    OUTER_BLOCK_BASE_PROBABILITY,
    OUTER_BLOCK_LEVEL_STEP,
    RING_BLOCK_BASE_PROBABILITY,
    RING_BLOCK_LEVEL_STEP,
    SPECIAL_CELL_MIN_LEVEL,
    SPECIAL_CELL_PROBABILITY,
)
from cat_trap.config.types import LevelConfig
from cat_trap.domain.grid import CellState, Coordinate, Grid


def validate_level(level: int, max_level: int = MAX_LEVEL) -> int:
    """Return ``level`` unchanged if it is selectable, else raise ValueError."""
    if isinstance(level, bool) or not isinstance(level, int):
        raise ValueError(f"level must be an integer, got {level!r}")
    if not MIN_LEVEL <= level <= max_level:
        raise ValueError(f"level must be in [{MIN_LEVEL}, {max_level}], got {level}")
    return level


def config_for(level: int) -> LevelConfig:
    """Derive the difficulty parameters of ``level``."""
    if level < MIN_LEVEL:
        raise ValueError(f"level must be >= {MIN_LEVEL}")
    return LevelConfig(
        level=level,
        initial_block_count=min(BASE_INITIAL_BLOCKS + level, MAX_INITIAL_BLOCKS),
        agent_move_delay_ms=max(
            BASE_AGENT_MOVE_DELAY_MS - level * AGENT_DELAY_STEP_MS, MIN_AGENT_MOVE_DELAY_MS
        ),
        required_moves=max(BASE_REQUIRED_MOVES - level, MIN_REQUIRED_MOVES),
        special_cell_count=level // 2 if level >= SPECIAL_CELL_MIN_LEVEL else 0,
        ring_block_probability=min(
            RING_BLOCK_BASE_PROBABILITY + level * RING_BLOCK_LEVEL_STEP, 1.0
        ),
        outer_block_probability=min(
            OUTER_BLOCK_BASE_PROBABILITY + level * OUTER_BLOCK_LEVEL_STEP, 1.0
        ),
    )


def _manhattan_from_center(grid: Grid, x: int, y: int) -> int:
    center = grid.size // 2
    return abs(x - center) + abs(y - center)


def seed_initial_blocks(grid: Grid, level: int, rng: Random) -> list[Coordinate]:
    """Block cells by distance from center; return the blocked cells row-major.

    One ``rng.random()`` draw is consumed per eligible cell, so a seeded
    generator reproduces the layout exactly.
    """
    config = config_for(level)
    center = grid.size // 2
    blocked: list[Coordinate] = []
    for y in range(grid.size):
        for x in range(grid.size):
            distance = _manhattan_from_center(grid, x, y)
            if distance == center + 1:
                probability = config.ring_block_probability
            elif distance > center + 2:
                probability = config.outer_block_probability
            else:
                continue
            if rng.random() < probability:
                grid.set_cell_state(x, y, CellState.BLOCKED)
                blocked.append((x, y))
    return blocked


def place_special_cells(
    grid: Grid, rng: Random, probability: float = SPECIAL_CELL_PROBABILITY
) -> list[Coordinate]:
    """Mark cells on the ring at distance ``center`` as special.

    Blocked cells are skipped without consuming a random draw.
    """
    center = grid.size // 2
    placed: list[Coordinate] = []
    for y in range(grid.size):
        for x in range(grid.size):
            if _manhattan_from_center(grid, x, y) != center:
                continue
            if grid.cell_state(x, y) != CellState.EMPTY:
                continue
            if rng.random() < probability:
                grid.set_cell_state(x, y, CellState.SPECIAL)
                placed.append((x, y))
    return placed


def build_board(
    level: int,
    rng: Random,
    grid_size: int = GRID_SIZE,
    special_cell_probability: float = SPECIAL_CELL_PROBABILITY,
) -> tuple[Grid, Coordinate]:
    """Create the starting board for ``level`` with the agent at the center."""
    config = config_for(level)
    grid = Grid(grid_size)
    seed_initial_blocks(grid, level, rng)
    if config.special_cell_count > 0:
        place_special_cells(grid, rng, special_cell_probability)
    center = grid_size // 2
    start = (center, center)
    grid.set_cell_state(center, center, CellState.AGENT)
    return grid, start
