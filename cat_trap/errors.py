"""Exception types raised by the game core."""

from __future__ import annotations


class CatTrapError(Exception):
    """Base class for game-core errors."""


class OutOfBoundsError(CatTrapError, ValueError):
    """Coordinate lies outside the board."""

    def __init__(self, x: int, y: int, grid_size: int) -> None:
        super().__init__(f"({x}, {y}) is outside a {grid_size}x{grid_size} board")
        self.x = x
        self.y = y
        self.grid_size = grid_size


class StatisticsStoreError(CatTrapError):
    """Statistics could not be loaded from or saved to the backing store."""
