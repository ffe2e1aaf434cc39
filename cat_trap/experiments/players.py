"""Scripted players for self-play runs."""

from __future__ import annotations

from random import Random
from typing import Protocol

from cat_trap.config.types import PlayerKind
from cat_trap.domain.analysis import minimum_blocking_set
from cat_trap.domain.grid import CellState, Coordinate
from cat_trap.domain.reachability import shortest_escape_path
from cat_trap.game.session import GameSession


class Player(Protocol):
    kind: PlayerKind

    def choose_cell(self, session: GameSession) -> Coordinate | None: ...


class RandomPlayer:
    """Clicks a uniformly random empty or special cell."""

    kind = PlayerKind.RANDOM

    def __init__(self, rng: Random) -> None:
        self._rng = rng

    def choose_cell(self, session: GameSession) -> Coordinate | None:
        grid = session.grid
        options = grid.cells_in_state(CellState.EMPTY) + grid.cells_in_state(CellState.SPECIAL)
        if not options:
            return None
        return self._rng.choice(sorted(options))


def _chebyshev(a: Coordinate, b: Coordinate) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


class CutPlayer:
    """Blocks the minimum-cut cell closest to the cat.

    When the cat stands on the boundary or is already enclosed, it falls back
    to the first step of the cat's shortest escape path, then to any empty
    cell.
    """

    kind = PlayerKind.CUT

    def choose_cell(self, session: GameSession) -> Coordinate | None:
        grid = session.grid
        agent = session.agent_position
        cut = minimum_blocking_set(grid, agent)
        if cut:
            return min(cut, key=lambda c: (_chebyshev(c, agent), c[1], c[0]))
        path = shortest_escape_path(grid, agent)
        if path is not None and len(path) > 1:
            return path[1]
        empty = grid.cells_in_state(CellState.EMPTY)
        if not empty:
            return None
        return min(empty, key=lambda c: (_chebyshev(c, agent), c[1], c[0]))


def make_player(kind: PlayerKind, rng: Random) -> Player:
    if kind is PlayerKind.RANDOM:
        return RandomPlayer(rng)
    if kind is PlayerKind.CUT:
        return CutPlayer()
    raise ValueError(f"unsupported player kind: {kind!r}")
