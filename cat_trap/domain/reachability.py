"""Breadth-first reachability over the 8-connected board.

Only ``EMPTY`` cells are traversable; the start cell is always admitted
whatever its state, since it usually holds the agent. Every search keeps a
visited set, so each cell is enqueued at most once and the search always
terminates on a finite board.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass

from cat_trap.domain.grid import Coordinate, Grid


@dataclass(frozen=True)
class SearchTrace:
    """Outcome of an exhaustive search from one start cell."""

    start: Coordinate
    visited: frozenset[Coordinate]
    enqueued: int
    reaches_boundary: bool


def _open_neighbors(grid: Grid, cell: Coordinate) -> list[Coordinate]:
    return [n for n in grid.neighbors(*cell) if grid.is_empty(*n)]


def is_trapped(grid: Grid, start: Coordinate) -> bool:
    """True if no path of empty cells connects ``start`` to the boundary."""
    grid.require_inside(*start)
    visited = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if grid.is_boundary(*current):
            return False
        for neighbor in _open_neighbors(grid, current):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
    return True


def shortest_escape_path(grid: Grid, start: Coordinate) -> list[Coordinate] | None:
    """Shortest path from ``start`` to any boundary cell, or None if trapped.

    The path includes ``start`` as its first element, so a start already on
    the boundary yields ``[start]`` and the first move is ``path[1]``.
    Ties between equally short paths resolve by neighbor enumeration order.
    """
    grid.require_inside(*start)
    parents: dict[Coordinate, Coordinate | None] = {start: None}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if grid.is_boundary(*current):
            path: list[Coordinate] = []
            node: Coordinate | None = current
            while node is not None:
                path.append(node)
                node = parents[node]
            path.reverse()
            return path
        for neighbor in _open_neighbors(grid, current):
            if neighbor not in parents:
                parents[neighbor] = current
                queue.append(neighbor)
    return None


def explore(grid: Grid, start: Coordinate) -> SearchTrace:
    """Run the same search without stopping at the boundary."""
    grid.require_inside(*start)
    visited = {start}
    queue = deque([start])
    enqueued = 1
    reaches_boundary = False
    while queue:
        current = queue.popleft()
        if grid.is_boundary(*current):
            reaches_boundary = True
        for neighbor in _open_neighbors(grid, current):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
                enqueued += 1
    return SearchTrace(
        start=start,
        visited=frozenset(visited),
        enqueued=enqueued,
        reaches_boundary=reaches_boundary,
    )
