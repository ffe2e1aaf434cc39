"""Graph view of the board for hints and self-play diagnostics.

The board is lifted into a NetworkX graph whose nodes are the traversable
cells (empty cells plus the agent's cell) joined by 8-adjacency. A virtual
``EDGE_NODE`` is attached to every traversable boundary cell, which turns
"can the cat escape" into an s-t connectivity question: the minimum node cut
between the agent and ``EDGE_NODE`` is the smallest set of cells the player
still has to block.
"""

from __future__ import annotations

import networkx as nx

from cat_trap.domain.grid import CellState, Coordinate, Grid

EDGE_NODE = "edge"
"""Virtual sink joined to every traversable boundary cell."""


def board_graph(grid: Grid, start: Coordinate) -> nx.Graph:
    """Build the traversability graph seen by an agent standing at ``start``."""
    grid.require_inside(*start)
    g = nx.Graph()
    g.add_node(EDGE_NODE)
    cells = grid.cells_in_state(CellState.EMPTY)
    if start not in cells:
        cells.append(start)
    traversable = set(cells)
    for cell in cells:
        g.add_node(cell)
        if grid.is_boundary(*cell):
            g.add_edge(cell, EDGE_NODE)
        for neighbor in grid.neighbors(*cell):
            if neighbor in traversable:
                g.add_edge(cell, neighbor)
    return g


def escape_distance(grid: Grid, start: Coordinate) -> int | None:
    """Agent moves needed to reach the boundary, or None when trapped."""
    g = board_graph(grid, start)
    try:
        return nx.shortest_path_length(g, start, EDGE_NODE) - 1
    except nx.NetworkXNoPath:
        return None


def escape_region(grid: Grid, start: Coordinate) -> set[Coordinate]:
    """Cells the agent can still reach from ``start``, including ``start``."""
    g = board_graph(grid, start)
    g.remove_node(EDGE_NODE)
    return set(nx.node_connected_component(g, start))


def minimum_blocking_set(grid: Grid, start: Coordinate) -> set[Coordinate] | None:
    """Smallest set of cells whose blocking traps the agent.

    Returns an empty set when the agent is already trapped and None when the
    agent stands on the boundary, where no block can stop it.
    """
    if grid.is_boundary(*start):
        return None
    g = board_graph(grid, start)
    if not nx.has_path(g, start, EDGE_NODE):
        return set()
    return set(nx.minimum_node_cut(g, start, EDGE_NODE))


def blocks_to_trap(grid: Grid, start: Coordinate) -> int | None:
    cut = minimum_blocking_set(grid, start)
    return None if cut is None else len(cut)
