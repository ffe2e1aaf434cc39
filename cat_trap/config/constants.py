"""Centralized game constants.

All magic numbers shared by the board, level, agent and session modules are
defined here. Consuming modules should import from this module rather than
defining their own inline literals.
"""

from __future__ import annotations

GRID_SIZE = 11
"""Side length of the square board in cells."""

MAX_LEVEL = 10
"""Highest selectable level; winning it completes the game."""

MIN_LEVEL = 1
"""Lowest selectable level."""

FREEZE_TURNS = 2
"""Agent turns skipped after the freeze special effect."""

SPECIAL_CELL_PROBABILITY = 0.3
"""Chance that an eligible cell on the special ring becomes a special cell."""

SPECIAL_CELL_MIN_LEVEL = 6
"""First level that seeds special cells."""

MIN_AGENT_MOVE_DELAY_MS = 100
"""Fastest agent animation delay, reached at high levels."""

BASE_AGENT_MOVE_DELAY_MS = 300
"""Agent animation delay before level speed-up is applied."""

AGENT_DELAY_STEP_MS = 20
"""Delay reduction per level."""

BASE_INITIAL_BLOCKS = 5
"""Initial block budget at level 0; one more per level."""

MAX_INITIAL_BLOCKS = 15
"""Cap on the initial block budget."""

BASE_REQUIRED_MOVES = 20
"""Move budget at level 0; one fewer per level."""

MIN_REQUIRED_MOVES = 5
"""Floor on the move budget."""

RING_BLOCK_BASE_PROBABILITY = 0.5
"""Block probability on the ring just outside the special ring."""

RING_BLOCK_LEVEL_STEP = 0.02
"""Ring block probability increase per level."""

OUTER_BLOCK_BASE_PROBABILITY = 0.2
"""Block probability for cells beyond the ring."""

OUTER_BLOCK_LEVEL_STEP = 0.01
"""Outer block probability increase per level."""

GAME_COMPLETE_ACHIEVEMENT = "game_complete"
"""Badge unlocked when the final level is won and the player continues."""

FLUSH_THRESHOLD = 8_192
"""Flush self-play turn rows to Parquet once this in-memory row count is reached."""
