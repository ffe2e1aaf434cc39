"""Configuration dataclasses for game sessions, levels and self-play runs.

All frozen dataclasses that parameterise a session, a single level, and a
batch of scripted self-play games live here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from cat_trap.config.constants import (
    FREEZE_TURNS,
    GRID_SIZE,
    MAX_LEVEL,
    MIN_LEVEL,
    SPECIAL_CELL_PROBABILITY,
)

__all__ = [
    "AutoplayConfig",
    "GameConfig",
    "LevelConfig",
    "PlayerKind",
]


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class PlayerKind(Enum):
    """Scripted player policy used by self-play runs."""

    RANDOM = "random"
    CUT = "cut"


# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GameConfig:
    """Session-wide knobs shared by every level."""

    grid_size: int = GRID_SIZE
    max_level: int = MAX_LEVEL
    freeze_turns: int = FREEZE_TURNS
    special_cell_probability: float = SPECIAL_CELL_PROBABILITY

    def __post_init__(self) -> None:
        if self.grid_size < 3:
            raise ValueError("grid_size must be >= 3")
        if self.max_level < MIN_LEVEL:
            raise ValueError(f"max_level must be >= {MIN_LEVEL}")
        if self.freeze_turns < 1:
            raise ValueError("freeze_turns must be >= 1")
        if not 0.0 <= self.special_cell_probability <= 1.0:
            raise ValueError("special_cell_probability must be in [0.0, 1.0]")

    @property
    def center(self) -> int:
        return self.grid_size // 2


@dataclass(frozen=True)
class LevelConfig:
    """Difficulty parameters derived from a level number.

    ``required_moves`` is tracked for display only; no move cap is enforced.
    """

    level: int
    initial_block_count: int
    agent_move_delay_ms: int
    required_moves: int
    special_cell_count: int
    ring_block_probability: float
    outer_block_probability: float

    def __post_init__(self) -> None:
        if self.level < MIN_LEVEL:
            raise ValueError(f"level must be >= {MIN_LEVEL}")
        if self.agent_move_delay_ms < 0:
            raise ValueError("agent_move_delay_ms must be >= 0")
        if self.special_cell_count < 0:
            raise ValueError("special_cell_count must be >= 0")
        for name in ("ring_block_probability", "outer_block_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0.0, 1.0]")

    @property
    def agent_move_delay_s(self) -> float:
        return self.agent_move_delay_ms / 1000.0


@dataclass(frozen=True)
class AutoplayConfig:
    """Batch self-play settings for scripted players."""

    n_games: int = 20
    level: int = 1
    player: PlayerKind = PlayerKind.CUT
    max_turns: int = 200
    seed_start: int = 0
    out_dir: Path = Path("data")
    advance_levels: bool = False
    render_frames: bool = False
    """Write PNG board frames for the first game."""
    game: GameConfig = GameConfig()

    def __post_init__(self) -> None:
        if self.n_games < 1:
            raise ValueError("n_games must be >= 1")
        if not MIN_LEVEL <= self.level <= self.game.max_level:
            raise ValueError(f"level must be in [{MIN_LEVEL}, {self.game.max_level}]")
        if self.max_turns < 1:
            raise ValueError("max_turns must be >= 1")
