"""Configuration layer: constants and typed config dataclasses."""

from cat_trap.config.constants import (
    FLUSH_THRESHOLD,
    FREEZE_TURNS,
    GAME_COMPLETE_ACHIEVEMENT,
    GRID_SIZE,
    MAX_LEVEL,
    MIN_LEVEL,
    SPECIAL_CELL_PROBABILITY,
)
from cat_trap.config.types import (
    AutoplayConfig,
    GameConfig,
    LevelConfig,
    PlayerKind,
)

__all__ = [
    "AutoplayConfig",
    "FLUSH_THRESHOLD",
    "FREEZE_TURNS",
    "GAME_COMPLETE_ACHIEVEMENT",
    "GRID_SIZE",
    "GameConfig",
    "LevelConfig",
    "MAX_LEVEL",
    "MIN_LEVEL",
    "PlayerKind",
    "SPECIAL_CELL_PROBABILITY",
]
