"""Collaborator interfaces consumed by the game session.

The core never talks to a display, speaker or storage backend directly.
Hosts hand the session objects satisfying these protocols; the null
implementations below are the defaults for headless use.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from cat_trap.domain.grid import Coordinate
from cat_trap.domain.statistics import Statistics


class AudioCue(str, Enum):
    """Symbolic sound events emitted by the session."""

    MOVE = "move"
    BLOCK = "block"
    WIN = "win"
    LOSE = "lose"
    SPECIAL = "special"


@dataclass(frozen=True)
class BoardFrame:
    """Immutable board snapshot handed to a render sink.

    ``cells`` holds one tag per cell, row-major: ``empty``, ``blocked``,
    ``agent``, ``special`` or ``agent-moving``.
    """

    cells: tuple[tuple[str, ...], ...]
    agent_position: Coordinate
    level: int
    move_count: int
    phase: str
    generation: int

    @property
    def grid_size(self) -> int:
        return len(self.cells)

    def tag_at(self, x: int, y: int) -> str:
        return self.cells[y][x]


class RenderSink(Protocol):
    def render(self, frame: BoardFrame) -> None: ...


class AudioCueSink(Protocol):
    def play(self, cue: AudioCue) -> None: ...


class StatisticsStore(Protocol):
    def load(self) -> Statistics: ...

    def save(self, statistics: Statistics) -> None: ...


class NullRenderSink:
    """Discards frames."""

    def render(self, frame: BoardFrame) -> None:
        return None


class NullAudioSink:
    """Discards cues."""

    def play(self, cue: AudioCue) -> None:
        return None
