"""Aggregate player statistics kept across sessions."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

STATISTICS_SCHEMA_VERSION = 1


@dataclass
class Statistics:
    """Lifetime totals; ``best_score`` is ``inf`` until the first win."""

    best_score: float = math.inf
    games_played: int = 0
    games_won: int = 0
    levels_completed: int = 0
    total_moves: int = 0
    achievements: set[str] = field(default_factory=set)

    @property
    def win_rate(self) -> float:
        if self.games_played == 0:
            return 0.0
        return self.games_won / self.games_played

    @property
    def has_best_score(self) -> bool:
        return math.isfinite(self.best_score)

    def record_win(self, moves: int, level: int) -> None:
        self.games_played += 1
        self.games_won += 1
        self.levels_completed = max(self.levels_completed, level)
        self.best_score = min(self.best_score, moves)
        self.total_moves += moves

    def record_loss(self) -> None:
        self.games_played += 1

    def unlock(self, achievement: str) -> bool:
        """Add ``achievement``; return False if it was already unlocked."""
        if achievement in self.achievements:
            return False
        self.achievements.add(achievement)
        return True

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe payload; an unbounded best score is written as None."""
        return {
            "schema_version": STATISTICS_SCHEMA_VERSION,
            "best_score": int(self.best_score) if self.has_best_score else None,
            "games_played": self.games_played,
            "games_won": self.games_won,
            "levels_completed": self.levels_completed,
            "total_moves": self.total_moves,
            "achievements": sorted(self.achievements),
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> Statistics:
        """Inverse of ``to_dict``; missing keys fall back to defaults.

        Counters must be non-negative integers. ``best_score`` may be null or
        positive infinity for "no win yet".
        """
        if not isinstance(payload, dict):
            raise ValueError("statistics payload must be a JSON object")
        achievements = payload.get("achievements") or []
        if not isinstance(achievements, list):
            raise ValueError("achievements must be a list")
        return cls(
            best_score=_best_score(payload.get("best_score")),
            games_played=_count(payload, "games_played"),
            games_won=_count(payload, "games_won"),
            levels_completed=_count(payload, "levels_completed"),
            total_moves=_count(payload, "total_moves"),
            achievements={str(a) for a in achievements},
        )


def _count(payload: dict[str, Any], key: str) -> int:
    raw = payload.get(key, 0)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError(f"{key} must be a non-negative integer, got {raw!r}")
    if not math.isfinite(raw) or raw != int(raw) or raw < 0:
        raise ValueError(f"{key} must be a non-negative integer, got {raw!r}")
    return int(raw)


def _best_score(raw: object) -> float:
    if raw is None:
        return math.inf
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError(f"best_score must be a number or null, got {raw!r}")
    if raw == math.inf:
        return math.inf
    if not math.isfinite(raw) or raw != int(raw) or raw < 0:
        raise ValueError(f"best_score must be a non-negative integer, got {raw!r}")
    return int(raw)
