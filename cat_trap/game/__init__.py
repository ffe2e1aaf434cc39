"""Game layer: the turn-based session state machine."""

from cat_trap.game.session import (
    SPECIAL_EFFECTS,
    GamePhase,
    GameSession,
    Outcome,
    PendingMove,
    SpecialEffect,
    TurnResult,
    TurnStatus,
)

__all__ = [
    "GamePhase",
    "GameSession",
    "Outcome",
    "PendingMove",
    "SPECIAL_EFFECTS",
    "SpecialEffect",
    "TurnResult",
    "TurnStatus",
]
