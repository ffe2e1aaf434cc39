"""Experiments layer: scripted players, batch self-play, and its CLI."""

from cat_trap.experiments.autoplay import GameSummary, play_game, run_autoplay
from cat_trap.experiments.players import CutPlayer, Player, RandomPlayer, make_player

__all__ = [
    "CutPlayer",
    "GameSummary",
    "Player",
    "RandomPlayer",
    "make_player",
    "play_game",
    "run_autoplay",
]
