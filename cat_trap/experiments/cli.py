"""CLI entrypoint for scripted self-play runs.

This module owns argument parsing and config resolution only. Game logic
lives in ``cat_trap.game.session`` and the batch loop in
``cat_trap.experiments.autoplay``.
"""

from __future__ import annotations

import argparse
import json
import logging
import math
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from cat_trap.config.constants import GRID_SIZE, MAX_LEVEL, SPECIAL_CELL_PROBABILITY
from cat_trap.config.types import AutoplayConfig, GameConfig, PlayerKind
from cat_trap.experiments.autoplay import run_autoplay

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

T = TypeVar("T")

# ---------------------------------------------------------------------------
# CLI parsing helpers
# ---------------------------------------------------------------------------


_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


def _parse_player(raw_player: str) -> PlayerKind:
    """Parse player kind from CLI/config."""
    try:
        return PlayerKind(raw_player)
    except ValueError as exc:
        valid = ", ".join(kind.value for kind in PlayerKind)
        raise ValueError(f"player must be one of {valid}") from exc


def _as_flag(raw: object, key: str) -> bool:
    """Accept JSON booleans or on/off words."""
    if isinstance(raw, bool):
        return raw
    word = raw.strip().lower() if isinstance(raw, str) else None
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"{key} must be a boolean value")


def _as_whole(raw: object, key: str) -> int:
    """Whole numbers only: ``2.0`` and ``"2"`` pass, ``2.5`` and ``true`` do not."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    if isinstance(raw, (float, str)):
        try:
            value = float(raw)
        except ValueError:
            value = math.nan
        if value.is_integer():
            return int(value)
    raise ValueError(f"{key} must be an integer value, got {raw!r}")


def _as_fraction(raw: object, key: str) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise ValueError(f"{key} must be a number, got {raw!r}")
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got {raw!r}") from exc


def _as_text(raw: object, key: str) -> str:
    if not isinstance(raw, (str, Path)):
        raise ValueError(f"{key} must be a string, got {raw!r}")
    return str(raw)


def _setting(
    args: argparse.Namespace,
    file_cfg: dict[str, object],
    key: str,
    default: object,
    parse: Callable[[object, str], T],
) -> T:
    """Resolve ``key`` as CLI > config file > default, then parse it."""
    raw = getattr(args, key)
    if raw is None:
        raw = file_cfg.get(key, default)
    return parse(raw, key)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Run scripted cat-trap self-play games")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    parser.add_argument("--n-games", type=int, default=None)
    parser.add_argument("--level", type=int, default=None)
    parser.add_argument(
        "--player",
        type=str,
        choices=[kind.value for kind in PlayerKind],
        default=None,
    )
    parser.add_argument("--max-turns", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None, help="Board seed of the first game")
    parser.add_argument("--out-dir", type=Path, default=None)
    parser.add_argument("--grid-size", type=int, default=None)
    parser.add_argument("--special-cell-probability", type=float, default=None)
    parser.add_argument("--advance-levels", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument(
        "--render-frames",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Write PNG frames of the first game",
    )
    parser.add_argument("--log-level", type=str, choices=LOG_LEVELS, default=None)
    return parser


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for self-play runs.

    Supports ``--config path/to/config.json`` for reproducible runs. CLI
    arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    file_cfg: dict[str, object] = {}
    if args.config is not None:
        try:
            file_cfg = json.loads(Path(args.config).read_text())
        except FileNotFoundError:
            parser.error(f"Config file not found: {args.config}")
        except json.JSONDecodeError as exc:
            parser.error(f"Config file is not valid JSON: {args.config}: {exc}")

    try:
        log_level = _setting(args, file_cfg, "log_level", "INFO", _as_text).upper()
    except ValueError as exc:
        parser.error(str(exc))
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    defaults = AutoplayConfig()
    try:
        game = GameConfig(
            grid_size=_setting(args, file_cfg, "grid_size", GRID_SIZE, _as_whole),
            max_level=MAX_LEVEL,
            special_cell_probability=_setting(
                args,
                file_cfg,
                "special_cell_probability",
                SPECIAL_CELL_PROBABILITY,
                _as_fraction,
            ),
        )
        player = _setting(args, file_cfg, "player", defaults.player.value, _as_text)
        config = AutoplayConfig(
            n_games=_setting(args, file_cfg, "n_games", defaults.n_games, _as_whole),
            level=_setting(args, file_cfg, "level", defaults.level, _as_whole),
            player=_parse_player(player),
            max_turns=_setting(args, file_cfg, "max_turns", defaults.max_turns, _as_whole),
            seed_start=_setting(args, file_cfg, "seed", defaults.seed_start, _as_whole),
            out_dir=Path(_setting(args, file_cfg, "out_dir", defaults.out_dir, _as_text)),
            advance_levels=_setting(
                args, file_cfg, "advance_levels", defaults.advance_levels, _as_flag
            ),
            render_frames=_setting(
                args, file_cfg, "render_frames", defaults.render_frames, _as_flag
            ),
            game=game,
        )
    except ValueError as exc:
        parser.error(str(exc))

    summaries = run_autoplay(config)
    outcomes = [s.outcome for s in summaries]
    won = [s for s in summaries if s.outcome == "win"]
    summary = {
        "player": config.player.value,
        "games": len(summaries),
        "wins": len(won),
        "losses": outcomes.count("loss"),
        "unfinished": outcomes.count("unfinished"),
        "best_moves": min((s.move_count for s in won), default=None),
        "final_level": summaries[-1].level,
        "out_dir": str(config.out_dir),
    }
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
