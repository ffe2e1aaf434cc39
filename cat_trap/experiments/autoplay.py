"""Batch self-play engine: seeded games with scripted players and Parquet logs."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from dataclasses import asdict, dataclass
from pathlib import Path
from random import Random

import pyarrow as pa
import pyarrow.parquet as pq

from cat_trap.config.constants import FLUSH_THRESHOLD
from cat_trap.config.types import AutoplayConfig
from cat_trap.domain.analysis import blocks_to_trap, escape_distance
from cat_trap.domain.grid import CellState
from cat_trap.experiments.players import Player, make_player
from cat_trap.game.session import GameSession, Outcome, TurnResult, TurnStatus
from cat_trap.interfaces import RenderSink
from cat_trap.io.paths import (
    frames_dir,
    game_summary_path,
    logs_dir,
    run_config_path,
    statistics_path,
    turn_log_path,
)
from cat_trap.io.schemas import GAME_SUMMARY_SCHEMA, TURN_LOG_COLUMNS, TURN_LOG_SCHEMA
from cat_trap.io.stores import JsonStatisticsStore

logger = logging.getLogger(__name__)

PLAYER_SEED_OFFSET = 1_000_003
"""Offset separating the player's rng stream from the board's."""

UNFINISHED = "unfinished"


@dataclass(frozen=True)
class GameSummary:
    """Per-game result row."""

    game_id: str
    seed: int
    level: int
    player: str
    outcome: str
    turns: int
    move_count: int
    specials_used: int
    initial_blocks: int
    final_blocks: int


def _deterministic_game_id(level: int, seed: int, player: str) -> str:
    """Build reproducible game ID stable across runs for identical seeds."""
    return f"lv{level}_s{seed}_{player}"


def flush_turn_columns(
    turn_columns: dict[str, list[object]],
    path: Path,
    writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated turn rows to Parquet and clear in-memory buffers."""
    if not turn_columns["game_id"]:
        return writer
    table = pa.Table.from_pydict(turn_columns, schema=TURN_LOG_SCHEMA)
    if writer is None:
        writer = pq.ParquetWriter(path, TURN_LOG_SCHEMA)
    writer.write_table(table)
    for values in turn_columns.values():
        values.clear()
    return writer


def _append_turn(
    turn_columns: dict[str, list[object]],
    game_id: str,
    turn: int,
    session: GameSession,
    result: TurnResult,
) -> None:
    agent = session.agent_position
    if session.is_over:
        distance = None
        to_trap = None
    else:
        distance = escape_distance(session.grid, agent)
        to_trap = blocks_to_trap(session.grid, agent)
    row = {
        "game_id": game_id,
        "level": session.current_level,
        "turn": turn,
        "cell_x": result.cell[0],
        "cell_y": result.cell[1],
        "status": result.status.value,
        "effect": result.effect.value if result.effect is not None else None,
        "agent_x": agent[0],
        "agent_y": agent[1],
        "move_reason": result.decision.reason.value if result.decision is not None else None,
        "move_count": session.move_count,
        "freeze_counter": session.freeze_counter,
        "escape_distance": distance,
        "blocks_to_trap": to_trap,
        "phase": session.phase.value,
    }
    for column in TURN_LOG_COLUMNS:
        turn_columns[column].append(row[column])


def play_game(
    session: GameSession,
    player: Player,
    max_turns: int,
) -> Iterator[TurnResult]:
    """Drive ``session`` with ``player`` until it ends or ``max_turns`` pass.

    Yields the result of every accepted selection.
    """
    turns = 0
    while not session.is_over and turns < max_turns:
        cell = player.choose_cell(session)
        if cell is None:
            logger.warning("Player %s has no cell to select", player.kind.value)
            return
        result = session.select_cell(*cell)
        if result.status is TurnStatus.IGNORED:
            raise RuntimeError(f"player {player.kind.value} selected unusable cell {cell}")
        turns += 1
        yield result


def run_autoplay(
    config: AutoplayConfig,
    render_sink: RenderSink | None = None,
) -> list[GameSummary]:
    """Play ``config.n_games`` seeded games and persist JSON/Parquet outputs.

    Game ``i`` uses board seed ``config.seed_start + i``. With
    ``advance_levels`` a win moves the next game up one level.
    """
    out_dir = Path(config.out_dir)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    run_config = asdict(config)
    run_config["out_dir"] = str(config.out_dir)
    run_config["player"] = config.player.value
    run_config_path(out_dir).write_text(json.dumps(run_config, ensure_ascii=False, indent=2))

    store = JsonStatisticsStore(statistics_path(out_dir))
    turn_columns: dict[str, list[object]] = {column: [] for column in TURN_LOG_COLUMNS}
    writer: pq.ParquetWriter | None = None
    summaries: list[GameSummary] = []
    level = config.level

    try:
        for i in range(config.n_games):
            seed = config.seed_start + i
            sink = render_sink
            if sink is None and config.render_frames and i == 0:
                from cat_trap.viz.render import FigureRenderSink

                sink = FigureRenderSink(frames_dir(out_dir))
            session = GameSession(
                config=config.game,
                level=level,
                rng=Random(seed),
                render_sink=sink,
                statistics_store=store,
            )
            player = make_player(config.player, Random(seed + PLAYER_SEED_OFFSET))
            game_id = _deterministic_game_id(level, seed, config.player.value)
            initial_blocks = session.grid.count(CellState.BLOCKED)

            turns = 0
            specials = 0
            for result in play_game(session, player, config.max_turns):
                turns += 1
                if result.status is TurnStatus.SPECIAL:
                    specials += 1
                _append_turn(turn_columns, game_id, turns, session, result)
            if len(turn_columns["game_id"]) >= FLUSH_THRESHOLD:
                writer = flush_turn_columns(turn_columns, turn_log_path(out_dir), writer)

            outcome = session.last_outcome.value if session.last_outcome is not None else UNFINISHED
            summaries.append(
                GameSummary(
                    game_id=game_id,
                    seed=seed,
                    level=level,
                    player=config.player.value,
                    outcome=outcome,
                    turns=turns,
                    move_count=session.move_count,
                    specials_used=specials,
                    initial_blocks=initial_blocks,
                    final_blocks=session.grid.count(CellState.BLOCKED),
                )
            )
            logger.info("Game %s finished: %s in %d turns", game_id, outcome, turns)
            won = session.last_outcome is Outcome.WIN
            if config.advance_levels and won and level < config.game.max_level:
                level += 1
        writer = flush_turn_columns(turn_columns, turn_log_path(out_dir), writer)
    finally:
        if writer is not None:
            writer.close()

    if writer is None:
        # Every game ended before a single turn; still leave a readable log.
        pq.write_table(TURN_LOG_SCHEMA.empty_table(), turn_log_path(out_dir))
    rows = [asdict(summary) for summary in summaries]
    summary_table = pa.Table.from_pylist(rows, schema=GAME_SUMMARY_SCHEMA)
    pq.write_table(summary_table, game_summary_path(out_dir))
    return summaries
