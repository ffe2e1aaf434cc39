"""Tests for cat_trap.experiments.autoplay module."""

from __future__ import annotations

import json
from pathlib import Path
from random import Random

import pyarrow.parquet as pq

from cat_trap.config.types import AutoplayConfig, PlayerKind
from cat_trap.experiments.autoplay import play_game, run_autoplay
from cat_trap.experiments.players import RandomPlayer
from cat_trap.game.session import GameSession
from cat_trap.interfaces import BoardFrame
from cat_trap.io.schemas import GAME_SUMMARY_SCHEMA, TURN_LOG_COLUMNS


class RecordingRender:
    def __init__(self) -> None:
        self.frames: list[BoardFrame] = []

    def render(self, frame: BoardFrame) -> None:
        self.frames.append(frame)


def _config(tmp_path: Path, **overrides: object) -> AutoplayConfig:
    fields: dict[str, object] = {
        "n_games": 3,
        "level": 1,
        "player": PlayerKind.RANDOM,
        "max_turns": 40,
        "seed_start": 5,
        "out_dir": tmp_path,
    }
    fields.update(overrides)
    return AutoplayConfig(**fields)  # type: ignore[arg-type]


def test_play_game_stops_when_over() -> None:
    session = GameSession(rng=Random(0))
    results = list(play_game(session, RandomPlayer(Random(1)), max_turns=500))
    assert session.is_over
    assert results[-1].outcome is not None
    assert all(r.outcome is None for r in results[:-1])


def test_play_game_respects_max_turns() -> None:
    session = GameSession(rng=Random(0))
    results = list(play_game(session, RandomPlayer(Random(1)), max_turns=1))
    assert len(results) == 1


def test_run_autoplay_writes_json_and_parquet(tmp_path: Path) -> None:
    summaries = run_autoplay(_config(tmp_path))
    assert len(summaries) == 3

    logs_dir = tmp_path / "logs"
    turn_table = pq.read_table(logs_dir / "turn_log.parquet")
    summary_table = pq.read_table(logs_dir / "game_summary.parquet")
    assert turn_table.column_names == TURN_LOG_COLUMNS
    assert summary_table.schema.names == GAME_SUMMARY_SCHEMA.names
    assert summary_table.num_rows == 3
    assert turn_table.num_rows == sum(s.turns for s in summaries)

    run_config = json.loads((logs_dir / "run_config.json").read_text())
    assert run_config["player"] == "random"
    assert run_config["n_games"] == 3

    stats = json.loads((tmp_path / "statistics.json").read_text())
    finished = [s for s in summaries if s.outcome != "unfinished"]
    assert stats["games_played"] == len(finished)
    assert stats["games_won"] == sum(1 for s in summaries if s.outcome == "win")


def test_run_autoplay_is_deterministic(tmp_path: Path) -> None:
    first = run_autoplay(_config(tmp_path / "a", player=PlayerKind.CUT))
    second = run_autoplay(_config(tmp_path / "b", player=PlayerKind.CUT))
    assert first == second
    first_log = pq.read_table(tmp_path / "a" / "logs" / "turn_log.parquet")
    second_log = pq.read_table(tmp_path / "b" / "logs" / "turn_log.parquet")
    assert first_log.equals(second_log)


def test_turn_log_rows_are_consistent(tmp_path: Path) -> None:
    run_autoplay(_config(tmp_path, n_games=2))
    rows = pq.read_table(tmp_path / "logs" / "turn_log.parquet").to_pylist()
    for row in rows:
        assert row["status"] in {"blocked", "special"}
        if row["phase"] in {"game_won", "game_lost"}:
            assert row["escape_distance"] is None
        else:
            assert row["escape_distance"] is not None
        if row["status"] == "special":
            assert row["effect"] is not None
    game_ids = {row["game_id"] for row in rows}
    assert game_ids == {"lv1_s5_random", "lv1_s6_random"}


def test_unfinished_games_are_reported(tmp_path: Path) -> None:
    summaries = run_autoplay(_config(tmp_path, max_turns=1))
    assert all(s.turns == 1 for s in summaries)
    assert all(s.outcome in {"win", "loss", "unfinished"} for s in summaries)


def test_advance_levels_follows_wins(tmp_path: Path) -> None:
    summaries = run_autoplay(
        _config(tmp_path, n_games=6, player=PlayerKind.CUT, advance_levels=True, max_turns=200)
    )
    for previous, current in zip(summaries, summaries[1:]):
        expected = previous.level + 1 if previous.outcome == "win" else previous.level
        assert current.level == min(expected, 10)


def test_external_render_sink_receives_frames(tmp_path: Path) -> None:
    sink = RecordingRender()
    run_autoplay(_config(tmp_path, n_games=1), render_sink=sink)
    assert sink.frames
    assert sink.frames[0].move_count == 0


def test_render_frames_writes_png(tmp_path: Path) -> None:
    run_autoplay(_config(tmp_path, n_games=2, max_turns=2, render_frames=True))
    frames = sorted((tmp_path / "frames").glob("frame_*.png"))
    assert frames
    assert frames[0].name == "frame_00000.png"
