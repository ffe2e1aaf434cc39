"""Tests for cat_trap.io.stores module."""

from __future__ import annotations

import json
import math
from pathlib import Path

import pytest

from cat_trap.domain.statistics import Statistics
from cat_trap.errors import StatisticsStoreError
from cat_trap.io.stores import InMemoryStatisticsStore, JsonStatisticsStore


class TestInMemoryStore:
    def test_empty_store_loads_defaults(self) -> None:
        assert InMemoryStatisticsStore().load() == Statistics()

    def test_save_keeps_a_copy(self) -> None:
        store = InMemoryStatisticsStore()
        stats = Statistics()
        stats.record_win(5, level=1)
        store.save(stats)
        stats.record_loss()
        loaded = store.load()
        assert loaded.games_played == 1
        assert store.save_count == 1

    def test_initial_statistics(self) -> None:
        seed = Statistics(games_played=4, games_won=2, best_score=11)
        assert InMemoryStatisticsStore(seed).load() == seed


class TestJsonStore:
    def test_missing_file_loads_defaults(self, tmp_path: Path) -> None:
        store = JsonStatisticsStore(tmp_path / "statistics.json")
        assert store.load() == Statistics()

    def test_round_trip_with_unbounded_best(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "statistics.json"
        store = JsonStatisticsStore(path)
        stats = Statistics()
        stats.record_loss()
        stats.unlock("game_complete")
        store.save(stats)
        raw = json.loads(path.read_text())
        assert raw["best_score"] is None
        loaded = store.load()
        assert math.isinf(loaded.best_score)
        assert loaded == stats
        assert not path.with_suffix(".json.tmp").exists()

    def test_corrupt_file_raises_store_error(self, tmp_path: Path) -> None:
        path = tmp_path / "statistics.json"
        path.write_text("{not json")
        with pytest.raises(StatisticsStoreError, match="malformed"):
            JsonStatisticsStore(path).load()

    def test_wrong_shape_raises_store_error(self, tmp_path: Path) -> None:
        path = tmp_path / "statistics.json"
        path.write_text(json.dumps({"games_played": "lots"}))
        with pytest.raises(StatisticsStoreError):
            JsonStatisticsStore(path).load()

    def test_infinite_best_score_loads_as_no_best(self, tmp_path: Path) -> None:
        path = tmp_path / "statistics.json"
        path.write_text(json.dumps({"best_score": math.inf, "games_played": 1}))
        assert "Infinity" in path.read_text()
        loaded = JsonStatisticsStore(path).load()
        assert math.isinf(loaded.best_score)
        assert loaded.games_played == 1

    @pytest.mark.parametrize(
        "payload",
        [
            {"games_played": -1},
            {"games_won": 2.5},
            {"best_score": -math.inf},
        ],
    )
    def test_invalid_counters_raise_store_error(
        self, tmp_path: Path, payload: dict[str, object]
    ) -> None:
        path = tmp_path / "statistics.json"
        path.write_text(json.dumps(payload))
        with pytest.raises(StatisticsStoreError, match="malformed"):
            JsonStatisticsStore(path).load()

    def test_unwritable_target_raises_store_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("")
        store = JsonStatisticsStore(blocker / "statistics.json")
        with pytest.raises(StatisticsStoreError, match="cannot write"):
            store.save(Statistics())
