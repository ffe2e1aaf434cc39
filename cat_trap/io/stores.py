"""Statistics store implementations."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from cat_trap.domain.statistics import Statistics
from cat_trap.errors import StatisticsStoreError

logger = logging.getLogger(__name__)


class InMemoryStatisticsStore:
    """Keeps a private copy of the last saved statistics."""

    def __init__(self, initial: Statistics | None = None) -> None:
        self._payload = initial.to_dict() if initial is not None else None
        self.save_count = 0

    def load(self) -> Statistics:
        if self._payload is None:
            return Statistics()
        return Statistics.from_dict(self._payload)

    def save(self, statistics: Statistics) -> None:
        self._payload = statistics.to_dict()
        self.save_count += 1


class JsonStatisticsStore:
    """Statistics persisted as one JSON object on disk.

    A missing file loads as default statistics. Unreadable or malformed files
    raise :exc:`StatisticsStoreError`.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> Statistics:
        if not self.path.exists():
            logger.debug("No statistics at %s; using defaults", self.path)
            return Statistics()
        try:
            payload = json.loads(self.path.read_text())
            return Statistics.from_dict(payload)
        except OSError as exc:
            raise StatisticsStoreError(f"cannot read statistics from {self.path}") from exc
        except ValueError as exc:
            # json.JSONDecodeError is a ValueError subclass
            raise StatisticsStoreError(f"malformed statistics file {self.path}: {exc}") from exc

    def save(self, statistics: Statistics) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(statistics.to_dict(), ensure_ascii=False, indent=2))
            tmp_path.replace(self.path)
        except OSError as exc:
            raise StatisticsStoreError(f"cannot write statistics to {self.path}") from exc
