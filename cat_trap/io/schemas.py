"""Parquet schema definitions for self-play artifacts.

The Arrow schemas used for persisting per-turn logs and per-game summaries
are centralised here so that the writer and every reader work against the
same column contracts.
"""

from __future__ import annotations

import pyarrow as pa

# ---------------------------------------------------------------------------
# Schema version constants
# ---------------------------------------------------------------------------

TURN_LOG_SCHEMA_VERSION = 1
GAME_SUMMARY_SCHEMA_VERSION = 1

# ---------------------------------------------------------------------------
# Self-play schemas
# ---------------------------------------------------------------------------

TURN_LOG_SCHEMA = pa.schema(
    [
        ("game_id", pa.string()),
        ("level", pa.int64()),
        ("turn", pa.int64()),
        ("cell_x", pa.int64()),
        ("cell_y", pa.int64()),
        ("status", pa.string()),
        ("effect", pa.string()),
        ("agent_x", pa.int64()),
        ("agent_y", pa.int64()),
        ("move_reason", pa.string()),
        ("move_count", pa.int64()),
        ("freeze_counter", pa.int64()),
        ("escape_distance", pa.int64()),
        ("blocks_to_trap", pa.int64()),
        ("phase", pa.string()),
    ]
)

GAME_SUMMARY_SCHEMA = pa.schema(
    [
        ("game_id", pa.string()),
        ("seed", pa.int64()),
        ("level", pa.int64()),
        ("player", pa.string()),
        ("outcome", pa.string()),
        ("turns", pa.int64()),
        ("move_count", pa.int64()),
        ("specials_used", pa.int64()),
        ("initial_blocks", pa.int64()),
        ("final_blocks", pa.int64()),
    ]
)

# Column order of TURN_LOG_SCHEMA, used to build empty in-memory buffers.
TURN_LOG_COLUMNS: list[str] = [field.name for field in TURN_LOG_SCHEMA]
