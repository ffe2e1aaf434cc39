"""I/O layer: statistics stores, Parquet schemas and output paths."""

from cat_trap.io.stores import InMemoryStatisticsStore, JsonStatisticsStore

__all__ = [
    "InMemoryStatisticsStore",
    "JsonStatisticsStore",
]
