"""Path construction helpers for self-play output directories.

Centralises the directory/file naming conventions used by the autoplay
engine, the renderer and the CLI.
"""

from __future__ import annotations

from pathlib import Path


def resolve_within_base(path: Path, base_dir: Path) -> Path:
    """Resolve *path* and ensure it stays within the trusted *base_dir*.

    Raises :exc:`ValueError` if the resolved path escapes the base directory.
    """
    candidate = path if path.is_absolute() else base_dir / path
    resolved = candidate.resolve()
    base_resolved = base_dir.resolve()
    if resolved != base_resolved and base_resolved not in resolved.parents:
        raise ValueError(f"Path escapes base_dir: {path}")
    return resolved


def logs_dir(out_dir: Path) -> Path:
    """Return path to the logs subdirectory within an output directory."""
    return out_dir / "logs"


def frames_dir(out_dir: Path) -> Path:
    """Return path to the rendered board frames subdirectory."""
    return out_dir / "frames"


def turn_log_path(out_dir: Path) -> Path:
    """Return path to the per-turn Parquet log."""
    return logs_dir(out_dir) / "turn_log.parquet"


def game_summary_path(out_dir: Path) -> Path:
    """Return path to the per-game summary Parquet file."""
    return logs_dir(out_dir) / "game_summary.parquet"


def run_config_path(out_dir: Path) -> Path:
    """Return path to the JSON record of the run configuration."""
    return logs_dir(out_dir) / "run_config.json"


def statistics_path(out_dir: Path) -> Path:
    """Return path to the aggregate statistics JSON file."""
    return out_dir / "statistics.json"
