"""Matplotlib-based rendering of board frames."""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import BoundaryNorm, ListedColormap
from matplotlib.image import AxesImage
from matplotlib.patches import Patch

from cat_trap.interfaces import BoardFrame
from cat_trap.io.paths import resolve_within_base
from cat_trap.viz.theme import CELL_TAGS, DEFAULT_THEME, Theme

_TAG_INDEX: dict[str, int] = {tag: i for i, tag in enumerate(CELL_TAGS)}


# ---------------------------------------------------------------------------
# Cell-fill helpers
# ---------------------------------------------------------------------------


def frame_to_array(frame: BoardFrame) -> np.ndarray:
    """Return (H, W) int array of tag indices into ``CELL_TAGS``."""
    size = frame.grid_size
    image = np.zeros((size, size), dtype=int)
    for y, row in enumerate(frame.cells):
        for x, tag in enumerate(row):
            try:
                image[y, x] = _TAG_INDEX[tag]
            except KeyError as exc:
                raise ValueError(f"unknown cell tag {tag!r} at ({x}, {y})") from exc
    return image


def _tag_cmap(theme: Theme = DEFAULT_THEME) -> tuple[ListedColormap, BoundaryNorm]:
    """Discrete colormap with one color per cell tag."""
    cmap = ListedColormap(theme.colors())
    bounds = [i - 0.5 for i in range(len(CELL_TAGS) + 1)]
    norm = BoundaryNorm(bounds, cmap.N)
    return cmap, norm


def _legend_handles(theme: Theme = DEFAULT_THEME) -> list[Patch]:
    return [
        Patch(facecolor=theme.tag_colors[tag], edgecolor="gray", label=tag)
        for tag in CELL_TAGS
    ]


def draw_frame(ax: plt.Axes, frame: BoardFrame, theme: Theme = DEFAULT_THEME) -> AxesImage:
    """Draw ``frame`` onto ``ax`` with grid lines and a status title."""
    cmap, norm = _tag_cmap(theme)
    img = ax.imshow(frame_to_array(frame), cmap=cmap, norm=norm, origin="upper", aspect="equal")
    size = frame.grid_size
    for i in range(size + 1):
        ax.axvline(i - 0.5, color=theme.grid_line_color, linewidth=0.5)
        ax.axhline(i - 0.5, color=theme.grid_line_color, linewidth=0.5)
    ax.set_xticks([])
    ax.set_yticks([])
    ax.set_facecolor(theme.background_color)
    ax.set_title(
        f"Level {frame.level} | moves {frame.move_count} | {frame.phase}",
        color=theme.title_color,
        fontsize=9,
    )
    return img


def render_frame(
    frame: BoardFrame,
    output_path: Path,
    theme: Theme = DEFAULT_THEME,
    legend: bool = False,
    base_dir: Path | None = None,
) -> Path:
    """Render one frame to an image file and return its resolved path."""
    output_path = (
        Path(output_path).resolve()
        if base_dir is None
        else resolve_within_base(Path(output_path), Path(base_dir))
    )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig, ax = plt.subplots(figsize=(4, 4.4 if legend else 4))
    fig.patch.set_facecolor(theme.background_color)
    draw_frame(ax, frame, theme)
    if legend:
        ax.legend(
            handles=_legend_handles(theme),
            loc="upper center",
            bbox_to_anchor=(0.5, -0.02),
            ncol=len(CELL_TAGS),
            fontsize=6,
            frameon=False,
        )
    fig.tight_layout()
    fig.savefig(output_path, dpi=100)
    plt.close(fig)
    return output_path


class FigureRenderSink:
    """Render sink that writes every frame as a numbered PNG under ``out_dir``."""

    def __init__(self, out_dir: Path, theme: Theme = DEFAULT_THEME, prefix: str = "frame") -> None:
        self.out_dir = Path(out_dir)
        self.theme = theme
        self.prefix = prefix
        self.paths: list[Path] = []

    def render(self, frame: BoardFrame) -> None:
        name = Path(f"{self.prefix}_{len(self.paths):05d}.png")
        self.paths.append(render_frame(frame, name, theme=self.theme, base_dir=self.out_dir))
