"""Color themes for board rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

# Render order of cell tags; a tag's index is its value in image arrays.
CELL_TAGS: tuple[str, ...] = ("empty", "blocked", "agent", "special", "agent-moving")


@dataclass(frozen=True)
class Theme:
    """Palette for one rendering style."""

    name: str
    tag_colors: dict[str, str] = field(default_factory=dict)
    grid_line_color: str = "#d0d0d0"
    background_color: str = "#ffffff"
    title_color: str = "#222222"

    def colors(self) -> list[str]:
        """Colors ordered like ``CELL_TAGS``."""
        missing = [tag for tag in CELL_TAGS if tag not in self.tag_colors]
        if missing:
            raise ValueError(f"theme {self.name!r} lacks colors for {missing}")
        return [self.tag_colors[tag] for tag in CELL_TAGS]


DEFAULT_THEME = Theme(
    name="default",
    tag_colors={
        "empty": "#f4f1ea",
        "blocked": "#4a4e69",
        "agent": "#f28c28",
        "special": "#6ab04c",
        "agent-moving": "#f7c59f",
    },
)

DARK_THEME = Theme(
    name="dark",
    tag_colors={
        "empty": "#1e1e24",
        "blocked": "#8d99ae",
        "agent": "#ff9f1c",
        "special": "#2ec4b6",
        "agent-moving": "#ffbf69",
    },
    grid_line_color="#3a3a44",
    background_color="#121216",
    title_color="#eeeeee",
)

REGISTERED_THEMES: dict[str, Theme] = {t.name: t for t in (DEFAULT_THEME, DARK_THEME)}


def get_theme(name: str) -> Theme:
    try:
        return REGISTERED_THEMES[name]
    except KeyError as exc:
        valid = ", ".join(sorted(REGISTERED_THEMES))
        raise ValueError(f"theme must be one of {valid}") from exc
