"""Visualization layer: themes and board frame rendering."""

from cat_trap.viz.render import FigureRenderSink, draw_frame, frame_to_array, render_frame
from cat_trap.viz.theme import DARK_THEME, DEFAULT_THEME, REGISTERED_THEMES, Theme, get_theme

__all__ = [
    "DARK_THEME",
    "DEFAULT_THEME",
    "FigureRenderSink",
    "REGISTERED_THEMES",
    "Theme",
    "draw_frame",
    "frame_to_array",
    "get_theme",
    "render_frame",
]
