"""Renderer package for span-colored terminal output."""

from .colorizer import RenderStats, SequentialColorizer, render_spans
from .sgr import (
    COLOR_SYSTEMS,
    DEFAULT_COLOR_SYSTEM,
    RESET,
    SegmentPainter,
    count_resets,
    count_style_starts,
    get_color_system,
    list_color_systems,
    strip_sgr,
    style_for,
)
from .source import SourceText

__all__ = [
    "COLOR_SYSTEMS",
    "DEFAULT_COLOR_SYSTEM",
    "RESET",
    "RenderStats",
    "SegmentPainter",
    "SequentialColorizer",
    "SourceText",
    "count_resets",
    "count_style_starts",
    "get_color_system",
    "list_color_systems",
    "render_spans",
    "strip_sgr",
    "style_for",
]
