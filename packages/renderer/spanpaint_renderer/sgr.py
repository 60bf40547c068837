"""ANSI SGR styling for color specs, built on rich styles."""

from __future__ import annotations

import re
from collections.abc import Iterator

from rich.color import Color, ColorSystem
from rich.style import Style

from spanpaint_spans.models import ColorSpec


RESET = "\x1b[0m"
SGR_PATTERN = re.compile(r"\x1b\[[0-9;]*m")

COLOR_SYSTEMS: dict[str, ColorSystem] = {
    "truecolor": ColorSystem.TRUECOLOR,
    "256": ColorSystem.EIGHT_BIT,
    "standard": ColorSystem.STANDARD,
}
DEFAULT_COLOR_SYSTEM = "truecolor"


def list_color_systems() -> list[str]:
    return list(COLOR_SYSTEMS.keys())


def get_color_system(name: str | None) -> ColorSystem:
    if not name:
        return COLOR_SYSTEMS[DEFAULT_COLOR_SYSTEM]
    try:
        return COLOR_SYSTEMS[name]
    except KeyError:
        raise ValueError(f"Unknown color system: {name}") from None


def style_for(spec: ColorSpec) -> Style | None:
    if spec.is_empty:
        return None
    fg = Color.from_rgb(*spec.foreground.as_tuple()) if spec.foreground is not None else None
    bg = Color.from_rgb(*spec.background.as_tuple()) if spec.background is not None else None
    return Style(color=fg, bgcolor=bg)


class SegmentPainter:
    """Applies one ColorSpec per physical line so every line opens and resets its own style."""

    def __init__(self, spec: ColorSpec, color_system: ColorSystem = ColorSystem.TRUECOLOR) -> None:
        self.spec = spec
        self.color_system = color_system
        self._style = style_for(spec)
        self._open = self._close = ""
        if self._style is not None:
            # Style.render skips empty text, so split the pair off a one-char render
            self._open, self._close = self._style.render("\0", color_system=color_system).split("\0")

    def paint(self, text: str) -> str:
        if self._style is None:
            return text
        return f"{self._open}{text}{self._close}"

    def segments(self, text: str) -> Iterator[tuple[str, bool]]:
        """Yield ``(piece, styled)`` per line, empty lines included; newlines stay unstyled between them."""
        for idx, line in enumerate(text.split("\n")):
            if idx:
                yield "\n", False
            yield self.paint(line), self._style is not None


def strip_sgr(text: str) -> str:
    return SGR_PATTERN.sub("", text)


def count_resets(text: str) -> int:
    return text.count(RESET)


def count_style_starts(text: str) -> int:
    return sum(1 for m in SGR_PATTERN.finditer(text) if m.group(0) != RESET)
