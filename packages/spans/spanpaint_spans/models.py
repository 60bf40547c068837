"""Typed span models."""

from __future__ import annotations

from dataclasses import dataclass

from .colors import Background, ColorRole, ColorValue, Foreground
from .errors import DuplicateColorRole, SpanPaintError


@dataclass(frozen=True)
class ColorSpec:
    foreground: ColorValue | None = None
    background: ColorValue | None = None

    @classmethod
    def from_roles(cls, *roles: ColorRole) -> "ColorSpec":
        if not roles:
            raise ValueError("At least one color role is required")
        fg: ColorValue | None = None
        bg: ColorValue | None = None
        for role in roles:
            if isinstance(role, Foreground):
                if fg is not None:
                    raise DuplicateColorRole("more than one foreground color")
                fg = role.color
            elif isinstance(role, Background):
                if bg is not None:
                    raise DuplicateColorRole("more than one background color")
                bg = role.color
            else:
                raise TypeError(f"Not a color role: {role!r}")
        return cls(foreground=fg, background=bg)

    @property
    def is_empty(self) -> bool:
        return self.foreground is None and self.background is None


@dataclass(frozen=True)
class Span:
    start: int
    end: int
    color: ColorSpec

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span range {self.start}..{self.end}")

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class ParsedLine:
    """Decode result for one input line: exactly one of ``span``/``error`` is set."""

    line_no: int
    raw: str
    span: Span | None = None
    error: SpanPaintError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Span:
        if self.error is not None:
            raise self.error
        if self.span is None:
            raise ValueError(f"line {self.line_no} carries neither a span nor an error")
        return self.span
