"""RGB color values and the fg/bg role decoding of color tokens."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from .errors import InvalidHexColor, UnrecognizedColorToken


_HEX6 = re.compile(r"[0-9a-fA-F]{6}")

BACKGROUND_MARKER = "!"


@dataclass(frozen=True)
class ColorValue:
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 0xFF:
                raise ValueError(f"Channel out of range: {channel}")

    @classmethod
    def from_hex(cls, token: str) -> "ColorValue":
        """Decode ``#RRGGBB``. Only hex colors are supported."""
        if not token.startswith("#"):
            raise UnrecognizedColorToken(f"expected '#RRGGBB', got {token!r}")
        payload = token[1:]
        if not _HEX6.fullmatch(payload):
            raise InvalidHexColor(f"expected 6 hex digits after '#', got {payload!r}")
        r, g, b = bytes.fromhex(payload)
        return cls(r, g, b)

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class Foreground:
    color: ColorValue


@dataclass(frozen=True)
class Background:
    color: ColorValue


ColorRole = Union[Foreground, Background]


def decode_color_token(token: str) -> ColorRole:
    """``#RRGGBB`` is a foreground, ``!#RRGGBB`` a background."""
    if token.startswith(BACKGROUND_MARKER):
        return Background(ColorValue.from_hex(token[len(BACKGROUND_MARKER) :]))
    return Foreground(ColorValue.from_hex(token))
