"""Span descriptors: color model, stream parser, and stream checker."""

from .checker import CheckReport, SpanStreamChecker
from .colors import Background, ColorRole, ColorValue, Foreground, decode_color_token
from .errors import (
    DuplicateColorRole,
    InvalidHexColor,
    MalformedLine,
    MalformedOffsets,
    OverlappingSpan,
    SourceEncodingError,
    SpanBoundaryError,
    SpanPaintError,
    StreamIOError,
    UnrecognizedColorToken,
)
from .models import ColorSpec, ParsedLine, Span
from .parser import SpanStreamParser, parse_span_line

__all__ = [
    "Background",
    "CheckReport",
    "ColorRole",
    "ColorSpec",
    "ColorValue",
    "DuplicateColorRole",
    "Foreground",
    "InvalidHexColor",
    "MalformedLine",
    "MalformedOffsets",
    "OverlappingSpan",
    "ParsedLine",
    "SourceEncodingError",
    "Span",
    "SpanBoundaryError",
    "SpanPaintError",
    "SpanStreamChecker",
    "SpanStreamParser",
    "StreamIOError",
    "UnrecognizedColorToken",
    "decode_color_token",
    "parse_span_line",
]
