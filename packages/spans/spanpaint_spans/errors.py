"""Error kinds for span stream decoding and rendering."""

from __future__ import annotations


class SpanPaintError(Exception):
    """Base class; ``kind`` names the failure for reports and logs."""

    kind = "SpanPaintError"

    def __init__(self, message: str, line_no: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line_no = line_no

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        cls.kind = cls.__name__

    def describe(self) -> str:
        prefix = f"line {self.line_no}: " if self.line_no is not None else ""
        return f"{prefix}{self.kind}: {self.message}"


class MalformedLine(SpanPaintError):
    pass


class MalformedOffsets(SpanPaintError):
    pass


class InvalidHexColor(SpanPaintError):
    pass


class UnrecognizedColorToken(SpanPaintError):
    pass


class DuplicateColorRole(SpanPaintError):
    pass


class OverlappingSpan(SpanPaintError):
    pass


class SpanBoundaryError(SpanPaintError):
    pass


class SourceEncodingError(SpanPaintError):
    pass


class StreamIOError(SpanPaintError):
    """Read or write fault on the span stream or output sink; ``__cause__`` holds the OSError."""
