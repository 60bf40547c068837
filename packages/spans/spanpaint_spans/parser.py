"""Line-oriented span stream decoding."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator

from .colors import decode_color_token
from .errors import MalformedLine, MalformedOffsets, SpanPaintError, StreamIOError
from .models import ColorSpec, ParsedLine, Span


_FIELD_SEP = re.compile(r"[ \t]+")
_OFFSET = re.compile(r"[0-9]+")

logger = logging.getLogger("spanpaint.parser")


def _parse_offset(field: str, name: str) -> int:
    if not _OFFSET.fullmatch(field):
        raise MalformedOffsets(f"{name} offset must be a non-negative integer, got {field!r}")
    return int(field)


def parse_span_line(
    line: str,
    line_no: int | None = None,
    max_line_bytes: int | None = None,
    encoding: str = "utf-8",
) -> Span:
    """Decode ``<start> <end> <color1> [<color2>]`` into a Span.

    ``max_line_bytes`` counts the line without its terminator, in the
    stream's ``encoding``. Raises one of the SpanPaintError kinds with
    ``line_no`` attached.
    """
    try:
        body = line.rstrip("\r\n")
        if max_line_bytes is not None and len(body.encode(encoding, errors="replace")) > max_line_bytes:
            raise MalformedLine(f"line longer than {max_line_bytes} bytes")

        fields = [f for f in _FIELD_SEP.split(body) if f]
        if len(fields) < 3:
            raise MalformedLine(f"expected '<start> <end> <color> [<color>]', got {len(fields)} field(s)")
        if len(fields) > 4:
            raise MalformedLine(f"expected at most 2 colors, got {len(fields) - 2}")

        start = _parse_offset(fields[0], "start")
        end = _parse_offset(fields[1], "end")
        if end < start:
            raise MalformedOffsets(f"end {end} is before start {start}")

        roles = [decode_color_token(token) for token in fields[2:]]
        return Span(start=start, end=end, color=ColorSpec.from_roles(*roles))
    except SpanPaintError as exc:
        exc.line_no = line_no
        raise


class SpanStreamParser:
    """Lazily decode a line source into one ParsedLine per line.

    The source may be a list, a file object or a live pipe; only the current
    line is held. Read faults from the source end iteration with
    StreamIOError, decode faults are reported per line.
    """

    def __init__(
        self,
        lines: Iterable[str | bytes],
        encoding: str = "utf-8",
        max_line_bytes: int | None = None,
    ) -> None:
        self._lines = iter(lines)
        self.encoding = encoding
        self.max_line_bytes = max_line_bytes
        self._line_no = 0

    def __iter__(self) -> Iterator[ParsedLine]:
        return self

    def _next_line(self) -> str:
        try:
            line = next(self._lines)
            if isinstance(line, bytes):
                line = line.decode(self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise StreamIOError(f"failed to read span stream: {exc}", self._line_no + 1) from exc
        return line

    def __next__(self) -> ParsedLine:
        line = self._next_line()
        self._line_no += 1
        try:
            span = parse_span_line(line, self._line_no, self.max_line_bytes, self.encoding)
        except SpanPaintError as exc:
            logger.debug("rejected span line", extra={"event": "span_rejected", "line_no": self._line_no, "kind": exc.kind})
            return ParsedLine(line_no=self._line_no, raw=line, error=exc)
        return ParsedLine(line_no=self._line_no, raw=line, span=span)
