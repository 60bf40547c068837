"""Sequential colorizer: source text plus ordered spans to an ANSI byte stream."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import BinaryIO

from spanpaint_spans.errors import OverlappingSpan, SpanPaintError, StreamIOError
from spanpaint_spans.models import ParsedLine, Span

from .sgr import SegmentPainter, get_color_system
from .source import SourceText


logger = logging.getLogger("spanpaint.renderer")


@dataclass
class RenderStats:
    spans_rendered: int = 0
    styled_segments: int = 0
    bytes_written: int = 0
    verbatim_bytes: int = 0


class SequentialColorizer:
    """Walks the source and the span stream in lockstep behind a forward-only cursor.

    Spans must arrive in non-decreasing, non-overlapping start order. A span
    starting before the cursor raises OverlappingSpan; a failed ParsedLine
    raises its stored error. Either way nothing of the offending span is
    written and the render stops.
    """

    def __init__(
        self,
        source: SourceText,
        output: BinaryIO,
        color_system: str = "truecolor",
        flush_each_span: bool = False,
    ) -> None:
        self.source = source
        self.output = output
        self.color_system = get_color_system(color_system)
        self.flush_each_span = flush_each_span
        self._cursor = 0
        self._stats = RenderStats()

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def stats(self) -> RenderStats:
        return self._stats

    def _write(self, payload: bytes) -> None:
        if not payload:
            return
        try:
            self.output.write(payload)
        except OSError as exc:
            raise StreamIOError(f"failed to write output: {exc}") from exc
        self._stats.bytes_written += len(payload)

    def _flush(self) -> None:
        try:
            self.output.flush()
        except OSError as exc:
            raise StreamIOError(f"failed to flush output: {exc}") from exc

    def _emit_span(self, span: Span, line_no: int | None) -> None:
        if span.start < self._cursor:
            raise OverlappingSpan(
                f"span {span.start}..{span.end} starts before cursor {self._cursor}",
                line_no,
            )
        try:
            verbatim = self.source.slice(self._cursor, span.start)
            text = self.source.text(span.start, span.end)
        except SpanPaintError as exc:
            if exc.line_no is None:
                exc.line_no = line_no
            raise

        self._write(verbatim)
        self._stats.verbatim_bytes += len(verbatim)

        painter = SegmentPainter(span.color, self.color_system)
        for piece, styled in painter.segments(text):
            self._write(piece.encode("utf-8"))
            if styled:
                self._stats.styled_segments += 1

        self._cursor = span.end
        self._stats.spans_rendered += 1
        if self.flush_each_span:
            self._flush()

    def render(self, items: Iterable[ParsedLine | Span]) -> RenderStats:
        logger.info("render started", extra={"event": "render_start", "source_bytes": len(self.source)})
        try:
            for item in items:
                if isinstance(item, ParsedLine):
                    self._emit_span(item.unwrap(), item.line_no)
                else:
                    self._emit_span(item, None)

            tail = self.source.slice(self._cursor, len(self.source))
            self._write(tail)
            self._stats.verbatim_bytes += len(tail)
            self._cursor = len(self.source)
            self._flush()
        except SpanPaintError as exc:
            logger.warning(
                f"render failed: {exc.describe()}",
                extra={"event": "render_failed", "kind": exc.kind, "line_no": exc.line_no},
            )
            raise

        logger.info(
            "render finished",
            extra={
                "event": "render_done",
                "spans": self._stats.spans_rendered,
                "bytes_written": self._stats.bytes_written,
            },
        )
        return self._stats


def render_spans(
    source: SourceText,
    items: Iterable[ParsedLine | Span],
    output: BinaryIO,
    color_system: str = "truecolor",
) -> RenderStats:
    return SequentialColorizer(source, output, color_system=color_system).render(items)
