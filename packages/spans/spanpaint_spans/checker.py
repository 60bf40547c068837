"""Span stream validation without rendering."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from .parser import SpanStreamParser


class BoundedSource(Protocol):
    """Byte-addressed source, e.g. ``spanpaint_renderer.SourceText``."""

    def __len__(self) -> int: ...

    def is_boundary(self, offset: int) -> bool: ...


@dataclass
class CheckReport:
    total_lines: int = 0
    valid_spans: int = 0
    overlaps: int = 0
    out_of_range: int = 0
    error_counts: dict[str, int] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.error_counts


def _boundary_problem(start: int, end: int, source: BoundedSource) -> str | None:
    if end > len(source):
        return f"end {end} is past source length {len(source)}"
    for offset in (start, end):
        if not source.is_boundary(offset):
            return f"offset {offset} splits a multi-byte character"
    return None


class SpanStreamChecker:
    """Walk a span stream the way the colorizer would, but keep going past bad lines."""

    def __init__(self, max_errors: int = 200) -> None:
        self.max_errors = max_errors

    def _record(self, report: CheckReport, kind: str, message: str) -> None:
        report.error_counts[kind] = report.error_counts.get(kind, 0) + 1
        if len(report.errors) < self.max_errors:
            report.errors.append(message)

    def run(
        self,
        lines: Iterable[str | bytes],
        source: BoundedSource | None = None,
        encoding: str = "utf-8",
        max_line_bytes: int | None = None,
    ) -> CheckReport:
        report = CheckReport()
        cursor = 0

        for item in SpanStreamParser(lines, encoding=encoding, max_line_bytes=max_line_bytes):
            report.total_lines += 1
            if item.error is not None:
                self._record(report, item.error.kind, item.error.describe())
                continue

            span = item.unwrap()
            if span.start < cursor:
                report.overlaps += 1
                self._record(
                    report,
                    "OverlappingSpan",
                    f"line {item.line_no}: OverlappingSpan: start {span.start} is before cursor {cursor}",
                )
                continue
            problem = _boundary_problem(span.start, span.end, source) if source is not None else None
            if problem is not None:
                report.out_of_range += 1
                self._record(report, "SpanBoundaryError", f"line {item.line_no}: SpanBoundaryError: {problem}")
                continue

            report.valid_spans += 1
            cursor = span.end

        return report
