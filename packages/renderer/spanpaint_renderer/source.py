"""Immutable UTF-8 source buffer addressed by byte offsets."""

from __future__ import annotations

from pathlib import Path

from spanpaint_spans.errors import SourceEncodingError, SpanBoundaryError, StreamIOError


class SourceText:
    def __init__(self, data: bytes) -> None:
        try:
            data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SourceEncodingError(f"source is not valid UTF-8 at byte {exc.start}") from exc
        self._data = bytes(data)

    @classmethod
    def from_str(cls, text: str) -> "SourceText":
        return cls(text.encode("utf-8"))

    @classmethod
    def from_path(cls, path: Path) -> "SourceText":
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise StreamIOError(f"failed to read source {path}: {exc}") from exc
        return cls(data)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def data(self) -> bytes:
        return self._data

    def is_boundary(self, offset: int) -> bool:
        """True when ``offset`` does not fall inside a multi-byte code point."""
        if offset == 0 or offset == len(self._data):
            return True
        if not 0 < offset < len(self._data):
            return False
        # UTF-8 continuation bytes are 0b10xxxxxx
        return (self._data[offset] & 0xC0) != 0x80

    def slice(self, start: int, end: int) -> bytes:
        if start < 0 or end < start:
            raise SpanBoundaryError(f"invalid range {start}..{end}")
        if end > len(self._data):
            raise SpanBoundaryError(f"end {end} is past source length {len(self._data)}")
        for offset in (start, end):
            if not self.is_boundary(offset):
                raise SpanBoundaryError(f"offset {offset} splits a multi-byte character")
        return self._data[start:end]

    def text(self, start: int, end: int) -> str:
        return self.slice(start, end).decode("utf-8")
