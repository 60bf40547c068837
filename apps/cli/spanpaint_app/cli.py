"""CLI entrypoints for rendering, checking span streams, and diagnostics."""

from __future__ import annotations

import argparse
import contextlib
import json
import platform
import sys
from dataclasses import asdict
from importlib import metadata
from pathlib import Path
from typing import BinaryIO, Iterator

from spanpaint_core import config_path, configure_logging, get_logger, load_config, log_dir
from spanpaint_renderer import SequentialColorizer, SourceText, list_color_systems
from spanpaint_spans import SpanPaintError, SpanStreamChecker, SpanStreamParser, StreamIOError


EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_INPUT_ERROR = 2


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _installed_version() -> str:
    try:
        return metadata.version("spanpaint")
    except metadata.PackageNotFoundError:
        return "0.1.0"


def _report_error(exc: SpanPaintError) -> int:
    print(f"spanpaint: {exc.describe()}", file=sys.stderr)
    return EXIT_IO_ERROR if isinstance(exc, StreamIOError) else EXIT_INPUT_ERROR


@contextlib.contextmanager
def _open_spans(path: str | None) -> Iterator[BinaryIO]:
    if path is None or path == "-":
        yield sys.stdin.buffer
        return
    try:
        fh = open(path, "rb")
    except OSError as exc:
        raise StreamIOError(f"failed to open span stream {path}: {exc}") from exc
    with fh:
        yield fh


@contextlib.contextmanager
def _open_output(path: str | None) -> Iterator[BinaryIO]:
    if path is None or path == "-":
        yield sys.stdout.buffer
        return
    try:
        fh = open(path, "wb")
    except OSError as exc:
        raise StreamIOError(f"failed to open output {path}: {exc}") from exc
    with fh:
        yield fh


def cmd_render(args: argparse.Namespace) -> int:
    cfg = load_config()
    color_system = args.color_system or cfg.render.color_system
    flush = bool(args.flush or cfg.render.flush_each_span)

    try:
        source = SourceText.from_path(Path(args.source))
        with _open_spans(args.spans) as lines, _open_output(args.output) as out:
            parser = SpanStreamParser(
                lines,
                encoding=cfg.stream.encoding,
                max_line_bytes=cfg.stream.max_line_bytes,
            )
            colorizer = SequentialColorizer(source, out, color_system=color_system, flush_each_span=flush)
            colorizer.render(parser)
    except SpanPaintError as exc:
        return _report_error(exc)
    return EXIT_OK


def cmd_check(args: argparse.Namespace) -> int:
    cfg = load_config()
    try:
        source = SourceText.from_path(Path(args.source)) if args.source else None
        with _open_spans(args.spans) as lines:
            report = SpanStreamChecker(max_errors=args.max_errors).run(
                lines,
                source=source,
                encoding=cfg.stream.encoding,
                max_line_bytes=cfg.stream.max_line_bytes,
            )
    except SpanPaintError as exc:
        return _report_error(exc)

    payload = asdict(report)
    payload["success"] = report.success
    _print_json(payload)
    return EXIT_OK if report.success else EXIT_INPUT_ERROR


def cmd_doctor(_args: argparse.Namespace) -> int:
    cfg = load_config()
    _print_json(
        {
            "version": _installed_version(),
            "python": platform.python_version(),
            "platform": platform.platform(),
            "config_path": str(config_path()),
            "log_dir": str(log_dir()),
            "color_systems": list_color_systems(),
            "config": asdict(cfg),
        }
    )
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="spanpaint", description="Color byte ranges of a text file from a span stream")
    sub = parser.add_subparsers(dest="command", required=True)

    render_cmd = sub.add_parser("render", help="Render SOURCE with spans read from --spans or stdin")
    render_cmd.add_argument("source", help="Path to the UTF-8 source text")
    render_cmd.add_argument("--spans", default=None, help="Span stream file (default: stdin)")
    render_cmd.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")
    render_cmd.add_argument("--color-system", choices=list_color_systems(), default=None)
    render_cmd.add_argument("--flush", action="store_true", help="Flush output after every span")
    render_cmd.set_defaults(func=cmd_render)

    check_cmd = sub.add_parser("check", help="Validate a span stream without rendering")
    check_cmd.add_argument("--spans", required=True, help="Span stream file ('-' for stdin)")
    check_cmd.add_argument("--source", default=None, help="Optional source text for range checks")
    check_cmd.add_argument("--max-errors", type=int, default=200)
    check_cmd.set_defaults(func=cmd_check)

    doctor_cmd = sub.add_parser("doctor", help="Print version, config, and log locations")
    doctor_cmd.set_defaults(func=cmd_doctor)

    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    configure_logging(keep_files=cfg.diagnostics.keep_log_files, console=cfg.diagnostics.console_log)
    parser = build_parser()
    args = parser.parse_args(argv)
    get_logger().info("command start", extra={"event": f"cmd_{args.command}"})
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
