"""Persistent settings schema and load/save helpers."""

from __future__ import annotations

import codecs
import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


CONFIG_VERSION = 2
HOME_ENV = "SPANPAINT_HOME"

COLOR_SYSTEM_CHOICES = ("truecolor", "256", "standard")
MIN_LINE_BYTES = 64
MAX_LINE_BYTES = 1024 * 1024


@dataclass
class RenderConfig:
    color_system: str = "truecolor"
    flush_each_span: bool = False


@dataclass
class StreamConfig:
    encoding: str = "utf-8"
    max_line_bytes: int = 4096


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7
    console_log: bool = False


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    render: RenderConfig = field(default_factory=RenderConfig)
    stream: StreamConfig = field(default_factory=StreamConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)


def config_root() -> Path:
    override = os.environ.get(HOME_ENV)
    if override:
        return Path(override).expanduser()
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "SpanPaint"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "SpanPaint"
    return Path.home() / ".config" / "spanpaint"


def config_path() -> Path:
    return config_root() / "config.json"


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return dict(value) if isinstance(value, dict) else {}


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_render(cfg: AppConfig) -> None:
    if cfg.render.color_system not in COLOR_SYSTEM_CHOICES:
        cfg.render.color_system = "truecolor"
    cfg.render.flush_each_span = bool(cfg.render.flush_each_span)


def _normalize_stream(cfg: AppConfig) -> None:
    try:
        codecs.lookup(str(cfg.stream.encoding))
    except LookupError:
        cfg.stream.encoding = "utf-8"
    max_line = _as_int(cfg.stream.max_line_bytes, StreamConfig.max_line_bytes)
    cfg.stream.max_line_bytes = max(MIN_LINE_BYTES, min(MAX_LINE_BYTES, max_line))


def _normalize_diagnostics(cfg: AppConfig) -> None:
    cfg.diagnostics.keep_log_files = max(2, _as_int(cfg.diagnostics.keep_log_files, DiagnosticsConfig.keep_log_files))
    cfg.diagnostics.console_log = bool(cfg.diagnostics.console_log)


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = _as_int(raw.get("config_version", 1), 1)
    data = dict(raw)

    if version < 2:
        # v1 kept a flat "color_system" and "encoding" at the top level.
        render = _section(data, "render")
        if "color_system" in data:
            render.setdefault("color_system", data.pop("color_system"))
        stream = _section(data, "stream")
        if "encoding" in data:
            stream.setdefault("encoding", data.pop("encoding"))
        data["render"] = render
        data["stream"] = stream
        data.setdefault("diagnostics", {})
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()
    if not isinstance(raw, dict):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=_as_int(data.get("config_version"), CONFIG_VERSION),
        render=_merge(RenderConfig, data.get("render", {})),
        stream=_merge(StreamConfig, data.get("stream", {})),
        diagnostics=_merge(DiagnosticsConfig, data.get("diagnostics", {})),
    )

    _normalize_render(cfg)
    _normalize_stream(cfg)
    _normalize_diagnostics(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
