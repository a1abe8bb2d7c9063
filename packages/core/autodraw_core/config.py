"""Persistent drawing settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from autodraw_palette import Color
from autodraw_planner import RESAMPLE_FILTERS, CanvasSpec, DrawMode


CONFIG_VERSION = 1


@dataclass
class DrawSettings:
    mode: str = DrawMode.LINES.value
    brush_index: int = 0


@dataclass
class CanvasSettings:
    width: int = 800
    height: int = 600
    background: str = "#FFFFFF"


@dataclass
class SchedulerSettings:
    delay_ms: int = 10


@dataclass
class ImageSettings:
    fetch_timeout_s: float = 30.0
    resample: str = "box"


@dataclass
class LoggingSettings:
    keep_log_files: int = 7


@dataclass
class DrawConfig:
    config_version: int = CONFIG_VERSION
    draw: DrawSettings = field(default_factory=DrawSettings)
    canvas: CanvasSettings = field(default_factory=CanvasSettings)
    scheduler: SchedulerSettings = field(default_factory=SchedulerSettings)
    image: ImageSettings = field(default_factory=ImageSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @property
    def draw_mode(self) -> DrawMode:
        return DrawMode.parse(self.draw.mode)

    def canvas_spec(self) -> CanvasSpec:
        return CanvasSpec(
            width=self.canvas.width,
            height=self.canvas.height,
            background=Color.from_hex(self.canvas.background),
        )


def data_dir() -> Path:
    """Per-user directory holding the settings file and the log folder."""
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "AutoDraw"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "AutoDraw"
    return Path.home() / ".config" / "autodraw"


def config_path() -> Path:
    return data_dir() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_draw(cfg: DrawConfig) -> None:
    try:
        cfg.draw.mode = DrawMode.parse(cfg.draw.mode).value
    except ValueError:
        cfg.draw.mode = DrawMode.LINES.value
    try:
        cfg.draw.brush_index = int(cfg.draw.brush_index)
    except (TypeError, ValueError):
        cfg.draw.brush_index = 0


def _normalize_canvas(cfg: DrawConfig) -> None:
    defaults = CanvasSettings()
    try:
        cfg.canvas.width = max(1, int(cfg.canvas.width))
    except (TypeError, ValueError):
        cfg.canvas.width = defaults.width
    try:
        cfg.canvas.height = max(1, int(cfg.canvas.height))
    except (TypeError, ValueError):
        cfg.canvas.height = defaults.height
    try:
        cfg.canvas.background = Color.from_hex(str(cfg.canvas.background)).to_hex()
    except ValueError:
        cfg.canvas.background = defaults.background


def _normalize_scheduler(cfg: DrawConfig) -> None:
    try:
        cfg.scheduler.delay_ms = max(0, min(1000, int(cfg.scheduler.delay_ms)))
    except (TypeError, ValueError):
        cfg.scheduler.delay_ms = SchedulerSettings().delay_ms


def _normalize_image(cfg: DrawConfig) -> None:
    try:
        cfg.image.fetch_timeout_s = max(1.0, float(cfg.image.fetch_timeout_s))
    except (TypeError, ValueError):
        cfg.image.fetch_timeout_s = ImageSettings().fetch_timeout_s
    if not isinstance(cfg.image.resample, str) or cfg.image.resample not in RESAMPLE_FILTERS:
        cfg.image.resample = "box"


def _normalize_logging(cfg: DrawConfig) -> None:
    try:
        cfg.logging.keep_log_files = max(1, int(cfg.logging.keep_log_files))
    except (TypeError, ValueError):
        cfg.logging.keep_log_files = LoggingSettings().keep_log_files


def normalize(cfg: DrawConfig) -> DrawConfig:
    _normalize_draw(cfg)
    _normalize_canvas(cfg)
    _normalize_scheduler(cfg)
    _normalize_image(cfg)
    _normalize_logging(cfg)
    return cfg


def load_config(path: Path | None = None) -> DrawConfig:
    path = path or config_path()
    if not path.exists():
        return DrawConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return DrawConfig()
    if not isinstance(data, dict):
        return DrawConfig()

    cfg = DrawConfig(
        config_version=CONFIG_VERSION,
        draw=_merge(DrawSettings, data.get("draw", {})),
        canvas=_merge(CanvasSettings, data.get("canvas", {})),
        scheduler=_merge(SchedulerSettings, data.get("scheduler", {})),
        image=_merge(ImageSettings, data.get("image", {})),
        logging=_merge(LoggingSettings, data.get("logging", {})),
    )
    return normalize(cfg)


def save_config(cfg: DrawConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
