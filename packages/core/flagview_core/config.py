"""Persistent settings schema and load/save helpers."""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from flagview_layout import Color, InvalidColor
from flagview_output import RENDERERS

CONFIG_VERSION = 1
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger("flagview.config")


@dataclass
class RendererConfig:
    name: str | None = None
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class DisplayConfig:
    background: str = "#000000"

    @property
    def background_color(self) -> Color:
        return Color.parse_hex(self.background)


@dataclass
class LoggingConfig:
    keep_log_files: int = 7
    level: str = "INFO"


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    renderer: RendererConfig = field(default_factory=RendererConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "Flagview"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "Flagview"
    return Path.home() / ".config" / "flagview"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: Any):
    defaults = dataclass_type()  # type: ignore[misc]
    if not isinstance(raw, dict):
        return defaults
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_renderer(cfg: AppConfig) -> None:
    name = cfg.renderer.name
    if name is not None and (not isinstance(name, str) or name not in RENDERERS):
        logger.warning(
            "unknown renderer %r in config, using default",
            name,
            extra={"event": "config_normalized", "field": "renderer.name"},
        )
        cfg.renderer.name = None
    if not isinstance(cfg.renderer.options, dict):
        cfg.renderer.options = {}


def _normalize_display(cfg: AppConfig) -> None:
    try:
        cfg.display.background = Color.parse_hex(str(cfg.display.background)).to_hex()
    except InvalidColor:
        logger.warning(
            "invalid background %r in config, using black",
            cfg.display.background,
            extra={"event": "config_normalized", "field": "display.background"},
        )
        cfg.display.background = "#000000"


def _normalize_logging(cfg: AppConfig) -> None:
    try:
        cfg.logging.keep_log_files = max(1, int(cfg.logging.keep_log_files))
    except (TypeError, ValueError, OverflowError):
        cfg.logging.keep_log_files = LoggingConfig.keep_log_files
    level = str(cfg.logging.level).upper()
    cfg.logging.level = level if level in LOG_LEVELS else "INFO"


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeError, json.JSONDecodeError) as exc:
        logger.warning(
            "ignoring unreadable config %s: %s", path, exc, extra={"event": "config_unreadable", "path": path}
        )
        return AppConfig()
    if not isinstance(data, dict):
        return AppConfig()

    cfg = AppConfig(
        config_version=CONFIG_VERSION,
        renderer=_merge(RendererConfig, data.get("renderer", {})),
        display=_merge(DisplayConfig, data.get("display", {})),
        logging=_merge(LoggingConfig, data.get("logging", {})),
    )

    _normalize_renderer(cfg)
    _normalize_display(cfg)
    _normalize_logging(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
