"""Core app services for settings and logging."""

from .config import AppConfig, DisplayConfig, LoggingConfig, RendererConfig, config_path, load_config, save_config
from .logging_setup import JsonFormatter, configure_logging, get_logger

__all__ = [
    "AppConfig",
    "DisplayConfig",
    "JsonFormatter",
    "LoggingConfig",
    "RendererConfig",
    "config_path",
    "configure_logging",
    "get_logger",
    "load_config",
    "save_config",
]
