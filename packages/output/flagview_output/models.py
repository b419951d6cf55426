"""Renderer interface, error types and option helpers."""

from __future__ import annotations

import logging
from typing import Any, Protocol, TypeVar

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from flagview_layout import Bitmap

logger = logging.getLogger("flagview.output")

OptionsT = TypeVar("OptionsT")


class RendererError(Exception):
    """Base class for output target errors."""


class UnknownRendererError(RendererError, KeyError):
    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "unknown renderer"


class RendererOptionsError(RendererError, ValueError):
    pass


class RendererFailure(RendererError, RuntimeError):
    """I/O or device failure while presenting a bitmap."""


class Renderer(Protocol):
    def get_size(self) -> tuple[int, int]: ...

    def render(self, bitmap: Bitmap) -> None: ...


def parse_options(text: str | None) -> dict[str, Any]:
    """Parse ``"key: value, key2: value2"`` into a mapping."""
    if text is None or not text.strip():
        return {}
    try:
        data = YAML(typ="safe").load("{" + text + "}")
    except YAMLError as exc:
        raise RendererOptionsError(f"invalid renderer options {text!r}: {exc}") from exc
    if not isinstance(data, dict):
        raise RendererOptionsError(f"renderer options must be a mapping: {text!r}")
    return dict(data)


def merge_options(options_type: type[OptionsT], raw: dict[str, Any] | None, renderer: str) -> OptionsT:
    defaults = options_type()
    for k, v in (raw or {}).items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
        else:
            logger.warning(
                "ignoring unknown option %r for renderer %s",
                k,
                renderer,
                extra={"event": "option_ignored", "renderer": renderer, "field": k},
            )
    return defaults


def as_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false", "yes", "no", "on", "off", "1", "0"):
        return value.lower() in ("true", "yes", "on", "1")
    raise RendererOptionsError(f"{name} must be a boolean, got {value!r}")


def as_positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise RendererOptionsError(f"{name} must be a positive integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise RendererOptionsError(f"{name} must be a positive integer, got {value!r}") from exc
    if number <= 0 or (isinstance(value, float) and number != value):
        raise RendererOptionsError(f"{name} must be a positive integer, got {value!r}")
    return number
