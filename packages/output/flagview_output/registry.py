"""Renderer lookup by configuration name."""

from __future__ import annotations

from dataclasses import fields
from typing import Any

from .ansi import AnsiRenderer
from .framebuffer import FramebufferRenderer
from .image import ImageRenderer
from .models import Renderer, UnknownRendererError

RENDERERS: dict[str, type] = {
    AnsiRenderer.name: AnsiRenderer,
    ImageRenderer.name: ImageRenderer,
    FramebufferRenderer.name: FramebufferRenderer,
}

DEFAULT_RENDERER_NAME = AnsiRenderer.name


def list_renderers() -> list[str]:
    return sorted(RENDERERS.keys())


def default_renderer_name() -> str:
    return DEFAULT_RENDERER_NAME


def get_renderer_class(name: str) -> type:
    try:
        return RENDERERS[name]
    except KeyError:
        raise UnknownRendererError(
            f"renderer {name!r} doesn't exist, available: {', '.join(list_renderers())}"
        ) from None


def describe_options(name: str) -> dict[str, Any]:
    """Option names of renderer ``name`` with their default values."""
    options_type = get_renderer_class(name).options_type
    defaults = options_type()
    return {f.name: getattr(defaults, f.name) for f in fields(options_type)}


def create_renderer(name: str, options: dict[str, Any] | None = None) -> Renderer:
    return get_renderer_class(name)(options)
