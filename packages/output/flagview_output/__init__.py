"""Output targets that receive finished flag bitmaps."""

from .ansi import AnsiOptions, AnsiRenderer, build_sequence
from .framebuffer import FramebufferOptions, FramebufferRenderer
from .image import ImageOptions, ImageRenderer, bitmap_to_image
from .models import (
    Renderer,
    RendererError,
    RendererFailure,
    RendererOptionsError,
    UnknownRendererError,
    parse_options,
)
from .pixels import pack_frame, rgb888_to_rgb565_le
from .registry import (
    RENDERERS,
    create_renderer,
    default_renderer_name,
    describe_options,
    list_renderers,
)

__all__ = [
    "AnsiOptions",
    "AnsiRenderer",
    "FramebufferOptions",
    "FramebufferRenderer",
    "ImageOptions",
    "ImageRenderer",
    "RENDERERS",
    "Renderer",
    "RendererError",
    "RendererFailure",
    "RendererOptionsError",
    "UnknownRendererError",
    "bitmap_to_image",
    "build_sequence",
    "create_renderer",
    "default_renderer_name",
    "describe_options",
    "list_renderers",
    "pack_frame",
    "parse_options",
    "rgb888_to_rgb565_le",
]
