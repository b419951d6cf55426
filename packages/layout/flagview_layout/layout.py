"""Viewport fitting and section/subsection rasterization."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Protocol

from .flag import FlagSpec
from .models import BLACK, Bitmap, Color

logger = logging.getLogger("flagview.layout")


class SizedSink(Protocol):
    def get_size(self) -> tuple[int, int]: ...

    def render(self, bitmap: Bitmap) -> None: ...


@dataclass(frozen=True)
class Viewport:
    x: int
    y: int
    width: int
    height: int


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if value < 0 else whole


def _pixels(value: float, limit: int) -> int:
    # Pixel counts saturate at zero and at the flag edge.
    if math.isnan(value) or value <= 0:
        return 0
    if value >= limit:
        return limit
    return round_half_away(value)


def _clamp(offset: int, length: int, limit: int) -> int:
    if offset + length > limit:
        return max(0, limit - offset)
    return length


def fit_viewport(aspect: float, canvas_width: int, canvas_height: int) -> Viewport:
    if canvas_width <= 0 or canvas_height <= 0:
        return Viewport(0, 0, 0, 0)

    canvas_aspect = canvas_width / canvas_height
    if canvas_aspect > aspect:
        width = _pixels(aspect * canvas_height, canvas_width)
        return Viewport(x=_pixels(canvas_width / 2 - width / 2, canvas_width), y=0, width=width, height=canvas_height)
    if canvas_aspect < aspect:
        height = _pixels(1.0 / aspect * canvas_width, canvas_height)
        return Viewport(x=0, y=_pixels(canvas_height / 2 - height / 2, canvas_height), width=canvas_width, height=height)
    return Viewport(0, 0, canvas_width, canvas_height)


def layout(flag: FlagSpec, canvas_width: int, canvas_height: int, background: Color = BLACK) -> Bitmap:
    """Rasterize ``flag`` onto a fresh ``canvas_width`` x ``canvas_height`` bitmap.

    Section widths are relative to the flag width and subsection heights to the
    flag height. Subsection widths are relative to the section's nominal
    (unclamped) width. Every offset is clamped to the flag's pixel bounds, so
    sizes summing past 1.0 are cut off rather than rejected.
    """
    viewport = fit_viewport(flag.aspect.require("aspect"), canvas_width, canvas_height)
    bitmap = Bitmap(canvas_width, canvas_height, background)
    logger.debug(
        "viewport %s on %dx%d canvas", viewport, canvas_width, canvas_height, extra={"event": "viewport_fit"}
    )

    section_x = 0
    for s_idx, section in enumerate(flag.sections):
        s_path = f"sections[{s_idx}]"
        section_raw = section.width.require(f"{s_path}.width")
        section_width = _clamp(section_x, _pixels(section_raw * viewport.width, viewport.width), viewport.width)

        section_y = 0
        for u_idx, sub in enumerate(section.subsections):
            u_path = f"{s_path}.subsections[{u_idx}]"
            sub_height = _pixels(sub.height.require(f"{u_path}.height") * viewport.height, viewport.height)
            sub_height = _clamp(section_y, sub_height, viewport.height)

            sub_width = _pixels(sub.width.require(f"{u_path}.width") * section_raw * viewport.width, viewport.width)
            sub_width = _clamp(section_x, sub_width, viewport.width)

            bitmap.fill_rect(viewport.x + section_x, viewport.y + section_y, sub_width, sub_height, sub.color)
            logger.debug(
                "%s at (%d, %d) size %dx%d color %s",
                u_path,
                viewport.x + section_x,
                viewport.y + section_y,
                sub_width,
                sub_height,
                sub.color,
                extra={
                    "event": "subsection_filled",
                    "field": u_path,
                    "rect": [viewport.x + section_x, viewport.y + section_y, sub_width, sub_height],
                },
            )
            section_y += sub_height

        section_x += section_width

    return bitmap


def render_flag(renderer: SizedSink, flag: FlagSpec, background: Color = BLACK) -> Bitmap:
    width, height = renderer.get_size()
    bitmap = layout(flag, width, height, background)
    logger.info("rendering %dx%d flag bitmap", bitmap.width, bitmap.height, extra={"event": "render"})
    renderer.render(bitmap)
    return bitmap
