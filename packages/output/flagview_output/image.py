"""Renderer that writes the bitmap to an image file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from flagview_layout import Bitmap

from .models import RendererFailure, RendererOptionsError, as_positive_int, merge_options

logger = logging.getLogger("flagview.output.image")


@dataclass
class ImageOptions:
    output: Path | None = None
    width: int = 640
    height: int = 480

    def validate(self) -> ImageOptions:
        if self.output is None or str(self.output) == "":
            raise RendererOptionsError("image renderer requires an 'output' path")
        self.output = Path(self.output)
        self.width = as_positive_int(self.width, "width")
        self.height = as_positive_int(self.height, "height")
        return self


def bitmap_to_image(bitmap: Bitmap, width: int, height: int) -> Image.Image:
    """Copy ``bitmap`` onto a black ``width`` x ``height`` RGB image."""
    image = Image.new("RGB", (width, height), (0, 0, 0))
    if bitmap.width and bitmap.height:
        source = Image.frombytes("RGB", (bitmap.width, bitmap.height), bitmap.to_rgb_bytes())
        image.paste(source, (0, 0))
    return image


class ImageRenderer:
    name = "image"
    options_type = ImageOptions

    def __init__(self, options: dict | None = None) -> None:
        self.options = merge_options(ImageOptions, options, self.name).validate()

    def get_size(self) -> tuple[int, int]:
        return self.options.width, self.options.height

    def render(self, bitmap: Bitmap) -> None:
        image = bitmap_to_image(bitmap, self.options.width, self.options.height)
        output = self.options.output
        try:
            image.save(output)
        except (OSError, ValueError) as exc:
            raise RendererFailure(f"failed to write image {output}: {exc}") from exc
        logger.info("wrote %s", output, extra={"event": "image_written", "renderer": self.name, "path": output})
