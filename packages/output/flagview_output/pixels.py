"""Pixel format conversion for raw framebuffer output."""

from __future__ import annotations

import numpy as np

from flagview_layout import Bitmap


def rgb888_to_rgb565_le(rgb: np.ndarray) -> np.ndarray:
    """Convert an ``(..., 3)`` uint8 array into little-endian RGB565 bytes, shape ``(..., 2)``."""
    r = rgb[..., 0].astype(np.uint16)
    g = rgb[..., 1].astype(np.uint16)
    b = rgb[..., 2].astype(np.uint16)
    rgb565 = ((r >> 3) << 11) | ((g >> 2) << 5) | (b >> 3)
    return rgb565.astype("<u2").view(np.uint8).reshape(rgb.shape[:-1] + (2,))


def pack_frame(bitmap: Bitmap, xres: int, yres: int, line_length: int, bits_per_pixel: int) -> bytes:
    """Lay ``bitmap`` out as a ``yres`` x ``line_length`` byte frame.

    24 and 32 bpp frames are stored blue, green, red (padding byte left zero);
    16 bpp frames are RGB565. Pixels outside the bitmap stay black.
    """
    bytes_per_pixel = bits_per_pixel // 8
    if bits_per_pixel not in (16, 24, 32):
        raise ValueError(f"Unsupported framebuffer depth: {bits_per_pixel} bpp")
    if xres * bytes_per_pixel > line_length:
        raise ValueError("Line length is shorter than one row of pixels")

    frame = np.zeros((yres, line_length), dtype=np.uint8)
    w = min(xres, bitmap.width)
    h = min(yres, bitmap.height)
    if w == 0 or h == 0:
        return frame.tobytes()

    rgb = bitmap.pixels[:h, :w]
    packed = np.zeros((h, xres, bytes_per_pixel), dtype=np.uint8)
    if bytes_per_pixel == 2:
        packed[:, :w] = rgb888_to_rgb565_le(rgb)
    else:
        packed[:, :w, :3] = rgb[..., ::-1]
    frame[:h, : xres * bytes_per_pixel] = packed.reshape(h, xres * bytes_per_pixel)
    return frame.tobytes()
