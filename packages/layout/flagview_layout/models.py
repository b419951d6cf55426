"""Color and bitmap models shared by the layout engine and renderers."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from .errors import InvalidColor

_HEX_DIGITS = re.compile(r"^[0-9a-fA-F]+$")


@dataclass(frozen=True)
class Color:
    red: int
    green: int
    blue: int

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
                raise InvalidColor(f"{name} channel must be an integer in 0..255, got {value!r}")

    @classmethod
    def parse_hex(cls, text: str) -> Color:
        """Parse ``#rrggbb`` (any case) into a color."""
        if not isinstance(text, str) or not text.startswith("#"):
            raise InvalidColor(f"color must start with '#': {text!r}")
        digits = text[1:]
        if not _HEX_DIGITS.match(digits):
            raise InvalidColor(f"color is not hexadecimal: {text!r}")
        value = int(digits, 16)
        if value > 0xFFFFFF:
            raise InvalidColor(f"color out of range: {text!r}")
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    @classmethod
    def from_value(cls, value: object) -> Color:
        """Build a color from a Color, a ``[r, g, b]`` sequence or hex text."""
        if isinstance(value, Color):
            return value
        if isinstance(value, str):
            return cls.parse_hex(value)
        if isinstance(value, Sequence) and len(value) == 3:
            return cls(*value)
        raise InvalidColor(f"expected [r, g, b] or '#rrggbb', got {value!r}")

    def to_hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    def __str__(self) -> str:
        return self.to_hex()


BLACK = Color(0, 0, 0)


class Bitmap:
    """Fixed size RGB pixel grid, stored as a ``(height, width, 3)`` uint8 array."""

    def __init__(self, width: int, height: int, background: Color = BLACK) -> None:
        if width < 0 or height < 0:
            raise ValueError("Bitmap dimensions must be non-negative")
        self.width = width
        self.height = height
        self._data = np.zeros((height, width, 3), dtype=np.uint8)
        if background != BLACK:
            self._data[:, :] = background.as_tuple()

    @property
    def pixels(self) -> np.ndarray:
        view = self._data.view()
        view.flags.writeable = False
        return view

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Color | None:
        if not self.in_bounds(x, y):
            return None
        r, g, b = self._data[y, x]
        return Color(int(r), int(g), int(b))

    def set(self, x: int, y: int, color: Color) -> None:
        if self.in_bounds(x, y):
            self._data[y, x] = color.as_tuple()

    def fill_rect(self, x: int, y: int, width: int, height: int, color: Color) -> None:
        if not self.in_bounds(x, y) or width <= 0 or height <= 0:
            return
        x_end = min(self.width, x + width)
        y_end = min(self.height, y + height)
        self._data[y:y_end, x:x_end] = color.as_tuple()

    def to_rgb_bytes(self) -> bytes:
        return self._data.tobytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bitmap):
            return NotImplemented
        return self.width == other.width and self.height == other.height and np.array_equal(self._data, other._data)

    def __repr__(self) -> str:
        return f"Bitmap(width={self.width}, height={self.height})"
