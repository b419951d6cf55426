"""Renderer that draws straight into the terminal with ANSI escape sequences."""

from __future__ import annotations

import logging
import shutil
import sys
from dataclasses import dataclass
from typing import TextIO

from flagview_layout import BLACK, Bitmap, Color

from .models import RendererFailure, as_bool, merge_options
from .terminal import wait_for_keypress

logger = logging.getLogger("flagview.output.ansi")

ESC = "\x1b["
UPPER_HALF_BLOCK = "▀"

HIDE_CURSOR = f"{ESC}?25l"
SHOW_CURSOR = f"{ESC}?25h"
CLEAR_SCREEN = f"{ESC}2J"
ENTER_ALT_SCREEN = f"{ESC}?1049h"
LEAVE_ALT_SCREEN = f"{ESC}?1049l"
RESET_COLORS = f"{ESC}39m{ESC}49m"


@dataclass
class AnsiOptions:
    true_color: bool = False

    def validate(self) -> AnsiOptions:
        self.true_color = as_bool(self.true_color, "true_color")
        return self


def cube_index(color: Color) -> int:
    """Map a color onto the 6x6x6 cube of the 256-color palette."""
    r, g, b = (int(c / 256.0 * 5.0) for c in color.as_tuple())
    return 16 + 36 * r + 6 * g + b


def fg_code(color: Color, true_color: bool) -> str:
    if true_color:
        return f"{ESC}38;2;{color.red};{color.green};{color.blue}m"
    return f"{ESC}38;5;{cube_index(color)}m"


def bg_code(color: Color, true_color: bool) -> str:
    if true_color:
        return f"{ESC}48;2;{color.red};{color.green};{color.blue}m"
    return f"{ESC}48;5;{cube_index(color)}m"


def build_sequence(bitmap: Bitmap, columns: int, rows: int, true_color: bool = False) -> str:
    """Encode ``bitmap`` as half-block characters, two pixel rows per text row.

    Color codes are skipped when they match the previous cell. An odd last
    pixel row is paired with black.
    """
    parts = [HIDE_CURSOR, CLEAR_SCREEN]
    last_fg: str | None = None
    last_bg: str | None = None

    for y in range(0, min(bitmap.height, rows * 2), 2):
        parts.append(f"{ESC}{y // 2 + 1};1H")
        for x in range(min(bitmap.width, columns)):
            upper = bitmap.get(x, y) or BLACK
            lower = bitmap.get(x, y + 1) or BLACK

            fg = fg_code(upper, true_color)
            bg = bg_code(lower, true_color)
            if fg != last_fg:
                parts.append(fg)
            if bg != last_bg:
                parts.append(bg)
            last_fg, last_bg = fg, bg

            parts.append(UPPER_HALF_BLOCK)

    return "".join(parts)


class AnsiRenderer:
    name = "ansi"
    options_type = AnsiOptions

    def __init__(self, options: dict | None = None, stream: TextIO | None = None) -> None:
        self.options = merge_options(AnsiOptions, options, self.name).validate()
        self.stream = stream or sys.stdout

    def get_size(self) -> tuple[int, int]:
        columns, rows = shutil.get_terminal_size()
        return columns, rows * 2

    def render(self, bitmap: Bitmap) -> None:
        columns, rows = shutil.get_terminal_size()
        sequence = build_sequence(bitmap, columns, rows, self.options.true_color)
        logger.debug(
            "writing %d bytes of escape sequences",
            len(sequence),
            extra={"event": "terminal_frame", "renderer": self.name, "rect": [0, 0, columns, rows]},
        )

        try:
            self.stream.write(ENTER_ALT_SCREEN)
            self.stream.write(sequence)
            self.stream.flush()
            wait_for_keypress()
        except OSError as exc:
            raise RendererFailure(f"error writing to terminal: {exc}") from exc
        finally:
            self._reset_terminal()

    def _reset_terminal(self) -> None:
        try:
            self.stream.write(RESET_COLORS + SHOW_CURSOR + LEAVE_ALT_SCREEN)
            self.stream.flush()
        except OSError as exc:
            logger.warning(
                "failed to reset terminal: %s", exc, extra={"event": "terminal_reset_failed", "renderer": self.name}
            )
