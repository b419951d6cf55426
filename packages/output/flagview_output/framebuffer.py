"""Renderer that writes to a Linux framebuffer device."""

from __future__ import annotations

import fcntl
import logging
import os
import struct
from dataclasses import dataclass
from pathlib import Path

from flagview_layout import Bitmap

from .models import RendererFailure, RendererOptionsError, merge_options
from .pixels import pack_frame
from .terminal import wait_for_keypress

logger = logging.getLogger("flagview.output.framebuffer")

FBIOGET_VSCREENINFO = 0x4600
FBIOGET_FSCREENINFO = 0x4602
KDSETMODE = 0x4B3A
KD_TEXT = 0x00
KD_GRAPHICS = 0x01

# struct fb_var_screeninfo is 160 bytes; only the leading fields are read.
_VAR_INFO_SIZE = 160
_VAR_INFO_FORMAT = "IIIIIII"
# struct fb_fix_screeninfo: id[16], smem_start, smem_len, type, type_aux,
# visual, xpanstep, ypanstep, ywrapstep, line_length, ...
_FIX_INFO_SIZE = 80
_FIX_INFO_FORMAT = "16sLIIIIHHHI"


@dataclass
class FramebufferOptions:
    device: Path = Path("/dev/fb0")
    console: Path = Path("/dev/tty")

    def validate(self) -> FramebufferOptions:
        if not self.device or not str(self.device):
            raise RendererOptionsError("framebuffer renderer requires a 'device' path")
        self.device = Path(self.device)
        self.console = Path(self.console)
        return self


@dataclass(frozen=True)
class ScreenInfo:
    xres: int
    yres: int
    bits_per_pixel: int
    line_length: int


def read_screen_info(fd: int) -> ScreenInfo:
    var = fcntl.ioctl(fd, FBIOGET_VSCREENINFO, bytes(_VAR_INFO_SIZE))
    xres, yres, _xvirt, _yvirt, _xoff, _yoff, bpp = struct.unpack_from(_VAR_INFO_FORMAT, var)
    fix = fcntl.ioctl(fd, FBIOGET_FSCREENINFO, bytes(_FIX_INFO_SIZE))
    line_length = struct.unpack_from(_FIX_INFO_FORMAT, fix)[-1]
    return ScreenInfo(xres=xres, yres=yres, bits_per_pixel=bpp, line_length=line_length)


class FramebufferRenderer:
    name = "framebuffer"
    options_type = FramebufferOptions

    def __init__(self, options: dict | None = None) -> None:
        self.options = merge_options(FramebufferOptions, options, self.name).validate()

    def _screen_info(self) -> ScreenInfo:
        try:
            fd = os.open(self.options.device, os.O_RDONLY)
        except OSError as exc:
            raise RendererFailure(f"cannot open framebuffer {self.options.device}: {exc}") from exc
        try:
            return read_screen_info(fd)
        except OSError as exc:
            raise RendererFailure(f"cannot query framebuffer {self.options.device}: {exc}") from exc
        finally:
            os.close(fd)

    def _set_kd_mode(self, mode: int) -> None:
        try:
            fd = os.open(self.options.console, os.O_RDWR)
        except OSError as exc:
            raise RendererFailure(f"cannot open console {self.options.console}: {exc}") from exc
        try:
            fcntl.ioctl(fd, KDSETMODE, mode)
        except OSError as exc:
            raise RendererFailure(f"cannot switch console mode: {exc}") from exc
        finally:
            os.close(fd)

    def get_size(self) -> tuple[int, int]:
        info = self._screen_info()
        return info.xres, info.yres

    def render(self, bitmap: Bitmap) -> None:
        info = self._screen_info()
        try:
            frame = pack_frame(bitmap, info.xres, info.yres, info.line_length, info.bits_per_pixel)
        except ValueError as exc:
            raise RendererFailure(str(exc)) from exc
        logger.debug(
            "framebuffer %s: %s",
            self.options.device,
            info,
            extra={"event": "framebuffer_frame", "renderer": self.name, "path": self.options.device},
        )

        self._set_kd_mode(KD_GRAPHICS)
        try:
            with open(self.options.device, "r+b", buffering=0) as fb:
                fb.write(frame)
            wait_for_keypress()
        except OSError as exc:
            raise RendererFailure(f"error writing framebuffer {self.options.device}: {exc}") from exc
        finally:
            self._set_kd_mode(KD_TEXT)
