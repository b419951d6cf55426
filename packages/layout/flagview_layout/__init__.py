"""Flag model, size expressions and the layout engine."""

from .errors import FlagError, FlagFormatError, InvalidColor, MalformedSizeExpression
from .flag import FlagSpec, SectionSpec, SubsectionSpec, load_flag, parse_flag
from .layout import Viewport, fit_viewport, layout, render_flag, round_half_away
from .models import BLACK, Bitmap, Color
from .size import SizeExpression, resolve_size

__all__ = [
    "BLACK",
    "Bitmap",
    "Color",
    "FlagError",
    "FlagFormatError",
    "FlagSpec",
    "InvalidColor",
    "MalformedSizeExpression",
    "SectionSpec",
    "SizeExpression",
    "SubsectionSpec",
    "Viewport",
    "fit_viewport",
    "layout",
    "load_flag",
    "parse_flag",
    "render_flag",
    "resolve_size",
    "round_half_away",
]
