"""Relative size expressions: percentages, fractions and plain decimals."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from .errors import MalformedSizeExpression

_PERCENT = re.compile(r"^([\d.]+)%$")
_FRACTION = re.compile(r"^([\d.]+)/([\d.]+)$")
_DECIMAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def _to_float(text: str) -> float | None:
    if not _DECIMAL.match(text):
        return None
    return float(text)


def percent_to_float(text: str) -> float | None:
    match = _PERCENT.match(text)
    if match is None:
        return None
    number = _to_float(match.group(1))
    if number is None:
        return None
    return number / 100.0


def fraction_to_float(text: str) -> float | None:
    match = _FRACTION.match(text)
    if match is None:
        return None
    numerator = _to_float(match.group(1))
    denominator = _to_float(match.group(2))
    if numerator is None or denominator is None or denominator == 0:
        return None
    return numerator / denominator


def resolve_size(text: str) -> float | None:
    """Resolve a size expression to a non-negative finite number.

    Forms are tried in order: ``"50%"``, ``"1/3"``, then ``"0.5"``. A form
    that matches but fails to produce a number falls through to the next one.
    Returns ``None`` when nothing matches or the result is negative or not
    finite (``"1/0"``, ``"1e400"``).
    """
    value = percent_to_float(text)
    if value is None:
        value = fraction_to_float(text)
    if value is None:
        value = _to_float(text)
    if value is None or not math.isfinite(value) or value < 0:
        return None
    # "-0" parses as negative zero
    return abs(value)


@dataclass(frozen=True)
class SizeExpression:
    text: str

    def resolve(self) -> float | None:
        return resolve_size(self.text)

    def require(self, field: str) -> float:
        value = self.resolve()
        if value is None:
            raise MalformedSizeExpression(field, self.text)
        return value

    def __str__(self) -> str:
        return self.text
