"""Error types raised while parsing and laying out flags."""

from __future__ import annotations


class FlagError(ValueError):
    """Base class for configuration problems in a flag description."""


class MalformedSizeExpression(FlagError):
    def __init__(self, field: str, text: str) -> None:
        super().__init__(f"invalid size for {field}: {text!r}")
        self.field = field
        self.text = text


class InvalidColor(FlagError):
    pass


class FlagFormatError(FlagError):
    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path
