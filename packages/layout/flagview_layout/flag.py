"""Flag description model and YAML loading."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import FlagFormatError, InvalidColor
from .models import Color
from .size import SizeExpression


@dataclass(frozen=True)
class SubsectionSpec:
    width: SizeExpression
    height: SizeExpression
    color: Color


@dataclass(frozen=True)
class SectionSpec:
    width: SizeExpression
    subsections: tuple[SubsectionSpec, ...] = ()


@dataclass(frozen=True)
class FlagSpec:
    aspect: SizeExpression
    sections: tuple[SectionSpec, ...] = ()


def _require(raw: Mapping[str, Any], key: str, path: str) -> Any:
    if key not in raw:
        raise FlagFormatError(path, f"missing required key '{key}'")
    return raw[key]


def _mapping(value: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise FlagFormatError(path, f"expected a mapping, got {type(value).__name__}")
    return value


def _sequence(value: Any, path: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise FlagFormatError(path, f"expected a list, got {type(value).__name__}")
    return value


def _size(value: Any, path: str) -> SizeExpression:
    # YAML turns bare `1` or `0.5` into numbers; keep them as their text form.
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise FlagFormatError(path, f"expected a size such as '50%', '1/3' or '0.5', got {value!r}")
    return SizeExpression(str(value).strip())


def _color(value: Any, path: str) -> Color:
    try:
        return Color.from_value(value)
    except InvalidColor as exc:
        raise InvalidColor(f"{path}: {exc}") from exc


def parse_flag(raw: Any) -> FlagSpec:
    doc = _mapping(raw, "")
    sections: list[SectionSpec] = []
    for s_idx, raw_section in enumerate(_sequence(doc.get("sections"), "sections")):
        s_path = f"sections[{s_idx}]"
        section = _mapping(raw_section, s_path)
        subsections: list[SubsectionSpec] = []
        for u_idx, raw_sub in enumerate(_sequence(section.get("subsections"), f"{s_path}.subsections")):
            u_path = f"{s_path}.subsections[{u_idx}]"
            sub = _mapping(raw_sub, u_path)
            subsections.append(
                SubsectionSpec(
                    width=_size(_require(sub, "width", u_path), f"{u_path}.width"),
                    height=_size(_require(sub, "height", u_path), f"{u_path}.height"),
                    color=_color(_require(sub, "color", u_path), f"{u_path}.color"),
                )
            )
        sections.append(
            SectionSpec(
                width=_size(_require(section, "width", s_path), f"{s_path}.width"),
                subsections=tuple(subsections),
            )
        )
    return FlagSpec(aspect=_size(_require(doc, "aspect", ""), "aspect"), sections=tuple(sections))


def load_flag(path: Path) -> FlagSpec:
    try:
        raw = YAML(typ="safe").load(Path(path).read_text(encoding="utf-8"))
    except (OSError, UnicodeError) as exc:
        raise FlagFormatError(str(path), f"cannot read flag file: {exc}") from exc
    except YAMLError as exc:
        raise FlagFormatError(str(path), f"invalid YAML: {exc}") from exc
    return parse_flag(raw)
