"""Theme colours and the theme configuration."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Sequence

from skirmish.text import TextSection

Color = tuple[float, float, float, float]

DEFAULT_CLEAR_COLOR: Color = (0.157, 0.157, 0.157, 1.0)

SFX_HOVER = "audio/sfx/251390__deadsillyrabbit__button_hover-mp3.ogg"
SFX_CLICK = "audio/sfx/253168__suntemple__sfx-ui-button-click.ogg"


class ThemeColor(enum.Enum):
    """A named slot in the theme palette."""

    WHITE = "white"
    INVISIBLE = "invisible"
    BODY = "body"
    BODY_TEXT = "body_text"
    PRIMARY = "primary"
    PRIMARY_HOVERED = "primary_hovered"
    PRIMARY_PRESSED = "primary_pressed"
    PRIMARY_DISABLED = "primary_disabled"
    PRIMARY_TEXT = "primary_text"
    POPUP = "popup"
    OVERLAY = "overlay"


_SLOTS = {color: index for index, color in enumerate(ThemeColor)}


def _to_color(value: Sequence[float]) -> Color:
    components = tuple(float(c) for c in value)
    if len(components) == 3:
        components += (1.0,)
    if len(components) != 4:
        raise ValueError(f"a colour needs 3 or 4 components, got {len(components)}")
    return components  # type: ignore[return-value]


@dataclass(frozen=True)
class ThemeColorList:
    """One colour for each ThemeColor, in declaration order."""

    colors: tuple[Color, ...]

    @classmethod
    def from_colors(cls, colors: Iterable[Sequence[float]]) -> ThemeColorList:
        parsed = tuple(_to_color(c) for c in colors)
        if len(parsed) != len(ThemeColor):
            raise ValueError(
                f"expected {len(ThemeColor)} theme colours, got {len(parsed)}"
            )
        return cls(parsed)

    def __getitem__(self, color: ThemeColor) -> Color:
        return self.colors[_SLOTS[color]]

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[Color]:
        return iter(self.colors)


@dataclass(frozen=True)
class ThemeConfig:
    """The loaded theme configuration."""

    colors: ThemeColorList

    FILE = "theme.json"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ThemeConfig:
        unknown = set(data) - {"colors"}
        if unknown:
            raise ValueError(f"unknown theme config fields: {sorted(unknown)}")
        if "colors" not in data:
            raise ValueError("theme config is missing 'colors'")
        return cls(ThemeColorList.from_colors(data["colors"]))

    @classmethod
    def load(cls, path: str | Path) -> ThemeConfig:
        with open(path, encoding="utf-8") as handle:
            return cls.from_dict(json.load(handle))

    def to_dict(self) -> dict[str, Any]:
        return {"colors": [list(c) for c in self.colors]}

    @property
    def clear_color(self) -> Color:
        """The window background colour this theme sets."""
        return self.colors[ThemeColor.BODY]


def recolor_sections(
    sections: Iterable[TextSection],
    colors: Iterable[ThemeColor],
    palette: ThemeColorList,
) -> list[TextSection]:
    """Give each section the palette colour paired with it; extra sections keep theirs."""
    color_iter = iter(colors)
    result = []
    for section in sections:
        color = next(color_iter, None)
        if color is None:
            result.append(section)
        else:
            result.append(replace(section, style=replace(section.style, color=palette[color])))
    return result