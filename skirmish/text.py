"""Rich text parsing and font sizing."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, replace
from typing import Mapping

from skirmish.ui import Val, Viewport

FONT = "font/pypx.ttf"
BOLD_FONT = "font/pypx-B.ttf"
THICK_FONT = "font/pypx-T.ttf"

DEFAULT_FONT_SIZE = 20.0
WHITE = (1.0, 1.0, 1.0, 1.0)

_TAG = re.compile(r"\[((?:\w|\d|-)+)\]")


@dataclass(frozen=True)
class TextStyle:
    font: str = FONT
    font_size: float = DEFAULT_FONT_SIZE
    color: tuple[float, float, float, float] = WHITE


@dataclass
class TextSection:
    value: str
    style: TextStyle


@dataclass(frozen=True)
class DynamicFontSize:
    """A font size relative to the layout, rounded down to a step."""

    size: Val
    step: float = 0.0
    minimum: float = 0.0

    def with_step(self, step: float) -> DynamicFontSize:
        return replace(self, step=step, minimum=max(self.minimum, step))

    def with_minimum(self, minimum: float) -> DynamicFontSize:
        return replace(self, minimum=minimum)

    def resolve(self, parent_size: float, viewport_size: Viewport) -> float:
        size = self.size.resolve(parent_size, viewport_size)
        if self.step > 0.0:
            size = math.floor(size / self.step) * self.step
        return max(size, self.minimum)


def parse_rich(text: str) -> list[TextSection]:
    """Parse rich text with the tags ``[r]``, ``[b]`` and ``[t]``."""
    styles = {
        "r": TextStyle(font=FONT),
        "b": TextStyle(font=BOLD_FONT),
        "t": TextStyle(font=THICK_FONT),
    }
    return parse_rich_custom(text, styles, "r")


def parse_rich_custom(
    text: str, styles: Mapping[str, TextStyle], start_tag: str
) -> list[TextSection]:
    """Parse rich text into sections.

    Text starts in ``styles[start_tag]``; ``[tag]`` switches to ``styles[tag]``.
    Tags not in ``styles`` are kept as literal text. A missing start tag
    raises ``KeyError``.
    """
    style = styles[start_tag]
    sections: list[TextSection] = []
    current = TextSection("", style)

    def push(fragment: str, fragment_style: TextStyle) -> None:
        nonlocal current
        if not fragment:
            return
        if current.style != fragment_style:
            if current.value:
                sections.append(current)
            current = TextSection("", fragment_style)
        current.value += fragment

    lo = 0
    for match in _TAG.finditer(text):
        next_style = styles.get(match.group(1))
        if next_style is None:
            continue
        push(text[lo : match.start()], style)
        lo = match.end()
        style = next_style
    push(text[lo:], style)
    if current.value:
        sections.append(current)
    return sections