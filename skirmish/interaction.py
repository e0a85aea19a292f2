"""Interaction-driven values: themes by interaction state, previous and backup values."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Interaction(enum.Enum):
    NONE = "none"
    HOVERED = "hovered"
    PRESSED = "pressed"


@dataclass(frozen=True)
class InteractionTheme(Generic[T]):
    """A table of values to use by interaction state."""

    none: T
    hovered: T
    pressed: T
    disabled: T

    def select(
        self, previous: Interaction, current: Interaction, disabled: bool = False
    ) -> Optional[T]:
        """Return the value for ``current``, or None to keep the value unchanged.

        Going from pressed to hovered is delayed by one frame, so that
        transition yields None.
        """
        if previous is Interaction.PRESSED and current is Interaction.HOVERED:
            return None
        if disabled:
            chosen = self.disabled
        else:
            chosen = {
                Interaction.NONE: self.none,
                Interaction.HOVERED: self.hovered,
                Interaction.PRESSED: self.pressed,
            }[current]
        return copy.copy(chosen)


@dataclass
class Previous(Generic[T]):
    """The start-of-frame value of something that changes."""

    value: T

    def update(self, current: T) -> T:
        """Record ``current`` and return the value it replaces."""
        old = self.value
        self.value = copy.copy(current)
        return old


@dataclass
class Backup(Generic[T]):
    """Holds a pre-animation value to be restored on the next frame."""

    value: Optional[T] = None

    def save(self, value: T) -> None:
        self.value = copy.copy(value)

    def restore(self) -> Optional[T]:
        """Take the saved value, leaving nothing; None if nothing was saved."""
        value, self.value = self.value, None
        return value