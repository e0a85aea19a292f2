"""Screen transition fades."""

from __future__ import annotations

from dataclasses import dataclass, field

from skirmish.state import Screen

FADE_IN_SECS = 0.5
FADE_OUT_SECS = 0.2
FADE_Z = 1000


@dataclass
class FadeIn:
    """An overlay that fades away after entering a screen."""

    duration: float = FADE_IN_SECS
    remaining: float = field(init=False)
    finished: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.remaining = self.duration

    def update(self, dt: float) -> float:
        """Advance by ``dt`` seconds and return the overlay alpha for this frame."""
        alpha = max(self.remaining / self.duration, 0.0)
        if self.remaining <= 0.0:
            self.finished = True
        self.remaining -= dt
        return alpha


@dataclass
class FadeOut:
    """An overlay that fades in before switching to ``to_screen``."""

    to_screen: Screen
    duration: float = FADE_OUT_SECS
    remaining: float = field(init=False)
    finished: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.remaining = self.duration

    def update(self, dt: float) -> float:
        """Advance by ``dt`` seconds and return the overlay alpha for this frame.

        Once ``finished`` is set, the caller should enter ``to_screen``.
        """
        alpha = 1.0 - max(self.remaining / self.duration, 0.0)
        if self.remaining <= 0.0:
            self.finished = True
        self.remaining -= dt
        return alpha