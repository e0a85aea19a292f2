"""Audio volume settings and playback parameters."""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass
from typing import Any, Mapping

MUSIC_TITLE = "audio/music/240376__edtijo__happy-8bit-pixel-adenture.ogg"
MUSIC_GAMEPLAY = "audio/music/545458__bertsz__bit-forest-evil-theme-music.ogg"

UI_SPEED_RANGE = (0.9, 1.5)


@dataclass
class AudioSettings:
    """Volume levels, each in the range 0.0 to 1.0."""

    master_volume: float = 0.5
    music_volume: float = 0.0
    ui_volume: float = 0.5

    def effective_music_volume(self) -> float:
        """Linear volume for music, scaled by the master volume."""
        return self.master_volume * self.music_volume

    def effective_ui_volume(self) -> float:
        """Linear volume for UI sounds, scaled by the master volume."""
        return self.master_volume * self.ui_volume

    def to_dict(self) -> dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AudioSettings:
        """Build settings from a mapping; missing fields keep their defaults."""
        defaults = cls()
        values = {}
        for name in ("master_volume", "music_volume", "ui_volume"):
            raw = data.get(name, getattr(defaults, name))
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raise ValueError(f"{name} must be a number, got {raw!r}")
            values[name] = float(raw)
        return cls(**values)


def ui_playback_speed(rng: random.Random | None = None) -> float:
    """Pick a random playback speed for a UI sound, in [0.9, 1.5)."""
    rng = rng or random.Random()
    low, high = UI_SPEED_RANGE
    return low + (high - low) * rng.random()