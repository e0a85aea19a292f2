"""Volume selectors of the settings menu and persistence of the settings."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from pathlib import Path

import platformdirs

from skirmish.audio import AudioSettings

APP_NAME = "skirmish"
SETTINGS_FILE = "settings.json"

VOLUME_STEP = 0.1
EPSILON = 1.1920929e-07


class VolumeChannel(enum.Enum):
    """A volume that the settings menu can adjust."""

    MASTER = "master_volume"
    MUSIC = "music_volume"
    UI = "ui_volume"

    @property
    def label(self) -> str:
        return {
            VolumeChannel.MASTER: "Master volume",
            VolumeChannel.MUSIC: "Music volume",
            VolumeChannel.UI: "UI volume",
        }[self]


@dataclass(frozen=True)
class SelectorState:
    """What a volume selector shows: its label and which arrows are disabled."""

    down_disabled: bool
    label: str
    up_disabled: bool


def volume_down(settings: AudioSettings, channel: VolumeChannel) -> float:
    """Lower a volume by one step, not below zero; return the new value."""
    value = max(getattr(settings, channel.value) - VOLUME_STEP, 0.0)
    setattr(settings, channel.value, value)
    return value


def volume_up(settings: AudioSettings, channel: VolumeChannel) -> float:
    """Raise a volume by one step, not above one; return the new value."""
    value = min(getattr(settings, channel.value) + VOLUME_STEP, 1.0)
    setattr(settings, channel.value, value)
    return value


def selector_state(settings: AudioSettings, channel: VolumeChannel) -> SelectorState:
    value = getattr(settings, channel.value)
    return SelectorState(
        down_disabled=value <= EPSILON,
        label=f"{value * 100.0:.0f}%",
        up_disabled=value >= 1.0 - EPSILON,
    )


def default_settings_path() -> Path:
    """The settings file in the local config directory, which is created if needed."""
    directory = Path(platformdirs.user_config_dir(APP_NAME, appauthor=False, roaming=False))
    directory.mkdir(parents=True, exist_ok=True)
    return directory / SETTINGS_FILE


def save_settings(settings: AudioSettings, path: str | Path | None = None) -> Path:
    """Write the settings as JSON and return the path written."""
    target = Path(path) if path is not None else default_settings_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8") as handle:
        json.dump({"audio_settings": settings.to_dict()}, handle, indent=2)
    return target


def load_settings(path: str | Path | None = None) -> AudioSettings:
    """Read saved settings; a missing file gives the defaults."""
    source = Path(path) if path is not None else default_settings_path()
    if not source.exists():
        return AudioSettings()
    with open(source, encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as error:
            raise ValueError(f"malformed settings file {source}: {error}") from error
    if not isinstance(data, dict):
        raise ValueError(f"settings file {source} does not hold an object")
    audio = data.get("audio_settings", {})
    if not isinstance(audio, dict):
        raise ValueError("audio_settings must be an object")
    return AudioSettings.from_dict(audio)