"""The game window: screens, menus, widgets and the main loop."""

from __future__ import annotations

import argparse
import enum
import json
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence

import pygame

from skirmish import audio as audio_mod
from skirmish.audio import AudioSettings, ui_playback_speed
from skirmish.camera import WINDOW_HEIGHT, WINDOW_WIDTH, zoom_scale
from skirmish.fade import FadeIn, FadeOut
from skirmish.gameplay import (
    CROSSHAIR_COLOR,
    CROSSHAIR_SIZE,
    GameWorld,
    cursor_to_world,
)
from skirmish.interaction import Interaction, InteractionTheme
from skirmish.settings import (
    VolumeChannel,
    load_settings,
    save_settings,
    selector_state,
    volume_down,
    volume_up,
)
from skirmish.state import (
    GameFlow,
    LoadingTracker,
    Menu,
    Screen,
    next_screen_after_intro,
)
from skirmish.text import BOLD_FONT, THICK_FONT, DynamicFontSize, parse_rich
from skirmish.theme import (
    SFX_CLICK,
    SFX_HOVER,
    ThemeColor,
    ThemeColorList,
    ThemeConfig,
)
from skirmish.ui import Val

Color = tuple[float, float, float, float]

DEFAULT_PALETTE = ThemeColorList.from_colors(
    [
        (1.0, 1.0, 1.0, 1.0),
        (0.0, 0.0, 0.0, 0.0),
        (0.157, 0.157, 0.157, 1.0),
        (0.9, 0.9, 0.9, 1.0),
        (0.25, 0.45, 0.75, 1.0),
        (0.32, 0.55, 0.85, 1.0),
        (0.2, 0.36, 0.6, 1.0),
        (0.35, 0.35, 0.4, 1.0),
        (1.0, 1.0, 1.0, 1.0),
        (0.1, 0.1, 0.12, 1.0),
        (0.0, 0.0, 0.0, 0.6),
    ]
)

BUTTON_COLORS: InteractionTheme[ThemeColor] = InteractionTheme(
    none=ThemeColor.PRIMARY,
    hovered=ThemeColor.PRIMARY_HOVERED,
    pressed=ThemeColor.PRIMARY_PRESSED,
    disabled=ThemeColor.PRIMARY_DISABLED,
)
BUTTON_OFFSETS: InteractionTheme[Val] = InteractionTheme(
    none=Val.ZERO, hovered=Val.vw(-0.5), pressed=Val.vw(0.5), disabled=Val.ZERO
)


class WindowMode(enum.Enum):
    WINDOWED = "windowed"
    BORDERLESS_FULLSCREEN = "borderless_fullscreen"
    FULLSCREEN = "fullscreen"


class PresentMode(enum.Enum):
    AUTO_VSYNC = "auto_vsync"
    AUTO_NO_VSYNC = "auto_no_vsync"
    FIFO = "fifo"
    IMMEDIATE = "immediate"


@dataclass(frozen=True)
class WindowConfig:
    """Window title and display modes, loaded from ``config/window.json``."""

    title: str = "skirmish"
    window_mode: WindowMode = WindowMode.WINDOWED
    present_mode: PresentMode = PresentMode.AUTO_VSYNC

    FILE = "window.json"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> WindowConfig:
        fields = {"title", "window_mode", "present_mode"}
        unknown = set(data) - fields
        if unknown:
            raise ValueError(f"unknown window config fields: {sorted(unknown)}")
        missing = fields - set(data)
        if missing:
            raise ValueError(f"window config is missing: {sorted(missing)}")
        return cls(
            title=str(data["title"]),
            window_mode=WindowMode(data["window_mode"]),
            present_mode=PresentMode(data["present_mode"]),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "title": self.title,
            "window_mode": self.window_mode.value,
            "present_mode": self.present_mode.value,
        }

    @classmethod
    def load(cls, path: str | Path) -> WindowConfig:
        with open(path, encoding="utf-8") as handle:
            return cls.from_dict(json.load(handle))


class AudioOutput(Protocol):
    def play_music(self, path: str, volume: float) -> None: ...

    def set_music_volume(self, volume: float) -> None: ...

    def play_sfx(self, path: str, volume: float, speed: float) -> None: ...


@dataclass
class Button:
    label: str
    width: Val
    height: Val
    font_size: Val
    action: Callable[[], None]
    disabled: bool = False


@dataclass
class Row:
    buttons: list[Button]
    middle: str = ""
    middle_width: Val = Val.ZERO


@dataclass
class _Placed:
    key: tuple[int, int]
    button: Button
    rect: pygame.Rect


def _small(label: str, action: Callable[[], None], disabled: bool = False) -> Button:
    return Button(label, Val.vw(3.0), Val.vw(4.0), Val.vw(3.0), action, disabled)


def _button(label: str, action: Callable[[], None]) -> Button:
    return Button(label, Val.vw(30.0), Val.vw(7.0), Val.vw(3.0), action)


def _wide(label: str, action: Callable[[], None]) -> Button:
    return Button(label, Val.vw(38.0), Val.vw(7.0), Val.vw(3.0), action)


def _big(label: str, action: Callable[[], None]) -> Button:
    return Button(label, Val.vw(38.0), Val.vw(10.0), Val.vw(4.0), action)


def _rgb(color: Color) -> tuple[int, int, int]:
    return tuple(round(min(max(c, 0.0), 1.0) * 255) for c in color[:3])  # type: ignore[return-value]


class Game:
    """Ties screens, menus, fades and gameplay together for one window."""

    def __init__(
        self,
        size: tuple[int, int] = (int(WINDOW_WIDTH), int(WINDOW_HEIGHT)),
        settings: Optional[AudioSettings] = None,
        palette: ThemeColorList = DEFAULT_PALETTE,
        audio: Optional[AudioOutput] = None,
        settings_path: Optional[Path] = None,
        assets: Optional[Path] = None,
        progress: tuple[int, int] = (1, 1),
        web: bool = False,
    ) -> None:
        self.size = size
        self.settings = settings or AudioSettings()
        self.palette = palette
        self.audio = audio
        self.settings_path = settings_path
        self.assets = assets
        self.progress = progress
        self.web = web
        self.running = True
        self.flow = GameFlow()
        self.world: Optional[GameWorld] = None
        self.fade_in: Optional[FadeIn] = None
        self.fade_out: Optional[FadeOut] = None
        self.loading = LoadingTracker()
        self.mouse: tuple[float, float] = (0.0, 0.0)
        self._held: set[int] = set()
        self._mouse_held = False
        self._pressed_key: Optional[tuple[int, int]] = None
        self._hovered_key: Optional[tuple[int, int]] = None
        self._fonts: dict[tuple[str, int], pygame.font.Font] = {}
        self._rng = random.Random()
        self._enter(Screen.TITLE)

    # Flow ------------------------------------------------------------------

    def _enter(self, screen: Screen) -> None:
        self.flow.enter_screen(screen)
        self.world = GameWorld() if screen is Screen.GAMEPLAY else None
        self.loading = LoadingTracker()
        self.fade_in = FadeIn()
        self.fade_out = None
        self._pressed_key = None
        if self.audio is not None:
            music = {
                Screen.TITLE: audio_mod.MUSIC_TITLE,
                Screen.GAMEPLAY: audio_mod.MUSIC_GAMEPLAY,
            }.get(screen)
            if music is not None:
                self.audio.play_music(music, self.settings.effective_music_volume())

    def _start_fade_out(self, screen: Screen) -> None:
        self.fade_out = FadeOut(screen)

    def _quit(self) -> None:
        if not self.web:
            self.running = False

    def _change_volume(self, channel: VolumeChannel, up: bool) -> None:
        (volume_up if up else volume_down)(self.settings, channel)
        if self.audio is not None:
            self.audio.set_music_volume(self.settings.effective_music_volume())
        if self.settings_path is not None:
            save_settings(self.settings, self.settings_path)

    def _start_game(self) -> None:
        done, total = self.progress
        self._start_fade_out(next_screen_after_intro(done, total))

    # Widgets ---------------------------------------------------------------

    def _header(self) -> str:
        return {
            Menu.MAIN: "[b]skirmish",
            Menu.INTRO: "[b]How to play",
            Menu.PAUSE: "[b]Game paused",
            Menu.SETTINGS: "[b]Settings",
            None: "[b]Loading..." if self.flow.screen is Screen.LOADING else "",
        }[self.flow.menus.current()]

    def _rows(self) -> list[Row]:
        menu = self.flow.menus.current()
        if menu is Menu.MAIN:
            quit_button = _big("Quit", self._quit)
            quit_button.disabled = self.web
            return [
                Row([_big("Play", lambda: self.flow.open_menu(Menu.INTRO))]),
                Row([_big("Settings", lambda: self.flow.open_menu(Menu.SETTINGS))]),
                Row([quit_button]),
            ]
        if menu is Menu.INTRO:
            return [Row([_button("Back", self.flow.back), _button("Start", self._start_game)])]
        if menu is Menu.PAUSE:
            return [
                Row([_wide("Continue", self.flow.close_menu)]),
                Row([_wide("Restart", lambda: self._start_fade_out(Screen.GAMEPLAY))]),
                Row([_wide("Settings", lambda: self.flow.open_menu(Menu.SETTINGS))]),
                Row([_wide("Quit to title", lambda: self._start_fade_out(Screen.TITLE))]),
            ]
        if menu is Menu.SETTINGS:
            rows = []
            for channel in VolumeChannel:
                state = selector_state(self.settings, channel)
                rows.append(
                    Row(
                        [
                            _small("<", lambda c=channel: self._change_volume(c, False), state.down_disabled),
                            _small(">", lambda c=channel: self._change_volume(c, True), state.up_disabled),
                        ],
                        middle=f"{channel.label}: {state.label}",
                        middle_width=Val.vw(30.0),
                    )
                )
            rows.append(Row([_wide("Back", self.flow.back)]))
            return rows
        return []

    def _layout(self) -> list[_Placed]:
        width, height = self.size
        viewport = (float(width), float(height))
        gap = Val.vw(2.5).resolve(width, viewport)
        placed = []
        y = height * 0.3
        for row_index, row in enumerate(self._rows()):
            sizes = [
                (b.width.resolve(width, viewport), b.height.resolve(width, viewport))
                for b in row.buttons
            ]
            middle = row.middle_width.resolve(width, viewport)
            row_width = sum(w for w, _ in sizes) + gap * (len(sizes) - 1) + middle
            row_height = max(h for _, h in sizes)
            x = (width - row_width) / 2.0
            for index, (button, (w, h)) in enumerate(zip(row.buttons, sizes)):
                rect = pygame.Rect(round(x), round(y + (row_height - h) / 2.0), round(w), round(h))
                placed.append(_Placed((row_index, index), button, rect))
                x += w + gap
                if index == 0 and middle:
                    x += middle
            y += row_height + gap
        return placed

    def _button_at(self, pos: tuple[float, float]) -> Optional[_Placed]:
        return next((p for p in self._layout() if p.rect.collidepoint(pos)), None)

    def _interaction(self, placed: _Placed) -> Interaction:
        if placed.key != self._hovered_key:
            return Interaction.NONE
        return Interaction.PRESSED if self._pressed_key == placed.key else Interaction.HOVERED

    # Events ----------------------------------------------------------------

    def handle_event(self, event: pygame.event.Event) -> bool:
        """React to one input event; return True if it was used."""
        if event.type == pygame.QUIT:
            self.running = False
            return True
        if event.type == pygame.VIDEORESIZE:
            self.size = (event.w, event.h)
            return True
        if event.type == pygame.MOUSEMOTION:
            self.mouse = event.pos
            hovered = self._button_at(event.pos)
            key = hovered.key if hovered else None
            if key != self._hovered_key and hovered and not hovered.button.disabled:
                self._play_sfx(SFX_HOVER)
            self._hovered_key = key
            return True
        if event.type == pygame.KEYUP:
            self._held.discard(event.key)
            return True
        if event.type == pygame.KEYDOWN:
            self._held.add(event.key)
            return self._handle_key(event.key)
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.mouse = event.pos
            self._mouse_held = True
            if self.fade_out is not None:
                return True
            target = self._button_at(event.pos)
            self._pressed_key = target.key if target else None
            return target is not None or self.world is not None
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.mouse = event.pos
            self._mouse_held = False
            pressed, self._pressed_key = self._pressed_key, None
            if self.fade_out is not None:
                return True
            target = self._button_at(event.pos)
            if target is None or target.key != pressed or target.button.disabled:
                return False
            self._play_sfx(SFX_CLICK)
            target.button.action()
            return True
        return False

    def _handle_key(self, key: int) -> bool:
        if self.fade_out is not None:
            return False
        if self.flow.menus.current() is not None:
            if key == pygame.K_ESCAPE:
                self.flow.back()
                return True
            if key == pygame.K_p and self.flow.screen is Screen.GAMEPLAY:
                self.flow.close_menu()
                return True
            return False
        if self.flow.screen is Screen.GAMEPLAY:
            if key in (pygame.K_ESCAPE, pygame.K_p):
                self.flow.open_menu(Menu.PAUSE)
                return True
            if key == pygame.K_SPACE and self.world is not None:
                self.world.jump()
                return True
        return False

    def _play_sfx(self, path: str) -> None:
        if self.audio is not None:
            self.audio.play_sfx(path, self.settings.effective_ui_volume(), ui_playback_speed(self._rng))

    # Frame -----------------------------------------------------------------

    def _world_scale(self) -> float:
        return zoom_scale(self.size[0], self.size[1])

    def update(self, dt: float) -> None:
        """Advance the game by ``dt`` seconds."""
        self.flow.tick(dt)

        if self.flow.screen is Screen.LOADING and self.fade_out is None:
            if self.loading.update(*self.progress):
                self._start_fade_out(Screen.GAMEPLAY)

        world = self.world
        if world is not None:
            world.paused = self.flow.paused
            world.mouse_position = cursor_to_world(
                self.mouse, (float(self.size[0]), float(self.size[1])), scale=self._world_scale()
            )
            if not world.paused and self.fade_out is None:
                if pygame.K_a in self._held:
                    world.move_left(dt)
                if pygame.K_d in self._held:
                    world.move_right(dt)
                if self._mouse_held:
                    world.attack()
            world.update(dt)

        if self.fade_in is not None:
            self._fade_in_alpha = self.fade_in.update(dt)
            if self.fade_in.finished:
                self.fade_in = None
        if self.fade_out is not None:
            self._fade_out_alpha = self.fade_out.update(dt)
            if self.fade_out.finished:
                self._enter(self.fade_out.to_screen)

    def _font(self, font_path: str, size: int) -> pygame.font.Font:
        if not pygame.font.get_init():
            pygame.font.init()
        key = (font_path, size)
        if key not in self._fonts:
            file = self.assets / font_path if self.assets is not None else None
            if file is not None and file.exists():
                font = pygame.font.Font(str(file), size)
            else:
                font = pygame.font.Font(None, size)
                font.set_bold(font_path in (BOLD_FONT, THICK_FONT))
            self._fonts[key] = font
        return self._fonts[key]

    def _draw_text(
        self, surface: pygame.Surface, text: str, size: Val, color: ThemeColor, center: tuple[float, float]
    ) -> None:
        width, height = self.size
        px = int(DynamicFontSize(size).with_step(8.0).resolve(width, (float(width), float(height))))
        rgb = _rgb(self.palette[color])
        images = [self._font(s.style.font, px).render(s.value, True, rgb) for s in parse_rich(text)]
        if not images:
            return
        total = sum(i.get_width() for i in images)
        x = center[0] - total / 2.0
        for image in images:
            surface.blit(image, (round(x), round(center[1] - image.get_height() / 2.0)))
            x += image.get_width()

    def _overlay(self, surface: pygame.Surface, color: Color, alpha: float) -> None:
        layer = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        layer.fill((*_rgb(color), round(min(max(alpha, 0.0), 1.0) * 255)))
        surface.blit(layer, (0, 0))

    def draw(self, surface: pygame.Surface) -> None:
        """Render the current frame onto ``surface``."""
        self.size = surface.get_size()
        width, height = self.size
        surface.fill(_rgb(self.palette[ThemeColor.BODY]))

        if self.world is not None:
            self._draw_world(surface)
            if self.flow.paused:
                overlay = self.palette[ThemeColor.OVERLAY]
                self._overlay(surface, overlay, overlay[3])

        if self.flow.screen is Screen.LOADING:
            self._draw_loading_bar(surface)

        header = self._header()
        if header:
            self._draw_text(surface, header, Val.vw(5.0), ThemeColor.BODY_TEXT, (width / 2.0, height * 0.15))
        if self.flow.menus.current() is Menu.INTRO:
            for i, line in enumerate(["Be skillful,", "win the game!", "Press P to pause."]):
                self._draw_text(surface, line, Val.vw(3.5), ThemeColor.BODY_TEXT, (width / 2.0, height * 0.55 + i * width * 0.05))

        rows = self._rows()
        for placed in self._layout():
            button = placed.button
            current = self._interaction(placed)
            color = BUTTON_COLORS.select(Interaction.NONE, current, button.disabled)
            offset = BUTTON_OFFSETS.select(Interaction.NONE, current, button.disabled)
            dy = offset.resolve(width, (float(width), float(height))) if offset else 0.0
            rect = placed.rect.move(0, round(dy))
            radius = rect.height // 2
            pygame.draw.rect(surface, (0, 0, 0), rect.move(0, round(width * 0.007)), border_radius=radius)
            pygame.draw.rect(surface, _rgb(self.palette[color or ThemeColor.PRIMARY]), rect, border_radius=radius)
            self._draw_text(surface, button.label, button.font_size, ThemeColor.PRIMARY_TEXT, rect.center)
            row = rows[placed.key[0]]
            if row.middle and placed.key[1] == 0:
                middle = row.middle_width.resolve(width, (float(width), float(height)))
                gap = width * 0.025
                self._draw_text(surface, row.middle, Val.vw(2.5), ThemeColor.BODY_TEXT, (rect.right + gap / 2.0 + middle / 2.0, rect.centery))

        if self.fade_in is not None:
            self._overlay(surface, self.palette[ThemeColor.BODY], getattr(self, "_fade_in_alpha", 1.0))
        if self.fade_out is not None:
            self._overlay(surface, self.palette[ThemeColor.BODY], getattr(self, "_fade_out_alpha", 0.0))

    def _to_screen(self, pos: tuple[float, float]) -> tuple[float, float]:
        width, height = self.size
        scale = self._world_scale()
        return width / 2.0 + pos[0] / scale, height / 2.0 - pos[1] / scale

    def _draw_rect(self, surface: pygame.Surface, pos, size, color: Color) -> None:
        scale = self._world_scale()
        w, h = size[0] / scale, size[1] / scale
        x, y = self._to_screen(pos)
        rect = pygame.Rect(round(x - w / 2.0), round(y - h / 2.0), max(1, round(w)), max(1, round(h)))
        if color[3] >= 1.0:
            pygame.draw.rect(surface, _rgb(color), rect)
        else:
            layer = pygame.Surface(rect.size, pygame.SRCALPHA)
            layer.fill((*_rgb(color), round(color[3] * 255)))
            surface.blit(layer, rect.topleft)

    def _draw_world(self, surface: pygame.Surface) -> None:
        world = self.world
        assert world is not None
        for body in world.bodies:
            self._draw_rect(surface, body.position, body.size, body.color)
        for bullet in world.bullets:
            self._draw_rect(surface, bullet.position, bullet.size, bullet.color)
        self._draw_rect(surface, world.crosshair, CROSSHAIR_SIZE, CROSSHAIR_COLOR)

    def _draw_loading_bar(self, surface: pygame.Surface) -> None:
        width, height = self.size
        bar = pygame.Rect(0, 0, round(width * 0.6), round(width * 0.04))
        bar.center = (width // 2, height // 2)
        pygame.draw.rect(surface, _rgb(self.palette[ThemeColor.BODY_TEXT]), bar, max(1, round(width * 0.005)))
        done, total = self.progress
        fraction = done / total if total else 1.0
        inner = bar.inflate(-round(width * 0.02), -round(width * 0.02))
        inner.width = round(inner.width * fraction)
        pygame.draw.rect(surface, _rgb(self.palette[ThemeColor.PRIMARY]), inner)


class _MixerAudio:
    def __init__(self, assets: Path) -> None:
        self.assets = assets
        self._sounds: dict[str, pygame.mixer.Sound] = {}

    def play_music(self, path: str, volume: float) -> None:
        file = self.assets / path
        if file.exists():
            pygame.mixer.music.load(str(file))
            pygame.mixer.music.set_volume(volume)
            pygame.mixer.music.play(-1)

    def set_music_volume(self, volume: float) -> None:
        pygame.mixer.music.set_volume(volume)

    def play_sfx(self, path: str, volume: float, speed: float) -> None:
        file = self.assets / path
        if not file.exists():
            return
        sound = self._sounds.get(path)
        if sound is None:
            sound = self._sounds[path] = pygame.mixer.Sound(str(file))
        sound.set_volume(volume)
        sound.play()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the game window and run until it is closed."""
    parser = argparse.ArgumentParser(prog="skirmish")
    parser.add_argument("--assets", type=Path, default=Path("assets"))
    parser.add_argument("--settings", type=Path, default=None)
    args = parser.parse_args(argv)

    pygame.init()
    config_dir = args.assets / "config"
    window_file = config_dir / WindowConfig.FILE
    window = WindowConfig.load(window_file) if window_file.exists() else WindowConfig()
    theme_file = config_dir / ThemeConfig.FILE
    palette = ThemeConfig.load(theme_file).colors if theme_file.exists() else DEFAULT_PALETTE

    flags = pygame.RESIZABLE
    if window.window_mode is WindowMode.FULLSCREEN:
        flags = pygame.FULLSCREEN
    elif window.window_mode is WindowMode.BORDERLESS_FULLSCREEN:
        flags = pygame.NOFRAME | pygame.FULLSCREEN
    vsync = 1 if window.present_mode in (PresentMode.AUTO_VSYNC, PresentMode.FIFO) else 0
    screen = pygame.display.set_mode((int(WINDOW_WIDTH), int(WINDOW_HEIGHT)), flags, vsync=vsync)
    pygame.display.set_caption(window.title)

    audio: Optional[AudioOutput] = None
    try:
        pygame.mixer.init()
        audio = _MixerAudio(args.assets)
    except pygame.error:
        audio = None

    settings_path = args.settings
    try:
        settings = load_settings(settings_path)
    except ValueError:
        settings = AudioSettings()
    game = Game(
        size=screen.get_size(),
        settings=settings,
        palette=palette,
        audio=audio,
        settings_path=settings_path,
        assets=args.assets,
    )
    if settings_path is None:
        from skirmish.settings import default_settings_path

        game.settings_path = default_settings_path()

    clock = pygame.time.Clock()
    try:
        while game.running:
            dt = clock.tick(60) / 1000.0
            for event in pygame.event.get():
                game.handle_event(event)
            game.update(dt)
            game.draw(screen)
            pygame.display.flip()
    finally:
        pygame.quit()
    return 0