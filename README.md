# skirmish

A small 2D arena shooter built on pygame. You control a green fighter inside
a walled play area that has four floating platforms. Enemies spawn every two
seconds, up to 25 at once, and you shoot at them with the mouse. The game
also has a title screen, a loading screen, main, intro, pause and settings
menus, and fade transitions between screens.

## Installing

```
pip install .
```

This installs `pygame` and `platformdirs` as well.

## Playing

```
skirmish
```

Options:

- `--assets DIR`: the directory that holds fonts, sounds and configuration
  files. The default is `assets`.
- `--settings FILE`: the file where the volume settings are stored. The
  default is `settings.json` in your local user configuration directory.
  The directory is created if it does not exist.

Controls:

| Action            | Input                           |
|-------------------|---------------------------------|
| Move left / right | `A` / `D` (hold)                |
| Jump              | `Space`                         |
| Shoot             | Left mouse button (hold)        |
| Pause             | `P` or `Escape` during gameplay |
| Close pause menu  | `P`                             |
| Back in menus     | `Escape`                        |

The Settings menu changes the master, music and UI volume in steps of 10%,
between 0% and 100%. Every change is written to the settings file as JSON,
and the game reads that file again the next time it starts. If the file is
missing or malformed, the game uses the defaults: master volume 50%, music
volume 0% and UI volume 50%.

### Optional asset files

Everything under `--assets` is optional:

- `config/window.json` sets the window. It holds `title`, `window_mode`
  (`windowed`, `borderless_fullscreen` or `fullscreen`) and `present_mode`
  (`auto_vsync`, `auto_no_vsync`, `fifo` or `immediate`).
- `config/theme.json` sets the palette. It holds `{"colors": [...]}` with 11
  RGB or RGBA colours, one for each `ThemeColor` in declaration order.
- The fonts under `font/` and the `.ogg` music and sound effects under
  `audio/` are loaded when they are present.

If a font is missing, pygame's default font is used instead. If a sound file
is missing, that sound does not play.

## Using the pieces

The game logic lives in small modules, and you can use each of them without
opening a window:

- `skirmish.gameplay`: `GameWorld` holds the player, enemies and bullets. It
  has the methods `jump`, `move_left`, `move_right`, `attack`, `can_collide`
  and `update`. The module also has `Timer`, `Body`, `Bullet` and
  `cursor_to_world`.
- `skirmish.state`: the `Screen` and `Menu` enums, `MenuStack`, `GameFlow`,
  `LoadingTracker` and `next_screen_after_intro`.
- `skirmish.fade`: the `FadeIn` and `FadeOut` overlays. Their `update(dt)`
  returns the overlay alpha for the frame.
- `skirmish.camera`: `SmoothFollow`, `zoom_scale` and `absolute_scale`.
- `skirmish.text`: `parse_rich` and `parse_rich_custom` turn strings such as
  `"[b]Settings"` into `TextSection`s. `DynamicFontSize` computes a font size
  from the layout.
- `skirmish.ui`: layout values. `Val` is a length that `resolve` turns into
  pixels. The module also has the `Node` presets, `GridAlignment` and
  `NodeOffset`.
- `skirmish.theme`: `ThemeColor`, `ThemeColorList` and `ThemeConfig`.
- `skirmish.interaction`: `InteractionTheme`, `Previous` and `Backup`.
- `skirmish.audio` and `skirmish.settings`: `AudioSettings`,
  `volume_up`, `volume_down`, `selector_state`, `save_settings` and
  `load_settings`.
- `skirmish.app`: `Game` (with `handle_event`, `update` and `draw`) and
  `main`.

This example parses a rich-text string:

```python
from skirmish.text import parse_rich

sections = parse_rich("hello [b]world")
print([s.value for s in sections])   # ['hello ', 'world']
```

This example runs the world for one second and fires a shot:

```python
from skirmish.gameplay import GameWorld

world = GameWorld()
world.update(1.0)
bullet = world.attack((100.0, 0.0))
print(bullet is not None, len(world.enemies))
```

## What it does not do

- Enemies do not move, chase or shoot. They spawn at one fixed spot and
  take damage from your bullets. Health drops to zero, but nothing is
  removed, and the game has no game-over screen.
- Assets are not loaded in the background. The loading screen shows a
  progress value that `Game` receives (by default, already complete), so it
  moves straight on to gameplay.
- It has no developer tools, such as debug overlays, an editor window or
  hot reloading.

## Running the tests

```
pip install .[test]
pytest
```