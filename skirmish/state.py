"""Screen and menu flow: which screen is shown, the menu stack and pausing."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional


class Screen(enum.Enum):
    """A top-level screen of the game; TITLE is the first one shown."""

    TITLE = "title"
    LOADING = "loading"
    GAMEPLAY = "gameplay"


class Menu(enum.Enum):
    """A menu shown over the current screen."""

    MAIN = "main"
    INTRO = "intro"
    PAUSE = "pause"
    SETTINGS = "settings"


class MenuStack:
    """A stack of open menus; the top one is shown.

    Menus below an acquired base cannot be popped or cleared until the base
    is released.
    """

    def __init__(self) -> None:
        self._stack: list[Menu] = []
        self._bases: list[int] = []

    @property
    def _base(self) -> int:
        return self._bases[-1] if self._bases else 0

    def push(self, menu: Menu) -> None:
        self._stack.append(menu)

    def pop(self) -> Optional[Menu]:
        """Remove and return the top menu, or None if nothing above the base is open."""
        if len(self._stack) > self._base:
            return self._stack.pop()
        return None

    def clear(self) -> list[Menu]:
        """Close every menu above the base and return the closed menus."""
        base = self._base
        closed = self._stack[base:]
        self._stack = self._stack[:base]
        return closed

    def current(self) -> Optional[Menu]:
        """The menu that is shown, or None when no menu is open."""
        return self._stack[-1] if self._stack else None

    def acquire(self) -> None:
        """Protect the menus currently open from pop and clear."""
        self._bases.append(len(self._stack))

    def release(self) -> None:
        """Undo the most recent acquire."""
        if self._bases:
            self._bases.pop()

    def __len__(self) -> int:
        return len(self._stack)


@dataclass
class GameFlow:
    """The active screen, its open menus and how long the screen has been shown."""

    screen: Optional[Screen] = None
    menus: MenuStack = field(default_factory=MenuStack)
    screen_time: float = 0.0

    @property
    def paused(self) -> bool:
        """The game is paused whenever a menu is open."""
        return self.menus.current() is not None

    def enter_screen(self, screen: Screen) -> None:
        """Leave the current screen (if any) and enter ``screen``.

        Entering the screen already shown restarts it.
        """
        if self.screen is not None:
            self.menus.release()
            self.menus.clear()
            self.screen_time = 0.0
        self.screen = screen
        if screen is Screen.TITLE:
            self.menus.push(Menu.MAIN)
            self.menus.acquire()

    def open_menu(self, menu: Menu) -> None:
        self.menus.push(menu)

    def back(self) -> Optional[Menu]:
        """Close the top menu and return it; None if it could not be closed."""
        return self.menus.pop()

    def close_menu(self) -> None:
        """Close all menus that can be closed."""
        self.menus.clear()

    def tick(self, dt: float) -> float:
        """Advance the time spent on the current screen and return it."""
        if self.screen is not None:
            self.screen_time += dt
        return self.screen_time


@dataclass
class LoadingTracker:
    """Watches loading progress and reports when loading has finished."""

    last_done: int = 0

    def update(self, done: int, total: int) -> bool:
        """Record progress; True when it changed and everything is now loaded."""
        if done == self.last_done:
            return False
        self.last_done = done
        return done == total


def next_screen_after_intro(done: int, total: int) -> Screen:
    """The screen that starting the game leads to, given the loading progress."""
    return Screen.GAMEPLAY if done >= total else Screen.LOADING