"""Window input state and the callbacks that react to it."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Optional, Tuple


class Action(IntEnum):
    """What happened to a key or button."""

    RELEASE = 0
    PRESS = 1
    REPEAT = 2


class Key(IntEnum):
    """Key codes used by the viewer."""

    SPACE = 32
    ESCAPE = 256
    ENTER = 257
    RIGHT = 262
    LEFT = 263
    DOWN = 264
    UP = 265


class MouseButton(IntEnum):
    """Mouse button codes."""

    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


@dataclass(frozen=True)
class KeyData:
    """What a key callback receives about a key event."""

    key: int
    action: Action
    scancode: int = 0
    modifier: int = 0


_Hook = Optional[Tuple[Callable[..., Any], Any]]


def _require_callable(func: Any) -> None:
    if not callable(func):
        raise TypeError(f"hook must be callable, got {func!r}")


@dataclass
class WindowEvents:
    """Keyboard, mouse and window state with the hooks attached to it."""

    width: int = 0
    height: int = 0
    title: str = ""
    x: int = 0
    y: int = 0
    should_close: bool = False
    _keys_down: set = field(default_factory=set, init=False, repr=False)
    _buttons_down: set = field(default_factory=set, init=False, repr=False)
    _cursor: Tuple[float, float] = field(default=(0.0, 0.0), init=False, repr=False)
    _key_hook: _Hook = field(default=None, init=False, repr=False)
    _scroll_hook: _Hook = field(default=None, init=False, repr=False)
    _mouse_hook: _Hook = field(default=None, init=False, repr=False)
    _cursor_hook: _Hook = field(default=None, init=False, repr=False)
    _close_hook: _Hook = field(default=None, init=False, repr=False)
    _resize_hook: _Hook = field(default=None, init=False, repr=False)

    # Keyboard

    def key_hook(self, func: Callable[[KeyData, Any], Any], param: Any) -> None:
        """Call ``func(key_data, param)`` on every key event."""
        _require_callable(func)
        self._key_hook = (func, param)

    def _emit_key(self, key: int, action: Action) -> None:
        if self._key_hook is not None:
            func, param = self._key_hook
            func(KeyData(key, action), param)

    def press_key(self, key: int) -> None:
        """Press a key; pressing a held key repeats it."""
        action = Action.REPEAT if key in self._keys_down else Action.PRESS
        self._keys_down.add(key)
        self._emit_key(key, action)

    def release_key(self, key: int) -> None:
        """Release a key."""
        self._keys_down.discard(key)
        self._emit_key(key, Action.RELEASE)

    def is_key_down(self, key: int) -> bool:
        """Tell whether a key is held."""
        return key in self._keys_down

    # Mouse

    def scroll_hook(self, func: Callable[[float, float, Any], Any], param: Any) -> None:
        """Call ``func(xdelta, ydelta, param)`` on every scroll."""
        _require_callable(func)
        self._scroll_hook = (func, param)

    def scroll(self, xdelta: float, ydelta: float) -> None:
        """Scroll the mouse wheel."""
        if self._scroll_hook is not None:
            func, param = self._scroll_hook
            func(xdelta, ydelta, param)

    def mouse_hook(self, func: Callable[[int, Action, int, Any], Any], param: Any) -> None:
        """Call ``func(button, action, mods, param)`` on every button event."""
        _require_callable(func)
        self._mouse_hook = (func, param)

    def _emit_mouse(self, button: int, action: Action) -> None:
        if self._mouse_hook is not None:
            func, param = self._mouse_hook
            func(button, action, 0, param)

    def press_mouse(self, button: int) -> None:
        """Press a mouse button."""
        self._buttons_down.add(button)
        self._emit_mouse(button, Action.PRESS)

    def release_mouse(self, button: int) -> None:
        """Release a mouse button."""
        self._buttons_down.discard(button)
        self._emit_mouse(button, Action.RELEASE)

    def is_mouse_down(self, button: int) -> bool:
        """Tell whether a mouse button is held."""
        return button in self._buttons_down

    def cursor_hook(self, func: Callable[[float, float, Any], Any], param: Any) -> None:
        """Call ``func(x, y, param)`` whenever the cursor moves."""
        _require_callable(func)
        self._cursor_hook = (func, param)

    def move_cursor(self, x: float, y: float) -> None:
        """Move the cursor to a position inside the window."""
        self._cursor = (float(x), float(y))
        if self._cursor_hook is not None:
            func, param = self._cursor_hook
            func(float(x), float(y), param)

    def get_mouse_pos(self) -> Tuple[int, int]:
        """Return the cursor position truncated to whole pixels."""
        x, y = self._cursor
        return int(x), int(y)

    # Window

    def close_hook(self, func: Callable[[Any], Any], param: Any) -> None:
        """Call ``func(param)`` when the window is asked to close."""
        _require_callable(func)
        self._close_hook = (func, param)

    def request_close(self) -> None:
        """Ask the window to close, as its close button does."""
        self.should_close = True
        if self._close_hook is not None:
            func, param = self._close_hook
            func(param)

    def resize_hook(self, func: Callable[[int, int, Any], Any], param: Any) -> None:
        """Call ``func(width, height, param)`` when the window is resized."""
        _require_callable(func)
        self._resize_hook = (func, param)

    def set_window_size(self, width: int, height: int) -> None:
        """Change the window size, notifying the resize hook on a change."""
        changed = (width, height) != (self.width, self.height)
        self.width = width
        self.height = height
        if changed and self._resize_hook is not None:
            func, param = self._resize_hook
            func(width, height, param)

    def set_window_pos(self, x: int, y: int) -> None:
        """Move the window."""
        self.x = x
        self.y = y

    def get_window_pos(self) -> Tuple[int, int]:
        """Return the window position."""
        return self.x, self.y

    def set_window_title(self, title: str) -> None:
        """Change the window title."""
        if title is None:
            raise TypeError("title must not be None")
        self.title = title