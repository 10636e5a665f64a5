"""A headless window that owns images, a render queue and loop hooks."""

from __future__ import annotations

import math
import time
from enum import IntEnum
from typing import Any, Callable

from .canvas import DrawCall, Image, Instance, sort_render_queue
from .events import WindowEvents


class Setting(IntEnum):
    """Options read when a window is created."""

    STRETCH_IMAGE = 0
    FULLSCREEN = 1
    MAXIMIZED = 2
    DECORATED = 3
    HEADLESS = 4


_settings: dict[Setting, int] = {
    Setting.STRETCH_IMAGE: False,
    Setting.FULLSCREEN: False,
    Setting.MAXIMIZED: False,
    Setting.DECORATED: True,
    Setting.HEADLESS: False,
}


def set_setting(setting: int, value: int) -> None:
    """Change a setting for windows created from now on."""
    try:
        key = Setting(setting)
    except ValueError:
        raise ValueError(f"invalid setting: {setting!r}") from None
    _settings[key] = int(value)


def _divide(numerator: float, denominator: float) -> float:
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator)


class Mlx:
    """A window with its images, draw calls and per-frame hooks."""

    def __init__(self, width: int, height: int, title: str, resize: bool) -> None:
        if title is None:
            raise TypeError("title must not be None")
        if width <= 0:
            raise ValueError("Window width must be positive")
        if height <= 0:
            raise ValueError("Window height must be positive")
        self.settings: dict[Setting, int] = dict(_settings)
        self.events = WindowEvents(width=width, height=height, title=title)
        self.resizable = bool(resize)
        self.visible = not self.settings[Setting.HEADLESS]
        self.initial_width = width
        self.initial_height = height
        self.images: list[Image] = []
        self.render_queue: list[DrawCall] = []
        self.hooks: list[tuple[Callable[[Any], Any], Any]] = []
        self.zdepth = 0
        self.delta_time = 0.0
        self.frames = 0
        self.projection: list[float] = []
        self.terminated = False
        self._sort_queue = False
        self._start = time.monotonic()

    @property
    def width(self) -> int:
        """Current window width."""
        return self.events.width

    @property
    def height(self) -> int:
        """Current window height."""
        return self.events.height

    def _check_alive(self) -> None:
        if self.terminated:
            raise RuntimeError("window has been terminated")

    def new_image(self, width: int, height: int) -> Image:
        """Create a blank image owned by this window."""
        self._check_alive()
        image = Image(width, height)
        self.images.insert(0, image)
        return image

    def image_to_window(self, image: Image, x: int, y: int) -> int:
        """Place a new instance of ``image`` at ``(x, y)``; return its index."""
        self._check_alive()
        if image is None:
            raise TypeError("image must not be None")
        image.instances.append(Instance(x, y, self.zdepth))
        self.zdepth += 1
        index = image.count - 1
        self.render_queue.insert(0, DrawCall(image, index))
        self._sort_queue = True
        return index

    def delete_image(self, image: Image) -> None:
        """Remove an image and every draw call that refers to it."""
        self._check_alive()
        if image is None:
            raise TypeError("image must not be None")
        self.render_queue = [c for c in self.render_queue if c.image is not image]
        for position, owned in enumerate(self.images):
            if owned is image:
                del self.images[position]
                break

    def set_instance_depth(self, instance: Instance, depth: int) -> None:
        """Change the depth of an instance; the queue is re-sorted lazily."""
        if instance is None:
            raise TypeError("instance must not be None")
        if instance.z == depth:
            return
        instance.z = depth
        self._sort_queue = True

    def loop_hook(self, func: Callable[[Any], Any], param: Any) -> bool:
        """Run ``func(param)`` once per frame, after the hooks added before."""
        self._check_alive()
        if not callable(func):
            raise TypeError(f"hook must be callable, got {func!r}")
        self.hooks.append((func, param))
        return True

    def _update_matrix(self) -> None:
        depth = float(self.zdepth)
        stretch = self.settings[Setting.STRETCH_IMAGE]
        width = float(self.initial_width if stretch else self.width)
        height = float(self.initial_height if stretch else self.height)
        self.projection = [
            _divide(2.0, width), 0.0, 0.0, 0.0,
            0.0, _divide(2.0, -height), 0.0, 0.0,
            0.0, 0.0, _divide(-2.0, depth - -depth), 0.0,
            -1.0, -_divide(height, -height),
            -_divide(depth + -depth, depth - -depth), 1.0,
        ]

    def _run_hooks(self) -> None:
        for func, param in list(self.hooks):
            if self.events.should_close:
                break
            func(param)

    def render_order(self) -> list[DrawCall]:
        """Return the draw calls that would be drawn, back to front."""
        if self._sort_queue:
            self._sort_queue = False
            self.render_queue = sort_render_queue(self.render_queue)
        return [
            call for call in self.render_queue
            if call.image.enabled and call.instance.enabled
        ]

    def loop(self) -> None:
        """Run frames until the window is asked to close."""
        self._check_alive()
        old_start = 0.0
        while not self.events.should_close:
            start = time.monotonic() - self._start
            self.delta_time = start - old_start
            old_start = start
            if self.width > 1 or self.height > 1:
                self._update_matrix()
            self._run_hooks()
            self.render_order()
            self.frames += 1

    def close_window(self) -> None:
        """Make the loop stop after the current frame."""
        self.events.should_close = True

    def terminate(self) -> None:
        """Release every hook, draw call and image of the window."""
        self._check_alive()
        self.hooks.clear()
        self.render_queue.clear()
        self.images.clear()
        self.terminated = True