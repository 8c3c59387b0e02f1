"""The window abstraction and the application main loop over a scene stack."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Callable

from bananaengine import input as engine_input
from bananaengine.events import Event, EventDispatcher, WindowCloseEvent, WindowResizeEvent
from bananaengine.keycodes import Key
from bananaengine.layers import Scene, SceneStack
from bananaengine.renderer2d import Renderer2D

log = logging.getLogger(__name__)

EventCallback = Callable[[Event], None]


@dataclass
class WindowProps:
    title: str = "Banana Engine"
    width: int = 1280
    height: int = 720


class Window(ABC):
    """A surface that produces events and presents frames."""

    def __init__(self, props: WindowProps | None = None) -> None:
        props = props if props is not None else WindowProps()
        self.title = props.title
        self.width = props.width
        self.height = props.height

    @abstractmethod
    def poll_events(self) -> None:
        """Deliver pending events to the callback."""

    @abstractmethod
    def swap_buffers(self) -> None:
        """Present the finished frame."""

    @abstractmethod
    def time(self) -> float:
        """Seconds on the window's clock."""

    @abstractmethod
    def set_event_callback(self, callback: EventCallback) -> None:
        """Route every event to ``callback``."""


class HeadlessWindow(Window):
    """Window without a display; events are queued with ``post``."""

    def __init__(self, props: WindowProps | None = None, clock: Callable[[], float] = time.perf_counter) -> None:
        super().__init__(props)
        self._clock = clock
        self._queue: deque[Event] = deque()
        self._callback: EventCallback | None = None
        self.frames_presented = 0

    def post(self, event: Event) -> None:
        """Queue ``event`` for the next ``poll_events``."""
        self._queue.append(event)

    def poll_events(self) -> None:
        while self._queue:
            event = self._queue.popleft()
            if isinstance(event, WindowResizeEvent):
                self.width = event.width
                self.height = event.height
            if self._callback is not None:
                self._callback(event)

    def swap_buffers(self) -> None:
        self.frames_presented += 1

    def time(self) -> float:
        return float(self._clock())

    def set_event_callback(self, callback: EventCallback) -> None:
        self._callback = callback


class DebugToggle:
    """Flips a debug flag on each new press of a key; starts enabled."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._held = False

    def update(self, pressed: bool) -> bool:
        """Feed the key's current state; returns the flag."""
        if pressed and not self._held:
            self.enabled = not self.enabled
        self._held = bool(pressed)
        return self.enabled


class Application:
    """Owns the window, the renderer and the scenes, and runs the frame loop.

    Only one application may exist at a time; ``close`` releases it.
    """

    _instance: Application | None = None

    def __init__(self, window: Window | None = None, renderer: Renderer2D | None = None) -> None:
        if Application._instance is not None:
            raise RuntimeError("Application already exists")
        Application._instance = self
        self.window = window if window is not None else HeadlessWindow(WindowProps("Banana Engine", 720, 1280))
        self.window.set_event_callback(self.on_event)
        self.renderer = renderer if renderer is not None else Renderer2D()
        self.scene_stack = SceneStack()
        self.debug_toggle = DebugToggle()
        self.running = True
        self.minimized = False
        self.viewport = (0, 0, self.window.width, self.window.height)
        self.fb_ids: list[int] = []

    @classmethod
    def instance(cls) -> Application:
        if cls._instance is None:
            raise RuntimeError("no application exists")
        return cls._instance

    def close(self) -> None:
        if Application._instance is self:
            Application._instance = None

    def __enter__(self) -> Application:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def on_event(self, event: Event) -> None:
        dispatcher = EventDispatcher(event)
        dispatcher.dispatch(WindowCloseEvent, self._on_window_close)
        dispatcher.dispatch(WindowResizeEvent, self._on_window_resize)
        for scene in reversed(self.scene_stack):
            scene.on_event(event)
            if event.handled:
                break

    def push_scene(self, scene: Scene) -> None:
        self.scene_stack.push_scene(scene)

    def pop_scene(self, scene: Scene) -> bool:
        return self.scene_stack.pop_scene(scene)

    def _on_window_close(self, event: WindowCloseEvent) -> bool:
        self.running = False
        return True

    def _on_window_resize(self, event: WindowResizeEvent) -> bool:
        if not event.width or not event.height:
            self.minimized = True
            return False
        self.viewport = (0, 0, event.width, event.height)
        for scene in self.scene_stack:
            scene.fb.set_window_dimension(event.width, event.height)
        self.minimized = False
        return False

    def run(self, max_frames: int | None = None) -> int:
        """Run frames until the window closes or ``max_frames`` is reached.

        Returns the number of frames run.
        """
        for scene in self.scene_stack:
            scene.on_attach()
            self.fb_ids.append(scene.fb.color_attachment_id)

        dt = 0.1
        frames = 0
        while self.running and (max_frames is None or frames < max_frames):
            begin = self.window.time()
            self.window.poll_events()
            self.renderer.backend.clear()

            if not self.minimized:
                self.debug_toggle.update(engine_input.is_key_pressed(Key.U))
                for scene in self.scene_stack:
                    scene.fb.bind()
                    scene.on_update(dt)
                    scene.fb.unbind()

            self.window.swap_buffers()
            dt = self.window.time() - begin
            frames += 1

        for scene in self.scene_stack:
            scene.on_detach()
        log.debug("Application finished after %d frames", frames)
        return frames