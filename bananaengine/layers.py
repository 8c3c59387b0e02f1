"""Layers, scenes and the ordered stacks that hold them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Iterator, TypeVar

from bananaengine.camera import Camera
from bananaengine.events import Event, EventDispatcher, WindowResizeEvent
from bananaengine.renderer2d import Framebuffer, Renderer2D

DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 720

T = TypeVar("T")


class Layer(ABC):
    """A slice of a scene that is attached, updated and given events."""

    def __init__(self, name: str = "Layer") -> None:
        self.name = name

    @abstractmethod
    def on_attach(self) -> None:
        """Called once when the owning scene is attached."""

    @abstractmethod
    def on_detach(self) -> None:
        """Called once when the owning scene is detached."""

    @abstractmethod
    def on_update(self, dt: float) -> None:
        """Advance by ``dt`` seconds and draw."""

    @abstractmethod
    def on_event(self, event: Event) -> None:
        """React to ``event``; set ``event.handled`` to stop propagation."""


class _Stack(Generic[T]):
    def __init__(self) -> None:
        self._items: list[T] = []

    def _push_front(self, item: T) -> None:
        self._items.insert(0, item)

    def _remove(self, item: T) -> bool:
        for index, current in enumerate(self._items):
            if current is item:
                del self._items[index]
                return True
        return False

    def __iter__(self) -> Iterator[T]:
        return iter(tuple(self._items))

    def __reversed__(self) -> Iterator[T]:
        return reversed(tuple(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: object) -> bool:
        return any(current is item for current in self._items)


class LayerStack(_Stack[Layer]):
    """Layers pushed in front of earlier layers; overlays go after all of them."""

    def push_layer(self, layer: Layer) -> None:
        self._push_front(layer)

    def push_overlay(self, overlay: Layer) -> None:
        self._items.append(overlay)

    def pop_layer(self, layer: Layer) -> bool:
        """Remove ``layer``; returns whether it was present."""
        return self._remove(layer)

    def pop_overlay(self, overlay: Layer) -> bool:
        """Remove ``overlay``; returns whether it was present."""
        return self._remove(overlay)


class Scene(ABC):
    """A camera, a framebuffer and a stack of layers rendered together."""

    def __init__(
        self,
        name: str = "Scene",
        renderer: Renderer2D | None = None,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
    ) -> None:
        self.name = name
        self.renderer = renderer if renderer is not None else Renderer2D()
        self.camera = Camera()
        self.layer_stack = LayerStack()
        self.fb = Framebuffer(width, height)

    @abstractmethod
    def on_attach(self) -> None:
        """Called once before the first update."""

    @abstractmethod
    def on_detach(self) -> None:
        """Called once after the last update."""

    @abstractmethod
    def on_update(self, dt: float) -> None:
        """Advance by ``dt`` seconds and draw."""

    def on_event(self, event: Event) -> None:
        """Handle resizes, then pass the event to layers from top to bottom."""
        EventDispatcher(event).dispatch(WindowResizeEvent, self.on_window_resize)
        for layer in reversed(self.layer_stack):
            layer.on_event(event)
            if event.handled:
                break

    def on_window_resize(self, event: WindowResizeEvent) -> bool:
        """Resize the camera; the viewport is square, sized by the width."""
        if event.width:
            self.camera.set_window_dimension(event.width, event.width)
        return False

    def push_layer(self, layer: Layer) -> None:
        self.layer_stack.push_layer(layer)

    def push_overlay(self, layer: Layer) -> None:
        self.layer_stack.push_overlay(layer)

    def pop_layer(self, layer: Layer) -> bool:
        return self.layer_stack.pop_layer(layer)

    def pop_overlay(self, layer: Layer) -> bool:
        return self.layer_stack.pop_overlay(layer)

    def attach_layers(self) -> None:
        for layer in self.layer_stack:
            layer.on_attach()

    def render_layers(self, dt: float) -> None:
        """Update every layer inside one renderer scene seen by this camera."""
        self.renderer.begin_scene(self.camera)
        for layer in self.layer_stack:
            layer.on_update(dt)
        self.renderer.end_scene()

    def detach_layers(self) -> None:
        for layer in self.layer_stack:
            layer.on_detach()


class SceneStack(_Stack[Scene]):
    """Scenes, each pushed in front of earlier ones."""

    def push_scene(self, scene: Scene) -> None:
        self._push_front(scene)

    def pop_scene(self, scene: Scene) -> bool:
        """Remove ``scene``; returns whether it was present."""
        return self._remove(scene)