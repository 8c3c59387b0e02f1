"""A small demo application: one scene with a text layer driven by the keyboard."""

from __future__ import annotations

from functools import lru_cache
from typing import Protocol

from bananaengine import input as engine_input
from bananaengine.application import Application, Window
from bananaengine.components import TextComponent
from bananaengine.entity import Entity
from bananaengine.events import Event
from bananaengine.keycodes import Key
from bananaengine.layers import DEFAULT_HEIGHT, DEFAULT_WIDTH, Layer, Scene
from bananaengine.renderer2d import (
    Font,
    FontMetrics,
    Glyph,
    ImageFormat,
    Renderer2D,
    Texture,
    TextureSpecification,
)
from bananaengine.transform import Projection, Transform

_GROW_SPEED = 2.0
_CAMERA_SPEED = 10.0
_START_CAMERA = (0.0, 0.0, -10.0)


class _Sound(Protocol):
    def start(self) -> None: ...


@lru_cache(maxsize=None)
def _default_font() -> Font:
    """A fixed-width block font covering the range 0x20 to 0xFF."""
    chars = [chr(code) for code in range(0x20, 0x100)]
    columns, cell = 16, 8
    rows = -(-len(chars) // columns)
    width, height = columns * cell, rows * cell
    size = width * height * 3
    atlas = Texture(
        TextureSpecification(
            width=width,
            height=height,
            format=ImageFormat.RGB8,
            generate_mips=False,
            data=bytes(size),
            size=size,
        )
    )
    glyphs = {}
    for index, char in enumerate(chars):
        col, row = index % columns, index // columns
        glyphs[char] = Glyph(
            advance=0.6,
            plane_bounds=(0.0, -0.2, 0.6, 0.8),
            atlas_bounds=(col * cell, row * cell, (col + 1) * cell, (row + 1) * cell),
        )
    return Font(glyphs, FontMetrics(ascender_y=0.8, descender_y=-0.2, line_height=1.2), atlas)


class _TextLayer(Layer):
    """A layer holding one entity that shows a line of text."""

    def __init__(self, name: str, text: str, renderer: Renderer2D | None, font: Font | None) -> None:
        super().__init__(name)
        self.renderer = renderer if renderer is not None else Renderer2D()
        self.attached = False
        self.last_event: Event | None = None
        self.entity = Entity(
            Transform(
                pos=(-1.0, 0.0, 0.0),
                size=(0.2, 0.2, 0.0),
                color=(1.0, 1.0, 1.0, 1.0),
                proj=Projection.NONE,
            )
        )
        self.entity.add_component(
            TextComponent(self.renderer, font if font is not None else _default_font(), text)
        )

    @property
    def text_component(self) -> TextComponent:
        component = self.entity.get_component("TextComponent")
        if not isinstance(component, TextComponent):
            raise LookupError("layer has no text component")
        return component

    def _grow(self, dt: float) -> None:
        if engine_input.is_key_pressed(Key.Y):
            self.entity.transform.size[1] += _GROW_SPEED * dt
        if engine_input.is_key_pressed(Key.Z):
            self.entity.transform.size[0] += _GROW_SPEED * dt


class TestLayer(_TextLayer):
    """Text that grows with Y/Z and changes with N (playing a sound) and J."""

    __test__ = False

    def __init__(
        self,
        name: str = "Layer",
        renderer: Renderer2D | None = None,
        font: Font | None = None,
        sound: _Sound | None = None,
    ) -> None:
        super().__init__(name, "banana double", renderer, font)
        self.sound = sound

    def on_attach(self) -> None:
        self.attached = True

    def on_detach(self) -> None:
        self.attached = False

    def on_event(self, event: Event) -> None:
        """Remember the event; the layer never marks it handled."""
        self.last_event = event

    def on_update(self, dt: float) -> None:
        text = self.text_component
        self._grow(dt)
        if engine_input.is_key_pressed(Key.N):
            if self.sound is not None:
                self.sound.start()
            text.change_text("salad bombs")
        if engine_input.is_key_pressed(Key.J):
            text.change_text("salad bomb")
        self.entity.render(dt)


class RunLayer(_TextLayer):
    """Text that grows with Y/Z and changes with N and J."""

    def __init__(self, name: str = "Layer", renderer: Renderer2D | None = None, font: Font | None = None) -> None:
        super().__init__(name, "banana trio", renderer, font)

    def on_attach(self) -> None:
        self.attached = True

    def on_detach(self) -> None:
        self.attached = False

    def on_event(self, event: Event) -> None:
        """Remember the event; the layer never marks it handled."""
        self.last_event = event

    def on_update(self, dt: float) -> None:
        text = self.text_component
        self._grow(dt)
        if engine_input.is_key_pressed(Key.N):
            text.change_text("thunar bombs")
        if engine_input.is_key_pressed(Key.J):
            text.change_text("thunar bomb")
        self.entity.render(dt)


class EntryScene(Scene):
    """The first scene: a test layer and a camera moved with W/A/S/D and T/G."""

    def __init__(
        self,
        name: str = "Entry",
        renderer: Renderer2D | None = None,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        font: Font | None = None,
        sound: _Sound | None = None,
    ) -> None:
        super().__init__(name, renderer, width, height)
        self._camera_target = list(_START_CAMERA)
        self.layer_stack.push_layer(TestLayer("Layer One", self.renderer, font, sound))

    def on_attach(self) -> None:
        self.attach_layers()

    def on_detach(self) -> None:
        self.detach_layers()

    def on_update(self, dt: float) -> None:
        step = _CAMERA_SPEED * dt
        moves = (
            (Key.S, 1, -step),
            (Key.W, 1, step),
            (Key.A, 0, -step),
            (Key.D, 0, step),
            (Key.T, 2, step),
            (Key.G, 2, -step),
        )
        for key, axis, delta in moves:
            if engine_input.is_key_pressed(key):
                self._camera_target[axis] += delta
        self.camera.position = tuple(self._camera_target)
        self.render_layers(dt)


class Sandbox(Application):
    """The demo application, starting with an entry scene."""

    def __init__(
        self,
        window: Window | None = None,
        renderer: Renderer2D | None = None,
        font: Font | None = None,
        sound: _Sound | None = None,
    ) -> None:
        super().__init__(window, renderer)
        self.push_scene(
            EntryScene(
                "Entry",
                self.renderer,
                self.window.width,
                self.window.height,
                font=font,
                sound=sound,
            )
        )