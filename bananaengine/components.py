"""Components that draw quads, text and pixel screens for an entity."""

from __future__ import annotations

from dataclasses import dataclass, field

from bananaengine.entity import Component
from bananaengine.renderer2d import Font, ImageFormat, Renderer2D, Texture, TextureSpecification
from bananaengine.transform import Transform


class QuadComponent(Component):
    """Draws the owner's transform as a coloured, optionally textured quad."""

    def __init__(self, renderer: Renderer2D, texture: Texture | TextureSpecification | None = None) -> None:
        super().__init__("QuadComponent")
        self.renderer = renderer
        if isinstance(texture, TextureSpecification):
            texture = Texture(texture)
        self.texture: Texture | None = texture

    @property
    def texture_id(self) -> int:
        if self.texture is None:
            raise RuntimeError("quad component has no texture")
        return self.texture.renderer_id

    def update_texture(self) -> None:
        """Reload the texture's pixels from its specification."""
        if self.texture is None:
            raise RuntimeError("quad component has no texture")
        self.texture.update()

    def on_update(self, dt: float, transform: Transform) -> None:
        self.renderer.draw_quad(
            transform.pos,
            transform.size[:2],
            transform.color,
            transform.rotation,
            self.texture,
            transform.proj,
        )


class TextComponent(Component):
    """Draws a string with a font at the owner's transform."""

    def __init__(
        self,
        renderer: Renderer2D,
        font: Font,
        text: str,
        font_width: int = 1024,
        font_height: int = 1024,
    ) -> None:
        super().__init__("TextComponent")
        self.renderer = renderer
        self.font = font
        self.text = text
        self.font_width = font_width
        self.font_height = font_height

    def change_text(self, text: str) -> None:
        self.text = text

    def on_update(self, dt: float, transform: Transform) -> None:
        self.renderer.draw_text(
            self.text, self.font, transform.pos, transform.size, transform.color, transform.proj
        )


@dataclass(frozen=True)
class Pixel:
    """One RGBA8 pixel."""

    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0


@dataclass
class Screen:
    """Rows of pixels with the dimensions of the texture they fill."""

    lines: list[list[Pixel]] = field(default_factory=list)
    width: int = 0
    height: int = 0

    def to_bytes(self) -> bytes:
        """The pixels row by row as RGBA bytes."""
        return bytes(channel for line in self.lines for p in line for channel in (p.r, p.g, p.b, p.a))


class LineComponent(Component):
    """Draws a screen of pixels as a textured quad, refreshed every update."""

    def __init__(self, renderer: Renderer2D, screen: Screen) -> None:
        super().__init__("LineComponent")
        self.screen = screen
        self.spec = TextureSpecification(
            width=screen.width,
            height=screen.height,
            format=ImageFormat.RGBA8,
            data=screen.to_bytes(),
            size=screen.width * screen.height * 4,
        )
        self.quad = QuadComponent(renderer, self.spec)
        self.update_tile_data()

    @property
    def texture_id(self) -> int:
        return self.quad.texture_id

    def update_tile_data(self) -> None:
        """Copy the screen's current pixels into the texture."""
        self.spec.data = self.screen.to_bytes()
        self.quad.update_texture()

    def on_update(self, dt: float, transform: Transform) -> None:
        self.update_tile_data()
        self.quad.on_update(dt, transform)