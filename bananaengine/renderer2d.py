"""Batched 2D quad and text rendering onto a pluggable backend."""

from __future__ import annotations

import itertools
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence

import numpy as np

from bananaengine.camera import Camera
from bananaengine.transform import Projection

log = logging.getLogger(__name__)

MAX_QUADS = 20000
MAX_VERTICES = MAX_QUADS * 4
MAX_INDICES = MAX_QUADS * 6
MAX_TEXTURE_SLOTS = 32

_renderer_ids = itertools.count(1)

_QUAD_TEX_COORDS = ((0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0))


class ImageFormat(Enum):
    """Pixel layouts a texture can hold."""

    NONE = 0
    R8 = 1
    RGB8 = 2
    RGBA8 = 3
    RGBA32F = 4

    @property
    def bytes_per_pixel(self) -> int:
        """Bytes per pixel expected in texture data: 4 for RGBA8, else 3."""
        return 4 if self is ImageFormat.RGBA8 else 3


@dataclass
class TextureSpecification:
    """Dimensions, format and pixel data a texture is created from."""

    width: int = 1
    height: int = 1
    format: ImageFormat = ImageFormat.RGB8
    generate_mips: bool = True
    data: bytes | bytearray | None = None
    size: int = 0


class Texture:
    """A 2D texture created from a specification it keeps referring to."""

    def __init__(self, spec: TextureSpecification) -> None:
        self.spec = spec
        self.width = int(spec.width)
        self.height = int(spec.height)
        self.renderer_id = next(_renderer_ids)
        self.bound_slot: int | None = None
        if spec.size != self.width * self.height * spec.format.bytes_per_pixel:
            log.warning("Texture2D data must be entire texture.")
        self.pixels = bytes(spec.data or b"")

    def bind(self, slot: int = 0) -> None:
        """Bind this texture to texture unit ``slot``."""
        self.bound_slot = int(slot)

    def unbind(self) -> None:
        self.bound_slot = None

    def update(self) -> None:
        """Re-read the pixel data from the specification."""
        self.pixels = bytes(self.spec.data or b"")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Texture):
            return NotImplemented
        return self.renderer_id == other.renderer_id

    def __hash__(self) -> int:
        return hash(self.renderer_id)

    def __repr__(self) -> str:
        return f"Texture(id={self.renderer_id}, {self.width}x{self.height})"


class Framebuffer:
    """Off-screen render target with a colour and a depth attachment."""

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.bound = False
        self._invalidate()

    def _invalidate(self) -> None:
        self.id = next(_renderer_ids)
        self.color_attachment_id = next(_renderer_ids)
        self.depth_attachment_id = next(_renderer_ids)

    def bind(self) -> None:
        self.bound = True

    def unbind(self) -> None:
        self.bound = False

    def set_window_dimension(self, width: int, height: int) -> None:
        """Resize, recreating the attachments."""
        self.width = int(width)
        self.height = int(height)
        self._invalidate()


@dataclass(frozen=True)
class QuadVertex:
    position: tuple[float, float, float]
    color: tuple[float, float, float, float]
    tex_coords: tuple[float, float]
    proj_id: float
    tex_id: float


@dataclass(frozen=True)
class TextVertex:
    position: tuple[float, float, float]
    color: tuple[float, float, float, float]
    tex_coords: tuple[float, float]
    proj_id: float


@dataclass(frozen=True)
class RenderStats:
    """Counts reported by the last flush."""

    quad_count: int = 0
    texture_count: int = 0
    text_glyphs: int = 0


class RenderBackend(ABC):
    """Receives the batches the renderer produces."""

    @abstractmethod
    def clear(self) -> None:
        """Clear the current render target."""

    @abstractmethod
    def draw_quads(
        self,
        vertices: Sequence[QuadVertex],
        index_count: int,
        textures: Sequence[Texture],
        view_projections: Sequence[np.ndarray],
    ) -> None:
        """Draw a quad batch with its bound textures and the camera matrices."""

    @abstractmethod
    def draw_text(self, vertices: Sequence[TextVertex], index_count: int, atlas: Texture) -> None:
        """Draw a text batch sampled from the font ``atlas``."""


class RecordingBackend(RenderBackend):
    """Backend that keeps every call it receives."""

    def __init__(self) -> None:
        self.clears = 0
        self.quad_draws: list[tuple[tuple[QuadVertex, ...], int, tuple[Texture, ...], tuple[np.ndarray, ...]]] = []
        self.text_draws: list[tuple[tuple[TextVertex, ...], int, Texture]] = []

    def clear(self) -> None:
        self.clears += 1

    def draw_quads(self, vertices, index_count, textures, view_projections) -> None:
        self.quad_draws.append((tuple(vertices), int(index_count), tuple(textures), tuple(view_projections)))

    def draw_text(self, vertices, index_count, atlas) -> None:
        self.text_draws.append((tuple(vertices), int(index_count), atlas))


@dataclass(frozen=True)
class FontMetrics:
    ascender_y: float
    descender_y: float
    line_height: float


@dataclass(frozen=True)
class Glyph:
    """Advance and bounds of one glyph; bounds are (left, bottom, right, top)."""

    advance: float
    plane_bounds: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    atlas_bounds: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)


class Font:
    """Glyph geometry, metrics and kerning over an atlas texture."""

    def __init__(
        self,
        glyphs: Mapping[str, Glyph],
        metrics: FontMetrics,
        atlas: Texture,
        kerning: Mapping[tuple[str, str], float] | None = None,
    ) -> None:
        self._glyphs = dict(glyphs)
        self.metrics = metrics
        self.atlas = atlas
        self._kerning = dict(kerning or {})

    def glyph(self, char: str) -> Glyph | None:
        """The glyph for ``char``, or None if the font lacks it."""
        return self._glyphs.get(char)

    def advance(self, current: str, following: str) -> float | None:
        """Kerned advance from ``current`` to ``following``; None if either is missing."""
        if current not in self._glyphs or following not in self._glyphs:
            return None
        return self._glyphs[current].advance + self._kerning.get((current, following), 0.0)


def quad_indices(quad_count: int) -> np.ndarray:
    """Index buffer for ``quad_count`` quads of four vertices, two triangles each."""
    if quad_count < 0:
        raise ValueError("quad_count must not be negative")
    pattern = np.array([0, 1, 2, 1, 2, 3], dtype=np.uint32)
    offsets = np.arange(quad_count, dtype=np.uint32) * 4
    return (offsets[:, None] + pattern[None, :]).reshape(-1)


def _vector(values: Any, count: int, what: str, at_least: bool = False) -> np.ndarray:
    array = np.array(values, dtype=np.float64).reshape(-1)
    if array.size < count or (not at_least and array.size != count):
        raise ValueError(f"{what} needs {count} components, got {array.size}")
    return array[:count]


def _translate(offset: np.ndarray) -> np.ndarray:
    m = np.identity(4)
    m[:3, 3] = offset
    return m


def _rotate_z(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    m = np.identity(4)
    m[0, 0], m[0, 1] = c, -s
    m[1, 0], m[1, 1] = s, c
    return m


def _scale(x: float, y: float) -> np.ndarray:
    return np.diag([x, y, 1.0, 1.0])


def _apply(transform: np.ndarray, point: Sequence[float]) -> tuple[float, float, float]:
    result = transform @ np.array([point[0], point[1], point[2], 1.0])
    return (float(result[0]), float(result[1]), float(result[2]))


class Renderer2D:
    """Collects quads and glyphs into batches and hands them to a backend."""

    def __init__(self, backend: RenderBackend | None = None) -> None:
        self.backend = backend if backend is not None else RecordingBackend()
        self.indices = quad_indices(MAX_QUADS)
        self.scene_camera = Camera()
        self.stats = RenderStats()
        self.font_atlas: Texture | None = None
        self._texture_slots: list[Texture | None] = [None] * MAX_TEXTURE_SLOTS
        self._slot_index = 0
        self._quad_vertices: list[QuadVertex] = []
        self._quad_index_count = 0
        self._text_vertices: list[TextVertex] = []
        self._text_index_count = 0
        self._view_projections: tuple[np.ndarray, np.ndarray] = (np.identity(4), np.identity(4))
        self.start_batch()

    @property
    def quad_vertices(self) -> tuple[QuadVertex, ...]:
        return tuple(self._quad_vertices)

    @property
    def text_vertices(self) -> tuple[TextVertex, ...]:
        return tuple(self._text_vertices)

    @property
    def quad_index_count(self) -> int:
        return self._quad_index_count

    @property
    def text_index_count(self) -> int:
        return self._text_index_count

    @property
    def texture_slots(self) -> tuple[Texture, ...]:
        return tuple(t for t in self._texture_slots[: self._slot_index] if t is not None)

    def begin_scene(self, camera: Camera | None = None) -> None:
        """Start a scene seen through ``camera``, clearing the target."""
        if camera is None:
            log.warning("Client did not specify a camera")
            camera = Camera()
        self.scene_camera = camera
        self.backend.clear()
        self.start_batch()

    def start_batch(self) -> None:
        """Empty the batches and take the camera matrices for the next draw."""
        self._quad_vertices = []
        self._quad_index_count = 0
        self._slot_index = 0
        self._text_vertices = []
        self._text_index_count = 0
        self._view_projections = (
            self.scene_camera.perspective_view_projection,
            self.scene_camera.orthographic_view_projection,
        )

    def next_batch(self) -> None:
        self.flush()
        self.start_batch()

    def end_scene(self) -> None:
        self.flush()

    def flush(self) -> None:
        """Submit whatever the batches hold to the backend."""
        self.stats = RenderStats(
            quad_count=self._quad_index_count,
            texture_count=self._text_index_count,
            text_glyphs=self._text_index_count,
        )
        if self._quad_index_count:
            textures = self.texture_slots
            for slot, texture in enumerate(textures):
                texture.bind(slot)
            self.backend.draw_quads(
                tuple(self._quad_vertices), self._quad_index_count, textures, self._view_projections
            )
        if self._text_index_count and self.font_atlas is not None:
            self.font_atlas.bind(0)
            self.backend.draw_text(tuple(self._text_vertices), self._text_index_count, self.font_atlas)

    def _texture_index(self, texture: Texture) -> float:
        for index, slot in enumerate(self._texture_slots[1 : self._slot_index], start=1):
            if slot == texture:
                return float(index)
        if self._slot_index >= MAX_TEXTURE_SLOTS:
            self.next_batch()
        index = self._slot_index
        self._texture_slots[index] = texture
        self._slot_index += 1
        return float(index)

    def draw_quad(
        self,
        pos: Any,
        size: Any,
        color: Any,
        rotation: float = 0.0,
        texture: Texture | None = None,
        proj: Projection = Projection.NONE,
    ) -> None:
        """Add a quad at ``pos`` of ``size``, rotated by ``rotation`` degrees."""
        position = _vector(pos, 3, "pos")
        extent = _vector(size, 2, "size", at_least=True)
        rgba = tuple(float(c) for c in _vector(color, 4, "color"))
        proj_id = float(int(Projection(proj)))

        if self._quad_index_count >= MAX_INDICES:
            self.next_batch()

        tex_id = -1.0 if texture is None else self._texture_index(texture)

        x, y, z = position
        sx, sy = extent
        corners = [(x, y, z), (x + sx, y, z), (x, y + sy, z), (x + sx, y + sy, z)]
        if rotation == 0:
            points = [tuple(float(v) for v in corner) for corner in corners]
        else:
            transform = _translate(position) @ _rotate_z(math.radians(rotation)) @ _scale(sx, sy)
            points = [_apply(transform, corner) for corner in corners]

        self._quad_vertices.extend(
            QuadVertex(point, rgba, coords, proj_id, tex_id) for point, coords in zip(points, _QUAD_TEX_COORDS)
        )
        self._quad_index_count += 6

    def draw_text(
        self,
        text: str,
        font: Font,
        pos: Any,
        size: Any,
        color: Any,
        proj: Projection = Projection.NONE,
    ) -> None:
        """Lay out ``text`` with ``font`` and add one quad per visible glyph."""
        position = _vector(pos, 3, "pos")
        extent = _vector(size, 2, "size", at_least=True)
        rgba = tuple(float(c) for c in _vector(color, 4, "color"))
        proj_id = float(int(Projection(proj)))

        metrics = font.metrics
        atlas = font.atlas
        self.font_atlas = atlas

        space = font.glyph(" ")
        if space is None:
            raise ValueError("font has no space glyph")

        fs_scale = 1.0 / (metrics.ascender_y - metrics.descender_y)
        transform = _translate(position) @ _scale(extent[0], extent[1])
        texel_w = 1.0 / atlas.width
        texel_h = 1.0 / atlas.height

        x = 0.0
        y = 0.0
        for char, following in itertools.zip_longest(text, text[1:]):
            if char == "\r":
                continue
            if char == "\n":
                x = 0.0
                y -= fs_scale * metrics.line_height
                continue
            if char == " ":
                advance = space.advance
                if following is not None:
                    kerned = font.advance(char, following)
                    if kerned is not None:
                        advance = kerned
                x += fs_scale * advance
                continue
            if char == "\t":
                x += 4.0 * (fs_scale * space.advance)
                continue

            glyph = font.glyph(char) or font.glyph("?")
            if glyph is None:
                return

            al, ab, ar, at = glyph.atlas_bounds
            tex_min = (al * texel_w, ab * texel_h)
            tex_max = (ar * texel_w, at * texel_h)

            pl, pb, pr, pt = glyph.plane_bounds
            min_x, min_y = pl * fs_scale + x, pb * fs_scale + y
            max_x, max_y = pr * fs_scale + x, pt * fs_scale + y

            quad = (
                ((min_x, min_y, 0.0), tex_min),
                ((max_x, 0.0, 0.0), (tex_max[0], tex_min[1])),
                ((min_x, max_y, 0.0), (tex_min[0], tex_max[1])),
                ((max_x, max_y, 0.0), tex_max),
            )
            self._text_vertices.extend(
                TextVertex(_apply(transform, point), rgba, coords, proj_id) for point, coords in quad
            )
            self._text_index_count += 6

            if following is not None:
                kerned = font.advance(char, following)
                x += fs_scale * (glyph.advance if kerned is None else kerned)