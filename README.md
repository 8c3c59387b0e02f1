# bananaengine

bananaengine is the core of a small 2D game engine. It is built from these modules:

- **Events** (`bananaengine.events`): typed application, keyboard and mouse
  events that carry `EventCategory` flags. An `EventDispatcher` passes an event
  to a handler only when the event is of the class you ask for. The handler's
  result is or-ed into `event.handled`.
- **Key codes** (`bananaengine.keycodes`): the `Key`, `MouseButton` and `Mod`
  enumerations.
- **Input** (`bananaengine.input`): input through a backend you can replace.
  The functions `is_key_pressed`, `is_key_repeat`, `is_mouse_button_pressed`,
  `mouse_x` and `mouse_y` query the backend set with `set_backend`.
  `StateInput` is an in-memory backend that you drive yourself.
- **Transforms and entities** (`bananaengine.transform`, `bananaengine.entity`):
  - A `Transform` holds position, size, colour, rotation in degrees and a `Projection`.
  - An `Entity` owns uniquely named `Component`s and updates them in the order they were added.
- **Camera** (`bananaengine.camera`): view, perspective and orthographic
  matrices as numpy arrays. They are recomputed when the position, the
  rotation (in radians) or the window size changes.
- **2D renderer** (`bananaengine.renderer2d`):
  - `Renderer2D` collects coloured, textured and rotated quads and text glyphs into batches, then hands each batch to a `RenderBackend`.
  - `RecordingBackend` keeps every call it receives.
  - The module also defines `Texture`, `TextureSpecification`, `ImageFormat`, `Framebuffer`, `Font`, `Glyph`, `FontMetrics`, the vertex types and `quad_indices`.
- **Layers and scenes** (`bananaengine.layers`): `Layer`, `LayerStack`, `Scene`
  and `SceneStack`.
  - A pushed layer goes below the layers already in the stack. Overlays stay above all layers.
  - Events travel from the top of a stack to the bottom and stop at the first handler that marks them handled.
- **Components** (`bananaengine.components`):
  - `QuadComponent` draws a quad.
  - `TextComponent` draws a string.
  - `LineComponent` shows a `Screen` of `Pixel`s as an RGBA8 texture and refreshes it on every update.
- **Application** (`bananaengine.application`): the frame loop over a
  `Window`. `HeadlessWindow` runs without a display and accepts events through
  `post`. Only one `Application` can exist at a time. Call `close()` or use the
  application as a context manager to release it.
- **Sandbox** (`bananaengine.sandbox`): a demo `Sandbox` application. It has an
  `EntryScene` with a camera that W/A/S/D and T/G move, and the text layers
  `TestLayer` and `RunLayer`.

## Events

```python
from bananaengine.events import EventCategory, EventDispatcher, WindowResizeEvent

event = WindowResizeEvent(800, 600)
assert event.is_in_category(EventCategory.APPLICATION)

def on_resize(e):
    print("resized to", e.width, e.height)
    return True  # mark as handled

EventDispatcher(event).dispatch(WindowResizeEvent, on_resize)
assert event.handled
```

## Input

```python
from bananaengine import input as engine_input
from bananaengine.keycodes import Key

state = engine_input.StateInput()
engine_input.set_backend(state)

state.press_key(Key.W)
assert engine_input.is_key_pressed(Key.W)

state.move_mouse(10.0, 20.0)
assert (engine_input.mouse_x(), engine_input.mouse_y()) == (10.0, 20.0)
```

## Entities and components

```python
from bananaengine.entity import Component, Entity

class Spin(Component):
    def __init__(self):
        super().__init__("Spin")

    def on_update(self, dt, transform):
        transform.rotation += 90 * dt

entity = Entity()
assert entity.add_component(Spin())
assert not entity.add_component(Spin())  # a second "Spin" is refused
entity.render(0.5)
assert entity.transform.rotation == 45
```

`get_component(name)` returns `None` when no component has that name.
`remove_component(name)` raises `KeyError` in that case.

## Rendering

```python
from bananaengine.camera import Camera
from bananaengine.renderer2d import RecordingBackend, Renderer2D

backend = RecordingBackend()
renderer = Renderer2D(backend)
renderer.begin_scene(Camera())
renderer.draw_quad((0, 0, 0), (1, 1), (1, 0, 0, 1))
renderer.end_scene()

assert len(backend.quad_draws) == 1
assert renderer.stats.quad_count == 6
```

## Scenes, layers and the application

To build an application:

1. Subclass `Layer` and implement `on_attach`, `on_detach`, `on_update` and `on_event`.
2. Subclass `Scene` and add layers with `push_layer` and `push_overlay`.
3. Push scenes onto an `Application` with `push_scene`.
4. Call `run`. Pass `max_frames` to stop after a fixed number of frames; `run` returns the number of frames it ran.

```python
from bananaengine.sandbox import Sandbox

with Sandbox() as app:
    assert app.run(max_frames=3) == 3
```

## What this package does not do

- It opens no real window. The only `Window` implementation is `HeadlessWindow`.
- It does no GPU drawing. `Renderer2D` hands vertex batches to a `RenderBackend`, and only `RecordingBackend` is provided.
- It does not load fonts or images from files. A `Font` is built from `Glyph`s you supply.
- It plays no sound. `TestLayer` and `Sandbox` accept any object with a `start()` method as a sound.
- It has no describer for vertex buffer layouts.
- It installs no command-line program.