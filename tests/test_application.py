import itertools

import pytest

from bananaengine import input as engine_input
from bananaengine.application import Application, DebugToggle, HeadlessWindow, WindowProps
from bananaengine.events import KeyPressedEvent, WindowCloseEvent, WindowResizeEvent
from bananaengine.keycodes import Key
from bananaengine.layers import Scene
from bananaengine.renderer2d import RecordingBackend, Renderer2D


class CountingScene(Scene):
    def __init__(self, name, log=None, handles=False, **kwargs):
        super().__init__(name, **kwargs)
        self.log = log if log is not None else []
        self.handles = handles
        self.updates = []
        self.attached = 0
        self.detached = 0

    def on_attach(self):
        self.attached += 1

    def on_detach(self):
        self.detached += 1

    def on_update(self, dt):
        self.updates.append(dt)

    def on_event(self, event):
        self.log.append(self.name)
        super().on_event(event)
        if self.handles:
            event.handled = True


@pytest.fixture
def state_input():
    previous = engine_input.get_backend()
    backend = engine_input.StateInput()
    engine_input.set_backend(backend)
    yield backend
    engine_input.set_backend(previous)


@pytest.fixture
def clock():
    counter = itertools.count()
    return lambda: float(next(counter))


@pytest.fixture
def app(state_input, clock):
    window = HeadlessWindow(WindowProps("t", 640, 480), clock=clock)
    application = Application(window, Renderer2D(RecordingBackend()))
    yield application
    application.close()


def test_only_one_application_at_a_time(app):
    assert Application.instance() is app
    with pytest.raises(RuntimeError):
        Application()
    app.close()
    with Application() as other:
        assert Application.instance() is other
    with pytest.raises(RuntimeError):
        Application.instance()


def test_window_close_stops_and_is_not_forwarded(app):
    log = []
    app.push_scene(CountingScene("s", log))
    event = WindowCloseEvent()
    app.on_event(event)
    assert app.running is False
    assert event.handled is True
    assert log == []


def test_events_reach_scenes_bottom_of_stack_first(app):
    log = []
    app.push_scene(CountingScene("first", log))
    app.push_scene(CountingScene("second", log))
    app.on_event(KeyPressedEvent(65))
    assert log == ["first", "second"]


def test_handled_event_stops_at_scene(app):
    log = []
    app.push_scene(CountingScene("first", log, handles=True))
    app.push_scene(CountingScene("second", log))
    app.on_event(KeyPressedEvent(65))
    assert log == ["first"]


def test_resize_to_zero_minimizes_and_back(app):
    scene = CountingScene("s")
    app.push_scene(scene)
    app.on_event(WindowResizeEvent(0, 0))
    assert app.minimized is True
    app.on_event(WindowResizeEvent(300, 200))
    assert app.minimized is False
    assert (scene.fb.width, scene.fb.height) == (300, 200)
    assert app.viewport == (0, 0, 300, 200)
    assert scene.camera.width == 300


def test_run_attaches_updates_and_detaches(app):
    scene = CountingScene("s")
    app.push_scene(scene)
    assert app.run(max_frames=3) == 3
    assert scene.attached == 1
    assert scene.detached == 1
    assert len(scene.updates) == 3
    assert scene.updates[0] == pytest.approx(0.1)
    assert app.fb_ids == [scene.fb.color_attachment_id]
    assert app.window.frames_presented == 3
    assert app.renderer.backend.clears == 3


def test_posted_close_ends_run_after_frame(app):
    scene = CountingScene("s")
    app.push_scene(scene)
    app.window.post(WindowCloseEvent())
    assert app.run() == 1
    assert len(scene.updates) == 1


def test_minimized_window_skips_updates(app):
    scene = CountingScene("s")
    app.push_scene(scene)
    app.window.post(WindowResizeEvent(0, 0))
    assert app.run(max_frames=2) == 2
    assert scene.updates == []
    assert app.window.width == 0


def test_run_toggles_debug_on_key(app, state_input):
    state_input.press_key(Key.U)
    app.run(max_frames=2)
    assert app.debug_toggle.enabled is False


def test_debug_toggle_flips_once_per_press():
    toggle = DebugToggle()
    assert toggle.enabled is True
    assert toggle.update(True) is False
    assert toggle.update(True) is False
    assert toggle.update(False) is False
    assert toggle.update(True) is True


def test_headless_window_time_and_resize(clock):
    window = HeadlessWindow(WindowProps("w", 10, 20), clock=clock)
    received = []
    window.set_event_callback(received.append)
    event = WindowResizeEvent(30, 40)
    window.post(event)
    window.poll_events()
    assert received == [event]
    assert (window.width, window.height) == (30, 40)
    first = window.time()
    assert window.time() > first


def test_pop_scene(app):
    scene = CountingScene("s")
    app.push_scene(scene)
    assert app.pop_scene(scene) is True
    assert app.pop_scene(scene) is False
    assert len(app.scene_stack) == 0