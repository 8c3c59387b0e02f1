import pytest

from bananaengine.events import (
    AppRenderEvent,
    AppTickEvent,
    AppUpdateEvent,
    Event,
    EventCategory,
    EventDispatcher,
    EventType,
    KeyPressedEvent,
    KeyTypedEvent,
    MouseButtonPressedEvent,
    MouseButtonReleasedEvent,
    MouseMovedEvent,
    MouseScrolledEvent,
    WindowCloseEvent,
    WindowResizeEvent,
)


def test_base_event_is_abstract():
    with pytest.raises(TypeError):
        Event()


@pytest.mark.parametrize(
    "event, name",
    [
        (WindowCloseEvent(), "WindowClose"),
        (AppTickEvent(), "AppTick"),
        (AppUpdateEvent(), "AppUpdate"),
        (AppRenderEvent(), "AppRender"),
    ],
)
def test_application_event_names_and_category(event, name):
    assert str(event) == name
    assert event.is_in_category(EventCategory.APPLICATION)
    assert not event.is_in_category(EventCategory.INPUT)
    assert event.handled is False


def test_window_resize_string_and_fields():
    event = WindowResizeEvent(800, 600)
    assert (event.width, event.height) == (800, 600)
    assert str(event) == "WindowResizeEvent width: 800 height: 600"
    assert event.event_type is EventType.WINDOW_RESIZE


def test_key_pressed_repeat_and_string():
    assert KeyPressedEvent(65, 0, 0).repeated is False
    event = KeyPressedEvent(65, 1, 0)
    assert event.repeated is True
    assert str(event) == "KeyPressedEvent: 65 | Repeated: 1\n"
    assert event.is_in_category(EventCategory.KEYBOARD)
    assert event.is_in_category(EventCategory.INPUT)
    assert not event.is_in_category(EventCategory.MOUSE)


def test_key_pressed_mods():
    event = KeyPressedEvent(65, 0, EventCategory.INPUT | EventCategory.MOUSE)
    assert event.is_mod_pressed(EventCategory.INPUT)
    assert not event.is_mod_pressed(EventCategory.APPLICATION)


def test_key_typed_string():
    event = KeyTypedEvent(66)
    assert event.key_code == 66
    assert str(event) == "KeyPressedEvent :66\n"
    assert event.event_type is EventType.KEY_TYPED


def test_mouse_button_events():
    pressed = MouseButtonPressedEvent(2, 1)
    released = MouseButtonReleasedEvent(2, 0)
    assert str(pressed) == "MouseButtonPressedEvent: 2\n"
    assert str(released) == "MouseButtonReleasedEvent: 2\n"
    assert pressed.is_mod_pressed(1)
    assert not released.is_mod_pressed(1)
    for event in (pressed, released):
        assert event.is_in_category(EventCategory.MOUSE_BUTTON)
        assert event.is_in_category(EventCategory.MOUSE)
        assert event.is_in_category(EventCategory.INPUT)


def test_mouse_offset_events_share_text():
    scrolled = MouseScrolledEvent(1.5, -2.0)
    moved = MouseMovedEvent(1.5, -2.0)
    assert str(scrolled) == "MouseScrolledEvent X-Offset: 1.500000Y-Offset: -2.000000\n"
    assert str(moved) == str(scrolled)
    assert scrolled.event_type is EventType.MOUSE_SCROLLED
    assert moved.event_type is EventType.MOUSE_MOVED
    assert not moved.is_in_category(EventCategory.MOUSE_BUTTON)


def test_dispatch_matching_type_sets_handled():
    event = WindowCloseEvent()
    dispatcher = EventDispatcher(event)
    seen = []
    assert dispatcher.dispatch(WindowCloseEvent, lambda e: seen.append(e) or True)
    assert seen == [event]
    assert event.handled is True


def test_dispatch_other_type_is_skipped():
    event = WindowCloseEvent()
    called = []
    result = EventDispatcher(event).dispatch(WindowResizeEvent, lambda e: called.append(e) or True)
    assert result is False
    assert called == []
    assert event.handled is False


def test_dispatch_keeps_handled_once_set():
    event = KeyPressedEvent(32, 0, 0)
    dispatcher = EventDispatcher(event)
    dispatcher.dispatch(KeyPressedEvent, lambda e: True)
    assert dispatcher.dispatch(KeyPressedEvent, lambda e: False)
    assert event.handled is True