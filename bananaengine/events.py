"""Engine events, their types and categories, and dispatching by event class."""

from __future__ import annotations

from enum import Enum, IntFlag, auto
from typing import Callable, ClassVar, TypeVar


class EventType(Enum):
    """Every kind of event the engine knows about."""

    NONE = 0
    WINDOW_CLOSE = auto()
    WINDOW_RESIZE = auto()
    WINDOW_FOCUS = auto()
    WINDOW_LOST_FOCUS = auto()
    WINDOW_MOVED = auto()
    APP_TICK = auto()
    APP_UPDATE = auto()
    APP_RENDER = auto()
    KEY_PRESSED = auto()
    KEY_RELEASED = auto()
    KEY_TYPED = auto()
    MOUSE_BUTTON_PRESSED = auto()
    MOUSE_BUTTON_RELEASED = auto()
    MOUSE_MOVED = auto()
    MOUSE_SCROLLED = auto()
    GAME_OBJECT_EVENT = auto()
    GAME_OBJECT_PRESSED = auto()
    GAME_OBJECT_RELEASED = auto()
    GAME_OBJECT_HOVER_BEGIN = auto()
    GAME_OBJECT_HOVER_END = auto()


class EventCategory(IntFlag):
    """Bit flags grouping event types."""

    NONE = 0
    APPLICATION = 1 << 0
    INPUT = 1 << 1
    KEYBOARD = 1 << 2
    MOUSE = 1 << 3
    MOUSE_BUTTON = 1 << 4
    GAME = 1 << 5
    GAME_OBJECT = 1 << 6


class Event:
    """Base of all events; concrete events set the class attributes."""

    event_type: ClassVar[EventType] = EventType.NONE
    category: ClassVar[EventCategory] = EventCategory.NONE
    name: ClassVar[str] = "None"

    def __init__(self) -> None:
        if type(self) is Event:
            raise TypeError("Event is abstract; instantiate a concrete event")
        self.handled = False

    def is_in_category(self, category: EventCategory) -> bool:
        """Whether this event's category flags share a bit with ``category``."""
        return bool(self.category & category)

    def __str__(self) -> str:
        return self.name


E = TypeVar("E", bound=Event)


class EventDispatcher:
    """Routes one event to a handler registered for its concrete class."""

    def __init__(self, event: Event) -> None:
        self.event = event

    def dispatch(self, event_class: type[E], func: Callable[[E], bool]) -> bool:
        """Call ``func`` if the event is of ``event_class``'s type.

        The handler's result is or-ed into ``event.handled``. Returns whether
        the handler was called.
        """
        if self.event.event_type != event_class.event_type:
            return False
        self.event.handled = self.event.handled or bool(func(self.event))  # type: ignore[arg-type]
        return True


class WindowCloseEvent(Event):
    event_type = EventType.WINDOW_CLOSE
    category = EventCategory.APPLICATION
    name = "WindowClose"


class WindowResizeEvent(Event):
    event_type = EventType.WINDOW_RESIZE
    category = EventCategory.APPLICATION
    name = "WindowResize"

    def __init__(self, width: int = 0, height: int = 0) -> None:
        super().__init__()
        self.width = width
        self.height = height

    def __str__(self) -> str:
        return f"WindowResizeEvent width: {self.width} height: {self.height}"


class AppTickEvent(Event):
    event_type = EventType.APP_TICK
    category = EventCategory.APPLICATION
    name = "AppTick"


class AppUpdateEvent(Event):
    event_type = EventType.APP_UPDATE
    category = EventCategory.APPLICATION
    name = "AppUpdate"


class AppRenderEvent(Event):
    event_type = EventType.APP_RENDER
    category = EventCategory.APPLICATION
    name = "AppRender"


class KeyPressedEvent(Event):
    event_type = EventType.KEY_PRESSED
    category = EventCategory.KEYBOARD | EventCategory.INPUT
    name = "KeyPressed"

    def __init__(self, key_code: int, repeat_code: int = 0, mods: int = 0) -> None:
        super().__init__()
        self.key_code = key_code
        self.repeated = repeat_code > 0
        self.mods = mods

    def is_mod_pressed(self, mod: int) -> bool:
        """Whether the modifier bit ``mod`` was held."""
        return bool(self.mods & mod)

    def __str__(self) -> str:
        return f"KeyPressedEvent: {self.key_code} | Repeated: {int(self.repeated)}\n"


class KeyTypedEvent(Event):
    event_type = EventType.KEY_TYPED
    category = EventCategory.KEYBOARD | EventCategory.INPUT
    name = "KeyTyped"

    def __init__(self, key_code: int = 0) -> None:
        super().__init__()
        self.key_code = key_code

    def __str__(self) -> str:
        return f"KeyPressedEvent :{self.key_code}\n"


class _MouseButtonEvent(Event):
    category = EventCategory.MOUSE_BUTTON | EventCategory.MOUSE | EventCategory.INPUT
    _label: ClassVar[str] = ""

    def __init__(self, button: int, mods: int = 0) -> None:
        super().__init__()
        self.button = button
        self.mods = mods

    def is_mod_pressed(self, mod: int) -> bool:
        """Whether the modifier bit ``mod`` was held."""
        return bool(self.mods & mod)

    def __str__(self) -> str:
        return f"{self._label}: {self.button}\n"


class MouseButtonPressedEvent(_MouseButtonEvent):
    event_type = EventType.MOUSE_BUTTON_PRESSED
    name = "MouseButtonPressed"
    _label = "MouseButtonPressedEvent"

    def is_mod_pressed(self, mod: int) -> bool:
        return super().is_mod_pressed(mod)


class MouseButtonReleasedEvent(_MouseButtonEvent):
    event_type = EventType.MOUSE_BUTTON_RELEASED
    name = "MouseButtonReleased"
    _label = "MouseButtonReleasedEvent"

    def is_mod_pressed(self, mod: int) -> bool:
        return super().is_mod_pressed(mod)


class _MouseOffsetEvent(Event):
    category = EventCategory.MOUSE | EventCategory.INPUT

    def __init__(self, x_offset: float = 0.0, y_offset: float = 0.0) -> None:
        super().__init__()
        self.x_offset = float(x_offset)
        self.y_offset = float(y_offset)

    def __str__(self) -> str:
        return f"MouseScrolledEvent X-Offset: {self.x_offset:f}Y-Offset: {self.y_offset:f}\n"


class MouseScrolledEvent(_MouseOffsetEvent):
    event_type = EventType.MOUSE_SCROLLED
    name = "MouseScrolled"


class MouseMovedEvent(_MouseOffsetEvent):
    event_type = EventType.MOUSE_MOVED
    name = "MouseMoved"