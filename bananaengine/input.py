"""Polling input state through a replaceable backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum


class InputBackend(ABC):
    """Source of the current keyboard and mouse state."""

    @abstractmethod
    def is_key_pressed(self, key: int) -> bool:
        """Whether ``key`` is currently down (not repeating)."""

    @abstractmethod
    def is_key_repeat(self, key: int) -> bool:
        """Whether ``key`` is currently held and repeating."""

    @abstractmethod
    def is_mouse_button_pressed(self, button: int) -> bool:
        """Whether mouse ``button`` is currently down."""

    @abstractmethod
    def mouse_position(self) -> tuple[float, float]:
        """The cursor position as ``(x, y)``."""


class _KeyState(Enum):
    PRESS = "press"
    REPEAT = "repeat"


class StateInput(InputBackend):
    """Input backend that holds state set explicitly by the caller."""

    def __init__(self) -> None:
        self._keys: dict[int, _KeyState] = {}
        self._buttons: set[int] = set()
        self._cursor = (0.0, 0.0)

    def press_key(self, key: int) -> None:
        self._keys[int(key)] = _KeyState.PRESS

    def repeat_key(self, key: int) -> None:
        self._keys[int(key)] = _KeyState.REPEAT

    def release_key(self, key: int) -> None:
        self._keys.pop(int(key), None)

    def press_button(self, button: int) -> None:
        self._buttons.add(int(button))

    def release_button(self, button: int) -> None:
        self._buttons.discard(int(button))

    def move_mouse(self, x: float, y: float) -> None:
        self._cursor = (float(x), float(y))

    def is_key_pressed(self, key: int) -> bool:
        return self._keys.get(int(key)) is _KeyState.PRESS

    def is_key_repeat(self, key: int) -> bool:
        return self._keys.get(int(key)) is _KeyState.REPEAT

    def is_mouse_button_pressed(self, button: int) -> bool:
        return int(button) in self._buttons

    def mouse_position(self) -> tuple[float, float]:
        return self._cursor


_backend: InputBackend = StateInput()


def set_backend(backend: InputBackend) -> None:
    """Make ``backend`` the source for the module-level queries."""
    global _backend
    if not isinstance(backend, InputBackend):
        raise TypeError("backend must be an InputBackend")
    _backend = backend


def get_backend() -> InputBackend:
    """The backend the module-level queries currently use."""
    return _backend


def is_key_pressed(key: int) -> bool:
    return _backend.is_key_pressed(key)


def is_key_repeat(key: int) -> bool:
    return _backend.is_key_repeat(key)


def is_mouse_button_pressed(button: int) -> bool:
    return _backend.is_mouse_button_pressed(button)


def mouse_x() -> float:
    return float(_backend.mouse_position()[0])


def mouse_y() -> float:
    return float(_backend.mouse_position()[1])