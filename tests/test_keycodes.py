from bananaengine.events import KeyPressedEvent, MouseButtonPressedEvent
from bananaengine.keycodes import Key, Mod, MouseButton


def test_printable_key_codes():
    assert Key(32) is Key.SPACE
    assert Key(65) is Key.A
    assert Key(90) is Key.Z
    assert Key(48) is Key.DIGIT_0


def test_letters_are_contiguous():
    letters = [Key(c) for c in range(ord("A"), ord("Z") + 1)]
    assert [k.name for k in letters] == [chr(c) for c in range(ord("A"), ord("Z") + 1)]


def test_function_keys():
    assert Key(256) is Key.ESCAPE
    assert Key(290) is Key.F1
    assert Key(314) is Key.F25
    assert Key(348) is Key.MENU


def test_key_lookup_by_value():
    assert Key(87) is Key.W
    assert Key(265) is Key.UP


def test_mouse_button_aliases():
    assert MouseButton(0) is MouseButton.LEFT
    assert MouseButton(1) is MouseButton.RIGHT
    assert MouseButton(2) is MouseButton.MIDDLE
    assert MouseButton(7) is MouseButton.LAST
    assert MouseButton(7) is MouseButton.BUTTON_8


def test_mod_values():
    assert Mod(0x0001) == Mod.SHIFT
    assert Mod(0x0002) == Mod.CONTROL
    assert Mod(0x0004) == Mod.ALT
    assert Mod(0x0008) == Mod.WINDOWS


def test_mods_work_with_events():
    event = KeyPressedEvent(Key.A, 0, Mod.SHIFT | Mod.ALT)
    assert event.is_mod_pressed(Mod.SHIFT)
    assert event.is_mod_pressed(Mod.ALT)
    assert not event.is_mod_pressed(Mod.CONTROL)
    button = MouseButtonPressedEvent(MouseButton.LEFT, Mod.CONTROL)
    assert button.is_mod_pressed(Mod.CONTROL)
    assert not button.is_mod_pressed(Mod.WINDOWS)