"""Serial protocol bytes and the on-screen keyboard layout."""

from __future__ import annotations

from enum import IntEnum

__all__ = [
    "BACKSPACE",
    "DOWN",
    "ENTER",
    "ESC",
    "LEFT",
    "LOWERCASE",
    "RIGHT",
    "SerialCode",
    "UP",
    "UPPERCASE",
    "key_for",
]

ESC = 27
BACKSPACE = 8
ENTER = 13
RIGHT = 14
LEFT = 15
UP = 17
DOWN = 18

ROWS = 5
COLUMNS = 10


class SerialCode(IntEnum):
    """Single-byte messages exchanged between the controller and the OSD."""

    BRIGHTNESS_UP = 0x00
    BRIGHTNESS_DOWN = 0x01
    CALIBRATION_STEP_ONE = 0x02
    CALIBRATION_STEP_TWO = 0x03
    CALIBRATION_COMPLETE = 0x04
    OS_KEYBOARD_ENABLED = 0x05
    OS_KEYBOARD_LEFT = 0x06
    OS_KEYBOARD_RIGHT = 0x07
    OS_KEYBOARD_UP = 0x08
    OS_KEYBOARD_DOWN = 0x09
    OS_KEYBOARD_SELECT = 0x10
    OS_KEYBOARD_DISABLED = 0x11
    MENU_OPEN = 0x12
    MENU_CLOSE = 0x13
    POV_MODE_ENABLE = 0x14
    POV_MODE_DISABLE = 0x15
    MOUSE_ENABLE = 0x16
    MOUSE_DISABLE = 0x17


LOWERCASE: tuple[tuple[int, ...], ...] = (
    (ESC, LEFT, RIGHT, 32, 45, 47, ENTER, 0, 0, 0),
    (0, 122, 120, 99, 118, 98, 110, 109, 44, BACKSPACE),
    (97, 115, 100, 102, 103, 104, 106, 107, 108, 46),
    (113, 119, 101, 114, 116, 121, 117, 105, 111, 112),
    (49, 50, 51, 52, 53, 54, 55, 56, 57, 48),
)

UPPERCASE: tuple[tuple[int, ...], ...] = (
    (ESC, UP, DOWN, 32, 95, 63, ENTER, 0, 0, 0),
    (0, 90, 88, 67, 86, 66, 78, 77, 60, BACKSPACE),
    (65, 83, 68, 70, 71, 72, 74, 75, 76, 62),
    (81, 87, 69, 82, 84, 89, 85, 73, 79, 80),
    (33, 64, 35, 36, 37, 94, 38, 42, 40, 41),
)


def key_for(row: int, column: int, uppercase: bool) -> int:
    """Return the key code at a keyboard position."""
    if not 0 <= row < ROWS:
        raise IndexError(f"keyboard row {row} out of range")
    if not 0 <= column < COLUMNS:
        raise IndexError(f"keyboard column {column} out of range")
    table = UPPERCASE if uppercase else LOWERCASE
    return table[row][column]