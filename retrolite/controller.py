"""Gamepad logic: buttons, sticks, d-pad, mouse emulation and the OSD link."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from .joystick import (
    AXES,
    DEAD_BAND,
    EARLY_STOP,
    Calibration,
    Calibrator,
    axis_value,
    build_lut,
)
from .keycodes import SerialCode

__all__ = [
    "BUTTON_PINS",
    "Controller",
    "ControllerIO",
    "DPAD_PINS",
    "SPECIAL_KEYS",
    "dpad_axes",
    "hat_angle",
]

BUTTON_PINS = (0, 1, 2, 3, 4, 5, 6, 7, 12, 13, 14, 15, 16)
DPAD_PINS = (8, 11, 9, 10)  # up, right, down, left
_UP, _RIGHT, _DOWN, _LEFT = range(4)

# Indices into the button list.
_RIGHT_STICK = 0
_CONFIRM = 1
_MOUSE_LEFT = 6
_HOTKEY = 8
_MOUSE_RIGHT = 9
_LEFT_STICK = 12

# Analog channel and inversion per axis.
_AXIS_INPUTS = {
    "left_x": (3, False),
    "left_y": (2, False),
    "right_x": (1, True),
    "right_y": (0, True),
}
# Which stick axis drives which gamepad axis.
_AXIS_OUTPUTS = (("right_y", "rx"), ("right_x", "z"), ("left_y", "y"), ("left_x", "x"))

SPECIAL_KEYS = {
    27: "escape",
    8: "backspace",
    13: "return",
    14: "right",
    15: "left",
    17: "up",
    18: "down",
}

SERIAL_BUTTON_DELAY = 150
MENU_TOGGLE_DELAY = 200
KEY_DELAY = 10
MOUSE_TOGGLE_HOLD = 2000
MOUSE_INTERVAL = 10
MOUSE_DIVIDER = 8


class ControllerIO(Protocol):
    def read(self, pin: int) -> int: ...
    def analog(self, channel: int) -> int: ...
    def delay(self, ms: int) -> None: ...
    def serial_write(self, data: bytes) -> None: ...
    def serial_read(self) -> bytes: ...
    def set_button(self, index: int, state: int) -> None: ...
    def set_axis(self, axis: str, value: int) -> None: ...
    def set_hat(self, angle: int) -> None: ...
    def send_state(self) -> None: ...
    def key_press(self, key: int | str) -> None: ...
    def key_release_all(self) -> None: ...
    def mouse_move(self, x: int, y: int, wheel: int) -> None: ...
    def mouse_press(self, button: str) -> None: ...
    def mouse_release(self, button: str) -> None: ...
    def mouse_is_pressed(self, button: str) -> bool: ...
    def led(self, on: bool) -> None: ...
    def eeprom_read(self) -> bytes: ...
    def eeprom_write(self, data: bytes) -> None: ...


def hat_angle(up: bool, right: bool, down: bool, left: bool, select: bool) -> int:
    """Hat switch angle in degrees for the d-pad, or -1 when centred.

    Up and down are ignored while the select button is held.
    """
    if up and not select:
        if right:
            return 45
        if left:
            return 315
        return 0
    if down and not select:
        if right:
            return 135
        if left:
            return 225
        return 180
    if right:
        return 90
    if left:
        return 270
    return -1


def dpad_axes(
    up: bool, right: bool, down: bool, left: bool, select: bool
) -> tuple[int, int]:
    """Return the (Ry, Rz) axis values, each 0, 1 or 2, for the d-pad."""
    if up and not select:
        ry = 2
    elif down and not select:
        ry = 0
    else:
        ry = 1
    if right:
        rz = 2
    elif left:
        rz = 0
    else:
        rz = 1
    return ry, rz


class Controller:
    """One controller; ``loop`` runs a single pass of its main loop."""

    def __init__(self, io: ControllerIO, clock: Callable[[], int]) -> None:
        self.io = io
        self.clock = clock
        self.buttons = [0] * len(BUTTON_PINS)
        self.dpad = [0] * len(DPAD_PINS)
        self._reported = [0] * len(BUTTON_PINS)
        self.calibration_mode = False
        self.menu_enabled = False
        self.pov_hat_mode = True
        self.mouse_enabled = False
        self._mouse_timer = 0
        self._mouse_toggle_started: int | None = None
        self.calibration = Calibration.from_eeprom(io.eeprom_read())
        self.calibrator = Calibrator(self.calibration)
        self.luts: dict[str, bytes] = {}
        self._rebuild_luts()

    def _rebuild_luts(self) -> None:
        for name in AXES:
            axis = getattr(self.calibration, name)
            self.luts[name] = build_lut(
                axis.minimum, axis.middle, axis.maximum, EARLY_STOP, DEAD_BAND
            )

    def _send(self, code: SerialCode) -> None:
        self.io.serial_write(bytes([code]))

    def _read_buttons(self) -> None:
        self.buttons = [int(not self.io.read(pin)) for pin in BUTTON_PINS]
        self.dpad = [int(not self.io.read(pin)) for pin in DPAD_PINS]

    def _read_axis(self, name: str) -> int:
        channel, inverted = _AXIS_INPUTS[name]
        raw = self.io.analog(channel)
        return 1023 - raw if inverted else raw

    def _axis_output(self, name: str) -> int:
        minimum = getattr(self.calibration, name).minimum
        return axis_value(self.luts[name], self._read_axis(name), minimum)

    def loop(self) -> None:
        """Run one pass of the controller."""
        self._read_buttons()
        if not self.calibration_mode and not self.menu_enabled:
            self._report_buttons()
            self._report_sticks()
            self._report_dpad()
            self.io.send_state()
        elif self.calibration_mode:
            self._calibrate()
        elif self.menu_enabled:
            self.handle_serial(self.io.serial_read())
            self._menu_mode()

        self._mouse_toggle()
        if self.mouse_enabled and self._mouse_timer + MOUSE_INTERVAL < self.clock():
            self._mouse_control()
            self._mouse_timer = self.clock()

        hotkey = self.buttons[_HOTKEY]
        if hotkey and self.dpad[_UP]:
            self._send(SerialCode.BRIGHTNESS_UP)
            self.io.delay(SERIAL_BUTTON_DELAY)
        if hotkey and self.dpad[_DOWN]:
            self._send(SerialCode.BRIGHTNESS_DOWN)
            self.io.delay(SERIAL_BUTTON_DELAY)
        if hotkey and self.buttons[_RIGHT_STICK]:
            if self.menu_enabled:
                self._send(SerialCode.MENU_CLOSE)
                self.io.delay(MENU_TOGGLE_DELAY)
                self.menu_enabled = False
            else:
                self._send(SerialCode.MENU_OPEN)
                self.io.delay(MENU_TOGGLE_DELAY)
                self.menu_enabled = True

    def handle_serial(self, data: bytes) -> None:
        """Act on bytes received from the OSD: keystrokes and mode changes."""
        for value in data:
            if value in SPECIAL_KEYS:
                self.io.key_press(SPECIAL_KEYS[value])
            elif value == SerialCode.CALIBRATION_STEP_ONE:
                self.calibration_mode = True
            elif value == SerialCode.MENU_CLOSE:
                self.menu_enabled = False
            elif value == SerialCode.POV_MODE_DISABLE:
                self.pov_hat_mode = False
            elif value == SerialCode.POV_MODE_ENABLE:
                self.pov_hat_mode = True
            else:
                self.io.key_press(value)
            self.io.delay(KEY_DELAY)
            self.io.key_release_all()

    def _report_buttons(self) -> None:
        for index, (state, sent) in enumerate(zip(self.buttons, self._reported)):
            if state != sent:
                self.io.set_button(index, state)
                self.io.serial_write(f"Button: {index}\r\n".encode("ascii"))
        self._reported = list(self.buttons)

    def _report_sticks(self) -> None:
        for name, output in _AXIS_OUTPUTS:
            self.io.set_axis(output, self._axis_output(name))

    def _report_dpad(self) -> None:
        up, right, down, left = (bool(state) for state in self.dpad)
        select = bool(self.buttons[_HOTKEY])
        if self.pov_hat_mode:
            self.io.set_hat(hat_angle(up, right, down, left, select))
        else:
            ry, rz = dpad_axes(up, right, down, left, select)
            self.io.set_axis("ry", ry)
            self.io.set_axis("rz", rz)

    def _menu_mode(self) -> None:
        if self.dpad[_UP]:
            code = SerialCode.OS_KEYBOARD_UP
        elif self.dpad[_DOWN]:
            code = SerialCode.OS_KEYBOARD_DOWN
        elif self.dpad[_RIGHT]:
            code = SerialCode.OS_KEYBOARD_RIGHT
        elif self.dpad[_LEFT]:
            code = SerialCode.OS_KEYBOARD_LEFT
        elif self.buttons[_CONFIRM]:
            code = SerialCode.OS_KEYBOARD_SELECT
        else:
            return
        self._send(code)
        self.io.delay(SERIAL_BUTTON_DELAY)

    def _blink(self) -> None:
        self.io.led(True)
        self.io.delay(100)
        self.io.led(False)

    def _calibrate(self) -> None:
        self._read_buttons()
        readings = {name: self._read_axis(name) for name in AXES}
        stage = self.calibrator.stage
        if stage == 3:
            self._read_buttons()
        code = self.calibrator.step(readings, bool(self.buttons[_CONFIRM]))

        if code == SerialCode.CALIBRATION_STEP_TWO:
            self._blink()
            self._send(code)
            self.io.delay(50)
        elif stage == 2:
            self._blink()
            self.io.delay(500)
        elif code == SerialCode.CALIBRATION_COMPLETE:
            self._blink()
            self.io.delay(200)
            self.io.eeprom_write(self.calibration.to_eeprom())
            self._rebuild_luts()
            self._send(code)
            self.io.delay(50)
            self.calibration_mode = False

    def _mouse_toggle(self) -> None:
        if not self.buttons[_LEFT_STICK]:
            self._mouse_toggle_started = None
            return
        now = self.clock()
        if self._mouse_toggle_started is None:
            self._mouse_toggle_started = now
        elif self._mouse_toggle_started + MOUSE_TOGGLE_HOLD < now:
            self.mouse_enabled = not self.mouse_enabled
            self._mouse_toggle_started = None

    def _mouse_control(self) -> None:
        y_move = int((self._axis_output("left_y") - 127) / MOUSE_DIVIDER)
        x_move = int((self._axis_output("left_x") - 127) / MOUSE_DIVIDER)
        self.io.mouse_move(x_move, y_move, 0)
        for index, button in ((_MOUSE_LEFT, "left"), (_MOUSE_RIGHT, "right")):
            pressed = self.io.mouse_is_pressed(button)
            if self.buttons[index] and not pressed:
                self.io.mouse_press(button)
            elif not self.buttons[index] and pressed:
                self.io.mouse_release(button)