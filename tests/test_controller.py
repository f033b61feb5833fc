import pytest

from retrolite.controller import Controller, dpad_axes, hat_angle
from retrolite.joystick import AxisCalibration, Calibration
from retrolite.keycodes import SerialCode

CENTRES = {0: 1023 - 529, 1: 1023 - 525, 2: 477, 3: 512}


class FakeIO:
    def __init__(self, eeprom=None):
        self.now = 0
        self.levels = {}
        self.analog_values = dict(CENTRES)
        self.serial_out = bytearray()
        self.inbound = bytearray()
        self.buttons = {}
        self.axes = {}
        self.hats = []
        self.states = 0
        self.keys = []
        self.releases = 0
        self.mouse_moves = []
        self.mouse_pressed = set()
        self.leds = []
        self.eeprom = bytes([0xFF]) * 1024 if eeprom is None else eeprom

    def clock(self):
        return self.now

    def read(self, pin):
        return self.levels.get(pin, 1)

    def analog(self, channel):
        return self.analog_values[channel]

    def delay(self, ms):
        self.now += ms

    def serial_write(self, data):
        self.serial_out += data

    def serial_read(self):
        data = bytes(self.inbound)
        self.inbound.clear()
        return data

    def set_button(self, index, state):
        self.buttons[index] = state

    def set_axis(self, axis, value):
        self.axes[axis] = value

    def set_hat(self, angle):
        self.hats.append(angle)

    def send_state(self):
        self.states += 1

    def key_press(self, key):
        self.keys.append(key)

    def key_release_all(self):
        self.releases += 1

    def mouse_move(self, x, y, wheel):
        self.mouse_moves.append((x, y, wheel))

    def mouse_press(self, button):
        self.mouse_pressed.add(button)

    def mouse_release(self, button):
        self.mouse_pressed.discard(button)

    def mouse_is_pressed(self, button):
        return button in self.mouse_pressed

    def led(self, on):
        self.leds.append(on)

    def eeprom_read(self):
        return self.eeprom

    def eeprom_write(self, data):
        self.eeprom = bytes(data) + self.eeprom[len(data):]


def make(eeprom=None):
    io = FakeIO(eeprom)
    return io, Controller(io, io.clock)


@pytest.mark.parametrize(
    "pressed, angle",
    [
        ((1, 0, 0, 0), 0),
        ((1, 1, 0, 0), 45),
        ((1, 0, 0, 1), 315),
        ((0, 0, 1, 0), 180),
        ((0, 1, 1, 0), 135),
        ((0, 0, 1, 1), 225),
        ((0, 1, 0, 0), 90),
        ((0, 0, 0, 1), 270),
        ((0, 0, 0, 0), -1),
    ],
)
def test_hat_angle(pressed, angle):
    assert hat_angle(*map(bool, pressed), False) == angle


def test_hat_ignores_vertical_with_select():
    assert hat_angle(True, False, False, False, True) == -1


def test_dpad_axes():
    assert dpad_axes(True, False, False, False, False) == (2, 1)
    assert dpad_axes(False, False, True, False, False) == (0, 1)
    assert dpad_axes(False, True, False, False, False) == (1, 2)
    assert dpad_axes(False, False, False, True, False) == (1, 0)
    assert dpad_axes(True, False, False, False, True) == (1, 1)


def test_blank_eeprom_loads_defaults():
    _, controller = make()
    assert controller.calibration == Calibration()


def test_stored_calibration_loaded():
    stored = Calibration(left_x=AxisCalibration(300, 800, 550)).to_eeprom()
    _, controller = make(stored + bytes([0xFF]) * 10)
    assert controller.calibration.left_x == AxisCalibration(300, 800, 550)


def test_centred_sticks_report_centre():
    io, controller = make()
    controller.loop()
    assert io.axes == {"x": 127, "y": 127, "z": 127, "rx": 127}
    assert io.hats == [-1]
    assert io.states == 1


def test_button_press_reported_once():
    io, controller = make()
    io.levels[3] = 0
    controller.loop()
    controller.loop()
    assert io.buttons == {3: 1}
    assert bytes(io.serial_out) == b"Button: 3\r\n"


def test_hat_up():
    io, controller = make()
    io.levels[8] = 0
    controller.loop()
    assert io.hats[-1] == 0


def test_axis_dpad_mode():
    io, controller = make()
    controller.handle_serial(bytes([SerialCode.POV_MODE_DISABLE]))
    io.levels[11] = 0
    controller.loop()
    assert io.axes["rz"] == 2
    assert io.axes["ry"] == 1


def test_brightness_hotkey():
    io, controller = make()
    io.levels[12] = 0
    io.levels[8] = 0
    controller.loop()
    assert bytes([SerialCode.BRIGHTNESS_UP]) in io.serial_out
    assert io.hats[-1] == -1


def test_menu_toggle():
    io, controller = make()
    io.levels[12] = 0
    io.levels[0] = 0
    controller.loop()
    assert controller.menu_enabled
    assert io.serial_out.endswith(bytes([SerialCode.MENU_OPEN]))


def test_menu_navigation():
    io, controller = make()
    controller.menu_enabled = True
    io.levels[8] = 0
    controller.loop()
    assert bytes(io.serial_out) == bytes([SerialCode.OS_KEYBOARD_UP])
    assert io.states == 0


def test_serial_keystrokes():
    io, controller = make()
    controller.handle_serial(b"a" + bytes([27]))
    assert io.keys == [ord("a"), "escape"]
    assert io.releases == 2


def test_serial_mode_bytes():
    io, controller = make()
    controller.menu_enabled = True
    controller.handle_serial(bytes([SerialCode.CALIBRATION_STEP_ONE, SerialCode.MENU_CLOSE]))
    assert controller.calibration_mode
    assert not controller.menu_enabled
    assert io.keys == []


def test_mouse_toggle_and_click():
    io, controller = make()
    io.levels[16] = 0
    controller.loop()
    assert not controller.mouse_enabled
    io.now = 2001
    controller.loop()
    assert controller.mouse_enabled
    assert io.mouse_moves[-1] == (0, 0, 0)

    io.levels[16] = 1
    io.levels[6] = 0
    io.now += 20
    controller.loop()
    assert io.mouse_pressed == {"left"}


def test_calibration_sequence_writes_eeprom():
    io, controller = make()
    controller.calibration_mode = True

    io.levels[1] = 0
    controller.loop()
    assert io.serial_out.endswith(bytes([SerialCode.CALIBRATION_STEP_TWO]))

    io.levels[1] = 1
    controller.loop()
    assert controller.calibrator.stage == 3

    io.analog_values[3] = 900
    controller.loop()
    io.analog_values[3] = CENTRES[3]
    io.levels[1] = 0
    controller.loop()

    assert io.serial_out.endswith(bytes([SerialCode.CALIBRATION_COMPLETE]))
    assert not controller.calibration_mode
    assert controller.calibration.left_x.maximum == 900
    assert Calibration.from_eeprom(io.eeprom) == controller.calibration