"""Joystick calibration, lookup tables and their EEPROM layout."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from .keycodes import SerialCode

__all__ = [
    "AXES",
    "AxisCalibration",
    "Calibration",
    "Calibrator",
    "CENTRE",
    "DEAD_BAND",
    "EARLY_STOP",
    "EEPROM_SIZE",
    "FULL",
    "LUT_SIZE",
    "arduino_map",
    "axis_value",
    "build_lut",
    "decode_int",
    "encode_int",
]

LUT_SIZE = 350
EARLY_STOP = 30
DEAD_BAND = 10
CENTRE = 127
FULL = 254

# Axis order as stored in EEPROM, starting at address 1.
AXES = ("left_x", "left_y", "right_y", "right_x")
EEPROM_SIZE = 1 + len(AXES) * 3 * 2
_EMPTY = -1


def _tdiv(numerator: int, denominator: int) -> int:
    """Integer division that truncates toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def arduino_map(x: int, in_min: int, in_max: int, out_min: int, out_max: int) -> int:
    """Re-map ``x`` linearly from one range to another with integer maths."""
    return _tdiv((x - in_min) * (out_max - out_min), in_max - in_min) + out_min


def build_lut(
    minimum: int, middle: int, maximum: int, early_stop: int, dead_band: int
) -> bytes:
    """Build the lookup table for one axis.

    Raw readings are shifted to start at zero and halved, so the table is
    indexed by ``(raw - minimum) // 2``. Values run from 0 to 254 with 127 at
    the centre and across the dead band.
    """
    mid = _tdiv(middle - minimum, 2)
    top = _tdiv(maximum - minimum, 2)

    def entry(index: int) -> int:
        if index < mid:
            value = arduino_map(index, early_stop, mid - dead_band, 0, CENTRE)
        else:
            value = arduino_map(index, mid + dead_band, top - early_stop, CENTRE, FULL)
        value = min(max(value, 0), FULL)
        if mid - dead_band < index < mid + dead_band:
            value = CENTRE
        return value

    return bytes(entry(index) for index in range(LUT_SIZE))


def axis_value(lut: Sequence[int], raw: int, minimum: int) -> int:
    """Look up the output for a raw reading; readings off the table are clamped."""
    index = _tdiv(raw - minimum, 2)
    index = min(max(index, 0), len(lut) - 1)
    return lut[index]


def encode_int(number: int) -> bytes:
    """Split a 16-bit integer into its high and low bytes."""
    return bytes(((number >> 8) & 0xFF, number & 0xFF))


def decode_int(high: int, low: int) -> int:
    """Join a high and a low byte into a signed 16-bit integer."""
    number = ((high & 0xFF) << 8) | (low & 0xFF)
    return number - 0x10000 if number & 0x8000 else number


@dataclass
class AxisCalibration:
    """Raw travel limits and centre of one joystick axis."""

    minimum: int
    maximum: int
    middle: int


@dataclass
class Calibration:
    """Calibration of all four joystick axes."""

    left_x: AxisCalibration = field(default_factory=lambda: AxisCalibration(330, 830, 512))
    left_y: AxisCalibration = field(default_factory=lambda: AxisCalibration(205, 635, 477))
    right_y: AxisCalibration = field(default_factory=lambda: AxisCalibration(215, 730, 529))
    right_x: AxisCalibration = field(default_factory=lambda: AxisCalibration(300, 780, 525))

    def to_eeprom(self) -> bytes:
        """Return the EEPROM image; address 0 is unused and left erased."""
        image = bytearray([0xFF])
        for name in AXES:
            axis: AxisCalibration = getattr(self, name)
            for number in (axis.minimum, axis.maximum, axis.middle):
                image += encode_int(number)
        return bytes(image)

    @staticmethod
    def from_eeprom(data: Sequence[int]) -> "Calibration":
        """Read a calibration from an EEPROM image, or defaults if it is blank."""
        if len(data) < EEPROM_SIZE:
            raise ValueError(
                f"EEPROM image holds {len(data)} bytes, need {EEPROM_SIZE}"
            )
        words = [decode_int(data[a], data[a + 1]) for a in range(1, EEPROM_SIZE, 2)]
        if words[0] == _EMPTY:
            return Calibration()
        axes = {
            name: AxisCalibration(*words[index * 3 : index * 3 + 3])
            for index, name in enumerate(AXES)
        }
        return Calibration(**axes)


class Calibrator:
    """Three-stage calibration that updates a :class:`Calibration` in place.

    Stage 1 waits for the confirm button and records the centres, stage 2
    resets the limits, stage 3 tracks the extremes until the button is
    pressed again.
    """

    def __init__(self, calibration: Calibration) -> None:
        self.calibration = calibration
        self.stage = 1
        self.complete = False

    def _axis(self, name: str) -> AxisCalibration:
        return getattr(self.calibration, name)

    def step(
        self, readings: Mapping[str, int], select_pressed: bool
    ) -> SerialCode | None:
        """Advance calibration; return the code to report, if any."""
        if self.stage == 1:
            self.complete = False
            if not select_pressed:
                return None
            for name in AXES:
                self._axis(name).middle = readings[name]
            self.stage = 2
            return SerialCode.CALIBRATION_STEP_TWO

        if self.stage == 2:
            for name in AXES:
                axis = self._axis(name)
                axis.minimum = axis.middle
                axis.maximum = 0
            self.stage = 3
            return None

        for name in AXES:
            axis = self._axis(name)
            value = readings[name]
            axis.maximum = max(axis.maximum, value)
            axis.minimum = min(axis.minimum, value)
        if not select_pressed:
            return None
        self.stage = 1
        self.complete = True
        return SerialCode.CALIBRATION_COMPLETE