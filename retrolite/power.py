"""Power button and low-voltage shutdown supervisor."""

from __future__ import annotations

from collections.abc import Callable
from enum import IntEnum
from typing import Protocol

__all__ = [
    "CHARGER_ADDRESS",
    "CHARGER_REGISTERS",
    "HIGH",
    "LOW",
    "Pin",
    "PowerMonitor",
    "configure_charger",
]

HIGH = 1
LOW = 0

POWER_ON_DELAY = 1000
POWER_OFF_DELAY = 3000
SHUTDOWN_DELAY = 10000
DEBOUNCE_DELAY = 50

# 7-bit bus address of the charger (0xD6 as an 8-bit write address).
CHARGER_ADDRESS = 0xD6 >> 1

CHARGER_REGISTERS: dict[int, int] = {
    0x00: 0b01111111,
    0x01: 0b00010001,
    0x02: 0b01000000,  # 2A charge current
    0x04: 0b10110000,
    0x05: 0b10001010,
    0x06: 0b00000001,
    0x07: 0b01001011,
}


class Pin(IntEnum):
    """Pins used by the supervisor."""

    LOW_VOLTAGE = 0
    SYSTEM_ON = 1
    SHUTDOWN = 2
    POWER_BUTTON = 8


class PinIO(Protocol):
    def read(self, pin: int) -> int: ...

    def write(self, pin: int, level: int) -> None: ...


class RegisterBus(Protocol):
    def write_byte_data(self, address: int, register: int, value: int) -> None: ...


def configure_charger(bus: RegisterBus) -> None:
    """Write the charger's configuration registers in order."""
    for register, value in CHARGER_REGISTERS.items():
        bus.write_byte_data(CHARGER_ADDRESS, register, value)


class PowerMonitor:
    """Turns the system on and off from the power button and low-voltage line.

    ``io`` reads and writes pin levels; ``clock`` returns milliseconds.
    """

    def __init__(self, io: PinIO, clock: Callable[[], int]) -> None:
        self.io = io
        self.clock = clock
        self.button_pressed = False
        self.low_voltage = False
        self.system_on = False
        self.shutdown_pending = False
        self._last_low_voltage_level = LOW
        self._last_low_voltage_change = 0
        self._button_started: int | None = None
        self._shutdown_started: int | None = None

    def loop(self) -> None:
        """Run one pass of the supervisor."""
        self._read_button()
        self._debounce_low_voltage()

        if not self.shutdown_pending:
            if self.button_pressed:
                self._check_button_timer()
            else:
                self._button_started = None
        else:
            self._shutdown_step()

        if self.low_voltage:
            self._shutdown_step()

    def _read_button(self) -> None:
        self.button_pressed = not self.io.read(Pin.POWER_BUTTON)

    def _debounce_low_voltage(self) -> None:
        level = self.io.read(Pin.LOW_VOLTAGE)
        now = self.clock()
        if level != self._last_low_voltage_level:
            self._last_low_voltage_change = now
        if now - self._last_low_voltage_change > DEBOUNCE_DELAY:
            self.low_voltage = bool(level)
        self._last_low_voltage_level = level

    def _check_button_timer(self) -> None:
        now = self.clock()
        if self._button_started is None:
            self._button_started = now
            return
        if not self.system_on:
            if self._button_started + POWER_ON_DELAY < now:
                self.system_on = True
                self.io.write(Pin.SYSTEM_ON, HIGH)
                self._button_started = None
        elif self._button_started + POWER_OFF_DELAY < now:
            self.system_on = False
            self.io.write(Pin.SHUTDOWN, HIGH)
            self._button_started = None
            self.shutdown_pending = True

    def _shutdown_step(self) -> None:
        now = self.clock()
        if self._shutdown_started is None:
            self._shutdown_started = now
            self.io.write(Pin.SHUTDOWN, HIGH)
            self.shutdown_pending = True
        elif self._shutdown_started + SHUTDOWN_DELAY < now:
            self.io.write(Pin.SYSTEM_ON, LOW)
            self.io.write(Pin.SHUTDOWN, LOW)
            self.system_on = False
            self._shutdown_started = None
            self.shutdown_pending = False