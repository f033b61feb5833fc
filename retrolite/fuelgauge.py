"""Fuel gauge access: state of charge, capacity, current and model setup."""

from __future__ import annotations

import time
from typing import Protocol

__all__ = [
    "CAPACITY_MULTIPLIER_MAH",
    "CURRENT_MULTIPLIER",
    "FUEL_GAUGE_ADDRESS",
    "FuelGauge",
    "PERCENTAGE_MULTIPLIER",
    "Register",
    "TIME_MULTIPLIER_HOURS",
    "VOLTAGE_MULTIPLIER",
    "vempty_register",
]

FUEL_GAUGE_ADDRESS = 0x36

CAPACITY_MULTIPLIER_MAH = 5e-3 / 0.01
CURRENT_MULTIPLIER = 0.00015625
VOLTAGE_MULTIPLIER = 7.8125e-5
TIME_MULTIPLIER_HOURS = 5.625 / 3600.0
PERCENTAGE_MULTIPLIER = 1.0 / 256.0

RECOVERY_VOLTAGE_MV = 3880
HIGH_CHARGE_VOLTAGE = 4.275
POLL_INTERVAL = 0.01


class Register:
    """Register addresses used on the gauge."""

    STATUS = 0x00
    REP_CAP = 0x05
    REP_SOC = 0x06
    VCELL = 0x09
    CURRENT = 0x0A
    TIME_TO_EMPTY = 0x11
    DESIGN_CAP = 0x18
    ICHG_TERM = 0x1E
    TIME_TO_FULL = 0x20
    V_EMPTY = 0x3A
    FSTAT = 0x3D
    DQ_ACC = 0x45
    DP_ACC = 0x46
    SOFT_WAKEUP = 0x60
    HIB_CFG = 0xBA
    MODEL_CFG = 0xDB


class WordBus(Protocol):
    def read_word_data(self, address: int, register: int) -> int: ...

    def write_word_data(self, address: int, register: int, value: int) -> None: ...


def vempty_register(ve_mv: int, vr_mv: int) -> int:
    """Pack the empty and recovery voltage targets into the VEmpty register."""
    return ((((ve_mv * 1000) // 10) << 7) | (vr_mv // 40)) & 0xFFFF


def _int16(number: int) -> int:
    number &= 0xFFFF
    return number - 0x10000 if number & 0x8000 else number


class FuelGauge:
    """A fuel gauge reached over a word-addressed bus."""

    def __init__(self, bus: WordBus) -> None:
        self.bus = bus
        self.address = FUEL_GAUGE_ADDRESS
        self.status: int | None = None

    def _read(self, register: int) -> int:
        return self.bus.read_word_data(self.address, register) & 0xFFFF

    def _write(self, register: int, value: int) -> None:
        self.bus.write_word_data(self.address, register, int(value) & 0xFFFF)

    def _wait_while(self, register: int, mask: int) -> None:
        while self._read(register) & mask:
            time.sleep(POLL_INTERVAL)

    def soc(self) -> float:
        """State of charge in percent."""
        return self._read(Register.REP_SOC) * PERCENTAGE_MULTIPLIER

    def capacity(self) -> int:
        """Design capacity in mAh."""
        return int(self._read(Register.DESIGN_CAP) * CAPACITY_MULTIPLIER_MAH)

    def remaining_capacity(self) -> int:
        """Remaining capacity in mAh."""
        return int(self._read(Register.REP_CAP) * CAPACITY_MULTIPLIER_MAH)

    def current(self) -> float:
        """Instantaneous current in amps; negative while discharging."""
        return _int16(self._read(Register.CURRENT)) * CURRENT_MULTIPLIER

    def voltage(self) -> float:
        """Cell voltage in volts."""
        return self._read(Register.VCELL) * VOLTAGE_MULTIPLIER

    def time_to_empty(self) -> float:
        """Estimated hours until empty."""
        return self._read(Register.TIME_TO_EMPTY) * TIME_MULTIPLIER_HOURS

    def time_to_full(self) -> float:
        """Estimated hours until full."""
        return self._read(Register.TIME_TO_FULL) * TIME_MULTIPLIER_HOURS

    def v_empty(self) -> int:
        """Empty voltage target in mV."""
        return ((self._read(Register.V_EMPTY) >> 7) & 0x1FF) * 10

    def initialise(
        self,
        battery_capacity: int,
        low_voltage_threshold: float,
        charge_voltage: float,
    ) -> bool:
        """Load the battery model if needed; return whether it was loaded.

        The model is loaded after a power-on reset or when the stored design
        capacity differs from ``battery_capacity``.
        """
        reset = self._read(Register.STATUS) & 0x0002
        if self.capacity() != battery_capacity:
            reset = 1
        if not reset:
            return False

        self._wait_while(Register.FSTAT, 0x0001)

        design = battery_capacity / CAPACITY_MULTIPLIER_MAH
        self._write(Register.DESIGN_CAP, int(design))
        self._write(Register.DQ_ACC, int(design) // 32)
        self._write(Register.ICHG_TERM, 0x666)
        self._write(
            Register.V_EMPTY,
            vempty_register(int(low_voltage_threshold), RECOVERY_VOLTAGE_MV),
        )
        hibernate_config = self._read(Register.HIB_CFG)
        self._write(Register.SOFT_WAKEUP, 0x90)
        self._write(Register.HIB_CFG, 0x0)
        self._write(Register.SOFT_WAKEUP, 0x0)

        if charge_voltage > HIGH_CHARGE_VOLTAGE:
            self._write(Register.DP_ACC, int(int(design / 32) * 51200 / design))
            self._write(Register.MODEL_CFG, 0x8400)
        else:
            self._write(Register.DP_ACC, int(int(design / 32) * 44138 / design))
            self._write(Register.MODEL_CFG, 0x8000)

        self._wait_while(Register.MODEL_CFG, 0x8000)
        self._write(Register.HIB_CFG, hibernate_config)

        self.status = self._read(Register.STATUS)
        self._write(Register.STATUS, self.status & 0xFFFD)
        return True