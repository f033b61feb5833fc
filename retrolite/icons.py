"""Status icon paths, battery label and fan speed curve."""

from __future__ import annotations

__all__ = [
    "battery_icon",
    "battery_label",
    "brightness_icon",
    "charge_icon",
    "fan_speed",
    "volume_icon",
]

BATTERY_ERROR_ICON = "./batteryIcons/battery_error_18d.png"
BATTERY_FULL_ICON = "./batteryIcons/battery_full_white_18dp.png"

TEMP_FAN_MIN = 50
TEMP_FAN_FULL = 65
PWM_FAN_MIN = 65
PWM_FAN_MAX = 100

_LEVELS = range(0, 101, 10)
_CHARGE_STEPS = 5


def battery_icon(soc: float, connected: bool) -> str:
    """Icon for the battery level, or the error icon without a gauge."""
    if not connected:
        return BATTERY_ERROR_ICON
    if soc > 90:
        return BATTERY_FULL_ICON
    for level in range(80, -1, -10):
        if soc > level:
            return f"./batteryIcons/battery_{level + 10}_white_18dp.png"
    return "./batteryIcons/battery_0_white_18dp.png"


def charge_icon(step: int) -> str:
    """Frame ``step`` (0 to 4) of the charging animation."""
    if not 0 <= step < _CHARGE_STEPS:
        raise ValueError(f"charge step {step} out of range")
    return f"./batteryIcons/battery_charge_{step}_18dp.png"


def brightness_icon(level: int) -> str | None:
    """Brightness bar icon; None for a level that is not a multiple of ten."""
    if level not in _LEVELS:
        return None
    return f"./brightnessIcons/brightness_{level}.png"


def volume_icon(level: int) -> str | None:
    """Volume bar icon; None for a level that is not a multiple of ten."""
    if level not in _LEVELS:
        return None
    return f"./volumeIcons/volume_bar_{level}.png"


def battery_label(soc: float) -> tuple[str, int]:
    """Percentage text and its width in characters for positioning."""
    text = f"{soc:.0f}%"[:4]
    if soc > 99.5:
        width = 4
    elif soc < 9.5:
        width = 2
    else:
        width = 3
    return text, width


def fan_speed(temperature: float, threshold: int) -> int | None:
    """Fan PWM duty for a CPU temperature in degrees.

    Returns None when the speed is to be left as it was, which happens
    between the start threshold and the bottom of the fan curve.
    """
    if temperature <= threshold:
        return 0
    if TEMP_FAN_MIN <= temperature <= TEMP_FAN_FULL:
        return int(
            (
                PWM_FAN_MIN * (TEMP_FAN_FULL - temperature)
                + PWM_FAN_MAX * (temperature - TEMP_FAN_MIN)
            )
            / (TEMP_FAN_FULL - TEMP_FAN_MIN)
        )
    if temperature > TEMP_FAN_FULL:
        return PWM_FAN_MAX
    return None