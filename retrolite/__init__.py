"""Power supervision, gamepad logic, fuel gauge access and OSD helpers for a handheld console."""

__version__ = "1.4.0"
__all__ = [
    "colour",
    "keycodes",
    "power",
    "joystick",
    "controller",
    "fuelgauge",
    "settings",
    "navigation",
    "icons",
]