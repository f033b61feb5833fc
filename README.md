# retrolite

Logic for a handheld game console built around a single-board computer:
the power-button supervisor, the gamepad controller loop with stick
calibration, a fuel gauge driver, and the pieces of an on-screen display
(settings, menu and keyboard navigation, status icons). Hardware access
is passed in as objects you supply, so every part can run and be tested
without the device.

## Installing

    pip install retrolite

For the test suite:

    pip install "retrolite[test]"
    pytest

## Modules

- `retrolite.colour`: the `Rgba` colour dataclass and `hsv_to_rgb(hue,
  saturation, value)`, with hue in tenths of a degree (0 to 3600) and
  saturation and value from 0 to 1000.
- `retrolite.keycodes`: `SerialCode`, the single-byte messages between the
  controller and the display, the `LOWERCASE` and `UPPERCASE` keyboard
  layouts, and `key_for(row, column, uppercase)`, which raises
  `IndexError` outside the 5 by 10 grid.
- `retrolite.power`: `PowerMonitor(io, clock)`, whose `loop()` turns the
  system on after the button is held for a second, asks for shutdown after
  three seconds or on a debounced low-voltage signal, and cuts power ten
  seconds later; `configure_charger(bus)` writes the charger registers.
- `retrolite.joystick`: `arduino_map`, `build_lut`, `axis_value`,
  `encode_int` / `decode_int`, the `AxisCalibration` and `Calibration`
  dataclasses (with `to_eeprom()` and `Calibration.from_eeprom(data)`), and
  the three-stage `Calibrator`.
- `retrolite.controller`: `Controller(io, clock)` with `loop()` and
  `handle_serial(data)`, plus `hat_angle` and `dpad_axes` for the d-pad.
  It reports buttons, sticks and d-pad, emulates a mouse (toggled by
  holding the left stick click), and sends brightness and menu codes.
- `retrolite.fuelgauge`: `FuelGauge(bus)` reading state of charge,
  capacity, current, voltage, time to empty or full and the empty voltage,
  and `initialise(...)` to load the battery model; `vempty_register`.
- `retrolite.settings`: the `Settings` dataclass with `normalised()`,
  `load_settings(path)` and `save_settings(settings, path)`. Settings are
  one space-separated line; `load_settings` returns defaults when the file
  is missing and otherwise writes the normalised values back.
- `retrolite.navigation`: `menu_up`, `menu_down` and `KeyboardCursor` with
  `move_left`, `move_right`, `move_up` and `move_down`.
- `retrolite.icons`: `battery_icon`, `charge_icon`, `brightness_icon`,
  `volume_icon`, `battery_label` and the `fan_speed` curve.

## Example

```python
from retrolite.colour import hsv_to_rgb
from retrolite.keycodes import key_for

print(hsv_to_rgb(1200, 1000, 1000))    # Rgba(red=0, green=255, blue=0, alpha=255)
print(key_for(3, 0, uppercase=False))  # 113, the key code for "q"
```

## What it does not do

The package installs no command. It does not draw anything on a screen,
open a serial port, or talk to GPIO, I2C or USB devices itself: callers
provide the pin, bus, serial and HID objects. There is no on-screen
display main loop or menu rendering; the modules above supply the state,
text paths and rules such a loop would use.