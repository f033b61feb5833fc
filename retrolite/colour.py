"""Colour values and an integer HSV to RGB conversion."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Rgba", "hsv_to_rgb"]


@dataclass(frozen=True)
class Rgba:
    """An 8-bit-per-channel colour with alpha."""

    red: int = 0
    green: int = 0
    blue: int = 0
    alpha: int = 255


def _tdiv(numerator: int, denominator: int) -> int:
    """Integer division that truncates toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def _tmod(numerator: int, denominator: int) -> int:
    return numerator - denominator * _tdiv(numerator, denominator)


def _int16(number: int) -> int:
    number &= 0xFFFF
    return number - 0x10000 if number & 0x8000 else number


def _channel(level: int) -> int:
    return _tdiv(255 * level, 1000) & 0xFF


def hsv_to_rgb(hue: int, saturation: int, value: int) -> Rgba:
    """Convert HSV to RGB.

    ``hue`` is in tenths of a degree (0 to 3600), ``saturation`` and
    ``value`` run from 0 to 1000. A hue outside the six sectors gives black.
    The alpha channel is left opaque.
    """
    hue, saturation, value = _int16(hue), _int16(saturation), _int16(value)

    if saturation == 0:
        grey = _channel(value)
        return Rgba(grey, grey, grey)

    sector = _int16(_tdiv(hue, 600))
    fraction = _int16(_tdiv(_tmod(hue, 600) * 1000, 600))
    p = _int16(_tdiv(value * (1000 - saturation), 1000))
    q = _int16(_tdiv(value * (1000 - _tdiv(saturation * fraction, 1000)), 1000))
    t = _int16(
        _tdiv(value * (1000 - _tdiv(saturation * (1000 - fraction), 1000)), 1000)
    )

    sectors = {
        0: (value, t, p),
        1: (q, value, p),
        2: (p, value, t),
        3: (p, q, value),
        4: (t, p, value),
        5: (value, p, q),
    }
    levels = sectors.get(sector)
    if levels is None:
        return Rgba(0, 0, 0)
    red, green, blue = (_channel(level) for level in levels)
    return Rgba(red, green, blue)