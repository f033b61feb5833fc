import pytest

from retrolite.colour import Rgba, hsv_to_rgb


@pytest.mark.parametrize("hue", [0, 600, 1800, 3599])
def test_zero_saturation_is_white_at_full_value(hue):
    assert hsv_to_rgb(hue, 0, 1000) == Rgba(255, 255, 255)


@pytest.mark.parametrize("hue", [0, 450, 1300, 2900])
@pytest.mark.parametrize("saturation", [0, 500, 1000])
def test_zero_value_is_black(hue, saturation):
    colour = hsv_to_rgb(hue, saturation, 0)
    assert (colour.red, colour.green, colour.blue) == (0, 0, 0)


def test_primary_colours():
    assert hsv_to_rgb(0, 1000, 1000) == Rgba(255, 0, 0)
    assert hsv_to_rgb(1200, 1000, 1000) == Rgba(0, 255, 0)
    assert hsv_to_rgb(2400, 1000, 1000) == Rgba(0, 0, 255)


@pytest.mark.parametrize("hue", range(0, 3600, 37))
def test_brightest_channel_matches_value(hue):
    grey = hsv_to_rgb(hue, 0, 800).red
    colour = hsv_to_rgb(hue, 1000, 800)
    channels = (colour.red, colour.green, colour.blue)
    assert max(channels) == grey
    assert min(channels) == 0


@pytest.mark.parametrize("hue", range(0, 3600, 113))
def test_channels_stay_in_byte_range(hue):
    colour = hsv_to_rgb(hue, 640, 930)
    for channel in (colour.red, colour.green, colour.blue):
        assert 0 <= channel <= 255


def test_hue_past_last_sector_is_black():
    assert hsv_to_rgb(3600, 1000, 1000) == Rgba(0, 0, 0)


def test_alpha_is_opaque():
    assert hsv_to_rgb(900, 700, 500).alpha == 255