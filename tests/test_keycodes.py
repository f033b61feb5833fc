import pytest

from retrolite.keycodes import (
    BACKSPACE,
    ENTER,
    ESC,
    LOWERCASE,
    UPPERCASE,
    SerialCode,
    key_for,
)


def test_letters_on_home_row():
    assert chr(key_for(2, 0, False)) == "a"
    assert chr(key_for(2, 0, True)) == "A"


def test_top_letter_row():
    word = "".join(chr(key_for(3, column, False)) for column in range(10))
    assert word == "qwertyuiop"


def test_digits_and_symbols():
    digits = "".join(chr(key_for(4, column, False)) for column in range(10))
    assert digits == "1234567890"
    assert chr(key_for(4, 0, True)) == "!"


def test_control_keys():
    assert key_for(0, 0, False) == ESC
    assert key_for(0, 6, True) == ENTER
    assert key_for(1, 9, False) == BACKSPACE


@pytest.mark.parametrize("row", [2, 3])
def test_letter_rows_differ_only_in_case(row):
    for column in range(9):
        lower = chr(key_for(row, column, False))
        upper = chr(key_for(row, column, True))
        assert upper == lower.upper()


@pytest.mark.parametrize("uppercase, table", [(False, LOWERCASE), (True, UPPERCASE)])
def test_every_position_of_five_by_ten_grid_is_reachable(uppercase, table):
    assert len(table) == 5
    for row in range(5):
        assert len(table[row]) == 10
        for column in range(10):
            assert key_for(row, column, uppercase) == table[row][column]


@pytest.mark.parametrize("row, column", [(-1, 0), (5, 0), (0, -1), (0, 10)])
def test_out_of_range_position_raises(row, column):
    with pytest.raises(IndexError):
        key_for(row, column, False)


def test_serial_codes_match_protocol():
    assert SerialCode.MENU_OPEN == 0x12
    assert SerialCode.MENU_CLOSE == 0x13
    assert SerialCode.OS_KEYBOARD_SELECT == 0x10
    assert SerialCode(0x00) is SerialCode.BRIGHTNESS_UP