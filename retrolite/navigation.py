"""Menu selection and on-screen keyboard cursor movement."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["KeyboardCursor", "menu_down", "menu_up"]

SETTINGS_MENU = 4
SAVE_ENTRY = 7
LAST_SETTING = 5
LAST_MAIN_ENTRY = 4

_ROWS = 5
_LAST_COLUMN = 9
_LAST_TOP_COLUMN = 6


def menu_up(selected: int) -> int:
    """Move the menu selection up one entry."""
    if selected > 1 and selected != SAVE_ENTRY:
        return selected - 1
    if selected == SAVE_ENTRY:
        return LAST_SETTING
    return selected


def menu_down(selected: int, active: int) -> int:
    """Move the menu selection down one entry within the active menu."""
    if active != SETTINGS_MENU:
        return selected + 1 if selected < LAST_MAIN_ENTRY else selected
    if selected < LAST_SETTING:
        return selected + 1
    if selected == LAST_SETTING:
        return SAVE_ENTRY
    return selected


@dataclass
class KeyboardCursor:
    """Highlighted key on the on-screen keyboard.

    The top row holds seven wider keys; the others hold ten.
    """

    row: int = 0
    column: int = 0

    def _last_column(self) -> int:
        return _LAST_TOP_COLUMN if self.row == 0 else _LAST_COLUMN

    def move_left(self) -> None:
        if self.column > 0:
            self.column -= 1
        else:
            self.column = self._last_column()

    def move_right(self) -> None:
        self.column = self.column + 1 if self.column < self._last_column() else 0

    def _into_top_row(self) -> None:
        if self.row != 0:
            return
        if self.column == 6:
            self.column = 4
        elif self.column == 7:
            self.column = 5
        elif self.column > 7:
            self.column = 6
        elif self.column in (3, 4, 5):
            self.column = 3

    def move_up(self) -> None:
        if self.row == 0:
            if self.column == 3:
                self.column = 4
            elif self.column == 4:
                self.column = 6
            elif self.column == 5:
                self.column = 7
            elif self.column > 5:
                self.column = 9
        self.row = self.row + 1 if self.row < _ROWS - 1 else 0
        self._into_top_row()

    def move_down(self) -> None:
        if self.row == 0:
            if self.column == 4:
                self.column = 6
            elif self.column == 5:
                self.column = 7
            elif self.column == 6:
                self.column = 9
            elif self.column == 3:
                self.column = 4
        self.row = self.row - 1 if self.row > 0 else _ROWS - 1
        self._into_top_row()