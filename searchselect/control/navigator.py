"""Keyboard navigation over the dropdown options."""

from typing import Callable

from ..options import ControlState, Option

# Key names as Textual reports them.
KEY_DOWN = "down"
KEY_UP = "up"
KEY_ENTER = "enter"
KEY_ESCAPE = "escape"


class KeyboardNavigator:
    """Maps key presses to highlight movement, commit and dismissal.

    handle() returns True when the key was consumed and the host should
    suppress its default behavior (scrolling, form submission, ...).
    """

    def __init__(
        self,
        state: ControlState,
        commit: Callable[[Option], None],
        on_change: Callable[[], None],
    ) -> None:
        self._state = state
        self._commit = commit
        self._on_change = on_change

    def handle(self, key: str) -> bool:
        if key == KEY_DOWN:
            self.down()
            return True
        if key == KEY_UP:
            return self.up()
        if key == KEY_ENTER:
            return self.enter()
        if key == KEY_ESCAPE:
            return self.escape()
        return False

    def down(self) -> None:
        state = self._state
        if not state.dropdown_open:
            state.dropdown_open = True
        else:
            state.highlighted_index = min(state.highlighted_index + 1, len(state.options) - 1)
        self._on_change()

    def up(self) -> bool:
        # Moves the highlight even while closed, like down; only consumed when open.
        state = self._state
        if state.highlighted_index > 0:
            state.highlighted_index -= 1
            self._on_change()
        return state.dropdown_open

    def enter(self) -> bool:
        option = self._state.highlighted_option
        if option is None:
            return self._state.dropdown_open
        self._commit(option)
        return True

    def escape(self) -> bool:
        if not self._state.dropdown_open:
            return False
        self._state.dropdown_open = False
        self._on_change()
        return True
