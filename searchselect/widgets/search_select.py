"""Textual search-select widget.

An Input with a dropdown of matching options underneath. All behavior lives
in SearchSelectControl; this widget forwards Textual events to it and
re-renders whenever the control's state changes.
"""

from typing import Optional

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, Static

from ..control import FetchOptions, SearchSelectControl
from ..options import AutocompleteConfig, ControlState, Option
from ..theme import PALETTE


class OptionRow(Static):
    """A single option in the dropdown."""

    DEFAULT_CSS = """
    OptionRow {
        height: 1;
        width: 100%;
        padding: 0 1;
    }
    OptionRow.highlighted {
        background: #1c2128;
    }
    """

    class PointerDown(Message):
        """The pointer was pressed on an option."""

        def __init__(self, index: int) -> None:
            super().__init__()
            self.index = index

    class Clicked(Message):
        """An option was clicked."""

        def __init__(self, index: int) -> None:
            super().__init__()
            self.index = index

    def __init__(self, option: Option, index: int, highlighted: bool = False,
                 selected: bool = False, **kwargs) -> None:
        super().__init__(**kwargs)
        self.option = option
        self.index = index
        self._selected = selected
        if highlighted:
            self.add_class("highlighted")

    def render(self) -> Text:
        t = Text()
        if self._selected:
            t.append("✓ ", style=f"bold {PALETTE.selected}")
        else:
            t.append("  ")
        t.append(self.option.label, style=PALETTE.text_bright)
        return t

    def on_mouse_down(self, event: events.MouseDown) -> None:
        # Keep receiving the release even if the pointer leaves the row.
        self.capture_mouse()
        self.post_message(self.PointerDown(self.index))

    def on_mouse_up(self, event: events.MouseUp) -> None:
        self.release_mouse()

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.post_message(self.Clicked(self.index))


class OptionDropdown(Widget):
    """Dropdown listing the current options, or a loading / no-results line."""

    DEFAULT_CSS = """
    OptionDropdown {
        height: auto;
        max-height: 10;
        width: 100%;
        background: #161b22;
        border: solid #30363d;
        padding: 0;
        display: none;
        overflow-y: auto;
    }
    OptionDropdown .status {
        height: 1;
        padding: 0 1;
        color: #6e7681;
    }
    """

    @property
    def is_open(self) -> bool:
        return self.display is True

    def show_state(self, state: ControlState, config: AutocompleteConfig) -> None:
        """Rebuild the dropdown from the control state."""
        self.remove_children()
        if not state.dropdown_open:
            self.display = False
            return

        term_length = len(state.search_term.strip())
        if state.is_loading:
            self.mount(Static(config.loading_text, classes="status"))
        elif state.options:
            self.mount_all(
                OptionRow(
                    option,
                    i,
                    highlighted=(i == state.highlighted_index),
                    selected=(option.value == state.selected_value),
                )
                for i, option in enumerate(state.options)
            )
        elif state.request_sequence and (term_length == 0 or term_length >= config.min_search_length):
            self.mount(Static(config.no_results_text, classes="status"))
        else:
            self.display = False
            return
        self.display = True


class SearchSelect(Widget):
    """Search-as-you-type selection of one option from an async source.

    Posts ``SearchSelect.Changed`` on every commit or clear and
    ``SearchSelect.OptionSelected`` with the full option on every commit.
    """

    DEFAULT_CSS = """
    SearchSelect {
        height: auto;
        width: 100%;
    }
    SearchSelect.-invalid Input {
        border: tall #e55a6e;
    }
    """

    class Changed(Message):
        """The committed value changed through user interaction."""

        def __init__(self, search_select: "SearchSelect", value: Optional[str]) -> None:
            super().__init__()
            self.search_select = search_select
            self.value = value

        @property
        def control(self) -> "SearchSelect":
            return self.search_select

    class OptionSelected(Message):
        """An option was committed."""

        def __init__(self, search_select: "SearchSelect", option: Option) -> None:
            super().__init__()
            self.search_select = search_select
            self.option = option

        @property
        def control(self) -> "SearchSelect":
            return self.search_select

    def __init__(
        self,
        fetch_options: FetchOptions,
        config: Optional[AutocompleteConfig] = None,
        value: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.controller = SearchSelectControl(
            fetch_options,
            config,
            on_value_committed=self._value_committed,
            on_touched=self._touched,
            on_option_selected=self._option_selected,
        )
        self._initial_value = value
        self._unsubscribe = None

    @property
    def config(self) -> AutocompleteConfig:
        return self.controller.config

    @property
    def value(self) -> Optional[str]:
        return self.controller.get_value()

    @property
    def label(self) -> Optional[str]:
        return self.controller.state.selected_label

    def set_value(self, value: Optional[str]) -> None:
        self.controller.set_value(value)

    def clear(self) -> None:
        self.controller.clear_selection()

    def compose(self) -> ComposeResult:
        yield Input(placeholder=self.config.placeholder, id="search_input")
        yield OptionDropdown()

    def on_mount(self) -> None:
        self._unsubscribe = self.controller.subscribe(self._render_state)
        if self._initial_value is not None:
            self.controller.set_value(self._initial_value)

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
        self.controller.close()

    # -- Textual events -> control --------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        # Echo of a value the control wrote into the Input itself.
        if event.value == self.controller.state.search_term:
            return
        self.controller.on_text_changed(event.value)

    def on_descendant_focus(self, event: events.DescendantFocus) -> None:
        self.controller.on_focus()

    def on_descendant_blur(self, event: events.DescendantBlur) -> None:
        self.controller.on_blur()

    def on_key(self, event: events.Key) -> None:
        if self.controller.handle_key(event.key):
            event.prevent_default()
            event.stop()

    def on_option_row_pointer_down(self, message: OptionRow.PointerDown) -> None:
        message.stop()
        self.controller.on_option_pointer_down(message.index)

    def on_option_row_clicked(self, message: OptionRow.Clicked) -> None:
        message.stop()
        if not self.controller.select_index(message.index):
            self.controller.on_option_pointer_released()

    def on_mouse_up(self, event: events.MouseUp) -> None:
        if self.controller.state.dropdown_open:
            self.controller.on_option_pointer_released()

    # -- control -> Textual ---------------------------------------------

    def _render_state(self, state: ControlState) -> None:
        inp = self.query_one("#search_input", Input)
        if inp.value != state.search_term:
            inp.value = state.search_term
            inp.cursor_position = len(inp.value)
        self.query_one(OptionDropdown).show_state(state, self.config)
        self.set_class(state.touched and self.controller.validate() is not None, "-invalid")

    def _value_committed(self, value: Optional[str]) -> None:
        self.post_message(self.Changed(self, value))

    def _option_selected(self, option: Option) -> None:
        self.post_message(self.OptionSelected(self, option))

    def _touched(self) -> None:
        self.set_class(self.controller.validate() is not None, "-invalid")
