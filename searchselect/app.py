"""Textual picker app: one SearchSelect, exits with the chosen option."""

from typing import Awaitable, Callable, Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from .control import FetchOptions
from .options import AutocompleteConfig, Option
from .theme import PALETTE
from .widgets import SearchSelect


class PickerApp(App[Option]):
    """Fullscreen picker. ``run()`` returns the selected Option or None."""

    CSS = """
    Screen {
        background: #0d1117;
        padding: 1 2;
    }
    #title {
        height: 1;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "cancel", "Cancel", show=False, priority=True),
    ]

    def __init__(
        self,
        fetch_options: FetchOptions,
        title: str = "Select",
        config: Optional[AutocompleteConfig] = None,
        value: Optional[str] = None,
        on_shutdown: Optional[Callable[[], Awaitable[None]]] = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._fetch_options = fetch_options
        self._title = title
        self._config = config
        self._value = value
        self._on_shutdown = on_shutdown

    def compose(self) -> ComposeResult:
        t = Text()
        t.append(self._title, style=f"bold {PALETTE.accent}")
        t.append("  type to search . enter to select . ctrl+c to cancel",
                 style=f"dim {PALETTE.text_dim}")
        yield Static(t, id="title")
        yield SearchSelect(self._fetch_options, self._config, value=self._value, id="picker")

    def on_mount(self) -> None:
        self.query_one("#picker #search_input").focus()

    def on_search_select_option_selected(self, message: SearchSelect.OptionSelected) -> None:
        self.exit(message.option)

    def action_cancel(self) -> None:
        self.exit(None)

    async def on_unmount(self) -> None:
        if self._on_shutdown is not None:
            await self._on_shutdown()
