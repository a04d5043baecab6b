"""The incremental search-select control.

SearchSelectControl owns the ControlState and wires together the debounce
scheduler, the search executor and the keyboard navigator. It is UI-toolkit
agnostic: a widget feeds it text, focus, pointer and key events and renders
``state`` whenever a subscribed listener is called.

All handlers are synchronous and must be called from the thread running the
asyncio event loop; the only suspension points are the fetch call and the
debounce and blur timers.
"""

import asyncio
import logging
from typing import Callable, Dict, List, Optional

from ..errors import ConfigurationError
from ..options import AutocompleteConfig, ControlState, Option
from .debounce import DebounceScheduler
from .executor import FetchOptions, SearchExecutor, call_fetch
from .navigator import KeyboardNavigator

_log = logging.getLogger(__name__)

Listener = Callable[[ControlState], None]


def _noop(*_args) -> None:
    pass


class SearchSelectControl:
    """Search-as-you-type selection of one option from an async source.

    Args:
        fetch_options: ``(search_term) -> awaitable list of options``.
            An empty term means "show everything".
        config: Behavior and display settings; defaults apply when omitted.
        on_value_committed: Called with the new value on every commit or
            clear made through the control.
        on_touched: Called when the input loses focus.
        on_option_selected: Called with the full Option on every commit.
    """

    def __init__(
        self,
        fetch_options: FetchOptions,
        config: Optional[AutocompleteConfig] = None,
        *,
        on_value_committed: Optional[Callable[[Optional[str]], None]] = None,
        on_touched: Optional[Callable[[], None]] = None,
        on_option_selected: Optional[Callable[[Option], None]] = None,
    ) -> None:
        if fetch_options is None or not callable(fetch_options):
            raise ConfigurationError("fetch_options must be a callable returning options")

        self.config = config or AutocompleteConfig()
        self.state = ControlState()

        self._fetch_options = fetch_options
        self._on_value_committed = on_value_committed or _noop
        self._on_touched = on_touched or _noop
        self._on_option_selected = on_option_selected or _noop
        self._listeners: List[Listener] = []
        self._label_cache: Dict[str, str] = {}

        self._debounce = DebounceScheduler(self.config.debounce_ms, self._on_quiet_period)
        self._executor = SearchExecutor(fetch_options, self.state, self._notify)
        self._navigator = KeyboardNavigator(self.state, self.select_option, self._notify)

        self._focused = False
        self._pointer_down = False
        self._blur_handle: Optional[asyncio.TimerHandle] = None
        self._resolve_ticket = 0
        self._resolve_task: Optional[asyncio.Task] = None

    # -- observers -------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(state)`` after every state change.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for option in self.state.options:
            self._label_cache[option.value] = option.label
        for listener in list(self._listeners):
            listener(self.state)

    # -- host form binding -----------------------------------------------

    def get_value(self) -> Optional[str]:
        return self.state.selected_value

    def set_value(self, value: Optional[str]) -> Optional[asyncio.Task]:
        """Programmatically select ``value`` (e.g. when editing a record).

        When no label for ``value`` is known yet, one fetch with an empty
        term is started to look it up and the task is returned. The value is
        honored even if no matching option turns up. An empty value clears
        like None. The host is not notified: it already knows the value it set.
        """
        self._resolve_ticket += 1
        self._debounce.cancel()
        state = self.state
        state.selected_value = value or None

        if not value:
            state.selected_label = None
            state.search_term = ""
            self._notify()
            return None

        label = self._known_label(value)
        if label is not None:
            state.selected_label = label
            state.search_term = label
            self._notify()
            return None

        state.selected_label = None
        self._notify()
        task = asyncio.get_running_loop().create_task(
            self._resolve_label(value, self._resolve_ticket)
        )
        self._resolve_task = task
        return task

    def validate(self) -> Optional[str]:
        """Return an error message if the control is in an invalid state."""
        if self.config.required and self.state.selected_value is None:
            return "A selection is required"
        return None

    def _known_label(self, value: str) -> Optional[str]:
        for option in self.state.options:
            if option.value == value:
                return option.label
        return self._label_cache.get(value)

    async def _resolve_label(self, value: str, ticket: int) -> None:
        try:
            candidates = await call_fetch(self._fetch_options, "")
        except Exception:
            _log.warning("Error fetching options to resolve value %r", value, exc_info=True)
            return

        for option in candidates:
            self._label_cache[option.value] = option.label

        # A newer set_value, commit, clear or keystroke wins over this lookup.
        if ticket != self._resolve_ticket or self.state.selected_value != value:
            return

        label = self._label_cache.get(value)
        if label is None:
            _log.debug("No option matches value %r; keeping it without a label", value)
            return
        self.state.selected_label = label
        self.state.search_term = label
        self._notify()

    # -- input events ----------------------------------------------------

    def on_text_changed(self, text: str) -> None:
        self._resolve_ticket += 1
        state = self.state
        state.search_term = text
        state.dropdown_open = True
        state.highlighted_index = -1
        self._debounce.trigger()
        self._notify()

    def on_focus(self) -> None:
        self._focused = True
        # A press released outside the dropdown never reported back.
        self._pointer_down = False
        self._cancel_blur_close()
        length = len(self.state.search_term)
        if length == 0 or length >= self.config.min_search_length:
            self.state.dropdown_open = True
            self._notify()

    def on_blur(self) -> None:
        """Mark touched and close the dropdown after the grace delay.

        The delay leaves room for a click on an option that caused the blur.
        While a pointer is pressed on an option the close is skipped
        altogether; the commit closes the dropdown instead.
        """
        self._focused = False
        self.state.touched = True
        self._on_touched()
        if self._pointer_down:
            return
        self._cancel_blur_close()
        loop = asyncio.get_running_loop()
        self._blur_handle = loop.call_later(
            self.config.blur_grace_ms / 1000, self._close_after_blur
        )

    def on_option_pointer_down(self, index: int) -> None:
        if 0 <= index < len(self.state.options):
            self._pointer_down = True

    def on_option_pointer_released(self) -> None:
        """The pointer was released without selecting an option."""
        self._pointer_down = False
        if not self._focused and self.state.dropdown_open:
            self.state.dropdown_open = False
            self._notify()

    def handle_key(self, key: str) -> bool:
        """Handle a key press; True means the key was consumed."""
        return self._navigator.handle(key)

    # -- selection -------------------------------------------------------

    def select_index(self, index: int) -> bool:
        """Commit the option at ``index`` (pointer selection)."""
        if 0 <= index < len(self.state.options):
            self.select_option(self.state.options[index])
            return True
        return False

    def select_option(self, option: Option) -> None:
        """Commit ``option`` as the control's value."""
        self._resolve_ticket += 1
        self._debounce.cancel()
        self._cancel_blur_close()
        self._pointer_down = False

        state = self.state
        state.selected_value = option.value
        state.selected_label = option.label
        state.search_term = option.label
        state.dropdown_open = False
        self._label_cache[option.value] = option.label
        self._notify()

        self._on_value_committed(option.value)
        self._on_option_selected(option)

    def clear_selection(self) -> None:
        self._resolve_ticket += 1
        self._debounce.cancel()
        self._executor.invalidate()

        state = self.state
        state.selected_value = None
        state.selected_label = None
        state.search_term = ""
        state.replace_options([])
        state.dropdown_open = False
        self._notify()

        self._on_value_committed(None)

    # -- lifecycle -------------------------------------------------------

    def close(self) -> None:
        """Cancel timers and outstanding fetches; the control is done."""
        self._debounce.cancel()
        self._cancel_blur_close()
        self._executor.cancel_all()
        if self._resolve_task is not None:
            self._resolve_task.cancel()
            self._resolve_task = None
        self._listeners.clear()

    # -- internals -------------------------------------------------------

    def _on_quiet_period(self) -> None:
        term = self.state.search_term.strip()
        if 0 < len(term) < self.config.min_search_length:
            # Too short to search; whatever is in flight no longer applies.
            self._executor.invalidate()
            self.state.replace_options([])
            self._notify()
            return
        self._executor.search(term)

    def _close_after_blur(self) -> None:
        self._blur_handle = None
        if self._pointer_down:
            return
        self.state.dropdown_open = False
        self._notify()

    def _cancel_blur_close(self) -> None:
        if self._blur_handle is not None:
            self._blur_handle.cancel()
            self._blur_handle = None
