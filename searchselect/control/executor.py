"""Search executor with stale-response suppression.

Every search takes a ticket from ``ControlState.request_sequence``. Results
are applied only while that ticket is still the newest one; anything that
resolves after a newer search started is dropped, whatever order the
responses arrive in. The fetch function is never asked to abort.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, List, Set, Union

from ..options import ControlState, Option, to_option

_log = logging.getLogger(__name__)

FetchOptions = Callable[[str], Union[Awaitable[List[Any]], List[Any]]]


async def call_fetch(fetch_options: FetchOptions, term: str) -> List[Option]:
    """Invoke a host fetch function and normalize what it returns."""
    result = fetch_options(term)
    if inspect.isawaitable(result):
        result = await result
    return [to_option(item) for item in (result or [])]


class SearchExecutor:
    """Issues fetches and applies only the response to the latest one."""

    def __init__(
        self,
        fetch_options: FetchOptions,
        state: ControlState,
        on_change: Callable[[], None],
    ) -> None:
        self._fetch_options = fetch_options
        self._state = state
        self._on_change = on_change
        self._tasks: Set[asyncio.Task] = set()

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def search(self, term: str) -> asyncio.Task:
        """Start a search for ``term`` and return the task awaiting it.

        The ticket, loading flag and cleared options are set before this
        returns, so nothing stale is rendered while the fetch is pending.
        """
        state = self._state
        state.request_sequence += 1
        ticket = state.request_sequence
        state.is_loading = True
        state.replace_options([])
        self._on_change()

        task = asyncio.get_running_loop().create_task(self._run(ticket, term))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def invalidate(self) -> None:
        """Supersede any outstanding search without starting a new one."""
        self._state.request_sequence += 1
        self._state.is_loading = False

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()

    def is_current(self, ticket: int) -> bool:
        return ticket == self._state.request_sequence

    async def _run(self, ticket: int, term: str) -> None:
        try:
            results = await call_fetch(self._fetch_options, term)
        except Exception:
            _log.warning("Error fetching options for %r", term, exc_info=True)
            if self.is_current(ticket):
                self._state.replace_options([])
                self._state.is_loading = False
                self._on_change()
            return

        if not self.is_current(ticket):
            _log.debug(
                "Discarding stale results for %r (ticket %d, current %d)",
                term, ticket, self._state.request_sequence,
            )
            return

        self._state.replace_options(results)
        self._state.is_loading = False
        self._on_change()
