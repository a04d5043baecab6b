"""Shared fakes for searchselect tests."""

import asyncio

import pytest

from searchselect.options import Option


COUNTRIES = [
    Option("AT", "Austria"),
    Option("CH", "Switzerland"),
    Option("DE", "Germany"),
    Option("FR", "France"),
]


class ControlledFetch:
    """fetch_options fake whose calls resolve only when the test says so."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self._pending: dict[str, list[asyncio.Future]] = {}

    async def __call__(self, term: str) -> list[Option]:
        fut = asyncio.get_running_loop().create_future()
        self.calls.append(term)
        self._pending.setdefault(term, []).append(fut)
        return await fut

    def resolve(self, term: str, options: list[Option]) -> None:
        self._pending[term].pop(0).set_result(options)

    def fail(self, term: str, exc: Exception) -> None:
        self._pending[term].pop(0).set_exception(exc)


class StaticFetch:
    """fetch_options fake that filters a fixed list immediately."""

    def __init__(self, options=COUNTRIES) -> None:
        self.options = list(options)
        self.calls: list[str] = []

    async def __call__(self, term: str) -> list[Option]:
        self.calls.append(term)
        needle = term.lower()
        return [o for o in self.options if needle in o.label.lower()]


async def settle(seconds: float = 0.05) -> None:
    """Let timers fire and pending tasks run."""
    await asyncio.sleep(seconds)


@pytest.fixture
def countries():
    return list(COUNTRIES)
