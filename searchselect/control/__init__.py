"""Toolkit-agnostic search-select control core."""

from .debounce import DebounceScheduler
from .executor import FetchOptions, SearchExecutor, call_fetch
from .navigator import KeyboardNavigator
from .search_select import SearchSelectControl

__all__ = [
    "DebounceScheduler",
    "FetchOptions",
    "SearchExecutor",
    "call_fetch",
    "KeyboardNavigator",
    "SearchSelectControl",
]
