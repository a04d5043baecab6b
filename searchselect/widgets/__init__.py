"""searchselect TUI widgets -- Textual components."""

from .search_select import OptionDropdown, OptionRow, SearchSelect

__all__ = [
    "OptionDropdown",
    "OptionRow",
    "SearchSelect",
]
