"""Option and control state data model."""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .errors import ConfigurationError


@dataclass(frozen=True)
class Option:
    """A single search candidate: opaque value plus human-readable label."""
    value: str
    label: str


def to_option(item: Any) -> Option:
    """Normalize a fetch result entry into an Option.

    Accepts Option instances, ``{"value": ..., "label": ...}`` mappings and
    ``(value, label)`` pairs.
    """
    if isinstance(item, Option):
        return item
    if isinstance(item, dict):
        return Option(value=str(item["value"]), label=str(item["label"]))
    if isinstance(item, (tuple, list)) and len(item) == 2:
        return Option(value=str(item[0]), label=str(item[1]))
    raise TypeError(f"Cannot convert {item!r} to an Option")


@dataclass
class AutocompleteConfig:
    """Host-facing configuration of a search-select control."""

    min_search_length: int = 3
    debounce_ms: int = 300
    blur_grace_ms: int = 200
    placeholder: str = "Search..."
    no_results_text: str = "No results found"
    loading_text: str = "Searching..."
    required: bool = False

    def __post_init__(self) -> None:
        if self.min_search_length < 1:
            raise ConfigurationError("min_search_length must be at least 1")
        if self.debounce_ms < 0:
            raise ConfigurationError("debounce_ms must not be negative")
        if self.blur_grace_ms < 0:
            raise ConfigurationError("blur_grace_ms must not be negative")


@dataclass
class ControlState:
    """Everything the control renders. Owned and mutated by the control only."""

    search_term: str = ""
    selected_value: Optional[str] = None
    selected_label: Optional[str] = None
    options: List[Option] = field(default_factory=list)
    is_loading: bool = False
    dropdown_open: bool = False
    highlighted_index: int = -1
    request_sequence: int = 0
    touched: bool = False

    @property
    def highlighted_option(self) -> Optional[Option]:
        if 0 <= self.highlighted_index < len(self.options):
            return self.options[self.highlighted_index]
        return None

    def replace_options(self, options: List[Option]) -> None:
        """Swap in a new result set and drop the highlight."""
        self.options = list(options)
        self.highlighted_index = -1
