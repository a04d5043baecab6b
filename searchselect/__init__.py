"""searchselect - incremental search-select control for async option sources."""

__version__ = "0.1.0"

from .control import SearchSelectControl
from .errors import ApiError, ConfigurationError, SearchSelectError
from .options import AutocompleteConfig, ControlState, Option
from .config import ConfigManager

__all__ = [
    "SearchSelectControl",
    "ApiError",
    "ConfigurationError",
    "SearchSelectError",
    "AutocompleteConfig",
    "ControlState",
    "Option",
    "ConfigManager",
]
