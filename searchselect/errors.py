"""Exception types raised by searchselect."""

from typing import Optional


class SearchSelectError(Exception):
    """Base class for all searchselect errors."""


class ConfigurationError(SearchSelectError):
    """The control was constructed or configured incorrectly by its host."""


class ApiError(SearchSelectError):
    """The partner REST API returned an error or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
