"""searchselect color system.

All hex values live here. Widgets never hardcode colors.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    """Surface / text / functional color palette."""

    # Surfaces
    bg: str = "#0d1117"
    surface: str = "#121218"
    dropdown_bg: str = "#161b22"
    highlight_bg: str = "#1c2128"
    border: str = "#30363d"

    # Text hierarchy
    text_bright: str = "#e8e8f0"
    text_primary: str = "#c9d1d9"
    text_dim: str = "#6e7681"

    # Functional
    accent: str = "#00d4e5"
    selected: str = "#34d399"
    spinner: str = "#e5c747"
    error: str = "#e55a6e"


PALETTE = Palette()
