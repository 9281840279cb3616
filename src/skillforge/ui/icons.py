"""
Status icons and cell-width-aware text helpers.

Icons render at different widths across terminals and fonts, so padding
is measured in terminal cells (Rich's cell_len) rather than characters.
"""

import rich.cells as _rich_cells

# =============================================================================
# Icon Constants
# =============================================================================

ICON_SUCCESS = "✓"
ICON_FAILURE = "✗"
ICON_INFO = "i"
ICON_WARNING = "!"

# Rich styles paired with each icon
STYLE_SUCCESS = "green"
STYLE_FAILURE = "red"
STYLE_INFO = "blue"
STYLE_WARNING = "yellow"

# Default target width for icon + padding (in terminal cells)
DEFAULT_ICON_WIDTH = 2


# =============================================================================
# Cell-Width-Aware String Helpers
# =============================================================================


def cell_ljust(text: str, width: int) -> str:
    """Left-justify text to a cell width (pad on right).

    Like str.ljust() but uses terminal cell width instead of character count.
    """
    current = _rich_cells.cell_len(text)
    return text + " " * max(0, width - current)


def truncate(text: str, max_length: int) -> str:
    """
    Shorten text to at most max_length characters, ending in '...'.

    Text that already fits is returned unchanged:

        truncate("hello world", 8) == "hello..."
        truncate("hello", 5) == "hello"
    """
    if len(text) <= max_length:
        return text
    return text[: max(0, max_length - 3)] + "..."
