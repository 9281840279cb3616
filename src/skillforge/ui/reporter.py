"""
Status output for commands.

Every line a command prints goes through a Reporter. Messages are
printed literally (skill descriptions may contain square brackets, which
Rich would otherwise read as markup) with a coloured status icon.
"""

import typing as _typing

import rich.console as _rich_console
import rich.text as _rich_text

import skillforge.ui.icons as icons


class Reporter:
    """Coloured status lines on a Rich console."""

    def __init__(
        self,
        console: _rich_console.Console | None = None,
        *,
        no_color: bool = False,
    ) -> None:
        """
        Initialize the reporter.

        Args:
            console: Rich Console instance (created if not provided).
            no_color: Disable all colors.
        """
        self._console = console or _rich_console.Console(
            highlight=False,
            no_color=no_color,
            soft_wrap=True,
        )

    @property
    def console(self) -> _rich_console.Console:
        return self._console

    def _status(self, icon: str, style: str, message: str) -> None:
        text = _rich_text.Text()
        text.append(icons.cell_ljust(icon, icons.DEFAULT_ICON_WIDTH), style=style)
        text.append(message)
        self._console.print(text)

    def success(self, message: str) -> None:
        """Print a success line (✓)."""
        self._status(icons.ICON_SUCCESS, icons.STYLE_SUCCESS, message)

    def error(self, message: str) -> None:
        """Print a failure line (✗)."""
        self._status(icons.ICON_FAILURE, icons.STYLE_FAILURE, message)

    def info(self, message: str) -> None:
        """Print an informational line (i)."""
        self._status(icons.ICON_INFO, icons.STYLE_INFO, message)

    def warning(self, message: str) -> None:
        """Print a warning line (!)."""
        self._status(icons.ICON_WARNING, icons.STYLE_WARNING, message)

    def line(self, message: str = "") -> None:
        """Print a plain line (blank by default)."""
        self._console.print(_rich_text.Text(message))

    def bullets(self, items: _typing.Iterable[str]) -> None:
        """Print an indented '- item' list."""
        for item in items:
            self.line(f"  - {item}")

    def rule(self, width: int = 50) -> None:
        """Print a separator line."""
        self.line("-" * width)
