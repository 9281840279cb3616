"""
Base classes for user interaction.

Commands never call click or read stdin directly. They ask an
InputProvider, which lets tests drive every prompt sequence with
canned answers instead of a real terminal.
"""

import abc as _abc
import dataclasses as _dataclasses
import typing as _typing

T = _typing.TypeVar("T")

Validator = _typing.Callable[[str], "str | None"]
"""Returns an error message for an unacceptable answer, or None."""


@_dataclasses.dataclass(frozen=True)
class Choice(_typing.Generic[T]):
    """One entry of a selection list."""

    label: str
    value: T


class InputProvider(_abc.ABC):
    """
    Abstract source of answers to interactive questions.

    Implementations must only return values that satisfy the validator
    (re-asking as needed) and only values present in the choices.
    """

    @_abc.abstractmethod
    def text(
        self,
        message: str,
        *,
        validate: Validator | None = None,
        default: str | None = None,
    ) -> str:
        """Ask for free text."""
        ...

    @_abc.abstractmethod
    def confirm(self, message: str, *, default: bool = False) -> bool:
        """Ask a yes/no question."""
        ...

    @_abc.abstractmethod
    def select(self, message: str, choices: _typing.Sequence[Choice[T]]) -> T:
        """Ask for exactly one of the choices."""
        ...

    @_abc.abstractmethod
    def checkbox(self, message: str, choices: _typing.Sequence[Choice[T]]) -> list[T]:
        """Ask for one or more of the choices."""
        ...
