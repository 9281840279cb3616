"""
User interaction for skillforge.

- InputProvider: abstract question/answer interface (ClickInputProvider on a terminal)
- Reporter: coloured status lines via Rich
"""

from skillforge.ui.base import Choice, InputProvider, Validator
from skillforge.ui.icons import truncate
from skillforge.ui.prompts import (
    ClickInputProvider,
    prompt_for_scope,
    prompt_for_single_skill,
    prompt_for_skill_selection,
    skill_label,
)
from skillforge.ui.reporter import Reporter

__all__ = [
    # Interfaces
    "Choice",
    "InputProvider",
    "Validator",
    # Implementations
    "ClickInputProvider",
    "Reporter",
    # Helpers
    "prompt_for_scope",
    "prompt_for_single_skill",
    "prompt_for_skill_selection",
    "skill_label",
    "truncate",
]
