"""
Interactive prompts.

ClickInputProvider asks questions on the terminal with click. The
prompt_for_* helpers build the selection lists the commands share and
work with any InputProvider.
"""

from __future__ import annotations

import typing as _typing

import click as _click

import skillforge.config as config
import skillforge.constants as constants
import skillforge.skills as skills
import skillforge.ui.base as base
import skillforge.ui.icons as icons

T = _typing.TypeVar("T")


class ClickInputProvider(base.InputProvider):
    """Terminal prompts built on click.prompt / click.confirm."""

    def text(
        self,
        message: str,
        *,
        validate: base.Validator | None = None,
        default: str | None = None,
    ) -> str:
        def _check(value: str) -> str:
            value = value.strip()
            if validate is not None and (problem := validate(value)):
                # click.prompt prints the error and asks again
                raise _click.BadParameter(problem)
            return value

        return _click.prompt(
            message,
            default=default,
            show_default=bool(default),
            value_proc=_check,
        )

    def confirm(self, message: str, *, default: bool = False) -> bool:
        return _click.confirm(message, default=default)

    def _show_choices(self, message: str, choices: _typing.Sequence[base.Choice[T]]) -> None:
        _click.echo(message)
        for index, choice in enumerate(choices, start=1):
            _click.echo(f"  {index}) {choice.label}")

    def select(self, message: str, choices: _typing.Sequence[base.Choice[T]]) -> T:
        if not choices:
            raise ValueError("select() needs at least one choice")
        self._show_choices(message, choices)
        index = _click.prompt(
            "Enter number",
            type=_click.IntRange(1, len(choices)),
            default=1 if len(choices) == 1 else None,
        )
        return choices[index - 1].value

    def checkbox(self, message: str, choices: _typing.Sequence[base.Choice[T]]) -> list[T]:
        if not choices:
            raise ValueError("checkbox() needs at least one choice")
        self._show_choices(message, choices)

        def _parse(value: str) -> list[int]:
            picked: list[int] = []
            for part in value.replace(" ", ",").split(","):
                if not part:
                    continue
                if not part.isdigit() or not 1 <= int(part) <= len(choices):
                    raise _click.BadParameter(
                        f"'{part}' is not a number between 1 and {len(choices)}"
                    )
                if int(part) not in picked:
                    picked.append(int(part))
            if not picked:
                raise _click.BadParameter("Select at least one entry")
            return picked

        indexes = _click.prompt("Enter numbers (comma-separated)", value_proc=_parse)
        return [choices[i - 1].value for i in indexes]


# =============================================================================
# Shared selection prompts
# =============================================================================


def skill_label(skill: skills.SkillDescriptor) -> str:
    """'name - description' with the description shortened for lists."""
    return f"{skill.name} - {icons.truncate(skill.description, constants.DEFAULT_DESCRIPTION_TRUNCATE_LENGTH)}"


def prompt_for_scope(
    prompts: base.InputProvider,
    settings: config.Settings,
    *,
    scopes: _typing.Sequence[config.Scope] = config.ALL_SCOPES,
    message: str = "Select installation scope:",
) -> config.Scope:
    """Ask which scope to act on, labelled with each scope's directory."""
    choices = [
        base.Choice(f"{scope.label} ({settings.skills_dir(scope)}/)", scope)
        for scope in scopes
    ]
    return prompts.select(message, choices)


def prompt_for_skill_selection(
    prompts: base.InputProvider,
    skill_list: _typing.Sequence[skills.SkillDescriptor],
    message: str,
    *,
    allow_all: bool = True,
    key: _typing.Callable[[skills.SkillDescriptor], str] = lambda s: s.name,
) -> list[str]:
    """
    Ask for one or more skills.

    With allow_all, a "Select all skills?" shortcut is offered first.

    Args:
        key: What to return for each selected skill (its name by default).
    """
    if allow_all and prompts.confirm("Select all skills?", default=False):
        return [key(skill) for skill in skill_list]

    return prompts.checkbox(
        message,
        [base.Choice(skill_label(skill), key(skill)) for skill in skill_list],
    )


def prompt_for_single_skill(
    prompts: base.InputProvider,
    skill_list: _typing.Sequence[skills.SkillDescriptor],
    message: str,
) -> str:
    """Ask for exactly one skill; returns its name."""
    return prompts.select(
        message,
        [base.Choice(skill_label(skill), skill.name) for skill in skill_list],
    )
