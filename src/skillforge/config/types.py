"""Configuration type definitions for skillforge."""

import enum as _enum


class Scope(str, _enum.Enum):
    """
    Installation target for skills.

    - project: repository-local directory (.claude/skills)
    - personal: per-user directory (~/.claude/skills)
    """

    PROJECT = "project"
    PERSONAL = "personal"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Human-readable label used in prompts."""
        return self.value.capitalize()


ALL_SCOPES: tuple[Scope, ...] = (Scope.PROJECT, Scope.PERSONAL)
