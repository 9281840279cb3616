"""
Base exception for skillforge.

Every error the project raises deliberately derives from SkillforgeError,
so the CLI can report it once and exit with status 1.
"""


class SkillforgeError(Exception):
    """Root of all skillforge errors."""

    pass
