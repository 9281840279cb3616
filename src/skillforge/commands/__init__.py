"""
Command implementations.

Each run_* function drives one workflow against injected settings,
manager, prompts and reporter, and returns the process exit status.
"""

from skillforge.commands.build import BuildResult, build_all, build_skill, run_build
from skillforge.commands.install import run_install
from skillforge.commands.scaffold import (
    collect_scaffold_request,
    run_scaffold,
    validate_description,
    validate_skill_name,
)
from skillforge.commands.uninstall import run_uninstall
from skillforge.commands.update import installed_scopes, run_update

__all__ = [
    "BuildResult",
    "build_all",
    "build_skill",
    "collect_scaffold_request",
    "installed_scopes",
    "run_build",
    "run_install",
    "run_scaffold",
    "run_uninstall",
    "run_update",
    "validate_description",
    "validate_skill_name",
]
