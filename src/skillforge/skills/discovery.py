"""
Skill discovery from the source tree and the installed scopes.

Source skills live one level below Settings.source_dir:

    src/skills/
        documenting-bugs/SKILL.md
        executing-chores/SKILL.md

Installed skills use the same layout below the scope's directory
(.claude/skills/ for the project, ~/.claude/skills/ for the user).
Built packages are flat files in Settings.dist_dir named <skill>.skill.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib
import typing as _typing

import skillforge.config as config
import skillforge.constants as constants
import skillforge.errors as errors
import skillforge.skills.skill as skill_module

_logger = _logging.getLogger(__name__)


class SkillDiscoveryError(errors.SkillforgeError):
    """Raised when the skills source directory itself cannot be listed."""

    pass


def _candidate_dirs(parent: _pathlib.Path) -> _typing.Iterator[_pathlib.Path]:
    """Yield non-hidden subdirectories of parent (one level only)."""
    for entry in sorted(parent.iterdir()):
        if entry.name.startswith(".") or not entry.is_dir():
            continue
        yield entry


def list_source_skills(settings: config.Settings) -> list[skill_module.SkillDescriptor]:
    """
    List the skills under the source directory, sorted by name.

    Directories without a readable SKILL.md carrying both a name and a
    description are skipped silently.

    Raises:
        SkillDiscoveryError: If the source directory cannot be listed.
    """
    source_dir = settings.source_dir
    skills: list[skill_module.SkillDescriptor] = []

    try:
        candidates = list(_candidate_dirs(source_dir))
    except OSError as e:
        raise SkillDiscoveryError(f"Failed to read skills directory {source_dir}: {e}") from e

    for skill_dir in candidates:
        try:
            skills.append(skill_module.load_descriptor(skill_dir))
        except (OSError, UnicodeDecodeError, skill_module.SkillParseError) as e:
            _logger.debug("Skipping %s: %s", skill_dir, e)

    return sorted(skills, key=lambda s: s.name)


def _installed_descriptor(skill_dir: _pathlib.Path) -> skill_module.SkillDescriptor:
    """Describe an installed skill, falling back to placeholders."""
    try:
        return skill_module.load_descriptor(skill_dir)
    except (OSError, UnicodeDecodeError) as e:
        _logger.debug("Unreadable descriptor in %s: %s", skill_dir, e)
        return skill_module.SkillDescriptor(
            name=skill_dir.name,
            description=constants.UNKNOWN_DESCRIPTION,
            path=skill_dir,
        )
    except skill_module.SkillParseError as e:
        _logger.debug("Incomplete descriptor in %s: %s", skill_dir, e)

    # The header exists but is incomplete; keep whatever fields it has
    skill_file = skill_dir / constants.SKILL_FILE_NAME
    try:
        data, _ = skill_module.split_frontmatter(skill_file.read_text(encoding="utf-8"))
    except skill_module.SkillParseError:
        return skill_module.SkillDescriptor(
            name=skill_dir.name,
            description=constants.UNKNOWN_DESCRIPTION,
            path=skill_dir,
        )

    name = data.get("name")
    description = data.get("description")
    return skill_module.SkillDescriptor(
        name=str(name).strip() if name else skill_dir.name,
        description=str(description).strip() if description else constants.MISSING_DESCRIPTION,
        path=skill_dir,
    )


def list_installed_skills(
    settings: config.Settings,
    scope: config.Scope | str,
) -> list[skill_module.SkillDescriptor]:
    """
    List the skills installed in a scope, sorted by name.

    Never raises for a missing or unreadable scope directory; returns an
    empty list instead. Every skill directory is reported, even one with
    a broken descriptor, so it can still be targeted for removal.
    """
    skills_dir = settings.skills_dir(scope)

    try:
        candidates = list(_candidate_dirs(skills_dir))
    except OSError as e:
        _logger.debug("No installed skills in %s: %s", skills_dir, e)
        return []

    skills = [_installed_descriptor(skill_dir) for skill_dir in candidates]
    return sorted(skills, key=lambda s: s.name)


def packaged_skill_path(settings: config.Settings, skill_name: str) -> _pathlib.Path:
    """Path of the built package for a skill (dist/<name>.skill)."""
    return settings.dist_dir / f"{skill_name}{constants.PACKAGE_EXTENSION}"


def packaged_skill_exists(settings: config.Settings, skill_name: str) -> bool:
    """Whether a built package for the skill exists in the output directory."""
    return packaged_skill_path(settings, skill_name).is_file()


def partition_packaged(
    settings: config.Settings,
    skills: _typing.Iterable[skill_module.SkillDescriptor],
) -> tuple[list[skill_module.SkillDescriptor], list[str]]:
    """
    Split skills into those with a built package and the names of those without.

    Returns:
        Tuple of (packaged skills, names of unpackaged skills).
    """
    available: list[skill_module.SkillDescriptor] = []
    missing: list[str] = []
    for skill in skills:
        if packaged_skill_exists(settings, skill.name):
            available.append(skill)
        else:
            missing.append(skill.name)
    return available, missing
