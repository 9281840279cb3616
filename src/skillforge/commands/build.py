"""
Build command: validate and package every source skill.

Each skill goes through two steps, stopping at the first failure:
1. Validate (detailed, rule by rule)
2. Package into dist/<name>.skill

A failing skill never stops the remaining ones; the run as a whole fails
if any skill did.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import pathlib as _pathlib

import skillforge.config as config
import skillforge.manager as manager_module
import skillforge.skills as skills
import skillforge.ui as ui

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass
class BuildResult:
    """Outcome of building one skill."""

    name: str
    validated: bool = False
    packaged: bool = False
    error: str | None = None
    package_path: _pathlib.Path | None = None

    @property
    def succeeded(self) -> bool:
        return self.validated and self.packaged


def build_skill(
    skill: skills.SkillDescriptor,
    settings: config.Settings,
    manager: manager_module.SkillsManager,
    reporter: ui.Reporter,
) -> BuildResult:
    """Validate then package a single skill, reporting each step."""
    result = BuildResult(name=skill.name)
    reporter.line(f"Building: {skill.name}")

    try:
        validation = manager.validate(skill.path, detailed=True)
    except (manager_module.SkillsManagerError, OSError) as e:
        result.error = f"Validation failed: {e}"
        reporter.error("  Validation failed")
        return result

    if not validation.valid:
        failed, total = validation.failed_count, validation.total_count
        result.error = f"Validation failed: {failed}/{total} checks failed"
        reporter.error(f"  Validation failed ({failed}/{total} checks failed)")
        for rule, check in validation.failed_checks.items():
            reporter.error(f"    {rule}: {check.error}")
        return result

    result.validated = True
    reporter.success(
        f"  Validated ({validation.passed_count}/{validation.total_count} checks passed)"
    )
    for warning in validation.warnings:
        reporter.warning(f"  {warning}")

    try:
        packaged = manager.create_package(skill.path, output=settings.dist_dir, force=True)
    except (manager_module.SkillsManagerError, OSError) as e:
        result.error = f"Packaging failed: {e}"
        reporter.error("  Packaging failed")
        return result

    result.packaged = True
    result.package_path = packaged.package_path
    reporter.success(f"  Packaged to {packaged.package_path}")
    return result


def build_all(
    settings: config.Settings,
    manager: manager_module.SkillsManager,
    reporter: ui.Reporter,
) -> list[BuildResult]:
    """
    Build every discovered source skill in name order.

    Raises:
        SkillDiscoveryError: If the source directory cannot be listed.
    """
    source_skills = skills.list_source_skills(settings)
    if not source_skills:
        return []

    reporter.info(f"Found {len(source_skills)} skill(s)")
    reporter.line()

    return [build_skill(skill, settings, manager, reporter) for skill in source_skills]


def print_summary(results: list[BuildResult], reporter: ui.Reporter) -> bool:
    """Print the build summary; returns True when every skill succeeded."""
    successful = [r for r in results if r.succeeded]
    failed = [r for r in results if not r.succeeded]

    reporter.line()
    reporter.rule()
    reporter.line("Build Summary:")
    reporter.info(f"Total: {len(results)}")
    reporter.success(f"Successful: {len(successful)}")

    if failed:
        reporter.error(f"Failed: {len(failed)}")
        reporter.line()
        for result in failed:
            reporter.error(f"  {result.name}: {result.error}")

    return not failed


def run_build(
    settings: config.Settings,
    manager: manager_module.SkillsManager,
    reporter: ui.Reporter,
) -> int:
    """
    Build all skills from the source directory.

    Returns:
        Exit status: 0 when every skill validated and packaged, else 1.
    """
    reporter.info(f"Building all skills from {settings.source_dir}/")

    try:
        settings.dist_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        reporter.error(f"Cannot create output directory {settings.dist_dir}: {e}")
        return 1

    results = build_all(settings, manager, reporter)
    if not results:
        reporter.warning(f"No skills found in {settings.source_dir}/")
        return 0

    _logger.debug(
        "Build finished: %d ok, %d failed",
        sum(r.succeeded for r in results),
        sum(not r.succeeded for r in results),
    )
    return 0 if print_summary(results, reporter) else 1
