"""Uninstall command: remove installed skills from a scope."""

from __future__ import annotations

import skillforge.config as config
import skillforge.manager as manager_module
import skillforge.ui as ui


def run_uninstall(
    settings: config.Settings,
    manager: manager_module.SkillsManager,
    prompts: ui.InputProvider,
    reporter: ui.Reporter,
) -> int:
    """
    Interactively uninstall skills.

    Skills are selected by directory name, so one with a broken or
    mismatched descriptor can still be removed.

    Returns:
        Exit status: 1 when a removal failed or nothing selected was
        removed, else 0.
    """
    reporter.info("Uninstall skills")

    scope = ui.prompt_for_scope(prompts, settings, message="Select scope to uninstall from:")

    installed = manager.list(scope)
    if not installed:
        reporter.warning(f"No skills installed in {scope} scope.")
        return 0

    reporter.info(f"Found {len(installed)} installed skill(s) in {scope} scope")
    reporter.line()

    selected = ui.prompt_for_skill_selection(
        prompts,
        installed,
        "Select skills to uninstall:",
        key=lambda s: s.path.name,
    )
    if not selected:
        reporter.info("No skills selected.")
        return 0

    reporter.line()
    reporter.warning(f"You are about to uninstall {len(selected)} skill(s):")
    reporter.bullets(selected)
    reporter.line()

    if not prompts.confirm("Are you sure you want to uninstall these skills?", default=False):
        reporter.info("Cancelled.")
        return 0

    try:
        result = manager.uninstall(selected, scope=scope, force=True)
    except (manager_module.SkillsManagerError, OSError) as e:
        reporter.error(f"Failed to uninstall: {e}")
        return 1

    for name in result.removed:
        reporter.success(f"Uninstalled: {name}")
    for name in result.not_found:
        reporter.warning(f"Not found: {name}")
    for name, reason in result.failed.items():
        reporter.error(f"Failed to uninstall {name}: {reason}")

    reporter.line()
    summary = (
        f"Uninstallation complete: {len(result.removed)} removed, "
        f"{len(result.not_found)} not found"
    )
    if result.failed:
        summary += f", {len(result.failed)} failed"
    reporter.info(summary)
    return 0 if result.removed and not result.failed else 1
