"""Install command: copy built packages into a scope."""

from __future__ import annotations

import skillforge.config as config
import skillforge.manager as manager_module
import skillforge.skills as skills
import skillforge.ui as ui


def run_install(
    settings: config.Settings,
    manager: manager_module.SkillsManager,
    prompts: ui.InputProvider,
    reporter: ui.Reporter,
) -> int:
    """
    Interactively install packaged skills.

    Returns:
        Exit status: 0 when every selected skill installed (or nothing was
        selected, or the user cancelled), else 1.
    """
    reporter.info(f"Install skills from {settings.dist_dir}/")

    source_skills = skills.list_source_skills(settings)
    if not source_skills:
        reporter.error(f"No skills found in {settings.source_dir}/")
        return 1

    available, missing = skills.partition_packaged(settings, source_skills)

    if missing:
        reporter.warning("The following skills have not been packaged (run 'skillforge build' first):")
        reporter.bullets(missing)
        reporter.line()

    if not available:
        reporter.error("No packaged skills available. Run 'skillforge build' first.")
        return 1

    selected = ui.prompt_for_skill_selection(prompts, available, "Select skills to install:")
    if not selected:
        reporter.info("No skills selected.")
        return 0

    scope = ui.prompt_for_scope(prompts, settings)

    reporter.line()
    reporter.info(f"Installing {len(selected)} skill(s) to {scope} scope:")
    reporter.bullets(selected)
    reporter.line()

    if not prompts.confirm("Proceed with installation?", default=True):
        reporter.info("Cancelled.")
        return 0

    succeeded = failed = 0
    for name in selected:
        package_path = skills.packaged_skill_path(settings, name)
        try:
            result = manager.install(package_path, scope=scope, force=True)
        except (manager_module.SkillsManagerError, OSError) as e:
            reporter.error(f"Failed to install {name}: {e}")
            failed += 1
            continue
        reporter.success(f"Installed: {name} -> {result.installed_path}")
        succeeded += 1

    reporter.line()
    reporter.info(f"Installation complete: {succeeded} succeeded, {failed} failed")
    return 1 if failed else 0
