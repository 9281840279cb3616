"""
Update command: replace an installed skill with its freshly built package.

The scope comes from the selection: the skill is updated where it is
installed. Only when it is installed in both scopes is the user asked.
"""

from __future__ import annotations

import skillforge.config as config
import skillforge.manager as manager_module
import skillforge.skills as skills
import skillforge.ui as ui


def installed_scopes(settings: config.Settings, name: str) -> list[config.Scope]:
    """Scopes that have a skill directory called name."""
    return [
        scope
        for scope in config.ALL_SCOPES
        if (settings.skills_dir(scope) / name).is_dir()
    ]


def _describe_versions(result: manager_module.UpdateResult) -> str:
    if result.previous_version and result.new_version:
        return f" ({result.previous_version} -> {result.new_version})"
    if result.new_version:
        return f" (now {result.new_version})"
    return ""


def run_update(
    settings: config.Settings,
    manager: manager_module.SkillsManager,
    prompts: ui.InputProvider,
    reporter: ui.Reporter,
) -> int:
    """
    Interactively update one installed skill from dist/.

    Returns:
        Exit status: 0 on success or cancellation, else 1.
    """
    reporter.info(f"Update an installed skill from {settings.dist_dir}/")

    available, _ = skills.partition_packaged(settings, skills.list_source_skills(settings))
    if not available:
        reporter.error("No packaged skills available. Run 'skillforge build' first.")
        return 1

    name = ui.prompt_for_single_skill(prompts, available, "Select skill to update:")

    scopes = installed_scopes(settings, name)
    if not scopes:
        reporter.error(f'Skill "{name}" is not installed in any scope. Use install instead.')
        return 1
    if len(scopes) == 1:
        scope = scopes[0]
    else:
        scope = ui.prompt_for_scope(
            prompts,
            settings,
            scopes=scopes,
            message=f'"{name}" is installed in several scopes. Select scope to update:',
        )

    package_path = skills.packaged_skill_path(settings, name)

    reporter.line()
    reporter.info(f'Updating skill "{name}" in {scope} scope')
    reporter.info(f"Package: {package_path}")
    reporter.line()

    if not prompts.confirm("Proceed with update?", default=True):
        reporter.info("Cancelled.")
        return 0

    try:
        result = manager.update(name, package_path, scope=scope, force=True)
    except (manager_module.SkillsManagerError, OSError) as e:
        reporter.error(f"Failed to update {name}: {e}")
        return 1

    reporter.success(f"Successfully updated: {name}{_describe_versions(result)}")
    return 0
