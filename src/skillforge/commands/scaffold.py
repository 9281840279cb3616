"""
Scaffold command: create a new skill in the source directory.

All questions are asked up front (collect_scaffold_request) and checked
as they are answered, so nothing touches the filesystem until the
answers are complete and valid.
"""

from __future__ import annotations

import skillforge.config as config
import skillforge.constants as constants
import skillforge.manager as manager_module
import skillforge.ui as ui

_TEMPLATE_LABELS = {
    "basic": "Basic - plain instructions",
    "forked": "Forked - runs in its own context",
    "agent": "Agent - delegated to a subagent",
    "with-hooks": "With hooks - includes an example hook",
}


def validate_skill_name(value: str) -> str | None:
    """Error message for an unacceptable skill name, or None."""
    return manager_module.name_error(value)


def validate_description(value: str) -> str | None:
    """Error message for an unacceptable description, or None."""
    return manager_module.description_error(value)


def validate_argument_hint(value: str) -> str | None:
    if not value:
        return "Argument hint cannot be empty"
    if len(value) > constants.ARGUMENT_HINT_MAX_LENGTH:
        return f"Argument hint must be {constants.ARGUMENT_HINT_MAX_LENGTH} characters or less"
    return None


def parse_allowed_tools(value: str) -> list[str]:
    """Split 'Read, Write,Bash' into ['Read', 'Write', 'Bash']."""
    return [tool.strip() for tool in value.split(",") if tool.strip()]


def collect_template_options(prompts: ui.InputProvider) -> manager_module.TemplateOptions:
    """Ask for each optional template refinement, one opt-in at a time."""
    options = manager_module.TemplateOptions()

    if prompts.confirm("Use a template other than basic? (optional)", default=False):
        options.template_type = prompts.select(
            "Template:",
            [ui.Choice(_TEMPLATE_LABELS[t], t) for t in manager_module.TEMPLATE_TYPES],
        )

    options.minimal = prompts.confirm(
        "Minimal output (no guidance sections or resource directories)?",
        default=False,
    )

    if prompts.confirm("Set a memory scope? (optional)", default=False):
        options.memory = prompts.select(
            "Memory scope:",
            [ui.Choice(m, m) for m in manager_module.MEMORY_SCOPES],
        )

    if options.template_type == "agent" and prompts.confirm(
        "Set the agent model? (optional)", default=False
    ):
        options.model = prompts.select(
            "Agent model:",
            [ui.Choice(m, m) for m in manager_module.AGENT_MODELS],
        )

    if prompts.confirm("Add an argument hint? (optional)", default=False):
        options.argument_hint = prompts.text(
            "Argument hint (e.g., <query> [--deep]):",
            validate=validate_argument_hint,
        )

    return options


def collect_scaffold_request(
    prompts: ui.InputProvider,
    settings: config.Settings,
) -> manager_module.ScaffoldRequest:
    """Gather and check every answer needed to scaffold a skill."""
    name = prompts.text("Skill name (hyphen-case):", validate=validate_skill_name)
    description = prompts.text("Description:", validate=validate_description)
    template = collect_template_options(prompts)

    allowed_tools: list[str] = []
    if prompts.confirm("Specify allowed tools? (optional)", default=False):
        allowed_tools = parse_allowed_tools(
            prompts.text("Allowed tools (comma-separated, e.g., Read,Write,Bash):", default="")
        )

    return manager_module.ScaffoldRequest(
        name=name,
        description=description,
        output=settings.source_dir,
        allowed_tools=allowed_tools,
        template=template,
    )


def run_scaffold(
    settings: config.Settings,
    manager: manager_module.SkillsManager,
    prompts: ui.InputProvider,
    reporter: ui.Reporter,
) -> int:
    """
    Interactively create a new skill.

    Returns:
        Exit status: 0 on success or when overwriting is declined, else 1.
    """
    reporter.info(f"Create a new skill in {settings.source_dir}/")

    request = collect_scaffold_request(prompts, settings)

    skill_path = settings.source_dir / request.name
    if skill_path.exists():
        request.force = prompts.confirm(
            f'Skill "{request.name}" already exists. Overwrite?',
            default=False,
        )
        if not request.force:
            reporter.info("Cancelled.")
            return 0

    try:
        result = manager.scaffold(request)
    except (manager_module.SkillsManagerError, OSError) as e:
        reporter.error(f"Failed to create skill: {e}")
        return 1

    reporter.success(f'Skill "{request.name}" created at {result.path}')
    reporter.info(f"Files created: {', '.join(result.files)}")
    return 0
