"""
Main CLI entry point for skillforge.

Provides the command-line interface using Click. Every command also has a
standalone console script (skill-build, skill-scaffold, skill-install,
skill-update, skill-uninstall).

The click context object carries the four collaborators the commands
need (settings, manager, prompts, reporter). Anything not supplied by the
caller, e.g. CliRunner.invoke(obj=...) in tests, is created on first use.
"""

import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import click as _click
import rich.console as _rich_console
import rich.logging as _rich_logging

import skillforge
import skillforge.commands as commands
import skillforge.config as config
import skillforge.errors as errors
import skillforge.manager as manager_module
import skillforge.skills as skills
import skillforge.ui as ui

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}


def configure_logging(verbose: bool) -> None:
    """Route skillforge log records to stderr through Rich.

    Verbose runs show DEBUG records; otherwise only warnings and errors.
    """
    logger = _logging.getLogger("skillforge")
    logger.setLevel(_logging.DEBUG if verbose else _logging.WARNING)

    if any(isinstance(h, _rich_logging.RichHandler) for h in logger.handlers):
        return

    handler = _rich_logging.RichHandler(
        console=_rich_console.Console(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(_logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)


class Runtime(_typing.NamedTuple):
    """Collaborators shared by all commands."""

    settings: config.Settings
    manager: manager_module.SkillsManager
    prompts: ui.InputProvider
    reporter: ui.Reporter


def _runtime(ctx: _click.Context) -> Runtime:
    """Fill in whatever the caller did not inject, then return it."""
    obj = ctx.ensure_object(dict)

    if "settings" not in obj:
        obj["settings"] = config.Settings()
        configure_logging(obj["settings"].verbose)
    settings: config.Settings = obj["settings"]

    if "manager" not in obj:
        obj["manager"] = manager_module.LocalSkillsManager(settings)
    if "prompts" not in obj:
        obj["prompts"] = ui.ClickInputProvider()
    if "reporter" not in obj:
        obj["reporter"] = ui.Reporter()

    return Runtime(
        settings=settings,
        manager=obj["manager"],
        prompts=obj["prompts"],
        reporter=obj["reporter"],
    )


def _finish(
    runtime: Runtime,
    run: _typing.Callable[[], int],
) -> None:
    """Run a command body and turn its status (or a fatal error) into the exit code."""
    try:
        status = run()
    except errors.SkillforgeError as e:
        runtime.reporter.error(str(e))
        raise SystemExit(1) from None

    if status:
        raise SystemExit(status)


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(skillforge.__version__, "-V", "--version", prog_name="skillforge")
@_click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Show debug logging on stderr",
)
@_click.pass_context
def cli(ctx: _click.Context, verbose: bool) -> None:
    """
    skillforge - build, scaffold and install skills.

    \b
    Examples:
        skillforge build        # Validate and package every skill in src/skills/
        skillforge scaffold     # Create a new skill interactively
        skillforge install      # Install packaged skills into a scope
        skillforge update       # Replace an installed skill with its new package
        skillforge uninstall    # Remove installed skills
    """
    obj = ctx.ensure_object(dict)
    if "settings" not in obj:
        obj["settings"] = config.Settings()
    if verbose:
        obj["settings"].verbose = True
    configure_logging(obj["settings"].verbose)


# =============================================================================
# Workflow Commands
# =============================================================================


@cli.command(name="build", context_settings=CONTEXT_SETTINGS)
@_click.pass_context
def build_command(ctx: _click.Context) -> None:
    """Validate and package every skill in the source directory."""
    rt = _runtime(ctx)
    _finish(rt, lambda: commands.run_build(rt.settings, rt.manager, rt.reporter))


@cli.command(name="scaffold", context_settings=CONTEXT_SETTINGS)
@_click.pass_context
def scaffold_command(ctx: _click.Context) -> None:
    """Create a new skill in the source directory."""
    rt = _runtime(ctx)
    _finish(rt, lambda: commands.run_scaffold(rt.settings, rt.manager, rt.prompts, rt.reporter))


@cli.command(name="install", context_settings=CONTEXT_SETTINGS)
@_click.pass_context
def install_command(ctx: _click.Context) -> None:
    """Install packaged skills into the project or personal scope."""
    rt = _runtime(ctx)
    _finish(rt, lambda: commands.run_install(rt.settings, rt.manager, rt.prompts, rt.reporter))


@cli.command(name="update", context_settings=CONTEXT_SETTINGS)
@_click.pass_context
def update_command(ctx: _click.Context) -> None:
    """Update an installed skill from its package."""
    rt = _runtime(ctx)
    _finish(rt, lambda: commands.run_update(rt.settings, rt.manager, rt.prompts, rt.reporter))


@cli.command(name="uninstall", context_settings=CONTEXT_SETTINGS)
@_click.pass_context
def uninstall_command(ctx: _click.Context) -> None:
    """Remove installed skills from a scope."""
    rt = _runtime(ctx)
    _finish(rt, lambda: commands.run_uninstall(rt.settings, rt.manager, rt.prompts, rt.reporter))


# =============================================================================
# Inspection Commands
# =============================================================================


@cli.command(name="list")
@_click.option(
    "--scope",
    type=_click.Choice(["source", "project", "personal", "all"]),
    default="source",
    show_default=True,
    help="Source skills, or skills installed in a scope",
)
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def list_command(ctx: _click.Context, scope: str, json_output: bool) -> None:
    """List source skills or installed skills."""
    rt = _runtime(ctx)

    def _run() -> int:
        if scope == "source":
            source = skills.list_source_skills(rt.settings)
            if json_output:
                data = [
                    {**s.to_dict(), "packaged": skills.packaged_skill_exists(rt.settings, s.name)}
                    for s in source
                ]
                _click.echo(_json.dumps(data, indent=2))
                return 0
            if not source:
                _click.echo(f"No skills found in {rt.settings.source_dir}/")
                return 0
            _click.echo(f"Source Skills ({len(source)}):")
            _click.echo(f"{'Name':<40} {'Packaged'}")
            _click.echo("-" * 50)
            for s in source:
                packaged = "✓" if skills.packaged_skill_exists(rt.settings, s.name) else "✗"
                _click.echo(f"{s.name:<40} {packaged}")
            return 0

        scopes = config.ALL_SCOPES if scope == "all" else (config.Scope(scope),)
        installed = {str(sc): rt.manager.list(sc) for sc in scopes}
        if json_output:
            _click.echo(_json.dumps(
                {sc: [s.to_dict() for s in found] for sc, found in installed.items()},
                indent=2,
            ))
            return 0
        for sc, found in installed.items():
            directory = rt.settings.skills_dir(sc)
            if not found:
                _click.echo(f"No skills installed in {sc} scope ({directory}/)")
                continue
            _click.echo(f"Installed in {sc} scope ({directory}/):")
            for s in found:
                _click.echo(f"  {ui.skill_label(s)}")
        return 0

    _finish(rt, _run)


@cli.command(name="validate")
@_click.argument("path", type=_click.Path(file_okay=False, path_type=_pathlib.Path))
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def validate_command(ctx: _click.Context, path: _pathlib.Path, json_output: bool) -> None:
    """Validate a single skill directory, rule by rule."""
    rt = _runtime(ctx)

    def _run() -> int:
        result = rt.manager.validate(path, detailed=True)
        if json_output:
            _click.echo(_json.dumps(result.to_dict(), indent=2))
            return 0 if result.valid else 1

        rt.reporter.line(f"Skill: {path}")
        for rule, check in result.checks.items():
            if check.passed:
                rt.reporter.success(f"  {rule}")
            else:
                rt.reporter.error(f"  {rule}: {check.error}")
        for warning in result.warnings:
            rt.reporter.warning(f"  {warning}")

        if result.valid:
            rt.reporter.success(f"Valid ({result.passed_count}/{result.total_count} checks passed)")
            return 0
        rt.reporter.error(f"Invalid ({result.failed_count}/{result.total_count} checks failed)")
        return 1

    _finish(rt, _run)


# =============================================================================
# Entry Points
# =============================================================================


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="skillforge")


def build_main() -> None:
    build_command(prog_name="skill-build")


def scaffold_main() -> None:
    scaffold_command(prog_name="skill-scaffold")


def install_main() -> None:
    install_command(prog_name="skill-install")


def update_main() -> None:
    update_command(prog_name="skill-update")


def uninstall_main() -> None:
    uninstall_command(prog_name="skill-uninstall")


if __name__ == "__main__":
    main()
