"""
Tests for the uninstall command.

Tests verify that:
- Skills are chosen from what is installed in the selected scope
- Nothing is removed without confirmation
- The exit status reflects whether anything was removed
"""

import skillforge.commands as commands
import skillforge.config as config
import skillforge.manager as manager
import skillforge.skills as skills

PROJECT = config.Scope.PROJECT
PERSONAL = config.Scope.PERSONAL


class TestRunUninstall:
    """Tests for run_uninstall."""

    def test_removes_selected_skill(
        self, settings, make_skill, local_manager, scripted, reporter, console_output
    ) -> None:
        project_dir = settings.skills_dir(PROJECT)
        make_skill("alpha", parent=project_dir)
        make_skill("beta", parent=project_dir)
        prompts = scripted(PROJECT, False, ["alpha"], True)

        status = commands.run_uninstall(settings, local_manager, prompts, reporter)

        output = console_output.getvalue()
        assert status == 0
        assert not (project_dir / "alpha").exists()
        assert (project_dir / "beta").exists()
        assert "You are about to uninstall 1 skill(s):" in output
        assert "Uninstalled: alpha" in output
        assert "Uninstallation complete: 1 removed, 0 not found" in output

    def test_broken_installs_can_be_removed(
        self, settings, make_skill, local_manager, scripted, reporter
    ) -> None:
        """Selection uses directory names, so mismatched or unreadable skills still go."""
        project_dir = settings.skills_dir(PROJECT)
        make_skill("renamed-dir", name="declared-name", parent=project_dir)
        (project_dir / "no-descriptor").mkdir()
        prompts = scripted(PROJECT, True, True)

        status = commands.run_uninstall(settings, local_manager, prompts, reporter)

        assert status == 0
        assert list(project_dir.iterdir()) == []

    def test_empty_scope(self, settings, local_manager, scripted, reporter, console_output) -> None:
        status = commands.run_uninstall(settings, local_manager, scripted(PERSONAL), reporter)
        assert status == 0
        assert "No skills installed in personal scope." in console_output.getvalue()

    def test_declined(self, settings, make_skill, local_manager, scripted, reporter, console_output) -> None:
        make_skill("alpha", parent=settings.skills_dir(PROJECT))

        status = commands.run_uninstall(settings, local_manager, scripted(PROJECT, True, False), reporter)

        assert status == 0
        assert "Cancelled." in console_output.getvalue()
        assert (settings.skills_dir(PROJECT) / "alpha").exists()

    def test_confirmation_defaults_to_no(self, settings, make_skill, local_manager, scripted, reporter) -> None:
        make_skill("alpha", parent=settings.skills_dir(PROJECT))
        prompts = scripted(PROJECT, True, False)
        commands.run_uninstall(settings, local_manager, prompts, reporter)
        assert prompts.messages("confirm")[-1] == "Are you sure you want to uninstall these skills?"

    def test_nothing_removed_is_a_failure(
        self, settings, fake_manager, scripted, reporter, console_output
    ) -> None:
        path = settings.skills_dir(PROJECT) / "alpha"
        fake_manager.installed[PROJECT] = [skills.SkillDescriptor("alpha", "Gone", path)]
        fake_manager.uninstall_result = manager.UninstallResult(not_found=["alpha"])

        status = commands.run_uninstall(settings, fake_manager, scripted(PROJECT, True, True), reporter)

        assert status == 1
        assert "Not found: alpha" in console_output.getvalue()
        assert "0 removed, 1 not found" in console_output.getvalue()

    def test_partial_failure_reports_what_was_removed(
        self, settings, fake_manager, scripted, reporter, console_output
    ) -> None:
        project_dir = settings.skills_dir(PROJECT)
        fake_manager.installed[PROJECT] = [
            skills.SkillDescriptor("alpha", "Goes", project_dir / "alpha"),
            skills.SkillDescriptor("beta", "Stuck", project_dir / "beta"),
        ]
        fake_manager.uninstall_result = manager.UninstallResult(
            removed=["alpha"], failed={"beta": "Permission denied"}
        )

        status = commands.run_uninstall(settings, fake_manager, scripted(PROJECT, True, True), reporter)

        output = console_output.getvalue()
        assert status == 1
        assert "Uninstalled: alpha" in output
        assert "Failed to uninstall beta: Permission denied" in output
        assert "Uninstallation complete: 1 removed, 0 not found, 1 failed" in output

    def test_manager_failure(self, settings, fake_manager, scripted, reporter, console_output) -> None:
        path = settings.skills_dir(PROJECT) / "alpha"
        fake_manager.installed[PROJECT] = [skills.SkillDescriptor("alpha", "Doomed", path)]
        fake_manager.failures[("uninstall", "*")] = manager.SkillsManagerError("permission denied")

        status = commands.run_uninstall(settings, fake_manager, scripted(PROJECT, True, True), reporter)

        assert status == 1
        assert "Failed to uninstall: permission denied" in console_output.getvalue()
        assert fake_manager.calls_to("uninstall") == [("uninstall", ["alpha"], PROJECT, True)]
