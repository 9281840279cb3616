"""
Shared pytest fixtures for skillforge tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

from __future__ import annotations

import io as _io
import os as _os
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest
import rich.console as _rich_console
import yaml as _yaml

import skillforge.config as config
import skillforge.manager as manager
import skillforge.skills as skills
import skillforge.ui as ui

DEFAULT_BODY = "# Skill\n\nDo the thing.\n"

# =============================================================================
# Environment
# =============================================================================


@_pytest.fixture(autouse=True)
def isolated_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Keep the caller's SKILLFORGE_* variables out of every test."""
    for key in list(_os.environ):
        if key.startswith("SKILLFORGE_"):
            monkeypatch.delenv(key, raising=False)


@_pytest.fixture
def settings(tmp_path: _pathlib.Path) -> config.Settings:
    """
    Settings with every directory inside tmp_path.

    The personal scope lives under tmp_path/home so nothing touches the
    real home directory.
    """
    return config.Settings.construct_without_dotenv(
        personal_skills_dir=tmp_path / "home" / ".claude" / "skills",
    ).rooted_at(tmp_path)


# =============================================================================
# Skill Trees
# =============================================================================


@_pytest.fixture
def make_skill(settings: config.Settings) -> _typing.Callable[..., _pathlib.Path]:
    """
    Factory writing <parent>/<dir_name>/SKILL.md.

    The declared name defaults to the directory name; keyword fields are
    added to the header with underscores turned into hyphens
    (allowed_tools -> allowed-tools). Pass header= to write a raw header.

    Example:
        def test_something(make_skill):
            skill_dir = make_skill("my-skill", version="1.0.0")
    """

    def _make(
        dir_name: str,
        description: str | None = "A skill used in tests",
        *,
        name: str | None = None,
        parent: _pathlib.Path | None = None,
        body: str = DEFAULT_BODY,
        header: str | None = None,
        **fields: _typing.Any,
    ) -> _pathlib.Path:
        skill_dir = (parent or settings.source_dir) / dir_name
        skill_dir.mkdir(parents=True, exist_ok=True)

        if header is None:
            data: dict[str, _typing.Any] = {"name": name or dir_name}
            if description is not None:
                data["description"] = description
            data.update({key.replace("_", "-"): value for key, value in fields.items()})
            header = _yaml.safe_dump(data, sort_keys=False)

        (skill_dir / "SKILL.md").write_text(f"---\n{header}---\n\n{body}", encoding="utf-8")
        return skill_dir

    return _make


@_pytest.fixture
def local_manager(settings: config.Settings) -> manager.LocalSkillsManager:
    """The real filesystem manager, rooted in tmp_path."""
    return manager.LocalSkillsManager(settings)


@_pytest.fixture
def build_package(
    settings: config.Settings,
    make_skill: _typing.Callable[..., _pathlib.Path],
    local_manager: manager.LocalSkillsManager,
) -> _typing.Callable[..., _pathlib.Path]:
    """Factory writing a source skill and packaging it into dist/."""

    def _build(dir_name: str, **kwargs: _typing.Any) -> _pathlib.Path:
        skill_dir = make_skill(dir_name, **kwargs)
        return local_manager.create_package(
            skill_dir, output=settings.dist_dir, force=True
        ).package_path

    return _build


# =============================================================================
# Output
# =============================================================================


@_pytest.fixture
def console_output() -> _io.StringIO:
    """Buffer the test reporter writes into."""
    return _io.StringIO()


@_pytest.fixture
def reporter(console_output: _io.StringIO) -> ui.Reporter:
    """Reporter printing plain text into console_output."""
    console = _rich_console.Console(
        file=console_output,
        width=200,
        no_color=True,
        highlight=False,
        soft_wrap=True,
    )
    return ui.Reporter(console)


# =============================================================================
# Scripted Prompts
# =============================================================================


class ScriptedInputProvider(ui.InputProvider):
    """
    InputProvider answering from a fixed list, in order.

    Text answers rejected by the validator are recorded and the next answer
    is used, the way a terminal prompt asks again. Running out of answers
    fails the test with the unexpected question.
    """

    def __init__(self, answers: _typing.Iterable[_typing.Any]) -> None:
        self.answers = list(answers)
        self.asked: list[tuple[str, str]] = []
        self.rejected: list[tuple[str, str]] = []
        self.choices: dict[str, list[ui.Choice[_typing.Any]]] = {}

    def _next(self, kind: str, message: str) -> _typing.Any:
        self.asked.append((kind, message))
        if not self.answers:
            raise AssertionError(f"Unexpected {kind} prompt: {message!r}")
        return self.answers.pop(0)

    def text(
        self,
        message: str,
        *,
        validate: ui.Validator | None = None,
        default: str | None = None,
    ) -> str:
        while True:
            answer = self._next("text", message)
            if validate is not None and (problem := validate(answer)):
                self.rejected.append((answer, problem))
                continue
            return answer

    def confirm(self, message: str, *, default: bool = False) -> bool:
        answer = self._next("confirm", message)
        assert isinstance(answer, bool), f"Expected a bool for {message!r}, got {answer!r}"
        return answer

    def select(self, message: str, choices: _typing.Sequence[ui.Choice[_typing.Any]]) -> _typing.Any:
        self.choices[message] = list(choices)
        answer = self._next("select", message)
        assert answer in [c.value for c in choices], f"{answer!r} is not offered by {message!r}"
        return answer

    def checkbox(
        self,
        message: str,
        choices: _typing.Sequence[ui.Choice[_typing.Any]],
    ) -> list[_typing.Any]:
        self.choices[message] = list(choices)
        answer = self._next("checkbox", message)
        offered = [c.value for c in choices]
        assert all(a in offered for a in answer), f"{answer!r} not all offered by {message!r}"
        return list(answer)

    def messages(self, kind: str | None = None) -> list[str]:
        """Questions asked so far, optionally of one kind."""
        return [m for k, m in self.asked if kind is None or k == kind]


@_pytest.fixture
def scripted() -> _typing.Callable[..., ScriptedInputProvider]:
    """
    Factory for ScriptedInputProvider.

    Example:
        def test_something(scripted):
            prompts = scripted("my-skill", "Does things", False)
    """

    def _make(*answers: _typing.Any) -> ScriptedInputProvider:
        return ScriptedInputProvider(answers)

    return _make


# =============================================================================
# Fake Manager
# =============================================================================


class FakeSkillsManager(manager.SkillsManager):
    """
    SkillsManager that records calls and returns canned results.

    Set failures[(operation, skill_name)] to make one call raise.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[_typing.Any, ...]] = []
        self.failures: dict[tuple[str, str], Exception] = {}
        self.validation_results: dict[str, manager.ValidationResult] = {}
        self.installed: dict[config.Scope, list[skills.SkillDescriptor]] = {}
        self.uninstall_result: manager.UninstallResult | None = None

    def _maybe_fail(self, operation: str, name: str) -> None:
        if (error := self.failures.get((operation, name))) is not None:
            raise error

    def calls_to(self, operation: str) -> list[tuple[_typing.Any, ...]]:
        return [call for call in self.calls if call[0] == operation]

    def validate(self, path: _pathlib.Path, *, detailed: bool = True) -> manager.ValidationResult:
        self.calls.append(("validate", path.name))
        self._maybe_fail("validate", path.name)
        if path.name in self.validation_results:
            return self.validation_results[path.name]
        return manager.ValidationResult(
            path=path,
            checks={"file_exists": manager.CheckResult(passed=True)},
        )

    def create_package(
        self,
        path: _pathlib.Path,
        *,
        output: _pathlib.Path,
        force: bool = False,
    ) -> manager.PackageResult:
        self.calls.append(("create_package", path.name, force))
        self._maybe_fail("create_package", path.name)
        return manager.PackageResult(package_path=output / f"{path.name}.skill")

    def scaffold(self, request: manager.ScaffoldRequest) -> manager.ScaffoldResult:
        self.calls.append(("scaffold", request))
        self._maybe_fail("scaffold", request.name)
        return manager.ScaffoldResult(path=request.output / request.name, files=["SKILL.md"])

    def install(
        self,
        file: _pathlib.Path,
        *,
        scope: config.Scope,
        force: bool = False,
    ) -> manager.InstallResult:
        self.calls.append(("install", file.stem, scope, force))
        self._maybe_fail("install", file.stem)
        return manager.InstallResult(
            skill_name=file.stem,
            installed_path=_pathlib.Path(str(scope)) / file.stem,
        )

    def uninstall(
        self,
        names: _typing.Sequence[str],
        *,
        scope: config.Scope,
        force: bool = False,
    ) -> manager.UninstallResult:
        self.calls.append(("uninstall", list(names), scope, force))
        self._maybe_fail("uninstall", "*")
        if self.uninstall_result is not None:
            return self.uninstall_result
        return manager.UninstallResult(removed=list(names))

    def update(
        self,
        name: str,
        file: _pathlib.Path,
        *,
        scope: config.Scope,
        force: bool = False,
    ) -> manager.UpdateResult:
        self.calls.append(("update", name, scope, force))
        self._maybe_fail("update", name)
        return manager.UpdateResult(
            skill_name=name,
            installed_path=_pathlib.Path(str(scope)) / name,
            previous_version="1.0.0",
            new_version="1.1.0",
        )

    def list(self, scope: config.Scope) -> list[skills.SkillDescriptor]:
        self.calls.append(("list", scope))
        return list(self.installed.get(scope, []))


@_pytest.fixture
def fake_manager() -> FakeSkillsManager:
    """A fresh recording manager."""
    return FakeSkillsManager()
