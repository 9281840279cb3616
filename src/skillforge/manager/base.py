"""
Abstract interface for skill lifecycle operations.

The build/scaffold/install/update/uninstall commands only talk to a
SkillsManager. LocalSkillsManager implements it in-process; tests inject
fakes that record calls and return canned results.
"""

from __future__ import annotations

import abc as _abc
import dataclasses as _dataclasses
import pathlib as _pathlib
import typing as _typing

import skillforge.config as config
import skillforge.manager.templates as templates
import skillforge.skills as skills


@_dataclasses.dataclass
class CheckResult:
    """Outcome of one validation rule."""

    passed: bool
    error: str | None = None


@_dataclasses.dataclass
class ValidationResult:
    """
    Rule-by-rule validation outcome for a skill directory.

    Checks are kept in the order they ran, so output is stable.
    """

    path: _pathlib.Path
    checks: dict[str, CheckResult] = _dataclasses.field(default_factory=dict)
    warnings: list[str] = _dataclasses.field(default_factory=list)

    @property
    def valid(self) -> bool:
        """True when every check passed."""
        return all(check.passed for check in self.checks.values())

    @property
    def failed_checks(self) -> dict[str, CheckResult]:
        """The checks that did not pass."""
        return {name: c for name, c in self.checks.items() if not c.passed}

    @property
    def total_count(self) -> int:
        return len(self.checks)

    @property
    def passed_count(self) -> int:
        return self.total_count - len(self.failed_checks)

    @property
    def failed_count(self) -> int:
        return len(self.failed_checks)

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": str(self.path),
            "valid": self.valid,
            "checks": {
                name: {"passed": c.passed, "error": c.error}
                for name, c in self.checks.items()
            },
            "warnings": list(self.warnings),
        }


@_dataclasses.dataclass
class PackageResult:
    """A package written to disk."""

    package_path: _pathlib.Path
    files: list[str] = _dataclasses.field(default_factory=list)
    size: int = 0


@_dataclasses.dataclass
class ScaffoldRequest:
    """Everything needed to create a new skill directory."""

    name: str
    description: str
    output: _pathlib.Path
    allowed_tools: list[str] = _dataclasses.field(default_factory=list)
    force: bool = False
    template: templates.TemplateOptions | None = None


@_dataclasses.dataclass
class ScaffoldResult:
    """A newly created skill directory and the files written into it."""

    path: _pathlib.Path
    files: list[str] = _dataclasses.field(default_factory=list)


@_dataclasses.dataclass
class InstallResult:
    """A skill extracted into a scope."""

    skill_name: str
    installed_path: _pathlib.Path


@_dataclasses.dataclass
class UninstallResult:
    """Which requested skills were removed, not there, or could not be removed."""

    removed: list[str] = _dataclasses.field(default_factory=list)
    not_found: list[str] = _dataclasses.field(default_factory=list)
    failed: dict[str, str] = _dataclasses.field(default_factory=dict)


@_dataclasses.dataclass
class UpdateResult:
    """An installed skill replaced by a newer package."""

    skill_name: str
    installed_path: _pathlib.Path
    previous_version: str | None = None
    new_version: str | None = None


class SkillsManager(_abc.ABC):
    """
    Abstract base class for skill lifecycle engines.

    Implementations raise SkillsManagerError subclasses for failures that
    concern a single skill; callers report them and carry on.
    """

    @_abc.abstractmethod
    def validate(self, path: _pathlib.Path, *, detailed: bool = True) -> ValidationResult:
        """
        Check a skill directory against the validation rules.

        Args:
            path: Skill directory.
            detailed: If False, stop at the first failing rule.
        """
        ...

    @_abc.abstractmethod
    def create_package(
        self,
        path: _pathlib.Path,
        *,
        output: _pathlib.Path,
        force: bool = False,
    ) -> PackageResult:
        """Archive a valid skill directory into output/<name>.skill."""
        ...

    @_abc.abstractmethod
    def scaffold(self, request: ScaffoldRequest) -> ScaffoldResult:
        """Create a new skill directory from a template."""
        ...

    @_abc.abstractmethod
    def install(
        self,
        file: _pathlib.Path,
        *,
        scope: config.Scope,
        force: bool = False,
    ) -> InstallResult:
        """Extract a package into the scope's skills directory."""
        ...

    @_abc.abstractmethod
    def uninstall(
        self,
        names: _typing.Sequence[str],
        *,
        scope: config.Scope,
        force: bool = False,
    ) -> UninstallResult:
        """
        Remove installed skills by directory name.

        A skill that cannot be removed is recorded in failed (name -> reason)
        and the rest of the batch still runs.
        """
        ...

    @_abc.abstractmethod
    def update(
        self,
        name: str,
        file: _pathlib.Path,
        *,
        scope: config.Scope,
        force: bool = False,
    ) -> UpdateResult:
        """Replace an installed skill with the contents of a package."""
        ...

    @_abc.abstractmethod
    def list(self, scope: config.Scope) -> list[skills.SkillDescriptor]:
        """List the skills installed in a scope."""
        ...
