"""
In-process skill manager.

Implements every lifecycle operation directly on the filesystem:
validation rules, zip packaging, template scaffolding and
install/update/uninstall into the scope directories from Settings.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib
import shutil as _shutil
import typing as _typing

import skillforge.config as config
import skillforge.constants as constants
import skillforge.manager.base as base
import skillforge.manager.errors as errors
import skillforge.manager.packaging as packaging
import skillforge.manager.templates as templates
import skillforge.manager.validation as validation
import skillforge.skills as skills

_logger = _logging.getLogger(__name__)


def _remove_tree(path: _pathlib.Path) -> None:
    """Remove an installed skill, whether a real directory or a symlink to one."""
    if path.is_symlink():
        path.unlink()
    else:
        _shutil.rmtree(path)


def _is_plain_name(name: str) -> bool:
    """A bare directory name with no path components."""
    return bool(name) and name not in (".", "..") and "/" not in name and "\\" not in name


def _extract_into(manifest: packaging.PackageManifest, target: _pathlib.Path) -> None:
    """
    Extract a package into target, replacing whatever is installed there.

    An existing install is moved to .<name>.backup first and put back if
    extraction fails for any reason.
    """
    backup = None
    if target.exists() or target.is_symlink():
        backup = target.with_name(f".{target.name}.backup")
        if backup.exists() or backup.is_symlink():
            _remove_tree(backup)
        target.rename(backup)
        _logger.debug("Backed up %s to %s", target, backup)

    try:
        packaging.extract_package(manifest, target)
    except Exception:
        _shutil.rmtree(target, ignore_errors=True)
        if backup is not None:
            backup.rename(target)
            _logger.debug("Restored %s from backup", target)
        raise

    if backup is not None:
        try:
            _remove_tree(backup)
        except OSError as e:
            _logger.warning("Could not remove backup %s: %s", backup, e)


class LocalSkillsManager(base.SkillsManager):
    """Skill manager operating on the local filesystem."""

    def __init__(self, settings: config.Settings) -> None:
        """
        Initialize the manager.

        Args:
            settings: Supplies the scope directories for install,
                update, uninstall and list.
        """
        self._settings = settings

    @property
    def settings(self) -> config.Settings:
        return self._settings

    # -------------------------------------------------------------------------
    # Authoring
    # -------------------------------------------------------------------------

    def validate(self, path: _pathlib.Path, *, detailed: bool = True) -> base.ValidationResult:
        return validation.validate_skill(path, detailed=detailed)

    def create_package(
        self,
        path: _pathlib.Path,
        *,
        output: _pathlib.Path,
        force: bool = False,
    ) -> base.PackageResult:
        result = self.validate(path, detailed=True)
        if not result.valid:
            failed = result.failed_checks
            raise errors.SkillValidationError(
                f"Skill is invalid: {len(failed)}/{result.total_count} checks failed",
                failed_checks={rule: check.error or "" for rule, check in failed.items()},
            )

        package_path, entries = packaging.write_package(path, output, force=force)
        _logger.debug("Wrote %s (%d files)", package_path, len(entries))
        return base.PackageResult(
            package_path=package_path,
            files=entries,
            size=package_path.stat().st_size,
        )

    def scaffold(self, request: base.ScaffoldRequest) -> base.ScaffoldResult:
        options = request.template or templates.TemplateOptions()
        self._check_scaffold_request(request, options)

        skill_dir = request.output / request.name
        if skill_dir.exists() and not request.force:
            raise errors.SkillExistsError(f"Skill directory already exists: {skill_dir}")

        files: list[str] = []
        try:
            skill_dir.mkdir(parents=True, exist_ok=True)
            (skill_dir / constants.SKILL_FILE_NAME).write_text(
                templates.render_skill_md(
                    request.name,
                    request.description,
                    request.allowed_tools,
                    options,
                ),
                encoding="utf-8",
            )
            files.append(constants.SKILL_FILE_NAME)

            if not options.minimal:
                for resource in templates.RESOURCE_DIRS:
                    keep = skill_dir / resource / ".gitkeep"
                    keep.parent.mkdir(exist_ok=True)
                    keep.touch()
                    files.append(f"{resource}/.gitkeep")
        except OSError as e:
            raise errors.ScaffoldError(f"Failed to create {skill_dir}: {e}") from e

        return base.ScaffoldResult(path=skill_dir, files=files)

    @staticmethod
    def _check_scaffold_request(
        request: base.ScaffoldRequest,
        options: templates.TemplateOptions,
    ) -> None:
        if problem := validation.name_error(request.name):
            raise errors.ScaffoldError(problem)
        if problem := validation.description_error(request.description):
            raise errors.ScaffoldError(problem)
        if options.template_type not in templates.TEMPLATE_TYPES:
            raise errors.ScaffoldError(
                f"Unknown template '{options.template_type}' "
                f"(expected one of: {', '.join(templates.TEMPLATE_TYPES)})"
            )
        if options.memory is not None and options.memory not in templates.MEMORY_SCOPES:
            raise errors.ScaffoldError(
                f"Unknown memory scope '{options.memory}' "
                f"(expected one of: {', '.join(templates.MEMORY_SCOPES)})"
            )
        if options.model is not None and options.model not in templates.AGENT_MODELS:
            raise errors.ScaffoldError(
                f"Unknown model '{options.model}' "
                f"(expected one of: {', '.join(templates.AGENT_MODELS)})"
            )
        if (
            options.argument_hint is not None
            and len(options.argument_hint) > constants.ARGUMENT_HINT_MAX_LENGTH
        ):
            raise errors.ScaffoldError(
                f"Argument hint must be {constants.ARGUMENT_HINT_MAX_LENGTH} characters or less"
            )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _read_installable(self, file: _pathlib.Path) -> packaging.PackageManifest:
        manifest = packaging.read_manifest(file)
        if problem := validation.name_error(manifest.skill_name):
            raise errors.InvalidPackageError(f"Invalid skill name in {file}: {problem}")
        return manifest

    def install(
        self,
        file: _pathlib.Path,
        *,
        scope: config.Scope,
        force: bool = False,
    ) -> base.InstallResult:
        manifest = self._read_installable(file)
        target = self._settings.skills_dir(scope) / manifest.skill_name

        if (target.exists() or target.is_symlink()) and not force:
            raise errors.SkillExistsError(
                f"Skill '{manifest.skill_name}' is already installed at {target}"
            )

        try:
            _extract_into(manifest, target)
        except OSError as e:
            raise errors.SkillsManagerError(
                f"Failed to install {manifest.skill_name}: {e}"
            ) from e

        _logger.debug("Installed %s into %s", manifest.skill_name, target)
        return base.InstallResult(skill_name=manifest.skill_name, installed_path=target)

    def uninstall(
        self,
        names: _typing.Sequence[str],
        *,
        scope: config.Scope,
        force: bool = False,
    ) -> base.UninstallResult:
        skills_dir = self._settings.skills_dir(scope)
        result = base.UninstallResult()
        targets: list[tuple[str, _pathlib.Path]] = []

        for name in names:
            target = skills_dir / name
            if not _is_plain_name(name) or not (target.is_dir() or target.is_symlink()):
                result.not_found.append(name)
                continue
            if not force and not (target / constants.SKILL_FILE_NAME).is_file():
                raise errors.SkillsManagerError(
                    f"{target} has no {constants.SKILL_FILE_NAME}; use force to remove it"
                )
            targets.append((name, target))

        for name, target in targets:
            try:
                _remove_tree(target)
            except OSError as e:
                _logger.debug("Could not remove %s: %s", target, e)
                result.failed[name] = str(e)
                continue
            _logger.debug("Removed %s", target)
            result.removed.append(name)

        return result

    def update(
        self,
        name: str,
        file: _pathlib.Path,
        *,
        scope: config.Scope,
        force: bool = False,
    ) -> base.UpdateResult:
        manifest = self._read_installable(file)
        if manifest.skill_name != name:
            raise errors.InvalidPackageError(
                f"Package {file} contains '{manifest.skill_name}', not '{name}'"
            )

        target = self._settings.skills_dir(scope) / name
        if not target.is_dir():
            raise errors.SkillNotInstalledError(f"Skill '{name}' is not installed in {scope} scope")

        try:
            previous, _ = skills.load_skill_file(target)
            previous_version = previous.version_string
        except (OSError, UnicodeDecodeError, skills.SkillParseError):
            previous_version = None

        if (
            not force
            and previous_version is not None
            and previous_version == manifest.version
        ):
            raise errors.SkillsManagerError(
                f"Skill '{name}' is already at version {previous_version}; use force to reinstall"
            )

        try:
            _extract_into(manifest, target)
        except OSError as e:
            raise errors.SkillsManagerError(f"Failed to update {name}: {e}") from e

        return base.UpdateResult(
            skill_name=name,
            installed_path=target,
            previous_version=previous_version,
            new_version=manifest.version,
        )

    def list(self, scope: config.Scope) -> list[skills.SkillDescriptor]:
        return skills.list_installed_skills(self._settings, scope)
