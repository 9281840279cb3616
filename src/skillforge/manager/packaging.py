"""
Reading and writing .skill packages.

A package is a zip archive whose entries all live under one top-level
directory named after the skill:

    my-skill/SKILL.md
    my-skill/references/guide.md
    my-skill/scripts/run.py
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import pathlib as _pathlib
import zipfile as _zipfile
import zlib as _zlib

import skillforge.constants as constants
import skillforge.manager.errors as errors
import skillforge.skills as skills

_logger = _logging.getLogger(__name__)

_SKIPPED_PARTS = frozenset({"__pycache__", "node_modules"})


@_dataclasses.dataclass
class PackageManifest:
    """What a package contains, read without extracting it."""

    path: _pathlib.Path
    skill_name: str
    frontmatter: skills.SkillFrontmatter
    entries: list[str]

    @property
    def version(self) -> str | None:
        return self.frontmatter.version_string


def _is_packaged(file_path: _pathlib.Path, skill_dir: _pathlib.Path) -> bool:
    relative = file_path.relative_to(skill_dir)
    if any(part.startswith(".") or part in _SKIPPED_PARTS for part in relative.parts):
        return False
    return file_path.is_file()


def write_package(
    skill_dir: _pathlib.Path,
    output_dir: _pathlib.Path,
    *,
    force: bool = False,
) -> tuple[_pathlib.Path, list[str]]:
    """
    Archive a skill directory into output_dir/<dir-name>.skill.

    Hidden files and cache directories are left out.

    Returns:
        Tuple of (package path, archive entry names).

    Raises:
        SkillExistsError: If the package exists and force is False.
        PackageError: If the archive cannot be written.
    """
    skill_dir = skill_dir.resolve()
    skill_name = skill_dir.name
    package_path = output_dir / f"{skill_name}{constants.PACKAGE_EXTENSION}"

    if package_path.exists() and not force:
        raise errors.SkillExistsError(f"Package already exists: {package_path}")

    entries: list[str] = []
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        with _zipfile.ZipFile(package_path, "w", _zipfile.ZIP_DEFLATED) as zf:
            for file_path in sorted(skill_dir.rglob("*")):
                if not _is_packaged(file_path, skill_dir):
                    continue
                arcname = f"{skill_name}/{file_path.relative_to(skill_dir).as_posix()}"
                zf.write(file_path, arcname)
                entries.append(arcname)
                _logger.debug("Packed %s", arcname)
    except OSError as e:
        raise errors.PackageError(f"Failed to write {package_path}: {e}") from e

    return package_path, entries


def read_manifest(package_path: _pathlib.Path) -> PackageManifest:
    """
    Inspect a package and parse its SKILL.md.

    Raises:
        InvalidPackageError: If the file is missing, not a zip archive, has
            entries outside a single top-level directory, or lacks a valid
            SKILL.md.
    """
    if not package_path.is_file():
        raise errors.InvalidPackageError(f"Package not found: {package_path}")

    try:
        with _zipfile.ZipFile(package_path) as zf:
            entries = [info.filename for info in zf.infolist() if not info.is_dir()]
            roots = {entry.split("/", 1)[0] for entry in zf.namelist()}
            if len(roots) != 1:
                raise errors.InvalidPackageError(
                    f"Package must contain exactly one top-level directory: {package_path}"
                )
            root = roots.pop()
            _check_entries(root, zf.namelist(), package_path)
            try:
                raw = zf.read(f"{root}/{constants.SKILL_FILE_NAME}")
            except KeyError:
                raise errors.InvalidPackageError(
                    f"Package has no {root}/{constants.SKILL_FILE_NAME}: {package_path}"
                ) from None
    except (_zipfile.BadZipFile, _zlib.error) as e:
        raise errors.InvalidPackageError(f"Not a valid package: {package_path} ({e})") from e

    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise errors.InvalidPackageError(
            f"{root}/{constants.SKILL_FILE_NAME} is not UTF-8 text: {package_path}"
        ) from e

    try:
        frontmatter, _ = skills.parse_skill_markdown(content)
    except skills.SkillParseError as e:
        raise errors.InvalidPackageError(f"Invalid {constants.SKILL_FILE_NAME} in package: {e}") from e

    return PackageManifest(
        path=package_path,
        skill_name=root,
        frontmatter=frontmatter,
        entries=entries,
    )


def _check_entries(root: str, names: list[str], package_path: _pathlib.Path) -> None:
    """Reject entries that would escape the skill directory on extraction."""
    if not root or root in (".", ".."):
        raise errors.InvalidPackageError(f"Invalid top-level directory in {package_path}")
    for name in names:
        parts = _pathlib.PurePosixPath(name).parts
        if name.startswith("/") or ".." in parts or "\\" in name:
            raise errors.InvalidPackageError(
                f"Unsafe entry '{name}' in package: {package_path}"
            )


def extract_package(manifest: PackageManifest, target_dir: _pathlib.Path) -> list[_pathlib.Path]:
    """
    Extract a package's files into target_dir (the skill directory itself).

    Returns:
        Paths of the extracted files.

    Raises:
        InvalidPackageError: If a member is corrupt (bad CRC, broken deflate
            stream). Files already written are left for the caller to clean up.
    """
    prefix = f"{manifest.skill_name}/"
    extracted: list[_pathlib.Path] = []

    target_dir.mkdir(parents=True, exist_ok=True)
    try:
        with _zipfile.ZipFile(manifest.path) as zf:
            for info in zf.infolist():
                if info.is_dir() or not info.filename.startswith(prefix):
                    continue
                destination = target_dir / info.filename[len(prefix):]
                destination.parent.mkdir(parents=True, exist_ok=True)
                with zf.open(info) as source, destination.open("wb") as sink:
                    sink.write(source.read())
                extracted.append(destination)
                _logger.debug("Extracted %s", destination)
    except (_zipfile.BadZipFile, _zlib.error) as e:
        raise errors.InvalidPackageError(f"Corrupt package {manifest.path}: {e}") from e

    return extracted
