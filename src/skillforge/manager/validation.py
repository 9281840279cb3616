"""
Rule-by-rule validation of skill directories.

Rules run in a fixed order. A rule that cannot be evaluated because an
earlier one failed (no file, no parseable header) is not reported, so
counts reflect only the rules that actually ran.

Rule names:
- file_exists: SKILL.md is present
- frontmatter_valid: the header block parses to a YAML mapping
- required_fields: name and description are non-empty strings
- allowed_properties: no unknown header keys
- name_format: hyphen-case, starts with a letter, at most 64 characters
- description_format: at most 1024 characters, no angle brackets
- name_matches_directory: declared name equals the directory name
"""

from __future__ import annotations

import pathlib as _pathlib
import re as _re
import typing as _typing

import skillforge.constants as constants
import skillforge.manager.base as base
import skillforge.skills as skills

NAME_PATTERN = _re.compile(r"^(?:[a-z][a-z0-9-]*[a-z0-9]|[a-z])$")

ALLOWED_PROPERTIES: frozenset[str] = frozenset({
    "name",
    "description",
    "license",
    "allowed-tools",
    "metadata",
    "version",
    "compatibility",
    "context",
    "agent",
    "model",
    "memory",
    "argument-hint",
    "hooks",
    "user-invocable",
    "disable-model-invocation",
})


def name_error(value: str) -> str | None:
    """Return why value is not a valid skill name, or None if it is."""
    if not value:
        return "Name is required"
    if len(value) > constants.NAME_MAX_LENGTH:
        return f"Name must be {constants.NAME_MAX_LENGTH} characters or less"
    if not NAME_PATTERN.match(value):
        return (
            "Name must be hyphen-case (lowercase letters, numbers, hyphens) "
            "and start with a letter"
        )
    return None


def description_error(value: str) -> str | None:
    """Return why value is not a valid skill description, or None if it is."""
    if not value:
        return "Description is required"
    if "<" in value or ">" in value:
        return "Description cannot contain angle brackets"
    if len(value) > constants.DESCRIPTION_MAX_LENGTH:
        return f"Description must be {constants.DESCRIPTION_MAX_LENGTH} characters or less"
    return None


class _Stop(Exception):
    """Internal signal: a rule failed in non-detailed mode."""


def validate_skill(path: _pathlib.Path, *, detailed: bool = True) -> base.ValidationResult:
    """
    Validate a skill directory.

    Args:
        path: Skill directory (must contain SKILL.md).
        detailed: If False, stop after the first failing rule.

    Returns:
        The ordered per-rule results plus non-fatal warnings.
    """
    result = base.ValidationResult(path=path)

    def record(rule: str, error: str | None) -> None:
        result.checks[rule] = base.CheckResult(passed=error is None, error=error)
        if error is not None and not detailed:
            raise _Stop

    try:
        _run_rules(path, result, record)
    except _Stop:
        pass

    return result


def _run_rules(
    path: _pathlib.Path,
    result: base.ValidationResult,
    record: _typing.Callable[[str, str | None], None],
) -> None:
    skill_file = path / constants.SKILL_FILE_NAME
    if not skill_file.is_file():
        record("file_exists", f"{constants.SKILL_FILE_NAME} not found in {path}")
        return
    record("file_exists", None)

    try:
        data, body = skills.split_frontmatter(skill_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, skills.SkillParseError) as e:
        record("frontmatter_valid", str(e))
        return
    record("frontmatter_valid", None)

    name = data.get("name")
    description = data.get("description")
    missing = [
        key
        for key, value in (("name", name), ("description", description))
        if not isinstance(value, str) or not value.strip()
    ]
    record(
        "required_fields",
        f"Missing or empty required field(s): {', '.join(missing)}" if missing else None,
    )

    unknown = sorted(str(key) for key in data if key not in ALLOWED_PROPERTIES)
    record(
        "allowed_properties",
        f"Unknown frontmatter properties: {', '.join(unknown)}" if unknown else None,
    )

    has_name = isinstance(name, str) and bool(name.strip())
    if has_name:
        name = name.strip()
        record("name_format", name_error(name))

    if isinstance(description, str) and description.strip():
        record("description_format", description_error(description.strip()))

    if has_name:
        directory = path.resolve().name
        record(
            "name_matches_directory",
            None
            if name == directory
            else f"Skill name '{name}' does not match directory name '{directory}'",
        )

    line_count = len(body.splitlines())
    if not body:
        result.warnings.append(f"{constants.SKILL_FILE_NAME} body is empty")
    elif line_count > constants.SKILL_BODY_SOFT_LIMIT:
        result.warnings.append(
            f"Body exceeds recommended limit ({line_count} > "
            f"{constants.SKILL_BODY_SOFT_LIMIT} lines)"
        )
