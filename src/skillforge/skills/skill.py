"""
Skill descriptor parsing.

Skills are defined by a SKILL.md file with YAML frontmatter.
The frontmatter contains metadata; the body contains instructions.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import pathlib as _pathlib
import re as _re
import typing as _typing

import pydantic as _pydantic
import yaml as _yaml

import skillforge.constants as constants
import skillforge.errors as errors

# Regex to extract YAML frontmatter from markdown
_FRONTMATTER_RE = _re.compile(
    r"^---[ \t]*\n(.*?)\n---[ \t]*(?:\n(.*))?$",
    _re.DOTALL,
)


class SkillParseError(errors.SkillforgeError, ValueError):
    """Raised when a SKILL.md header is missing, malformed, or incomplete."""

    pass


class SkillFrontmatter(_pydantic.BaseModel):
    """
    Frontmatter parsed from a SKILL.md file.

    Required fields:
    - name: Skill identifier
    - description: What the skill does AND when to use it

    Only name and description are checked here. Optional keys are read
    as text whatever their YAML type, and format rules (hyphen-case
    names, length limits) are reported rule by rule during validation.
    Unknown keys are kept so validation can flag them.
    """

    model_config = _pydantic.ConfigDict(
        extra="allow",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    # Required fields
    name: str = _pydantic.Field(..., min_length=1)
    description: str = _pydantic.Field(..., min_length=1)

    # Optional fields
    license: str | None = None

    allowed_tools: list[str] = _pydantic.Field(
        default_factory=list,
        alias="allowed-tools",
        description="Tools pre-approved for use with this skill",
    )

    metadata: dict[str, _typing.Any] = _pydantic.Field(default_factory=dict)

    version: str | None = None
    context: str | None = None
    agent: str | None = None
    model: str | None = None
    memory: str | None = None

    argument_hint: str | None = _pydantic.Field(default=None, alias="argument-hint")

    @_pydantic.field_validator("allowed_tools", mode="before")
    @classmethod
    def _split_tool_string(cls, value: _typing.Any) -> _typing.Any:
        """Accept 'Read, Write' or 'Read Write' as well as a YAML list."""
        if value is None:
            return []
        if isinstance(value, str):
            return [t for t in _re.split(r"[,\s]+", value) if t]
        if isinstance(value, (list, tuple)):
            return [str(t) for t in value if t is not None]
        return [str(value)]

    @_pydantic.field_validator("metadata", mode="before")
    @classmethod
    def _mapping_metadata(cls, value: _typing.Any) -> _typing.Any:
        return value if isinstance(value, dict) else {}

    @_pydantic.field_validator(
        "license", "version", "context", "agent", "model", "memory", "argument_hint",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: _typing.Any) -> _typing.Any:
        """
        Read any YAML value of an optional key as text.

        `version: 1.0` arrives as a float and `argument-hint: [issue]` as a
        list; neither should make the skill unreadable.
        """
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (list, tuple)):
            return "[" + ", ".join(str(v) for v in value) + "]"
        return str(value)

    @property
    def version_string(self) -> str | None:
        """Declared version: top-level `version` or `metadata.version`."""
        if self.version:
            return self.version
        declared = self.metadata.get("version")
        return str(declared) if declared is not None else None


@_dataclasses.dataclass(frozen=True)
class SkillDescriptor:
    """A discovered skill: what it is called, what it does, where it lives."""

    name: str
    description: str
    path: _pathlib.Path

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "description": self.description,
            "path": str(self.path),
        }


def split_frontmatter(content: str) -> tuple[dict[str, _typing.Any], str]:
    """
    Split SKILL.md content into its raw header mapping and body.

    Raises:
        SkillParseError: If the header block is missing or not a YAML mapping.
    """
    content = content.lstrip("\ufeff").replace("\r\n", "\n")
    match = _FRONTMATTER_RE.match(content)
    if not match:
        raise SkillParseError("SKILL.md must start with YAML frontmatter (---)")

    try:
        data = _yaml.safe_load(match.group(1)) or {}
    except _yaml.YAMLError as e:
        raise SkillParseError(f"Invalid YAML in frontmatter: {e}") from e

    if not isinstance(data, dict):
        raise SkillParseError("Frontmatter must be a mapping of key: value pairs")

    return data, (match.group(2) or "").strip()


def parse_skill_markdown(content: str) -> tuple[SkillFrontmatter, str]:
    """
    Parse a SKILL.md file into frontmatter and body.

    Args:
        content: Raw markdown content.

    Returns:
        Tuple of (frontmatter, body).

    Raises:
        SkillParseError: If frontmatter is missing, malformed, or lacks a
            non-empty name or description.
    """
    data, body = split_frontmatter(content)

    try:
        frontmatter = SkillFrontmatter.model_validate(data)
    except _pydantic.ValidationError as e:
        raise SkillParseError(f"Invalid skill frontmatter: {e}") from e

    return frontmatter, body


def load_skill_file(skill_dir: _pathlib.Path) -> tuple[SkillFrontmatter, str]:
    """
    Read and parse the descriptor of a skill directory.

    Raises:
        FileNotFoundError: If SKILL.md doesn't exist.
        SkillParseError: If SKILL.md is invalid.
    """
    skill_file = skill_dir / constants.SKILL_FILE_NAME
    if not skill_file.is_file():
        raise FileNotFoundError(f"{constants.SKILL_FILE_NAME} not found: {skill_file}")

    return parse_skill_markdown(skill_file.read_text(encoding="utf-8"))


def load_descriptor(skill_dir: _pathlib.Path) -> SkillDescriptor:
    """Load the name/description/path record for a skill directory."""
    frontmatter, _ = load_skill_file(skill_dir)
    return SkillDescriptor(
        name=frontmatter.name,
        description=frontmatter.description,
        path=skill_dir,
    )
