"""
Skill descriptors and discovery for skillforge.

A skill is a directory with a SKILL.md file (YAML frontmatter plus a
markdown body) and optional assets/, references/ and scripts/.

Skill locations:
1. src/skills/ - Sources, built into dist/<name>.skill
2. .claude/skills/ - Installed for the project
3. ~/.claude/skills/ - Installed for the user
"""

from skillforge.skills.discovery import (
    SkillDiscoveryError,
    list_installed_skills,
    list_source_skills,
    packaged_skill_exists,
    packaged_skill_path,
    partition_packaged,
)
from skillforge.skills.skill import (
    SkillDescriptor,
    SkillFrontmatter,
    SkillParseError,
    load_descriptor,
    load_skill_file,
    parse_skill_markdown,
    split_frontmatter,
)

__all__ = [
    # Core
    "SkillDescriptor",
    "SkillFrontmatter",
    # Parsing
    "SkillParseError",
    "load_descriptor",
    "load_skill_file",
    "parse_skill_markdown",
    "split_frontmatter",
    # Discovery
    "SkillDiscoveryError",
    "list_installed_skills",
    "list_source_skills",
    "packaged_skill_exists",
    "packaged_skill_path",
    "partition_packaged",
]
