"""
Shared constants for skillforge.

This module provides a single source of truth for the directory layout
and the limits used across discovery, validation and scaffolding.
"""

import pathlib as _pathlib

# Directory layout
SKILLS_SOURCE_DIR = "src/skills"
"""Where skill sources live, relative to the repository root."""

DIST_DIR = "dist"
"""Where built packages are written."""

PROJECT_SKILLS_DIR = ".claude/skills"
"""Installed skills for the project scope (repository-relative)."""

PERSONAL_SKILLS_DIR = str(_pathlib.Path.home() / ".claude" / "skills")
"""Installed skills for the personal scope (home-relative)."""

# Skill files
SKILL_FILE_NAME = "SKILL.md"
"""Descriptor file at the root of every skill directory."""

PACKAGE_EXTENSION = ".skill"
"""Extension of built skill archives."""

# Field limits
NAME_MAX_LENGTH = 64
DESCRIPTION_MAX_LENGTH = 1024
ARGUMENT_HINT_MAX_LENGTH = 200

SKILL_BODY_SOFT_LIMIT = 500
"""Recommended maximum SKILL.md body length in lines (warning only)."""

# Placeholder metadata for installed skills with unreadable descriptors
UNKNOWN_DESCRIPTION = "Unable to read description"
MISSING_DESCRIPTION = "No description"

# Display
DEFAULT_DESCRIPTION_TRUNCATE_LENGTH = 60
"""Length descriptions are truncated to in selection lists."""
