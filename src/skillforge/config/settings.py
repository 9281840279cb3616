"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with SKILLFORGE_ prefix
3. .env file (only when SKILLFORGE_ENV_FILE names one)
4. Field defaults (the fixed layout in skillforge.constants)

Examples:
  SKILLFORGE_SOURCE_DIR=skills
  SKILLFORGE_DIST_DIR=build/packages
  SKILLFORGE_PERSONAL_SKILLS_DIR=/opt/shared/skills
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import skillforge.config.types as types
import skillforge.constants as constants


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    Only an explicit SKILLFORGE_ENV_FILE is honoured. If it is set but the
    file doesn't exist, nothing is loaded rather than falling back silently.
    """
    if env_file := _os.environ.get("SKILLFORGE_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    skillforge configuration settings.

    Every directory the commands touch lives here instead of in module
    globals, so tests (and unusual repository layouts) can point the whole
    toolchain somewhere else.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="SKILLFORGE_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    source_dir: _pathlib.Path = _pydantic.Field(
        default=_pathlib.Path(constants.SKILLS_SOURCE_DIR),
        description="Directory holding skill sources (one subdirectory per skill)",
    )

    dist_dir: _pathlib.Path = _pydantic.Field(
        default=_pathlib.Path(constants.DIST_DIR),
        description="Directory built .skill packages are written to",
    )

    project_skills_dir: _pathlib.Path = _pydantic.Field(
        default=_pathlib.Path(constants.PROJECT_SKILLS_DIR),
        description="Installed skills for the project scope",
    )

    personal_skills_dir: _pathlib.Path = _pydantic.Field(
        default_factory=lambda: _pathlib.Path(constants.PERSONAL_SKILLS_DIR),
        description="Installed skills for the personal scope",
    )

    verbose: bool = _pydantic.Field(
        default=False,
        description="Emit debug logging to stderr",
    )

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file."""
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    def skills_dir(self, scope: types.Scope | str) -> _pathlib.Path:
        """Map a scope to the directory its skills are installed in."""
        scope = types.Scope(scope)
        if scope is types.Scope.PROJECT:
            return self.project_skills_dir
        return self.personal_skills_dir

    def rooted_at(self, root: _pathlib.Path) -> "Settings":
        """
        Return a copy with every relative directory anchored under root.

        Absolute directories (the personal scope by default) are left alone.
        """
        updates: dict[str, _pathlib.Path] = {}
        for field in ("source_dir", "dist_dir", "project_skills_dir", "personal_skills_dir"):
            value: _pathlib.Path = getattr(self, field)
            if not value.is_absolute():
                updates[field] = root / value
        return self.model_copy(update=updates)
