"""
Tests for Settings and Scope.

Tests verify that:
- Defaults follow the fixed directory layout
- SKILLFORGE_* environment variables override defaults
- Scopes map to their install directories
- rooted_at anchors only relative directories
"""

import pathlib as _pathlib

import pytest as _pytest

import skillforge.config as config
import skillforge.config.settings as settings_module


class TestScope:
    """Tests for the Scope enum."""

    def test_str_is_value(self) -> None:
        """Scopes print as their plain value."""
        assert str(config.Scope.PROJECT) == "project"
        assert f"{config.Scope.PERSONAL} scope" == "personal scope"

    def test_label_is_capitalized(self) -> None:
        assert config.Scope.PROJECT.label == "Project"
        assert config.Scope.PERSONAL.label == "Personal"

    def test_lookup_by_value(self) -> None:
        assert config.Scope("personal") is config.Scope.PERSONAL

    def test_all_scopes_order(self) -> None:
        """Project is offered before personal."""
        assert config.ALL_SCOPES == (config.Scope.PROJECT, config.Scope.PERSONAL)


class TestSettingsDefaults:
    """Tests for default directory layout."""

    def test_default_directories(self) -> None:
        """Defaults match the repository layout."""
        s = config.Settings.construct_without_dotenv()
        assert s.source_dir == _pathlib.Path("src/skills")
        assert s.dist_dir == _pathlib.Path("dist")
        assert s.project_skills_dir == _pathlib.Path(".claude/skills")
        assert s.personal_skills_dir == _pathlib.Path.home() / ".claude" / "skills"
        assert s.verbose is False

    def test_personal_dir_is_absolute(self) -> None:
        """The personal scope never depends on the working directory."""
        assert config.Settings.construct_without_dotenv().personal_skills_dir.is_absolute()


class TestSettingsEnvironment:
    """Tests for environment variable overrides."""

    def test_env_overrides_directories(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """SKILLFORGE_* variables replace the defaults."""
        monkeypatch.setenv("SKILLFORGE_SOURCE_DIR", "skills")
        monkeypatch.setenv("SKILLFORGE_DIST_DIR", "build/packages")
        s = config.Settings.construct_without_dotenv()
        assert s.source_dir == _pathlib.Path("skills")
        assert s.dist_dir == _pathlib.Path("build/packages")

    def test_env_enables_verbose(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SKILLFORGE_VERBOSE", "1")
        assert config.Settings.construct_without_dotenv().verbose is True

    def test_constructor_beats_env(self, monkeypatch: _pytest.MonkeyPatch) -> None:
        """Explicit arguments take precedence over the environment."""
        monkeypatch.setenv("SKILLFORGE_DIST_DIR", "from-env")
        s = config.Settings.construct_without_dotenv(dist_dir=_pathlib.Path("explicit"))
        assert s.dist_dir == _pathlib.Path("explicit")

    def test_env_file_used_only_when_it_exists(
        self,
        monkeypatch: _pytest.MonkeyPatch,
        tmp_path: _pathlib.Path,
    ) -> None:
        """SKILLFORGE_ENV_FILE must name an existing file to be used."""
        env_file = tmp_path / "skillforge.env"
        env_file.write_text("SKILLFORGE_DIST_DIR=out\n")

        monkeypatch.setenv("SKILLFORGE_ENV_FILE", str(env_file))
        assert settings_module._get_env_file() == str(env_file)

        monkeypatch.setenv("SKILLFORGE_ENV_FILE", str(tmp_path / "missing.env"))
        assert settings_module._get_env_file() is None

    def test_no_env_file_by_default(self) -> None:
        assert settings_module._get_env_file() is None


class TestSettingsDirectories:
    """Tests for scope mapping and rooting."""

    def test_skills_dir_per_scope(self) -> None:
        s = config.Settings.construct_without_dotenv(
            project_skills_dir=_pathlib.Path("proj"),
            personal_skills_dir=_pathlib.Path("/home/user/skills"),
        )
        assert s.skills_dir(config.Scope.PROJECT) == _pathlib.Path("proj")
        assert s.skills_dir(config.Scope.PERSONAL) == _pathlib.Path("/home/user/skills")

    def test_skills_dir_accepts_plain_string(self) -> None:
        s = config.Settings.construct_without_dotenv()
        assert s.skills_dir("project") == s.project_skills_dir

    def test_skills_dir_rejects_unknown_scope(self) -> None:
        with _pytest.raises(ValueError):
            config.Settings.construct_without_dotenv().skills_dir("global")

    def test_rooted_at_anchors_relative_dirs(self, tmp_path: _pathlib.Path) -> None:
        """Relative directories move under the root; absolute ones stay put."""
        personal = tmp_path / "home" / "skills"
        s = config.Settings.construct_without_dotenv(personal_skills_dir=personal)

        rooted = s.rooted_at(tmp_path / "repo")

        assert rooted.source_dir == tmp_path / "repo" / "src" / "skills"
        assert rooted.dist_dir == tmp_path / "repo" / "dist"
        assert rooted.project_skills_dir == tmp_path / "repo" / ".claude" / "skills"
        assert rooted.personal_skills_dir == personal

    def test_rooted_at_returns_a_copy(self, tmp_path: _pathlib.Path) -> None:
        s = config.Settings.construct_without_dotenv()
        s.rooted_at(tmp_path)
        assert s.source_dir == _pathlib.Path("src/skills")
