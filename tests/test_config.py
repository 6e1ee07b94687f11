"""
Tests for the configuration module.
"""

import pytest

from maven_overview.config import (
    DEFAULT_SUPPRESSED_SCOPES,
    OverviewConfig,
    build_config,
    get_output_dir,
    get_project_settings,
    load_config_file,
    split_list,
)
from maven_overview.exceptions import ConfigurationError


def test_defaults():
    config = build_config()

    assert config == OverviewConfig()
    assert config.includes == ()
    assert config.exclusions == ()
    assert config.max_depth == -1
    assert config.scopes == frozenset()
    assert config.suppressed_scopes == frozenset({"compile"})
    assert config.width == 1200
    assert config.height == 1200
    assert config.report_name == "overview"
    assert config.show_version is False
    assert config.full_label is False


def test_get_settings_from_local_config(tmp_path):
    """Test loading settings from .maven-overview.toml."""
    (tmp_path / ".maven-overview.toml").write_text(
        """
[tool.maven-overview]
includes = "com.example"
max-depth = 2
"""
    )

    settings = get_project_settings(tmp_path)
    assert settings["includes"] == "com.example"
    assert settings["max-depth"] == 2


def test_get_settings_from_pyproject(tmp_path):
    """Test loading settings from pyproject.toml."""
    (tmp_path / "pyproject.toml").write_text(
        """
[tool.maven-overview]
show-version = true
"""
    )

    assert get_project_settings(tmp_path) == {"show-version": True}


def test_local_config_takes_priority(tmp_path):
    """Test that .maven-overview.toml takes priority over pyproject.toml."""
    (tmp_path / "pyproject.toml").write_text(
        """
[tool.maven-overview]
width = 800
"""
    )
    (tmp_path / ".maven-overview.toml").write_text(
        """
[tool.maven-overview]
height = 600
"""
    )

    settings = get_project_settings(tmp_path)
    assert settings == {"height": 600}


def test_get_settings_missing_files(tmp_path):
    """Test that missing files return empty settings."""
    assert get_project_settings(tmp_path) == {}


def test_load_config_file_invalid_toml(tmp_path):
    config_path = tmp_path / ".maven-overview.toml"
    config_path.write_text("[tool.maven-overview\nbroken")

    with pytest.raises(ConfigurationError, match="Failed to load config"):
        load_config_file(config_path)


def test_build_config_from_settings():
    settings = {
        "includes": ["com.example", "org.example"],
        "exclusions": [{"groupId": "org\\.slf4j"}, {"scope": "test"}],
        "max-depth": 3,
        "scopes": "compile, runtime",
        "suppressed-scopes": "compile,runtime",
        "show-version": True,
        "full_label": True,
        "width": 800,
        "height": 600,
        "report-name": "deps",
        "verbose": True,
    }

    config = build_config(settings)

    assert config.includes == ("com.example", "org.example")
    assert len(config.exclusions) == 2
    assert config.max_depth == 3
    assert config.scopes == frozenset({"compile", "runtime"})
    assert config.suppressed_scopes == frozenset({"compile", "runtime"})
    assert config.show_version is True
    assert config.full_label is True
    assert (config.width, config.height) == (800, 600)
    assert config.report_name == "deps"
    assert config.verbose is True


def test_overrides_take_priority_over_settings():
    settings = {"max-depth": 3, "includes": "org.example", "show-version": True}

    config = build_config(settings, max_depth=0, includes="com.example", show_version=False)

    assert config.max_depth == 0
    assert config.includes == ("com.example",)
    assert config.show_version is False


def test_exclusions_are_combined():
    config = build_config({"exclusions": [{"scope": "test"}]}, exclusions=["groupId=junit"])
    assert len(config.exclusions) == 2


def test_empty_suppressed_scopes_shows_every_label():
    assert build_config(suppressed_scopes="").suppressed_scopes == frozenset()
    assert build_config().suppressed_scopes == DEFAULT_SUPPRESSED_SCOPES


def test_invalid_exclusion_pattern_fails_at_parse_time():
    with pytest.raises(ConfigurationError, match="Invalid regular expression"):
        build_config({"exclusions": [{"artifactId": "*broken"}]})


@pytest.mark.parametrize(
    "settings",
    [
        {"width": 0},
        {"height": -10},
        {"max-depth": "deep"},
        {"max-depth": True},
        {"show-version": "maybe"},
        {"report-name": "../escape/overview"},
    ],
)
def test_invalid_values_rejected(settings):
    with pytest.raises(ConfigurationError):
        build_config(settings)


def test_string_booleans_accepted():
    assert build_config({"show-version": "TRUE"}).show_version is True


def test_config_is_immutable():
    config = build_config()
    with pytest.raises(AttributeError):
        config.max_depth = 2


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, ()),
        ("", ()),
        ("a, b,,c ", ("a", "b", "c")),
        (["a", " b ", ""], ("a", "b")),
    ],
)
def test_split_list(value, expected):
    assert split_list(value) == expected


def test_get_output_dir_default(tmp_path, monkeypatch):
    monkeypatch.delenv("MAVEN_OVERVIEW_OUTPUT_DIR", raising=False)
    assert get_output_dir(tmp_path) == tmp_path / "target" / "site"


def test_get_output_dir_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("MAVEN_OVERVIEW_OUTPUT_DIR", str(tmp_path / "site"))
    assert get_output_dir("/some/project") == tmp_path / "site"
