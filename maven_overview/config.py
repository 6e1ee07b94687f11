"""
Configuration management for Maven Overview.

Loads report settings from:
1. .maven-overview.toml (local config)
2. pyproject.toml (project-level config)

Both use a ``[tool.maven-overview]`` table. Command-line options override
file settings; the result is a single immutable ``OverviewConfig``.
"""

import os
import tomllib
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, NamedTuple

from maven_overview.exceptions import ConfigurationError
from maven_overview.exclusions import ExclusionRule, parse_exclusions

LOCAL_CONFIG_NAME = ".maven-overview.toml"
CONFIG_TABLE = "maven-overview"

# Default report output directory, relative to the project directory
DEFAULT_OUTPUT_DIR = Path("target") / "site"
DEFAULT_REPORT_NAME = "overview"
DEFAULT_WIDTH = 1200
DEFAULT_HEIGHT = 1200
DEFAULT_SUPPRESSED_SCOPES = frozenset({"compile"})


class OverviewConfig(NamedTuple):
    """Settings for one report invocation."""

    includes: tuple[str, ...] = ()
    exclusions: tuple[ExclusionRule, ...] = ()
    max_depth: int = -1  # negative means unbounded
    scopes: frozenset[str] = frozenset()  # empty means every scope
    suppressed_scopes: frozenset[str] = DEFAULT_SUPPRESSED_SCOPES
    show_version: bool = False
    full_label: bool = False
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    report_name: str = DEFAULT_REPORT_NAME
    verbose: bool = False


def load_config_file(config_path: Path) -> dict:
    """Load a TOML configuration file."""
    if not config_path.exists():
        return {}
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Failed to load config from {config_path}: {e}") from e


def get_project_settings(project_dir: Path | str) -> dict[str, Any]:
    """
    Load the ``[tool.maven-overview]`` table for a project.

    Priority:
    1. .maven-overview.toml (local config, highest priority)
    2. pyproject.toml (project-level config, fallback)

    Args:
        project_dir: Directory containing the project's pom.xml.

    Returns:
        Settings table, empty when no config file defines one.
    """
    project_dir = Path(project_dir)

    local_config_path = project_dir / LOCAL_CONFIG_NAME
    if local_config_path.exists():
        config = load_config_file(local_config_path)
        settings = config.get("tool", {}).get(CONFIG_TABLE, {})
        if settings:
            return dict(settings)

    pyproject_path = project_dir / "pyproject.toml"
    if pyproject_path.exists():
        config = load_config_file(pyproject_path)
        return dict(config.get("tool", {}).get(CONFIG_TABLE, {}))

    return {}


def split_list(value: str | Iterable[str] | None) -> tuple[str, ...]:
    """Normalize a comma separated string or a list into a tuple of entries."""
    if value is None:
        return ()
    if isinstance(value, str):
        items: Iterable[str] = value.split(",")
    else:
        items = value
    return tuple(item.strip() for item in items if item and item.strip())


def _setting(settings: Mapping[str, Any], name: str, default: Any = None) -> Any:
    # Accept both "max-depth" and "max_depth" spellings
    if name in settings:
        return settings[name]
    return settings.get(name.replace("-", "_"), default)


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"'{name}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"'{name}' must be an integer, got {value!r}") from e


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise ConfigurationError(f"'{name}' must be a boolean, got {value!r}")


def build_config(
    settings: Mapping[str, Any] | None = None,
    *,
    includes: str | Iterable[str] | None = None,
    exclusions: Iterable[Mapping[str, object] | str] | None = None,
    max_depth: int | None = None,
    scopes: str | Iterable[str] | None = None,
    suppressed_scopes: str | Iterable[str] | None = None,
    show_version: bool | None = None,
    full_label: bool | None = None,
    width: int | None = None,
    height: int | None = None,
    report_name: str | None = None,
    verbose: bool | None = None,
) -> OverviewConfig:
    """
    Build the immutable report configuration.

    Keyword arguments left as ``None`` fall back to ``settings`` (the config
    file table), then to the defaults. Exclusions from both sources are
    combined.

    Raises:
        ConfigurationError: If any value is invalid. Regular expressions are
            compiled here, before any traversal happens.
    """
    settings = settings or {}

    def pick(name: str, override: Any, default: Any) -> Any:
        if override is not None:
            return override
        return _setting(settings, name, default)

    exclusion_entries = list(_setting(settings, "exclusions", []) or [])
    if exclusions:
        exclusion_entries.extend(exclusions)

    suppressed = pick("suppressed-scopes", suppressed_scopes, None)
    config = OverviewConfig(
        includes=split_list(pick("includes", includes, None)),
        exclusions=parse_exclusions(exclusion_entries),
        max_depth=_as_int("max-depth", pick("max-depth", max_depth, -1)),
        scopes=frozenset(split_list(pick("scopes", scopes, None))),
        suppressed_scopes=(
            DEFAULT_SUPPRESSED_SCOPES
            if suppressed is None
            else frozenset(split_list(suppressed))
        ),
        show_version=_as_bool("show-version", pick("show-version", show_version, False)),
        full_label=_as_bool("full-label", pick("full-label", full_label, False)),
        width=_as_int("width", pick("width", width, DEFAULT_WIDTH)),
        height=_as_int("height", pick("height", height, DEFAULT_HEIGHT)),
        report_name=str(pick("report-name", report_name, DEFAULT_REPORT_NAME)),
        verbose=_as_bool("verbose", pick("verbose", verbose, False)),
    )

    if config.width <= 0 or config.height <= 0:
        raise ConfigurationError(
            f"Image size must be positive, got {config.width}x{config.height}"
        )
    if not config.report_name or "/" in config.report_name:
        raise ConfigurationError(f"Invalid report name: {config.report_name!r}")

    return config


def get_output_dir(project_dir: Path | str) -> Path:
    """
    Get the report output directory.

    Priority:
    1. MAVEN_OVERVIEW_OUTPUT_DIR environment variable
    2. Default: <project_dir>/target/site

    Returns:
        Path to the report output directory.
    """
    env_output_dir = os.getenv("MAVEN_OVERVIEW_OUTPUT_DIR")
    if env_output_dir:
        return Path(env_output_dir).expanduser()
    return Path(project_dir) / DEFAULT_OUTPUT_DIR
