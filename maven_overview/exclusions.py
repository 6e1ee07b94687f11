"""
Exclusion rules for the dependency overview.

A rule is a set of optional regular expressions over an artifact's
coordinates. Absent fields match anything; a rule matches when all of its
present fields match, and an artifact is excluded when any rule matches.

Configuration form::

    [[tool.maven-overview.exclusions]]
    groupId = "org\\.apache\\..*"
    scope = "test"
"""

import re
from collections.abc import Iterable, Mapping
from typing import NamedTuple, Protocol

from maven_overview.exceptions import ConfigurationError

# Config key -> ExclusionRule field
_FIELD_ALIASES = {
    "groupId": "group_id",
    "group_id": "group_id",
    "group": "group_id",
    "artifactId": "artifact_id",
    "artifact_id": "artifact_id",
    "artifact": "artifact_id",
    "packaging": "packaging",
    "type": "packaging",
    "version": "version",
    "scope": "scope",
}


class Coordinates(Protocol):
    group_id: str
    artifact_id: str
    version: str
    packaging: str
    scope: str | None


class ExclusionRule(NamedTuple):
    """Optional pattern per field; ``None`` means the field is unconstrained."""

    group_id: re.Pattern[str] | None = None
    artifact_id: re.Pattern[str] | None = None
    packaging: re.Pattern[str] | None = None
    version: re.Pattern[str] | None = None
    scope: re.Pattern[str] | None = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, object]) -> "ExclusionRule":
        """
        Build a rule from a configuration table.

        Raises:
            ConfigurationError: On unknown keys, non-string values or
                invalid regular expressions.
        """
        fields: dict[str, re.Pattern[str]] = {}
        for raw_key, raw_value in mapping.items():
            field = _FIELD_ALIASES.get(raw_key)
            if field is None:
                raise ConfigurationError(
                    f"Unknown exclusion field '{raw_key}'. "
                    f"Expected one of: groupId, artifactId, packaging, version, scope"
                )
            if raw_value is None or raw_value == "":
                continue
            if not isinstance(raw_value, str):
                raise ConfigurationError(
                    f"Exclusion field '{raw_key}' must be a string, "
                    f"got {type(raw_value).__name__}"
                )
            fields[field] = _compile(raw_key, raw_value)
        if not fields:
            raise ConfigurationError(
                "Exclusion rule has no fields set and would exclude every artifact"
            )
        return cls(**fields)

    def describe(self) -> str:
        parts = [
            f"{name}={pattern.pattern}"
            for name, pattern in zip(self._fields, self)
            if pattern is not None
        ]
        return ", ".join(parts) or "<match all>"


def _compile(field: str, expression: str) -> re.Pattern[str]:
    try:
        return re.compile(expression)
    except re.error as e:
        raise ConfigurationError(
            f"Invalid regular expression for exclusion field '{field}': "
            f"{expression!r} ({e})"
        ) from e


def _field_matches(pattern: re.Pattern[str] | None, value: str | None) -> bool:
    if pattern is None:
        return True
    return pattern.fullmatch(value or "") is not None


def matches(node: Coordinates, rule: ExclusionRule) -> bool:
    """Check whether every constrained field of ``rule`` matches ``node``."""
    return (
        _field_matches(rule.group_id, node.group_id)
        and _field_matches(rule.artifact_id, node.artifact_id)
        and _field_matches(rule.packaging, node.packaging)
        and _field_matches(rule.version, node.version)
        and _field_matches(rule.scope, node.scope)
    )


def is_excluded(node: Coordinates, rules: Iterable[ExclusionRule]) -> bool:
    """Check whether any rule in ``rules`` matches ``node``."""
    return any(matches(node, rule) for rule in rules)


def parse_exclusion(text: str) -> ExclusionRule:
    """
    Parse the command-line form of a rule.

    Args:
        text: Comma separated ``field=regex`` pairs,
            e.g. ``"groupId=org\\.slf4j,scope=test"``.

    Returns:
        The compiled ExclusionRule.

    Raises:
        ConfigurationError: If a pair is malformed or a pattern is invalid.
    """
    mapping: dict[str, str] = {}
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        key, sep, value = part.partition("=")
        if not sep or not key.strip():
            raise ConfigurationError(
                f"Invalid exclusion '{text}'. Expected format: 'field=regex[,field=regex]'"
            )
        mapping[key.strip()] = value.strip()
    if not mapping:
        raise ConfigurationError("Empty exclusion rule")
    return ExclusionRule.from_mapping(mapping)


def parse_exclusions(entries: Iterable[Mapping[str, object] | str]) -> tuple[ExclusionRule, ...]:
    """Parse a mixed list of configuration tables and command-line strings."""
    rules: list[ExclusionRule] = []
    for entry in entries:
        if isinstance(entry, str):
            rules.append(parse_exclusion(entry))
        elif isinstance(entry, Mapping):
            rules.append(ExclusionRule.from_mapping(entry))
        else:
            raise ConfigurationError(
                f"Exclusion entries must be tables or strings, got {type(entry).__name__}"
            )
    return tuple(rules)
