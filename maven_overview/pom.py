"""
Minimal pom.xml reading: project identity and reactor modules.
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import NamedTuple

from maven_overview.exceptions import DependencyResolutionError

POM_NAME = "pom.xml"


class ProjectInfo(NamedTuple):
    """Identity of a Maven project read from its pom.xml."""

    group_id: str
    artifact_id: str
    name: str
    directory: Path


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def _child_text(element: ET.Element | None, name: str) -> str | None:
    if element is None:
        return None
    child = _child(element, name)
    if child is None or child.text is None:
        return None
    return child.text.strip() or None


def _load_pom(project_dir: Path) -> ET.Element:
    pom_path = project_dir / POM_NAME
    if not pom_path.exists():
        raise DependencyResolutionError(f"No {POM_NAME} found in {project_dir}")
    try:
        return ET.parse(pom_path).getroot()
    except ET.ParseError as e:
        raise DependencyResolutionError(f"Failed to parse {pom_path}: {e}") from e


def read_project_info(project_dir: Path | str) -> ProjectInfo:
    """
    Read group id, artifact id and display name from a pom.xml.

    The group id falls back to the parent's, and the name to the artifact id.
    """
    project_dir = Path(project_dir)
    root = _load_pom(project_dir)

    artifact_id = _child_text(root, "artifactId")
    if not artifact_id:
        raise DependencyResolutionError(
            f"{project_dir / POM_NAME} does not declare an artifactId"
        )
    group_id = _child_text(root, "groupId") or _child_text(
        _child(root, "parent"), "groupId"
    )
    return ProjectInfo(
        group_id=group_id or "",
        artifact_id=artifact_id,
        name=_child_text(root, "name") or artifact_id,
        directory=project_dir,
    )


def list_modules(project_dir: Path | str) -> list[Path]:
    """
    List the project directory and, recursively, its reactor modules.

    Returns:
        Module directories in declaration order, the project itself first.
    """
    project_dir = Path(project_dir)
    found: list[Path] = []
    _collect_modules(project_dir.resolve(), found)
    return found


def _collect_modules(project_dir: Path, found: list[Path]) -> None:
    if project_dir in found:
        return
    found.append(project_dir)
    modules = _child(_load_pom(project_dir), "modules")
    if modules is None:
        return
    for module in modules:
        if _local_name(module.tag) != "module" or not module.text:
            continue
        module_dir = (project_dir / module.text.strip()).resolve()
        # A module may point at a pom file instead of its directory
        if module_dir.is_file():
            module_dir = module_dir.parent
        _collect_modules(module_dir, found)
