"""Maven dependency tree resolution via ``mvn dependency:tree``."""

import asyncio
import json
import os
import shutil
from pathlib import Path

from maven_overview.dependency_graph import TreeNode
from maven_overview.exceptions import DependencyResolutionError
from maven_overview.external_tools.base import ExternalTool
from maven_overview.pom import list_modules

# Relative to each module's base directory
TREE_OUTPUT_FILE = Path("target") / "maven-overview-tree.json"


def parse_tree_json(data: dict) -> TreeNode:
    """Parse maven-dependency-plugin JSON output into a TreeNode.

    JSON structure:
    {
      "groupId": "...",
      "artifactId": "...",
      "version": "...",
      "type": "jar",
      "scope": "compile",
      "classifier": "",
      "optional": "false",
      "children": [...]
    }

    The root (the project itself) has an empty scope.

    Raises:
        DependencyResolutionError: If a node lacks its coordinates.
    """
    if not isinstance(data, dict):
        raise DependencyResolutionError(
            f"Expected a JSON object for a dependency node, got {type(data).__name__}"
        )

    group_id = data.get("groupId")
    artifact_id = data.get("artifactId")
    if not group_id or not artifact_id:
        raise DependencyResolutionError(
            f"Dependency node without groupId/artifactId: {json.dumps(data)[:200]}"
        )

    children = data.get("children") or []
    return TreeNode(
        group_id=group_id,
        artifact_id=artifact_id,
        version=data.get("version") or "unknown",
        packaging=data.get("type") or "jar",
        classifier=data.get("classifier") or "",
        scope=data.get("scope") or None,
        children=tuple(parse_tree_json(child) for child in children),
    )


def load_tree_file(path: Path | str) -> TreeNode:
    """
    Load a dependency tree written by ``mvn dependency:tree -DoutputType=json``.

    Raises:
        DependencyResolutionError: If the file is missing or malformed.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise DependencyResolutionError(f"Dependency tree file not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise DependencyResolutionError(
            f"Failed to read dependency tree from {path}: {e}"
        ) from e
    return parse_tree_json(data)


class MavenTreeTool(ExternalTool):
    """Use Maven to resolve a project's dependency tree."""

    @property
    def name(self) -> str:
        return "mvn"

    def is_available(self) -> bool:
        """Check if Maven is installed."""
        return shutil.which("mvn") is not None

    async def _run_dependency_tree(self, project_dir: Path, recursive: bool) -> None:
        """Run mvn dependency:tree writing JSON into each module's target dir.

        Raises:
            DependencyResolutionError: If Maven is missing or fails
        """
        if not self.is_available():
            raise DependencyResolutionError(
                "Required tool 'mvn' is not installed. "
                "Install Maven or pass pre-generated tree files."
            )

        args = [
            "mvn",
            "dependency:tree",
            "-DoutputType=json",
            f"-DoutputFile={TREE_OUTPUT_FILE.as_posix()}",
            "-B",  # Batch mode
            "-q",  # Quiet
        ]
        if not recursive:
            args.append("-N")

        process = await asyncio.create_subprocess_exec(
            *args,
            cwd=str(project_dir),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env={
                **dict(os.environ),
                "MAVEN_OPTS": "-Dorg.slf4j.simpleLogger.log.org.apache.maven.cli.transfer.Slf4jMavenTransferListener=warn",
            },
        )
        stdout, stderr = await process.communicate()

        if process.returncode != 0:
            error_msg = f"{stdout.decode().strip()}\n{stderr.decode().strip()}".strip()
            raise DependencyResolutionError(
                f"Failed to resolve dependencies in '{project_dir}': {error_msg}"
            )

    def _read_output(self, module_dir: Path) -> TreeNode:
        output_file = module_dir / TREE_OUTPUT_FILE
        if not output_file.exists():
            raise DependencyResolutionError(
                f"Maven dependency:tree succeeded but output file was not created for '{module_dir}'"
            )
        return load_tree_file(output_file)

    async def resolve_tree(self, project_dir: Path) -> TreeNode:
        """Resolve the dependency tree of a single project (non-recursive).

        Raises:
            DependencyResolutionError: If Maven execution fails
        """
        project_dir = Path(project_dir)
        await self._run_dependency_tree(project_dir, recursive=False)
        return self._read_output(project_dir)

    async def resolve_reactor(self, project_dir: Path) -> list[TreeNode]:
        """Resolve the trees of a project and every module of its reactor.

        Returns:
            One tree per module, the aggregator project first.

        Raises:
            DependencyResolutionError: If Maven fails or a module produced no tree
        """
        project_dir = Path(project_dir)
        await self._run_dependency_tree(project_dir, recursive=True)
        return [self._read_output(module_dir) for module_dir in list_modules(project_dir)]
