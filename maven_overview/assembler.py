"""
Graph assembly for single-module and aggregated (reactor) builds.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from maven_overview.config import OverviewConfig
from maven_overview.dependency_graph import DependencyGraph, NodeRegistry, TreeNode
from maven_overview.exceptions import DependencyResolutionError
from maven_overview.walker import walk

ProjectT = TypeVar("ProjectT")


def assemble_trees(trees: Iterable[TreeNode], config: OverviewConfig) -> DependencyGraph:
    """
    Merge the filtered walks of one or more project trees into one graph.

    A module that is also a dependency of another module ends up as a single
    root node with an incoming edge from its consumer.
    """
    trees = list(trees)
    if not trees:
        return DependencyGraph()
    # Only the top-level project's group id is implicitly included
    project_group_id = trees[0].group_id
    registry = NodeRegistry()
    for tree in trees:
        nodes, edges = walk(tree, config, project_group_id)
        registry.merge(nodes, edges)
    return registry.build()


def assemble(
    projects: Sequence[ProjectT],
    config: OverviewConfig,
    resolver: Callable[[ProjectT], TreeNode | None],
) -> DependencyGraph:
    """
    Resolve every project's dependency tree and assemble the overview graph.

    Args:
        projects: Projects to include (one for a single-module build).
        config: Traversal filters.
        resolver: Returns the resolved dependency tree of a project.

    Returns:
        The assembled DependencyGraph.

    Raises:
        DependencyResolutionError: If any project's tree cannot be obtained.
    """
    trees: list[TreeNode] = []
    for project in projects:
        try:
            tree = resolver(project)
        except DependencyResolutionError:
            raise
        except Exception as e:
            raise DependencyResolutionError(
                f"Failed to resolve dependency tree for '{project}': {e}"
            ) from e
        if tree is None:
            raise DependencyResolutionError(
                f"No dependency tree available for '{project}'"
            )
        trees.append(tree)
    return assemble_trees(trees, config)
