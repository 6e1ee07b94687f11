"""
Dependency tree traversal.

Walks one resolved dependency tree depth-first and keeps the artifacts that
pass the depth, scope, include and exclusion filters. A filtered artifact
takes its whole subtree with it.
"""

from fnmatch import fnmatchcase

from maven_overview.config import OverviewConfig
from maven_overview.dependency_graph import (
    ArtifactNode,
    DependencyEdge,
    NodeRegistry,
    TreeNode,
)
from maven_overview.exclusions import is_excluded


def group_included(group_id: str, includes: tuple[str, ...]) -> bool:
    """
    Check a group id against include patterns.

    A pattern matches when it equals the group id, is a dotted prefix of it,
    or matches it as a shell-style wildcard. No patterns means no filter.
    """
    if not includes:
        return True
    for pattern in includes:
        if group_id == pattern or group_id.startswith(pattern + "."):
            return True
        if fnmatchcase(group_id, pattern):
            return True
    return False


def effective_includes(project_group_id: str, config: OverviewConfig) -> tuple[str, ...]:
    """Include patterns with the project's own group id always in."""
    if not config.includes or project_group_id in config.includes:
        return config.includes
    return config.includes + (project_group_id,)


def accepts(tree_node: TreeNode, depth: int, includes: tuple[str, ...], config: OverviewConfig) -> bool:
    """Check whether a non-root tree node survives every filter."""
    if config.max_depth >= 0 and depth > config.max_depth:
        return False
    if config.scopes and tree_node.scope not in config.scopes:
        return False
    if not group_included(tree_node.group_id, includes):
        return False
    return not is_excluded(tree_node, config.exclusions)


def _visit(
    tree_node: TreeNode,
    parent: ArtifactNode,
    depth: int,
    includes: tuple[str, ...],
    config: OverviewConfig,
    registry: NodeRegistry,
) -> None:
    if not accepts(tree_node, depth, includes, config):
        return

    node = registry.add_node(ArtifactNode.from_tree_node(tree_node))
    registry.add_edge(DependencyEdge(parent.key, node.key, tree_node.scope))

    for child in tree_node.children:
        _visit(child, node, depth + 1, includes, config, registry)


def walk(
    root: TreeNode, config: OverviewConfig, project_group_id: str | None = None
) -> tuple[list[ArtifactNode], list[DependencyEdge]]:
    """
    Walk a resolved dependency tree.

    The root's direct children are at depth 0. With ``max_depth >= 0`` a node
    at exactly ``max_depth`` is kept but its children are not.

    Args:
        root: The project's resolved dependency tree.
        config: Traversal filters.
        project_group_id: Group id always added to non-empty includes.
            Defaults to the root's own; in a reactor build it is the
            top-level project's.

    Returns:
        Deduplicated nodes (root first) and edges, both in traversal order.
    """
    includes = effective_includes(project_group_id or root.group_id, config)
    registry = NodeRegistry()
    root_node = registry.add_node(ArtifactNode.from_tree_node(root, is_root=True))
    for child in root.children:
        _visit(child, root_node, 0, includes, config, registry)
    return registry.nodes(), registry.edges()
