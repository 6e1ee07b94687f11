"""
Dependency graph model for Maven projects.

Resolved dependency trees come in as ``TreeNode`` values; the overview graph
goes out as a ``DependencyGraph`` of deduplicated ``ArtifactNode`` entries and
scope-labelled ``DependencyEdge`` entries.
"""

from typing import NamedTuple


class ArtifactKey(NamedTuple):
    """Identity of an artifact in the graph."""

    group_id: str
    artifact_id: str
    version: str
    packaging: str = "jar"
    classifier: str = ""

    @property
    def coordinate(self) -> str:
        """Full coordinate string, e.g. ``org.slf4j:slf4j-api:jar:2.0.9``."""
        parts = [self.group_id, self.artifact_id, self.packaging]
        if self.classifier:
            parts.append(self.classifier)
        parts.append(self.version)
        return ":".join(parts)


class TreeNode(NamedTuple):
    """A node of a resolved dependency tree, as produced by the resolver."""

    group_id: str
    artifact_id: str
    version: str
    packaging: str = "jar"
    classifier: str = ""
    scope: str | None = None  # None for the project root
    children: tuple["TreeNode", ...] = ()

    @property
    def key(self) -> ArtifactKey:
        return ArtifactKey(
            self.group_id,
            self.artifact_id,
            self.version,
            self.packaging,
            self.classifier,
        )


class ArtifactNode(NamedTuple):
    """An artifact vertex of the overview graph."""

    group_id: str
    artifact_id: str
    version: str
    packaging: str = "jar"
    classifier: str = ""
    scope: str | None = None
    is_root: bool = False

    @property
    def key(self) -> ArtifactKey:
        return ArtifactKey(
            self.group_id,
            self.artifact_id,
            self.version,
            self.packaging,
            self.classifier,
        )

    @classmethod
    def from_tree_node(cls, tree_node: TreeNode, is_root: bool = False) -> "ArtifactNode":
        return cls(
            group_id=tree_node.group_id,
            artifact_id=tree_node.artifact_id,
            version=tree_node.version,
            packaging=tree_node.packaging,
            classifier=tree_node.classifier,
            scope=None if is_root else tree_node.scope,
            is_root=is_root,
        )


class DependencyEdge(NamedTuple):
    """Directed edge from a consumer artifact to one of its dependencies."""

    source: ArtifactKey
    target: ArtifactKey
    scope: str | None = None


class DependencyGraph(NamedTuple):
    """Finished overview graph handed to the renderer."""

    nodes: tuple[ArtifactNode, ...] = ()
    edges: tuple[DependencyEdge, ...] = ()

    def __len__(self) -> int:
        return len(self.nodes)

    def get_node(self, key: ArtifactKey) -> ArtifactNode | None:
        for node in self.nodes:
            if node.key == key:
                return node
        return None

    def roots(self) -> list[ArtifactNode]:
        return [node for node in self.nodes if node.is_root]

    def successors(self, key: ArtifactKey) -> list[DependencyEdge]:
        """Outgoing edges of ``key`` in insertion order."""
        return [edge for edge in self.edges if edge.source == key]


class NodeRegistry:
    """
    Identity-keyed accumulator of nodes and edges.

    Nodes reached several times collapse to one entry; the first scope seen is
    kept, and a node registered as a root anywhere stays a root. Edges are
    unique per (source, target) pair and self-loops are dropped.
    """

    def __init__(self) -> None:
        self._nodes: dict[ArtifactKey, ArtifactNode] = {}
        self._edges: dict[tuple[ArtifactKey, ArtifactKey], DependencyEdge] = {}

    def add_node(self, node: ArtifactNode) -> ArtifactNode:
        existing = self._nodes.get(node.key)
        if existing is None:
            self._nodes[node.key] = node
            return node
        if node.is_root and not existing.is_root:
            existing = existing._replace(is_root=True, scope=None)
            self._nodes[node.key] = existing
        return existing

    def add_edge(self, edge: DependencyEdge) -> bool:
        """Record ``edge``; returns False when it was a duplicate or self-loop."""
        if edge.source == edge.target:
            return False
        if edge.source not in self._nodes or edge.target not in self._nodes:
            raise ValueError(
                f"Edge {edge.source.coordinate} -> {edge.target.coordinate} "
                "references an unregistered node"
            )
        pair = (edge.source, edge.target)
        if pair in self._edges:
            return False
        self._edges[pair] = edge
        return True

    def merge(self, nodes: list[ArtifactNode], edges: list[DependencyEdge]) -> None:
        for node in nodes:
            self.add_node(node)
        for edge in edges:
            self.add_edge(edge)

    def nodes(self) -> list[ArtifactNode]:
        return list(self._nodes.values())

    def edges(self) -> list[DependencyEdge]:
        return list(self._edges.values())

    def build(self) -> DependencyGraph:
        return DependencyGraph(
            nodes=tuple(self._nodes.values()),
            edges=tuple(self._edges.values()),
        )
