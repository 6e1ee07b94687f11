"""
Label, color and shape attributes for rendering the overview graph.
"""

from maven_overview.config import DEFAULT_SUPPRESSED_SCOPES, OverviewConfig
from maven_overview.dependency_graph import ArtifactNode, DependencyEdge

ROOT_COLOR = "#f4a261"
DEFAULT_COLOR = "#8ecae6"
SCOPE_COLORS = {
    "compile": "#8ecae6",
    "runtime": "#90be6d",
    "provided": "#cdb4db",
    "system": "#bdbdbd",
    "test": "#ffd166",
    "import": "#e5e5e5",
}

# plotly marker symbols
ROOT_SYMBOL = "square"
DEFAULT_SYMBOL = "circle"


class Presentation:
    """Read-only mapping from graph elements to display attributes."""

    def __init__(
        self,
        show_version: bool = False,
        full_label: bool = False,
        suppressed_scopes: frozenset[str] = DEFAULT_SUPPRESSED_SCOPES,
    ):
        self.show_version = show_version
        self.full_label = full_label
        self.suppressed_scopes = frozenset(suppressed_scopes)

    @classmethod
    def from_config(cls, config: OverviewConfig) -> "Presentation":
        return cls(
            show_version=config.show_version,
            full_label=config.full_label,
            suppressed_scopes=config.suppressed_scopes,
        )

    def vertex_label(self, node: ArtifactNode) -> str:
        if self.full_label:
            return node.key.coordinate
        if self.show_version:
            return f"{node.artifact_id}\n{node.version}"
        return node.artifact_id

    def edge_label(self, edge: DependencyEdge) -> str | None:
        if not edge.scope or edge.scope in self.suppressed_scopes:
            return None
        return edge.scope

    def vertex_color(self, node: ArtifactNode) -> str:
        if node.is_root:
            return ROOT_COLOR
        return SCOPE_COLORS.get(node.scope or "", DEFAULT_COLOR)

    def vertex_symbol(self, node: ArtifactNode) -> str:
        return ROOT_SYMBOL if node.is_root else DEFAULT_SYMBOL
