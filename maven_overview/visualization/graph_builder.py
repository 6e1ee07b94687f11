"""Conversion of the overview graph to a NetworkX graph."""

import networkx as nx

from maven_overview.dependency_graph import DependencyGraph
from maven_overview.presentation import Presentation


def build_networkx_graph(
    graph: DependencyGraph, presentation: Presentation | None = None
) -> nx.DiGraph:
    """
    Build a NetworkX DiGraph annotated with display attributes.

    Nodes are keyed by their full coordinate and carry ``label``, ``color``,
    ``symbol``, ``scope`` and ``is_root``. Edges carry ``scope`` and ``label``
    (``None`` for suppressed scopes).
    """
    presentation = presentation or Presentation()
    nx_graph = nx.DiGraph()

    for node in graph.nodes:
        nx_graph.add_node(
            node.key.coordinate,
            label=presentation.vertex_label(node),
            color=presentation.vertex_color(node),
            symbol=presentation.vertex_symbol(node),
            scope=node.scope,
            is_root=node.is_root,
        )

    for edge in graph.edges:
        nx_graph.add_edge(
            edge.source.coordinate,
            edge.target.coordinate,
            scope=edge.scope,
            label=presentation.edge_label(edge),
        )

    return nx_graph
