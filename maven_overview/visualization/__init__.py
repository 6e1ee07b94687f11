"""Visualization module for dependency overview graphs.

Provides tools to convert a DependencyGraph to a rendered image
using NetworkX and Plotly.
"""

from maven_overview.visualization.graph_builder import build_networkx_graph
from maven_overview.visualization.plotly_visualizer import PlotlyVisualizer

__all__ = [
    "build_networkx_graph",
    "PlotlyVisualizer",
]
