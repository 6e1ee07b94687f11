"""Static and interactive rendering of the overview graph with Plotly."""

import json
from pathlib import Path

import networkx as nx
import plotly.graph_objects as go

from maven_overview.config import DEFAULT_HEIGHT, DEFAULT_WIDTH

LAYOUT_ITERATIONS = 1000
LAYOUT_SEED = 42
NODE_SIZE = 18
EDGE_COLOR = "#888888"


class PlotlyVisualizer:
    """Lay out a NetworkX dependency graph and export it as PNG, HTML or JSON."""

    def __init__(
        self,
        graph: nx.DiGraph,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        title: str | None = None,
    ):
        self.graph = graph
        self.width = width
        self.height = height
        self.title = title
        self._positions: dict[str, tuple[float, float]] | None = None

    @property
    def positions(self) -> dict[str, tuple[float, float]]:
        """Force-directed layout, computed once with a fixed seed."""
        if self._positions is None:
            if self.graph.number_of_nodes() == 0:
                self._positions = {}
            else:
                layout = nx.spring_layout(
                    self.graph, iterations=LAYOUT_ITERATIONS, seed=LAYOUT_SEED
                )
                self._positions = {
                    node: (float(x), float(y)) for node, (x, y) in layout.items()
                }
        return self._positions

    def _edge_annotations(self) -> list[dict]:
        annotations = []
        for source, target, data in self.graph.edges(data=True):
            x0, y0 = self.positions[source]
            x1, y1 = self.positions[target]
            annotations.append(
                dict(
                    x=x1,
                    y=y1,
                    ax=x0,
                    ay=y0,
                    xref="x",
                    yref="y",
                    axref="x",
                    ayref="y",
                    text="",
                    showarrow=True,
                    arrowhead=2,
                    arrowsize=1.2,
                    arrowwidth=1,
                    arrowcolor=EDGE_COLOR,
                    standoff=NODE_SIZE / 2,
                )
            )
            if data.get("label"):
                annotations.append(
                    dict(
                        x=(x0 + x1) / 2,
                        y=(y0 + y1) / 2,
                        xref="x",
                        yref="y",
                        text=data["label"],
                        showarrow=False,
                        font=dict(size=10, color="#555555"),
                    )
                )
        return annotations

    def _node_trace(self) -> go.Scatter:
        xs, ys, labels, colors, symbols, hover = [], [], [], [], [], []
        for node, data in self.graph.nodes(data=True):
            x, y = self.positions[node]
            xs.append(x)
            ys.append(y)
            labels.append(str(data.get("label", node)).replace("\n", "<br>"))
            colors.append(data.get("color"))
            symbols.append(data.get("symbol", "circle"))
            hover.append(node)
        return go.Scatter(
            x=xs,
            y=ys,
            mode="markers+text",
            text=labels,
            textposition="bottom center",
            hovertext=hover,
            hoverinfo="text",
            marker=dict(
                size=NODE_SIZE,
                color=colors,
                symbol=symbols,
                line=dict(width=1, color="#333333"),
            ),
        )

    def build_figure(self) -> go.Figure:
        figure = go.Figure(data=[self._node_trace()])
        axis = dict(showgrid=False, zeroline=False, showticklabels=False)
        figure.update_layout(
            title=self.title,
            width=self.width,
            height=self.height,
            showlegend=False,
            plot_bgcolor="white",
            paper_bgcolor="white",
            margin=dict(l=20, r=20, t=60 if self.title else 20, b=20),
            xaxis=axis,
            yaxis=axis,
            annotations=self._edge_annotations(),
        )
        return figure

    def export_png(self, output_path: Path) -> None:
        """Write the graph as a PNG image (requires kaleido)."""
        self.build_figure().write_image(
            str(output_path), format="png", width=self.width, height=self.height
        )

    def export_html(self, output_path: Path) -> None:
        """Write the graph as a standalone interactive HTML page."""
        self.build_figure().write_html(str(output_path), include_plotlyjs="cdn")

    def export_json(self, output_path: Path) -> None:
        """Write nodes, edges and layout positions as JSON."""
        data = {
            "nodes": [
                {
                    "id": node,
                    "label": attrs.get("label"),
                    "scope": attrs.get("scope"),
                    "is_root": attrs.get("is_root", False),
                    "x": self.positions[node][0],
                    "y": self.positions[node][1],
                }
                for node, attrs in self.graph.nodes(data=True)
            ],
            "edges": [
                {
                    "source": source,
                    "target": target,
                    "scope": attrs.get("scope"),
                    "label": attrs.get("label"),
                }
                for source, target, attrs in self.graph.edges(data=True)
            ],
        }
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
