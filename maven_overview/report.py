"""
Dependency overview report generation.

Renders the overview graph to ``images/<report_name>.png`` under the report
output directory and writes a small HTML page embedding it.
"""

import html
from pathlib import Path
from typing import NamedTuple

from rich.console import Console

from maven_overview.config import OverviewConfig
from maven_overview.dependency_graph import DependencyGraph
from maven_overview.presentation import Presentation
from maven_overview.visualization import PlotlyVisualizer, build_networkx_graph

console = Console()

PAGE_TITLE = "Dependency Overview"
FIGURE_CAPTION = "Dependency Overview Graph"


class OverviewReport(NamedTuple):
    """Files produced by one report run."""

    page_path: Path
    image_path: Path | None  # None when the image could not be written
    graph: DependencyGraph


def graph_location_in_site(report_name: str) -> str:
    """Image path relative to the report output directory."""
    return f"images/{report_name}.png"


def write_image(graph: DependencyGraph, config: OverviewConfig, image_path: Path) -> bool:
    """
    Render ``graph`` to a PNG file.

    Write failures are reported and swallowed so that the rest of the report
    can still be produced.

    Returns:
        True if the image was written.
    """
    nx_graph = build_networkx_graph(graph, Presentation.from_config(config))
    visualizer = PlotlyVisualizer(nx_graph, width=config.width, height=config.height)

    if config.verbose:
        console.print(f"[dim]Writing image to {image_path.absolute()}[/dim]")
    try:
        visualizer.export_png(image_path)
    except (OSError, RuntimeError, ValueError) as e:
        # kaleido raises RuntimeError when no Chrome is available
        console.print(f"[red]Couldn't write to: {image_path} ({e})[/red]")
        return False

    console.print(f"[green]Graph at: {image_path}[/green]")
    return True


def render_page(project_name: str, image_location: str | None) -> str:
    """Build the HTML report page."""
    name = html.escape(project_name)
    if image_location:
        figure = (
            "    <figure>\n"
            f'      <img src="{html.escape(image_location)}" alt="{FIGURE_CAPTION}"/>\n'
            f"      <figcaption>{FIGURE_CAPTION}</figcaption>\n"
            "    </figure>\n"
        )
    else:
        figure = "    <p>The dependency overview graph could not be generated.</p>\n"

    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        '  <meta charset="utf-8"/>\n'
        f"  <title>{PAGE_TITLE}</title>\n"
        "</head>\n"
        "<body>\n"
        "  <section>\n"
        f"    <h2>Dependency Overview Graph for {name}</h2>\n"
        "    <br/><br/>\n"
        f"{figure}"
        "    <br/>\n"
        "  </section>\n"
        "</body>\n"
        "</html>\n"
    )


def generate_report(
    graph: DependencyGraph,
    config: OverviewConfig,
    output_dir: Path | str,
    project_name: str,
) -> OverviewReport:
    """
    Write the overview image and page into ``output_dir``.

    Args:
        graph: The assembled overview graph (may be empty).
        config: Report settings.
        output_dir: Report output directory; created when missing.
        project_name: Name shown in the page heading.

    Returns:
        OverviewReport with the written paths.
    """
    output_dir = Path(output_dir)
    location = graph_location_in_site(config.report_name)
    image_path = output_dir / location

    if not image_path.parent.exists():
        if config.verbose:
            console.print(f"[dim]Creating output directory: {image_path.parent.absolute()}[/dim]")
        image_path.parent.mkdir(parents=True, exist_ok=True)

    console.print(
        f"[cyan]Rendering graph with {len(graph.nodes)} artifacts "
        f"and {len(graph.edges)} dependencies[/cyan]"
    )
    written = write_image(graph, config, image_path)

    page_path = output_dir / f"{config.report_name}.html"
    with open(page_path, "w", encoding="utf-8") as f:
        f.write(render_page(project_name, location if written else None))

    return OverviewReport(
        page_path=page_path,
        image_path=image_path if written else None,
        graph=graph,
    )
