"""
Command-line interface for Maven Overview.
"""

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.tree import Tree

from maven_overview.assembler import assemble, assemble_trees
from maven_overview.config import (
    OverviewConfig,
    build_config,
    get_output_dir,
    get_project_settings,
)
from maven_overview.dependency_graph import ArtifactKey, DependencyGraph
from maven_overview.exceptions import ConfigurationError, DependencyResolutionError
from maven_overview.external_tools.maven import MavenTreeTool, load_tree_file
from maven_overview.pom import POM_NAME, read_project_info
from maven_overview.presentation import Presentation
from maven_overview.report import generate_report
from maven_overview.visualization import PlotlyVisualizer, build_networkx_graph

# --- Typer App ---
app = typer.Typer(help="Dependency overview graphs for Maven projects.")
console = Console()


# --- Helper Functions ---


def load_config(
    project_dir: Path,
    *,
    includes: str | None = None,
    exclude: list[str] | None = None,
    max_depth: int | None = None,
    scope: list[str] | None = None,
    suppressed_scopes: str | None = None,
    show_version: bool | None = None,
    full_label: bool | None = None,
    width: int | None = None,
    height: int | None = None,
    verbose: bool | None = None,
) -> OverviewConfig:
    """Merge config file settings with CLI options, exiting on invalid values."""
    try:
        settings = get_project_settings(project_dir)
        return build_config(
            settings,
            includes=includes,
            exclusions=exclude or None,
            max_depth=max_depth,
            scopes=scope or None,
            suppressed_scopes=suppressed_scopes,
            show_version=show_version,
            full_label=full_label,
            width=width,
            height=height,
            verbose=verbose,
        )
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(code=1) from e


def build_graph(
    project_dir: Path,
    config: OverviewConfig,
    tree_files: list[Path] | None = None,
    aggregate: bool = False,
) -> DependencyGraph:
    """
    Obtain the dependency tree(s) and assemble the overview graph.

    Pre-generated tree files take precedence over running Maven.

    Raises:
        DependencyResolutionError: If any tree cannot be obtained.
    """
    if tree_files:
        if config.verbose:
            console.print(f"[dim]Loading {len(tree_files)} dependency tree file(s)[/dim]")
        return assemble(tree_files, config, load_tree_file)

    tool = MavenTreeTool()
    if aggregate:
        console.print(f"[cyan]Resolving reactor dependencies in {project_dir}[/cyan]")
        trees = asyncio.run(tool.resolve_reactor(project_dir))
        if config.verbose:
            console.print(f"[dim]Resolved {len(trees)} module tree(s)[/dim]")
        return assemble_trees(trees, config)

    console.print(f"[cyan]Resolving dependencies in {project_dir}[/cyan]")
    return assemble(
        [project_dir], config, lambda path: asyncio.run(tool.resolve_tree(path))
    )


def project_display_name(project_dir: Path, graph: DependencyGraph) -> str:
    """Project name from pom.xml, or the first root artifact of the graph."""
    if (project_dir / POM_NAME).exists():
        try:
            return read_project_info(project_dir).name
        except DependencyResolutionError as e:
            console.print(f"[yellow]⚠️  Could not read {POM_NAME}: {e}[/yellow]")
    roots = graph.roots()
    if roots:
        return roots[0].artifact_id
    return project_dir.resolve().name


def render_tree(graph: DependencyGraph, presentation: Presentation) -> list[Tree]:
    """Render the overview graph as rich trees, one per root."""
    expanded: set[ArtifactKey] = set()

    def add_children(branch: Tree, key: ArtifactKey) -> None:
        for edge in graph.successors(key):
            target = graph.get_node(edge.target)
            if target is None:
                continue
            label = presentation.vertex_label(target).replace("\n", " ")
            scope = presentation.edge_label(edge)
            text = f"{label} [dim]({scope})[/dim]" if scope else label
            if target.key in expanded:
                branch.add(f"{text} [dim]*[/dim]")
                continue
            expanded.add(target.key)
            add_children(branch.add(text), target.key)

    trees = []
    for root in graph.roots():
        root_label = presentation.vertex_label(root).replace("\n", " ")
        tree = Tree(f"[bold]{root_label}[/bold]")
        expanded.add(root.key)
        add_children(tree, root.key)
        trees.append(tree)
    return trees


# --- Commands ---


@app.command("report")
def report(
    project_dir: Path = typer.Argument(
        Path("."),
        help="Maven project directory (containing pom.xml).",
    ),
    tree_file: list[Path] | None = typer.Option(
        None,
        "--tree-file",
        "-t",
        help="Pre-generated 'mvn dependency:tree -DoutputType=json' file. Repeat to aggregate modules; skips running Maven.",
    ),
    aggregate: bool = typer.Option(
        False,
        "--aggregate",
        help="Include every module of the reactor in one graph.",
    ),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Report output directory (default: $MAVEN_OVERVIEW_OUTPUT_DIR or target/site).",
    ),
    includes: str | None = typer.Option(
        None,
        "--includes",
        help="Comma separated groupIds to include. The project's own groupId is always included.",
    ),
    exclude: list[str] | None = typer.Option(
        None,
        "--exclude",
        "-e",
        help="Exclusion rule as 'field=regex[,field=regex]' (fields: groupId, artifactId, packaging, version, scope).",
    ),
    max_depth: int | None = typer.Option(
        None,
        "--max-depth",
        help="Maximum transitive depth (0 for direct dependencies only, negative for unlimited).",
    ),
    scope: list[str] | None = typer.Option(
        None,
        "--scope",
        "-s",
        help="Only follow dependencies in this scope. Repeat for several scopes.",
    ),
    suppressed_scopes: str | None = typer.Option(
        None,
        "--suppressed-scopes",
        help="Comma separated scopes not shown as edge labels (default: compile).",
    ),
    show_version: bool | None = typer.Option(
        None,
        "--show-version/--hide-version",
        help="Show artifact versions in node labels.",
    ),
    full_label: bool | None = typer.Option(
        None,
        "--full-label/--short-label",
        help="Use full artifact coordinates as node labels.",
    ),
    width: int | None = typer.Option(None, "--width", help="Image width in pixels (default: 1200)."),
    height: int | None = typer.Option(None, "--height", help="Image height in pixels (default: 1200)."),
    verbose: bool | None = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Enable verbose logging. If not specified, uses config file default.",
    ),
) -> None:
    """
    Generate the dependency overview report.

    Example:
        maven-overview report
        maven-overview report ./my-app --max-depth=1 --exclude scope=test
        maven-overview report --aggregate --includes com.example
        maven-overview report -t module-a.json -t module-b.json -o site
    """
    if not tree_file and not (project_dir / POM_NAME).exists():
        console.print(f"[red]Error: {POM_NAME} not found in {project_dir}[/red]")
        raise typer.Exit(1)

    config = load_config(
        project_dir,
        includes=includes,
        exclude=exclude,
        max_depth=max_depth,
        scope=scope,
        suppressed_scopes=suppressed_scopes,
        show_version=show_version,
        full_label=full_label,
        width=width,
        height=height,
        verbose=verbose,
    )
    if config.verbose:
        console.print(f"[dim]Configuration: {config._replace(exclusions=())}[/dim]")
        for rule in config.exclusions:
            console.print(f"[dim]Exclusion: {rule.describe()}[/dim]")

    try:
        graph = build_graph(project_dir, config, tree_file, aggregate)
    except DependencyResolutionError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    result = generate_report(
        graph,
        config,
        output_dir or get_output_dir(project_dir),
        project_display_name(project_dir, graph),
    )
    console.print(f"[green]Report written to: {result.page_path}[/green]")
    if result.image_path is None:
        console.print("[yellow]⚠️  Report generated without the overview image.[/yellow]")


@app.command("tree")
def tree(
    tree_file: list[Path] = typer.Argument(
        ...,
        help="One or more 'mvn dependency:tree -DoutputType=json' files.",
    ),
    includes: str | None = typer.Option(None, "--includes", help="Comma separated groupIds to include."),
    exclude: list[str] | None = typer.Option(None, "--exclude", "-e", help="Exclusion rule as 'field=regex[,field=regex]'."),
    max_depth: int | None = typer.Option(None, "--max-depth", help="Maximum transitive depth."),
    scope: list[str] | None = typer.Option(None, "--scope", "-s", help="Only follow dependencies in this scope."),
    show_version: bool | None = typer.Option(None, "--show-version/--hide-version", help="Show artifact versions."),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Also export the graph: .json for node/edge data, anything else as interactive HTML.",
    ),
    verbose: bool | None = typer.Option(None, "--verbose", "-v", help="Enable verbose logging."),
) -> None:
    """
    Print the filtered dependency graph without rendering an image.

    Artifacts already shown elsewhere in the tree are marked with '*'.

    Example:
        maven-overview tree tree.json
        maven-overview tree tree.json --output=graph.html
        maven-overview tree module-a.json module-b.json -o graph.json
    """
    config = load_config(
        Path("."),
        includes=includes,
        exclude=exclude,
        max_depth=max_depth,
        scope=scope,
        show_version=show_version,
        verbose=verbose,
    )
    try:
        graph = assemble(tree_file, config, load_tree_file)
    except DependencyResolutionError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e

    for rendered in render_tree(graph, Presentation.from_config(config)):
        console.print(rendered)
    console.print(
        f"\n[cyan]{len(graph.nodes)} artifacts, {len(graph.edges)} dependencies[/cyan]"
    )

    if output is None:
        return

    visualizer = PlotlyVisualizer(
        build_networkx_graph(graph, Presentation.from_config(config)),
        width=config.width,
        height=config.height,
    )
    if output.suffix == ".json":
        visualizer.export_json(output)
        console.print(f"[green]Graph exported to: {output}[/green]")
    else:
        visualizer.export_html(output)
        console.print(f"[green]Interactive graph exported to: {output}[/green]")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
