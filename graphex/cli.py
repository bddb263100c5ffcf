"""CLI entry point for Graphex."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from graphex.core.config import get_settings
from graphex.core.discovery import (
    CabalDiscoverOpts,
    DiscoverRule,
    discover_cabal_module_graph,
    discover_python_module_graph,
)
from graphex.core.discovery.base import ProgressCallback
from graphex.core.exceptions import DiscoveryError, GraphLoadError
from graphex.core.graph import (
    Graph,
    all_deps_on,
    all_paths_to,
    direct_deps_on,
    graph_to_dep,
    graph_to_tree,
    load_graph,
    ranked,
    reverse_edges,
    select,
    why,
)
from graphex.core.graph.exchange import dep_to_json, graph_to_csv
from graphex.core.log import setup_logging
from graphex.core.models import DiscoveryStats

app = typer.Typer(
    name="graphex",
    help="Dependency questions over a module graph.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    TEXT = "text"


GraphOption = Annotated[
    Path | None,
    typer.Option("--graph", "-g", help="Path to graph data [default: $GRAPHEX_GRAPH or graph.json]"),
]
ReverseOption = Annotated[bool, typer.Option("--reverse", "-r", help="Reverse edges")]
JsonOption = Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")]
FormatOption = Annotated[
    OutputFormat, typer.Option("--format", "-f", help="Output format for graphs")
]
OutputOption = Annotated[
    Path | None, typer.Option("--output", "-o", help="Write the graph to a file instead of stdout")
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Dependency questions over a module graph."""
    setup_logging("DEBUG" if verbose else get_settings().log_level)


def get_graph(path: Path | None, reverse: bool) -> Graph:
    """Load the graph, optionally reversed. Exits on load failure."""
    path = path or get_settings().graph
    try:
        graph = load_graph(path)
    except GraphLoadError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    if reverse:
        logger.debug("Reversing %d edges", graph.num_edges)
        return reverse_edges(graph)
    return graph


def render_graph(graph: Graph, fmt: OutputFormat) -> str:
    """Render a graph as JSON exchange records, CSV, or plain lines."""
    if fmt is OutputFormat.JSON:
        return dep_to_json(graph_to_dep(graph))
    if fmt is OutputFormat.CSV:
        return graph_to_csv(graph)
    return "".join(f"{node}: {' '.join(sorted(graph[node]))}".rstrip() + "\n" for node in graph)


def print_lines(items: list[str], output_json: bool, empty_message: str) -> None:
    """One identifier per line, or a JSON list."""
    if output_json:
        print(json.dumps(items))
        return
    if not items:
        err_console.print(f"[dim]{escape(empty_message)}[/]")
        return
    for item in items:
        print(item)


def emit_graph(graph: Graph, fmt: OutputFormat, output: Path | None) -> None:
    text = render_graph(graph, fmt)
    if output is None:
        print(text, end="" if text.endswith("\n") else "\n")
    else:
        output.write_text(text if text.endswith("\n") else text + "\n", encoding="utf-8")
        err_console.print(f"Wrote [cyan]{escape(str(output))}[/]")


@app.command()
def deps(
    module: Annotated[str, typer.Argument(help="Module name")],
    graph_path: GraphOption = None,
    reverse: ReverseOption = False,
    output_json: JsonOption = False,
) -> None:
    """Show the direct dependencies of a module."""
    graph = get_graph(graph_path, reverse)
    print_lines(sorted(direct_deps_on(graph, module)), output_json, f"No dependencies for '{module}'")


@app.command(name="all")
def all_deps(
    modules: Annotated[list[str], typer.Argument(help="One or more module names")],
    graph_path: GraphOption = None,
    reverse: ReverseOption = False,
    output_json: JsonOption = False,
) -> None:
    """Show all transitive dependencies of one or more modules."""
    graph = get_graph(graph_path, reverse)
    found: set[str] = set()
    for module in modules:
        found |= all_deps_on(graph, module)
    print_lines(sorted(found), output_json, "No dependencies found")


@app.command(name="why")
def why_cmd(
    from_module: Annotated[str, typer.Argument(metavar="FROM", help="Module to start from")],
    to_module: Annotated[str, typer.Argument(metavar="TO", help="Module to reach")],
    graph_path: GraphOption = None,
    reverse: ReverseOption = False,
    output_json: JsonOption = False,
) -> None:
    """Show why one module depends on another (a shortest path)."""
    graph = get_graph(graph_path, reverse)
    print_lines(
        why(graph, from_module, to_module),
        output_json,
        f"No path from '{from_module}' to '{to_module}'",
    )


@app.command()
def rank(
    top: Annotated[int | None, typer.Option("--top", "-n", help="Show only the top N")] = None,
    graph_path: GraphOption = None,
    reverse: ReverseOption = False,
    output_json: JsonOption = False,
) -> None:
    """Show the most depended upon modules."""
    graph = get_graph(graph_path, reverse)
    scored = ranked(graph, top)

    if output_json:
        print(json.dumps([{"module": m, "count": n} for m, n in scored]))
    else:
        for module, count in scored:
            print(f"{module} - {count}")


@app.command(name="select")
def select_cmd(
    module: Annotated[str, typer.Argument(help="Module to start from")],
    graph_path: GraphOption = None,
    reverse: ReverseOption = False,
    fmt: FormatOption = OutputFormat.JSON,
    output: OutputOption = None,
) -> None:
    """Select the part of the graph reachable from a module."""
    graph = get_graph(graph_path, reverse)
    emit_graph(select(graph, module), fmt, output)


@app.command()
def paths(
    from_module: Annotated[str, typer.Argument(metavar="FROM", help="Module to start from")],
    to_module: Annotated[str, typer.Argument(metavar="TO", help="Module to reach")],
    graph_path: GraphOption = None,
    reverse: ReverseOption = False,
    fmt: FormatOption = OutputFormat.JSON,
    output: OutputOption = None,
) -> None:
    """Show every module and edge on some path between two modules."""
    graph = get_graph(graph_path, reverse)
    subgraph = all_paths_to(graph, from_module, to_module)
    if not subgraph:
        err_console.print(f"[dim]No path from '{escape(from_module)}' to '{escape(to_module)}'[/]")
    emit_graph(subgraph, fmt, output)


@app.command()
def tree(
    module: Annotated[str, typer.Argument(help="Root module")],
    max_depth: Annotated[int, typer.Option("--depth", "-d", help="Maximum tree depth")] = 10,
    graph_path: GraphOption = None,
    reverse: ReverseOption = False,
    output_json: JsonOption = False,
) -> None:
    """Show everything reachable from a module as a tree."""
    graph = get_graph(graph_path, reverse)
    root = graph_to_tree(graph, module, max_depth)

    if output_json:
        print(json.dumps(root.to_dict()))
        return

    console.print(f"[bold yellow]{escape(root.label)}[/]", highlight=False)
    last = len(root.children) - 1
    stack = [(child, "", i == last) for i, child in enumerate(root.children)][::-1]
    while stack:
        node, prefix, is_last = stack.pop()
        branch = "└─" if is_last else "├─"
        console.print(f"{prefix}{branch} [cyan]{escape(node.label)}[/]", highlight=False, soft_wrap=True)
        child_prefix = prefix + ("   " if is_last else "│  ")
        last = len(node.children) - 1
        stack.extend(
            (child, child_prefix, i == last) for i, child in reversed(list(enumerate(node.children)))
        )

    if module not in graph:
        err_console.print(f"[dim]'{escape(module)}' is not in the graph[/]")
    else:
        err_console.print(f"\n[dim]Reachable: {len(all_deps_on(graph, module))}[/]")


def _progress() -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=err_console,
        transient=True,
    )


def _report(stats: DiscoveryStats) -> None:
    err_console.print("[green]Done![/green]")
    err_console.print(f"  Modules found: {stats.modules}")
    err_console.print(f"  Files parsed: {stats.parsed}")
    err_console.print(f"  Edges created: {stats.edges}")

    if stats.missing:
        err_console.print(f"  [dim]Without file: {stats.missing}[/]")
    if stats.skipped:
        err_console.print(f"  [dim]Skipped: {stats.skipped}[/]")
    if stats.errors:
        err_console.print(f"  [red]Errors: {len(stats.errors)}[/red]")
        for error in stats.errors:
            err_console.print(f"    {escape(error)}")


def _progress_callback(progress: Progress, task: int, root: Path) -> ProgressCallback:
    def on_progress(file: Path, current: int, total: int) -> None:
        progress.update(task, total=total, completed=current)
        try:
            rel_path: Path | str = file.relative_to(root)
        except ValueError:
            rel_path = file.name
        progress.update(task, description=f"[cyan]{escape(str(rel_path))}[/]")

    return on_progress


@app.command()
def cabal(
    path: Annotated[Path, typer.Argument(help="Directory holding .cabal files")] = Path("."),
    units: Annotated[
        list[str] | None,
        typer.Option(
            "--unit",
            "-u",
            help="Show or hide units, applied in order: +lib, -exe, -test:spec, +exe:name",
        ),
    ] = None,
    external: Annotated[
        bool, typer.Option("--external", "-x", help="Keep imports of modules outside the package")
    ] = False,
    fmt: FormatOption = OutputFormat.JSON,
    output: OutputOption = None,
) -> None:
    """Build the internal module graph of a Cabal package."""
    path = path.resolve()
    try:
        rules = [DiscoverRule.parse(rule) for rule in units or []]
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--unit") from e

    opts = CabalDiscoverOpts(rules=rules, include_external=external)
    logger.debug("Unit rules: %s", rules)
    with _progress() as progress:
        task = progress.add_task(f"Discovering [cyan]{escape(path.name)}[/]", total=None)
        try:
            module_graph, stats = discover_cabal_module_graph(
                path, opts, on_progress=_progress_callback(progress, task, path)
            )
        except DiscoveryError as e:
            err_console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(code=1) from e

    _report(stats)
    emit_graph(module_graph.to_graph(), fmt, output)


@app.command()
def scan(
    path: Annotated[Path, typer.Argument(help="Directory to scan")] = Path("."),
    exclude: Annotated[
        list[str] | None, typer.Option("--exclude", "-e", help="Patterns to exclude")
    ] = None,
    external: Annotated[
        bool, typer.Option("--external", "-x", help="Keep imports of modules outside the tree")
    ] = False,
    fmt: FormatOption = OutputFormat.JSON,
    output: OutputOption = None,
) -> None:
    """Build the module import graph of a Python source tree."""
    path = path.resolve()

    with _progress() as progress:
        task = progress.add_task(f"Scanning [cyan]{escape(path.name)}[/]", total=None)
        module_graph, stats = discover_python_module_graph(
            path,
            exclude_patterns=exclude or [],
            include_external=external,
            on_progress=_progress_callback(progress, task, path),
        )

    _report(stats)
    emit_graph(module_graph.to_graph(), fmt, output)


if __name__ == "__main__":
    app()
