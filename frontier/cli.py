"""CLI entry point for Frontier."""

import json
import logging
from enum import Enum
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from frontier.core.exceptions import FrontierError
from frontier.core.graph import GENERATORS, Graph, generate
from frontier.core.models import Strategy

app = typer.Typer(
    name="frontier",
    help="Breadth-first traversal and shortest paths over generated graphs.",
    no_args_is_help=True,
)
console = Console()

_MAX_PATH_DISPLAY = 20


class StrategyChoice(str, Enum):
    auto = "auto"
    baseline = "baseline"
    optimized = "optimized"


GraphOpt = Annotated[
    str, typer.Option("--graph", "-g", help=f"Graph type: {', '.join(sorted(GENERATORS))}")
]
NodesOpt = Annotated[int, typer.Option("--nodes", "-n", help="Number of nodes", min=1)]
SeedOpt = Annotated[int, typer.Option("--seed", help="Seed for random generators")]
DirectedOpt = Annotated[bool, typer.Option("--directed", help="Generate a directed graph")]
StrategyOpt = Annotated[
    StrategyChoice, typer.Option("--strategy", "-s", help="BFS engine: auto, baseline, optimized")
]
JsonOpt = Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")]


def build_graph(kind: str, nodes: int, seed: int, directed: bool) -> Graph:
    """Generate the requested graph or exit with a readable error."""
    try:
        return generate(kind, nodes, seed=seed, directed=directed)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2) from e


def to_strategy(choice: StrategyChoice) -> Strategy | None:
    if choice is StrategyChoice.auto:
        return None
    return Strategy(choice.value)


def format_path(path: list[object]) -> str:
    """Render a node path, eliding the middle of long paths."""
    if len(path) <= _MAX_PATH_DISPLAY:
        return " → ".join(str(n) for n in path)
    head = " → ".join(str(n) for n in path[: _MAX_PATH_DISPLAY // 2])
    tail = " → ".join(str(n) for n in path[-_MAX_PATH_DISPLAY // 2 :])
    return f"{head} → [dim]… {len(path) - _MAX_PATH_DISPLAY} more …[/] → {tail}"


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Frontier command line."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@app.command()
def traverse(
    start: Annotated[int, typer.Argument(help="Start node")],
    graph_type: GraphOpt = "small-world",
    nodes: NodesOpt = 1000,
    seed: SeedOpt = 42,
    directed: DirectedOpt = False,
    target: Annotated[
        int | None, typer.Option("--target", "-t", help="Stop once this node is visited")
    ] = None,
    strategy: StrategyOpt = StrategyChoice.auto,
    output_json: JsonOpt = False,
) -> None:
    """Breadth-first traversal from a start node."""
    from frontier.core.models import TraversalOptions
    from frontier.core.traversal import breadth_first_search

    graph = build_graph(graph_type, nodes, seed, directed)
    levels: dict[object, int] = {}

    def on_visit(node: object, level: int) -> None:
        levels[node] = level

    try:
        result = breadth_first_search(
            graph,
            start,
            TraversalOptions(visit_callback=on_visit, target_node=target),
            strategy=to_strategy(strategy),
        )
    except FrontierError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e

    depth = max(levels.values(), default=0)

    if output_json:
        print(
            json.dumps(
                {
                    "start": start,
                    "visited": len(result.visited),
                    "depth": depth,
                    "order": result.order,
                    "tree": {str(k): v for k, v in result.tree.items()},
                }
            )
        )
        return

    console.print(f"[bold]BFS from [cyan]{start}[/cyan][/] over {graph!r}")
    console.print(f"  Visited: {len(result.visited)}")
    console.print(f"  Depth: {depth}")

    per_level: dict[int, int] = {}
    for level in levels.values():
        per_level[level] = per_level.get(level, 0) + 1

    table = Table("Level", "Nodes", show_edge=False)
    for level in sorted(per_level):
        table.add_row(str(level), str(per_level[level]))
    console.print(table)


@app.command()
def path(
    source: Annotated[int, typer.Argument(help="Source node")],
    target: Annotated[int, typer.Argument(help="Target node")],
    graph_type: GraphOpt = "small-world",
    nodes: NodesOpt = 1000,
    seed: SeedOpt = 42,
    directed: DirectedOpt = False,
    strategy: StrategyOpt = StrategyChoice.auto,
    output_json: JsonOpt = False,
) -> None:
    """Shortest unweighted path between two nodes."""
    from frontier.core.traversal import shortest_path_bfs

    graph = build_graph(graph_type, nodes, seed, directed)
    try:
        result = shortest_path_bfs(graph, source, target, strategy=to_strategy(strategy))
    except FrontierError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e

    if output_json:
        if result is None:
            print(json.dumps({"source": source, "target": target, "distance": None, "path": []}))
        else:
            print(
                json.dumps(
                    {
                        "source": source,
                        "target": target,
                        "distance": result.distance,
                        "path": result.path,
                    }
                )
            )
        return

    if result is None:
        console.print(f"No path from [cyan]{source}[/cyan] to [cyan]{target}[/cyan]")
        return

    console.print(f"[green]Distance:[/] {result.distance}")
    console.print(f"  {format_path(result.path)}")


@app.command()
def distances(
    source: Annotated[int, typer.Argument(help="Source node")],
    graph_type: GraphOpt = "small-world",
    nodes: NodesOpt = 1000,
    seed: SeedOpt = 42,
    directed: DirectedOpt = False,
    strategy: StrategyOpt = StrategyChoice.auto,
    output_json: JsonOpt = False,
) -> None:
    """Hop distance from a source to every reachable node."""
    from frontier.core.traversal import single_source_shortest_path_bfs

    graph = build_graph(graph_type, nodes, seed, directed)
    try:
        results = single_source_shortest_path_bfs(graph, source, strategy=to_strategy(strategy))
    except FrontierError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e

    if output_json:
        print(json.dumps({str(node): r.distance for node, r in results.items()}))
        return

    histogram: dict[int, int] = {}
    for r in results.values():
        histogram[r.distance] = histogram.get(r.distance, 0) + 1

    console.print(f"[bold]Reachable from [cyan]{source}[/cyan]:[/] {len(results)} / {graph.node_count}")
    table = Table("Distance", "Nodes", show_edge=False)
    for d in sorted(histogram):
        table.add_row(str(d), str(histogram[d]))
    console.print(table)


@app.command()
def bipartite(
    graph_type: GraphOpt = "grid",
    nodes: NodesOpt = 100,
    seed: SeedOpt = 42,
    output_json: JsonOpt = False,
) -> None:
    """Check whether an undirected graph is two-colorable."""
    from frontier.core.traversal import is_bipartite

    graph = build_graph(graph_type, nodes, seed, directed=False)
    result = is_bipartite(graph)

    if output_json:
        print(json.dumps({"graph": graph_type, "nodes": nodes, "bipartite": result}))
    elif result:
        console.print(f"[green]Bipartite[/green] ({graph!r})")
    else:
        console.print(f"[yellow]Not bipartite[/yellow] ({graph!r})")


@app.command()
def info(
    graph_type: GraphOpt = "small-world",
    nodes: NodesOpt = 1000,
    seed: SeedOpt = 42,
    directed: DirectedOpt = False,
    output_json: JsonOpt = False,
) -> None:
    """Show the CSR snapshot statistics of a generated graph."""
    from frontier.core.optimized import CompactGraph
    from frontier.core.traversal import select_strategy

    graph = build_graph(graph_type, nodes, seed, directed)
    compact = CompactGraph.from_graph(graph)
    max_out = max((compact.out_degree(n) for n in compact.nodes()), default=0)
    result = {
        "nodes": compact.node_count,
        "edges": graph.total_edge_count,
        "csr_entries": compact.edge_count,
        "directed": graph.is_directed,
        "max_out_degree": max_out,
        "csr_bytes": compact.memory_bytes(),
        "strategy": select_strategy(graph).value,
    }

    if output_json:
        print(json.dumps(result))
        return

    for key, value in result.items():
        console.print(f"{key.replace('_', ' ').capitalize()}: {value}")


if __name__ == "__main__":
    app()
