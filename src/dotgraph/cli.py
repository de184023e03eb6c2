"""CLI interface for dotgraph using Typer framework."""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from dotgraph import __description__, __version__
from dotgraph.api import build
from dotgraph.config import DotgraphConfig, load_config
from dotgraph.errors import DotgraphError
from dotgraph.graph import DotRenderer, EntityKind, default_grammars, load_grammars
from dotgraph.graph.grammar import AttributeGrammars
from dotgraph.render import ExternalRenderer
from dotgraph.sources import JsonGraphSource

app = typer.Typer(
    name="dotgraph",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()

LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"dotgraph version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """dotgraph - discover object graphs and serialize them to Graphviz DOT."""


def _setup_logging(config: DotgraphConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else LOG_LEVELS.get(config.logging.level, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_grammars(config: DotgraphConfig, grammar: Path | None) -> AttributeGrammars:
    grammar_path = grammar or config.grammar.path
    if grammar_path:
        return load_grammars(grammar_path)
    return default_grammars()


def _output_path(out: Path, source: Path, extension: str) -> Path:
    """Name the output after the source document when --out is a directory."""
    if out.is_dir():
        return out / f"{source.stem}{extension}"
    return out


ConfigOption = Annotated[
    Path,
    typer.Option("--config", "-c", help="Configuration file path (default: search for .dotgraph.json)")
]
GrammarOption = Annotated[
    Path,
    typer.Option("--grammar", "-g", help="Attribute grammar JSON file (default: bundled Graphviz subset)")
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", help="Enable debug logging")
]


@app.command()
def render(
    source: Annotated[
        Path,
        typer.Argument(help="JSON graph document")
    ],
    out: Annotated[
        Path,
        typer.Option("--out", "-o", help="Output file or directory (default: stdout, DOT only)")
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: dot, or any format the executable supports (default: from config)")
    ] = None,
    grammar: GrammarOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Render a JSON graph document to DOT or, through Graphviz, to an image."""
    try:
        dotgraph_config = load_config(config)
        _setup_logging(dotgraph_config, verbose)
        grammars = _load_grammars(dotgraph_config, grammar)

        graph_source = JsonGraphSource.load(source)
        graph = build(graph_source.root(), graph_source.attributes)

        output_format = format or ("dot" if out is None else dotgraph_config.render.format)

        if output_format == "dot":
            dot_renderer = DotRenderer(grammars)
            rendered = dot_renderer.render(graph)
            if out:
                out = _output_path(out, source, dot_renderer.get_file_extension())
                out.write_text(rendered + "\n", encoding="utf-8")
                console.print(f"[green]Graph written:[/green] {out}")
            else:
                sys.stdout.write(rendered + "\n")
            return

        if out is None:
            console.print(f"[red]Error:[/red] --out is required for format '{output_format}'")
            raise typer.Exit(1)

        out = _output_path(out, source, f".{output_format}")
        renderer = ExternalRenderer(
            dotgraph_config.render.executable,
            grammars=grammars,
            timeout=dotgraph_config.render.timeout,
        )
        stdout = renderer.render(graph, out.resolve(), output_format)
        if stdout:
            sys.stdout.write(stdout)
        console.print(f"[green]Graph rendered:[/green] {out}")

    except (DotgraphError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def check(
    source: Annotated[
        Path,
        typer.Argument(help="JSON graph document")
    ],
    grammar: GrammarOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Build a JSON graph document and validate every attribute."""
    try:
        dotgraph_config = load_config(config)
        _setup_logging(dotgraph_config, verbose)
        grammars = _load_grammars(dotgraph_config, grammar)

        graph_source = JsonGraphSource.load(source)
        graph = build(graph_source.root(), graph_source.attributes)
        DotRenderer(grammars).render(graph)

        console.print(f"[green]OK[/green] Graph with {len(graph.nodes)} nodes and {len(graph.edges)} edges")

    except (DotgraphError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def grammar(
    kind: Annotated[
        str,
        typer.Option("--kind", "-k", help="Entity kind: graph, node, edge (default: all)")
    ] = None,
    grammar: GrammarOption = None,
    config: ConfigOption = None,
) -> None:
    """Show the attribute grammar."""
    valid_kinds = [k.value for k in EntityKind]
    if kind is not None and kind not in valid_kinds:
        console.print(f"[red]Error:[/red] Invalid kind '{kind}'. Must be one of: {', '.join(valid_kinds)}")
        raise typer.Exit(1)

    try:
        grammars = _load_grammars(load_config(config), grammar)
    except (DotgraphError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    kinds = [kind] if kind else valid_kinds
    for entity_kind in kinds:
        table = Table(title=f"{entity_kind.capitalize()} attributes")
        table.add_column("Attribute", style="cyan")
        table.add_column("Type", style="green")
        for name, spec in sorted(grammars.for_kind(entity_kind).attributes.items()):
            table.add_row(name, spec.describe())
        console.print(table)


if __name__ == "__main__":
    app()
