"""Public operations: build a graph, render it to DOT text or to a file."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TextIO

from .graph.discovery import DiscoveryEngine
from .graph.dot import DotRenderer
from .graph.grammar import AttributeGrammars
from .graph.models import Graph
from .graph.protocol import GraphProtocol
from .render import ExternalRenderer

logger = logging.getLogger(__name__)


def build(
    root: Any,
    attributes: Mapping[str, Any] | None = None,
    protocol: GraphProtocol | None = None,
) -> Graph:
    """Discover the graph reachable from ``root``.

    Args:
        root: Root client object
        attributes: Top-level graph attributes
        protocol: Dispatch protocol (default: the objects' own methods)

    Returns:
        Immutable Graph
    """
    graph = DiscoveryEngine(protocol).build(root, attributes)
    logger.info(f"Built graph with {len(graph.nodes)} nodes and {len(graph.edges)} edges")
    return graph


def to_dot(graph: Graph, grammars: AttributeGrammars | None = None) -> str:
    """Serialize ``graph`` to DOT text."""
    return DotRenderer(grammars).render(graph)


def render_text(graph: Graph, sink: TextIO, grammars: AttributeGrammars | None = None) -> None:
    """Serialize ``graph`` to DOT and write it to ``sink``.

    Nothing is written if validation fails.
    """
    DotRenderer(grammars).write(graph, sink)


def render_file(
    graph: Graph,
    path: str | Path,
    fmt: str,
    grammars: AttributeGrammars | None = None,
    executable: str = "dot",
    timeout: float | None = None,
) -> str:
    """Render ``graph`` to ``path`` in format ``fmt`` with the Graphviz executable.

    Returns:
        The rendering program's standard output
    """
    renderer = ExternalRenderer(executable, grammars=grammars, timeout=timeout)
    return renderer.render(graph, path, fmt)
