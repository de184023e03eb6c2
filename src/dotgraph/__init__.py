"""dotgraph - discover client object graphs and serialize them to Graphviz DOT.

Client objects describe themselves through a small protocol; dotgraph walks
them, deduplicates nodes and edges, and renders a validated ``digraph``.
"""

__version__ = "0.1.0"
__description__ = "Discover object graphs and serialize them to Graphviz DOT"

from dotgraph.api import build, render_file, render_text, to_dot
from dotgraph.config import DotgraphConfig
from dotgraph.graph import (
    Attributed,
    AttributeGrammars,
    AttributeSpec,
    Edge,
    Graph,
    GraphObject,
    Node,
    attributed,
)

__all__ = [
    "__version__",
    "__description__",
    "build",
    "render_file",
    "render_text",
    "to_dot",
    "DotgraphConfig",
    "Attributed",
    "AttributeGrammars",
    "AttributeSpec",
    "Edge",
    "Graph",
    "GraphObject",
    "Node",
    "attributed",
]
