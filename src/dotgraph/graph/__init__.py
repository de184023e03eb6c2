"""Graph discovery and DOT serialization for dotgraph.

Discovery walks client objects through a small protocol (node_for,
points_to, pointed_to_by, related); the DOT renderer validates attributes
against per-kind grammars and emits a ``digraph`` block.
"""

from .discovery import DiscoveryEngine
from .dot import DotRenderer, escape
from .framework import GraphRenderer
from .grammar import (
    AttributeGrammar,
    AttributeGrammars,
    AttributeSpec,
    ValueKind,
    default_grammars,
    enum_of,
    load_grammars,
)
from .models import Attributed, Edge, EntityKind, Graph, Node, attributed
from .protocol import GraphObject, GraphProtocol, ObjectProtocol, RegistryProtocol

__all__ = [
    "DiscoveryEngine",
    "GraphRenderer",
    "DotRenderer",
    "escape",
    "AttributeGrammar",
    "AttributeGrammars",
    "AttributeSpec",
    "ValueKind",
    "default_grammars",
    "enum_of",
    "load_grammars",
    "Attributed",
    "attributed",
    "Edge",
    "EntityKind",
    "Graph",
    "Node",
    "GraphObject",
    "GraphProtocol",
    "ObjectProtocol",
    "RegistryProtocol",
]
