"""Graph data models produced by discovery and consumed by the renderers."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any


class EntityKind(str, Enum):
    """Kinds of entities an attribute can belong to."""
    GRAPH = "graph"
    NODE = "node"
    EDGE = "edge"


@dataclass(eq=False)
class Node:
    """A discovered graph vertex.

    Nodes compare by identity. ``id`` is left as None by clients that want
    the discovery engine to assign the next sequential identifier.
    """
    attributes: dict[str, Any] = field(default_factory=dict)
    id: int | None = None

    def __repr__(self) -> str:
        return f"Node(id={self.id!r}, attributes={self.attributes!r})"


@dataclass(frozen=True, eq=False)
class Edge:
    """A directed, attributed connection between two nodes."""
    source: Node
    target: Node
    attributes: dict[str, Any] = field(default_factory=dict)

    def duplicates(self, other: "Edge") -> bool:
        """Same endpoints (by identity) and structurally equal attributes."""
        return (
            self.source is other.source
            and self.target is other.target
            and self.attributes == other.attributes
        )


@dataclass(frozen=True)
class Attributed:
    """Pairs a client object with attributes for the edge that reaches it.

    Only meaningful as an element returned by ``points_to`` or
    ``pointed_to_by``; discovery unwraps it before anything else.
    """
    target: Any
    attributes: Mapping[str, Any] = field(default_factory=dict)


def attributed(target: Any, **attributes: Any) -> Attributed:
    """Shorthand for ``Attributed(target, attributes)``."""
    return Attributed(target, attributes)


@dataclass(frozen=True)
class Graph:
    """Complete result of one discovery run."""
    attributes: Mapping[str, Any] = field(default_factory=dict)
    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()

    def __post_init__(self):
        # Detach from the caller's containers
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))

    def get_node(self, node_id: int) -> Node | None:
        """Get a node by identifier."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def successors(self, node: Node) -> list[Node]:
        """Targets of edges leaving ``node``, in edge order."""
        return [edge.target for edge in self.edges if edge.source is node]

    def predecessors(self, node: Node) -> list[Node]:
        """Sources of edges entering ``node``, in edge order."""
        return [edge.source for edge in self.edges if edge.target is node]
