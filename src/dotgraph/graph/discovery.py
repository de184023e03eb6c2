"""Discovery engine: turns a root object into deduplicated nodes and edges."""

import logging
from collections.abc import Iterator, Mapping
from dataclasses import replace
from itertools import chain
from typing import Any

from ..errors import DuplicateNodeIdError
from .models import Attributed, Edge, Graph, Node
from .protocol import GraphProtocol, ObjectProtocol

logger = logging.getLogger(__name__)

RELATED = "related"
POINTS_TO = "points_to"
POINTED_TO_BY = "pointed_to_by"


class _Frame:
    """An object whose relationships are still being walked."""

    __slots__ = ("node", "pending", "targets", "sources", "parent", "role", "item")

    def __init__(self, node: Node | None, pending: Iterator[tuple[str, Any]]):
        self.node = node
        self.pending = pending
        self.targets: list[tuple[Node, dict[str, Any]]] = []
        self.sources: list[tuple[Node, dict[str, Any]]] = []
        # Where the finished node is reported: the parent frame and the
        # reference that led here
        self.parent: _Frame | None = None
        self.role = RELATED
        self.item: Any = None

    def record(self, role: str, item: Any, node: Node | None) -> None:
        if node is None:
            return
        if role == POINTS_TO:
            self.targets.append((node, _edge_attributes(item)))
        elif role == POINTED_TO_BY:
            self.sources.append((node, _edge_attributes(item)))


class _DiscoveryRun:
    """Scratch state for a single discovery run."""

    def __init__(self, protocol: GraphProtocol):
        self.protocol = protocol
        # id(obj) -> (obj, node); holding obj keeps its id from being reused
        self.memo: dict[int, tuple[Any, Node | None]] = {}
        self.next_id = 0
        self.used_ids: set[int] = set()
        self.nodes: list[Node] = []
        self.edges: list[Edge] = []
        self._edge_buckets: dict[tuple[int, int], list[Edge]] = {}

    def visit(self, root: Any) -> Node | None:
        """Discover ``root`` (and everything reachable) and return its node.

        The walk is depth-first but uses an explicit stack, so the length of
        a reference chain is not bounded by the interpreter recursion limit.
        """
        root_node, frame = self._enter(root)
        if frame is None:
            return root_node

        stack = [frame]
        while stack:
            frame = stack[-1]
            step = next(frame.pending, None)
            if step is None:
                stack.pop()
                self._complete(frame)
                if frame.parent is not None:
                    frame.parent.record(frame.role, frame.item, frame.node)
                continue

            role, item = step
            child_node, child = self._enter(item)
            if child is None:
                frame.record(role, item, child_node)
            else:
                child.parent, child.role, child.item = frame, role, item
                stack.append(child)
        return root_node

    def _enter(self, item: Any) -> tuple[Node | None, _Frame | None]:
        """Return the memoized node for ``item``, or start a frame for it."""
        obj = _unwrap(item)
        key = id(obj)
        if key in self.memo:
            return self.memo[key][1], None

        node = self._claim(self.protocol.node_for(obj))
        # Must be recorded before descending so that cycles terminate
        self.memo[key] = (obj, node)

        related = self.protocol.related(obj)
        points_to = self.protocol.points_to(obj)
        pointed_to_by = self.protocol.pointed_to_by(obj)
        pending = chain(
            ((RELATED, other) for other in related),
            ((POINTS_TO, other) for other in points_to),
            ((POINTED_TO_BY, other) for other in pointed_to_by),
        )
        return node, _Frame(node, pending)

    def _complete(self, frame: _Frame) -> None:
        node = frame.node
        if node is None:
            return
        self.nodes.append(node)
        for target, attributes in frame.targets:
            self._add_edge(Edge(node, target, attributes))
        for source, attributes in frame.sources:
            self._add_edge(Edge(source, node, attributes))

    def _claim(self, node: Node | None) -> Node | None:
        """Copy the client's node with a run-local identifier.

        The client's own Node is never modified, so a cached node can be
        returned again by a later run.
        """
        if node is None:
            return None
        if node.id is None:
            while self.next_id in self.used_ids:
                self.next_id += 1
            node_id = self.next_id
            self.next_id += 1
        elif node.id in self.used_ids:
            raise DuplicateNodeIdError(node.id)
        else:
            node_id = node.id
        self.used_ids.add(node_id)
        return replace(node, id=node_id, attributes=dict(node.attributes))

    def _add_edge(self, edge: Edge) -> None:
        bucket = self._edge_buckets.setdefault((id(edge.source), id(edge.target)), [])
        if any(edge.duplicates(existing) for existing in bucket):
            logger.debug(f"Skipping duplicate edge {edge.source.id} -> {edge.target.id}")
            return
        bucket.append(edge)
        self.edges.append(edge)


def _unwrap(item: Any) -> Any:
    return item.target if isinstance(item, Attributed) else item


def _edge_attributes(item: Any) -> dict[str, Any]:
    if isinstance(item, Attributed):
        return dict(item.attributes)
    return {}


class DiscoveryEngine:
    """Walks client objects through a :class:`GraphProtocol`.

    Traversal is depth-first and memoized on object identity: every
    object has ``node_for`` called exactly once, however many times it is
    referenced, and reference cycles terminate. Objects whose ``node_for``
    returns None are still traversed so that what they reach is
    discovered, but they never appear as edge endpoints.

    Nodes and edges are returned in reverse completion order, which puts
    the root's node first. Each call to :meth:`discover` starts from fresh
    state, so one engine can serve independent runs.

    Identifiers are written to run-local copies of the nodes returned by
    ``node_for``; the client's own Node objects are left untouched.
    """

    def __init__(self, protocol: GraphProtocol | None = None):
        self.protocol = protocol or ObjectProtocol()

    def discover(self, root: Any) -> tuple[list[Node], list[Edge]]:
        """Discover the graph reachable from ``root``.

        Args:
            root: Root client object (may be an Attributed wrapper)

        Returns:
            Tuple of (nodes, edges)

        Raises:
            DuplicateNodeIdError: If explicit node identifiers collide
        """
        run = _DiscoveryRun(self.protocol)
        run.visit(root)

        nodes = list(reversed(run.nodes))
        edges = list(reversed(run.edges))
        logger.debug(
            f"Discovered {len(nodes)} nodes and {len(edges)} edges "
            f"from {len(run.memo)} objects"
        )
        return nodes, edges

    def build(self, root: Any, attributes: Mapping[str, Any] | None = None) -> Graph:
        """Discover from ``root`` and wrap the result in a Graph."""
        nodes, edges = self.discover(root)
        return Graph(attributes=attributes or {}, nodes=nodes, edges=edges)
