"""DOT renderer with attribute validation."""

import decimal
import logging
import math
import struct
from collections.abc import Mapping
from enum import Enum
from typing import Any

from ..errors import AttributeTypeError, UnknownAttributeError
from .framework import GraphRenderer
from .grammar import AttributeGrammars, AttributeSpec, ValueKind, default_grammars
from .models import EntityKind, Graph

logger = logging.getLogger(__name__)

INDENT = "  "


def escape(value: str) -> str:
    """Quote a string for DOT.

    Only double quotes and newlines are escaped. Backslashes pass through
    untouched because Graphviz gives sequences such as ``\\l`` and ``\\N``
    their own meaning inside labels.
    """
    return '"' + value.replace('"', '\\"').replace("\n", "\\n") + '"'


def _single_precision(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _fixed_point(value: float) -> str:
    """Seven significant digits without an exponent; DOT numerals have none."""
    text = format(decimal.Decimal(f"{value:.7g}"), "f")
    return "0" if text == "-0" else text


class DotRenderer(GraphRenderer):
    """Renders a Graph as a Graphviz ``digraph`` block.

    Every attribute is checked against the grammar for its entity kind
    before anything is emitted, so a render either succeeds completely or
    raises an :class:`~dotgraph.errors.AttributeValidationError`.
    """

    def __init__(self, grammars: AttributeGrammars | None = None):
        self.grammars = grammars if grammars is not None else default_grammars()

    @property
    def format_name(self) -> str:
        return "dot"

    def get_file_extension(self) -> str:
        return ".dot"

    def render(self, graph: Graph) -> str:
        """Render graph as DOT text (no trailing newline)."""
        lines = ["digraph {"]

        for key, value in graph.attributes.items():
            lines.append(f"{INDENT}{key}={self.format_value(EntityKind.GRAPH, key, value)};")

        for node in graph.nodes:
            attrs = self._format_attributes(EntityKind.NODE, node.attributes)
            lines.append(f"{INDENT}{escape(str(node.id))} [{attrs}];")

        for edge in graph.edges:
            attrs = self._format_attributes(EntityKind.EDGE, edge.attributes)
            lines.append(
                f"{INDENT}{escape(str(edge.source.id))} -> {escape(str(edge.target.id))} [{attrs}];"
            )

        lines.append("}")
        logger.debug(f"Rendered DOT for {len(graph.nodes)} nodes and {len(graph.edges)} edges")
        return "\n".join(lines)

    def _format_attributes(self, kind: EntityKind, attributes: Mapping[str, Any]) -> str:
        return ",".join(
            f"{key}={self.format_value(kind, key, value)}"
            for key, value in attributes.items()
        )

    def format_value(self, kind: EntityKind, key: str, value: Any) -> str:
        """Validate one attribute and return its DOT representation.

        Raises:
            UnknownAttributeError: If ``key`` is not in the grammar for ``kind``
            AttributeTypeError: If ``value`` does not match the declared type
        """
        spec = self.grammars.for_kind(kind).lookup(key)
        if spec is None:
            raise UnknownAttributeError(key, kind.value)
        return _format_typed(kind, key, value, spec)


def _format_typed(kind: EntityKind, key: str, value: Any, spec: AttributeSpec) -> str:
    if spec.type == ValueKind.INTEGER:
        if isinstance(value, bool) or not isinstance(value, int):
            raise AttributeTypeError(key, kind.value, value, "integer")
        return str(value)

    if spec.type == ValueKind.BOOLEAN:
        return "true" if value else "false"

    if spec.type == ValueKind.TEXT:
        if not isinstance(value, str):
            raise AttributeTypeError(key, kind.value, value, "text")
        return escape(value)

    if spec.type == ValueKind.FLOAT:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise AttributeTypeError(key, kind.value, value, "float")
        try:
            single = _single_precision(float(value))
        except OverflowError:
            raise AttributeTypeError(key, kind.value, value, "single-precision float")
        if not math.isfinite(single):
            raise AttributeTypeError(key, kind.value, value, "finite float")
        return _fixed_point(single)

    # ValueKind.ENUM
    if value not in spec.values:
        raise AttributeTypeError(key, kind.value, value, spec.describe())
    if isinstance(value, Enum):
        return value.name.lower()
    return str(value)
