"""Shared fixtures for dotgraph tests."""

import pytest

from dotgraph.graph import AttributeGrammar, AttributeGrammars, GraphObject, Node
from dotgraph.graph.grammar import BOOLEAN, FLOAT, INTEGER, TEXT, enum_of


class Box(GraphObject):
    """Configurable test object; relationships are plain lists."""

    def __init__(self, name, include=True, node_id=None, **attributes):
        self.name = name
        self.include = include
        self.node_id = node_id
        self.attributes = attributes
        self.targets = []
        self.sources = []
        self.others = []
        self.calls = 0

    def __repr__(self):
        return f"Box({self.name!r})"

    def node_for(self):
        self.calls += 1
        if not self.include:
            return None
        return Node(dict(self.attributes), self.node_id)

    def points_to(self):
        return self.targets

    def pointed_to_by(self):
        return self.sources

    def related(self):
        return self.others


@pytest.fixture
def box():
    """Factory for Box test objects."""
    return Box


@pytest.fixture
def grammars():
    """Small grammar covering every value type."""
    return AttributeGrammars(
        graph=AttributeGrammar(attributes={
            "label": TEXT,
            "rankdir": enum_of(["TB", "LR"]),
        }),
        node=AttributeGrammar(attributes={
            "label": TEXT,
            "peripheries": INTEGER,
            "fixedsize": BOOLEAN,
            "width": FLOAT,
            "shape": enum_of(["box", "ellipse"]),
        }),
        edge=AttributeGrammar(attributes={
            "label": TEXT,
            "weight": INTEGER,
        }),
    )
