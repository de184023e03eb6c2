"""Unit tests for the JSON graph source."""

import json

import pytest

from dotgraph import build, to_dot
from dotgraph.errors import GraphSourceError
from dotgraph.sources import JsonGraphSource


@pytest.fixture
def document():
    return {
        "attributes": {"rankdir": "LR"},
        "root": "main",
        "nodes": [
            {"name": "main", "attributes": {"label": "Main"},
             "pointsTo": ["helper", {"name": "store", "attributes": {"label": "writes"}}]},
            {"name": "helper", "pointsTo": ["proxy"]},
            {"name": "proxy", "hidden": True, "related": ["store"]},
            {"name": "store", "attributes": {"shape": "cylinder"}, "pointedToBy": ["helper"]},
        ],
    }


class TestJsonGraphSource:
    """Loading and building JSON graph documents."""

    def test_build_from_document(self, document):
        source = JsonGraphSource.from_dict(document)

        graph = build(source.root(), source.attributes)

        assert len(graph.nodes) == 3
        assert graph.nodes[0].attributes == {"label": "Main"}
        pairs = {(e.source.attributes.get("label"), e.target.attributes.get("shape"), e.attributes.get("label"))
                 for e in graph.edges}
        assert ("Main", "cylinder", "writes") in pairs
        assert len(graph.edges) == 3

    def test_renders_with_default_grammar(self, document):
        source = JsonGraphSource.from_dict(document)
        text = to_dot(build(source.root(), source.attributes))

        assert text.startswith("digraph {\n  rankdir=LR;\n")
        assert "shape=cylinder" in text

    def test_without_root_relates_all_objects(self):
        source = JsonGraphSource.from_dict({
            "nodes": [{"name": "a"}, {"name": "b"}, {"name": "c", "hidden": True}],
        })

        graph = build(source.root())

        assert len(graph.nodes) == 2
        assert graph.edges == ()

    def test_explicit_ids(self):
        source = JsonGraphSource.from_dict({"nodes": [{"name": "a", "id": 7}]})
        assert build(source.root()).nodes[0].id == 7

    def test_load_from_file(self, tmp_path, document):
        path = tmp_path / "graph.json"
        path.write_text(json.dumps(document), encoding="utf-8")

        source = JsonGraphSource.load(path)

        assert set(source.objects) == {"main", "helper", "proxy", "store"}


class TestJsonGraphSourceErrors:
    """Malformed documents are rejected."""

    def test_duplicate_name(self):
        with pytest.raises(GraphSourceError, match="Duplicate object name 'a'"):
            JsonGraphSource.from_dict({"nodes": [{"name": "a"}, {"name": "a"}]})

    def test_undeclared_reference(self):
        with pytest.raises(GraphSourceError, match="undeclared object 'b'"):
            JsonGraphSource.from_dict({"nodes": [{"name": "a", "pointsTo": ["b"]}]})

    def test_undeclared_root(self):
        with pytest.raises(GraphSourceError, match="Root 'x'"):
            JsonGraphSource.from_dict({"root": "x", "nodes": [{"name": "a"}]})

    def test_unknown_field(self):
        with pytest.raises(GraphSourceError, match="Invalid graph document"):
            JsonGraphSource.from_dict({"nodes": [{"name": "a", "children": []}]})

    def test_misspelled_reference_key(self):
        with pytest.raises(GraphSourceError, match="Invalid graph document"):
            JsonGraphSource.from_dict({"nodes": [
                {"name": "a", "pointsTo": [{"name": "b", "attrs": {"label": "x"}}]},
                {"name": "b"},
            ]})

    def test_missing_file(self, tmp_path):
        with pytest.raises(GraphSourceError, match="not found"):
            JsonGraphSource.load(tmp_path / "missing.json")

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "graph.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(GraphSourceError, match="must contain a JSON object"):
            JsonGraphSource.load(path)
