"""Unit tests for the discovery protocols."""

import pytest

from dotgraph import build
from dotgraph.graph import GraphObject, Node, ObjectProtocol, RegistryProtocol


class Leaf(GraphObject):
    def node_for(self):
        return Node({"label": "leaf"})


class TestGraphObject:
    """Test the abstract base class."""

    def test_relationships_default_to_empty(self):
        leaf = Leaf()
        assert list(leaf.points_to()) == []
        assert list(leaf.pointed_to_by()) == []
        assert list(leaf.related()) == []

    def test_node_for_is_required(self):
        class Incomplete(GraphObject):
            pass

        with pytest.raises(TypeError):
            Incomplete()


class TestObjectProtocol:
    """Test duck-typed delegation."""

    def test_duck_typed_object(self):
        class Duck:
            def node_for(self):
                return Node()

        protocol = ObjectProtocol()
        duck = Duck()

        assert isinstance(protocol.node_for(duck), Node)
        assert list(protocol.points_to(duck)) == []
        assert list(protocol.related(duck)) == []

    def test_missing_node_for(self):
        with pytest.raises(TypeError, match="does not implement node_for"):
            ObjectProtocol().node_for(42)


class TestRegistryProtocol:
    """Test per-type handler registration."""

    @pytest.fixture
    def protocol(self):
        protocol = RegistryProtocol()
        protocol.register(
            dict,
            node_for=lambda d: Node({"label": d["name"]}),
            points_to=lambda d: d.get("children", []),
        )
        return protocol

    def test_builds_foreign_objects(self, protocol):
        tree = {"name": "root", "children": [{"name": "a"}, {"name": "b"}]}

        graph = build(tree, protocol=protocol)

        assert [n.attributes["label"] for n in graph.nodes] == ["root", "b", "a"]
        assert len(graph.edges) == 2

    def test_unregistered_operations_are_empty(self, protocol):
        assert protocol.related({"name": "x", "related": [1]}) == ()

    def test_subclass_uses_registered_handlers(self, protocol):
        class Record(dict):
            pass

        node = protocol.node_for(Record(name="r"))
        assert node.attributes == {"label": "r"}

    def test_unregistered_type_falls_back_to_methods(self, protocol):
        assert protocol.node_for(Leaf()).attributes == {"label": "leaf"}

    def test_unknown_operation(self):
        with pytest.raises(ValueError, match="Unknown protocol operations"):
            RegistryProtocol().register(dict, children=list)
