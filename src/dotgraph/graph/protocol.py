"""Capability protocol that client objects implement to take part in discovery."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any

from .models import Node

EMPTY: tuple = ()


class GraphObject(ABC):
    """Base class for objects that can be discovered.

    ``node_for`` is required. The relationship operations default to
    empty, so a leaf object only needs to say how it is drawn.

    ``points_to`` and ``pointed_to_by`` may return plain objects or
    :class:`~dotgraph.graph.models.Attributed` wrappers carrying edge
    attributes. ``related`` returns objects that are discovered without
    getting an edge from this one.
    """

    @abstractmethod
    def node_for(self) -> Node | None:
        """Node drawn for this object, or None to leave it out of the graph."""
        pass

    def points_to(self) -> Sequence[Any]:
        """Objects this one has an outgoing edge to."""
        return EMPTY

    def pointed_to_by(self) -> Sequence[Any]:
        """Objects that have an outgoing edge to this one."""
        return EMPTY

    def related(self) -> Sequence[Any]:
        """Objects to discover without a direct edge."""
        return EMPTY


class GraphProtocol(ABC):
    """Dispatch seam the discovery engine calls for every object."""

    @abstractmethod
    def node_for(self, obj: Any) -> Node | None:
        pass

    @abstractmethod
    def points_to(self, obj: Any) -> Sequence[Any]:
        pass

    @abstractmethod
    def pointed_to_by(self, obj: Any) -> Sequence[Any]:
        pass

    @abstractmethod
    def related(self, obj: Any) -> Sequence[Any]:
        pass


class ObjectProtocol(GraphProtocol):
    """Delegates to the object's own methods (see :class:`GraphObject`).

    Duck-typed: any object with a ``node_for`` method works; missing
    relationship methods count as empty.
    """

    def node_for(self, obj: Any) -> Node | None:
        method = getattr(obj, "node_for", None)
        if method is None:
            raise TypeError(
                f"{type(obj).__name__} object does not implement node_for()"
            )
        return method()

    def points_to(self, obj: Any) -> Sequence[Any]:
        return self._relationship(obj, "points_to")

    def pointed_to_by(self, obj: Any) -> Sequence[Any]:
        return self._relationship(obj, "pointed_to_by")

    def related(self, obj: Any) -> Sequence[Any]:
        return self._relationship(obj, "related")

    @staticmethod
    def _relationship(obj: Any, name: str) -> Sequence[Any]:
        method = getattr(obj, name, None)
        if method is None:
            return EMPTY
        return method()


Handler = Callable[[Any], Any]


class RegistryProtocol(ObjectProtocol):
    """Protocol with per-type handlers for types that cannot be subclassed.

    Handlers are looked up along the object's MRO; objects with no
    registered ``node_for`` handler fall back to their own methods.

    Example::

        protocol = RegistryProtocol()
        protocol.register(dict, node_for=lambda d: Node({"label": d["name"]}),
                          points_to=lambda d: d.get("children", []))
    """

    OPERATIONS = ("node_for", "points_to", "pointed_to_by", "related")

    def __init__(self):
        self._handlers: dict[type, dict[str, Handler]] = {}

    def register(self, cls: type, **handlers: Handler) -> None:
        """Register operation handlers for ``cls`` and its subclasses.

        Args:
            cls: Type the handlers apply to
            **handlers: Any of node_for, points_to, pointed_to_by, related

        Raises:
            ValueError: If an unknown operation name is given
        """
        unknown = set(handlers) - set(self.OPERATIONS)
        if unknown:
            raise ValueError(
                f"Unknown protocol operations {sorted(unknown)}. Available: {list(self.OPERATIONS)}"
            )
        self._handlers.setdefault(cls, {}).update(handlers)

    def _lookup(self, obj: Any) -> dict[str, Handler] | None:
        for cls in type(obj).__mro__:
            if cls in self._handlers:
                return self._handlers[cls]
        return None

    def node_for(self, obj: Any) -> Node | None:
        handlers = self._lookup(obj)
        if handlers is not None and "node_for" in handlers:
            return handlers["node_for"](obj)
        return super().node_for(obj)

    def points_to(self, obj: Any) -> Sequence[Any]:
        return self._dispatch(obj, "points_to")

    def pointed_to_by(self, obj: Any) -> Sequence[Any]:
        return self._dispatch(obj, "pointed_to_by")

    def related(self, obj: Any) -> Sequence[Any]:
        return self._dispatch(obj, "related")

    def _dispatch(self, obj: Any, name: str) -> Sequence[Any]:
        handlers = self._lookup(obj)
        if handlers is not None:
            # A registered type owns all its operations
            handler = handlers.get(name)
            return handler(obj) if handler is not None else EMPTY
        return self._relationship(obj, name)
