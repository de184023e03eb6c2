"""Graph source that reads a declarative JSON document.

The document lists named objects and their relationships; each declared
object becomes a :class:`GraphObject`, so the graph goes through the same
discovery engine as any client object graph.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import GraphSourceError
from ..graph.models import Attributed, Node
from ..graph.protocol import GraphObject

logger = logging.getLogger(__name__)


class ReferenceSpec(BaseModel):
    """Reference to a declared object, with attributes for the edge."""
    name: str
    attributes: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class ObjectSpec(BaseModel):
    """One declared object."""
    name: str
    id: int | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)
    points_to: list[str | ReferenceSpec] = Field(alias="pointsTo", default_factory=list)
    pointed_to_by: list[str | ReferenceSpec] = Field(alias="pointedToBy", default_factory=list)
    related: list[str] = Field(default_factory=list)
    hidden: bool = False

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class GraphDocument(BaseModel):
    """Top-level JSON graph document."""
    attributes: dict[str, Any] = Field(default_factory=dict)
    nodes: list[ObjectSpec] = Field(default_factory=list)
    root: str | None = None

    model_config = ConfigDict(extra="forbid")


class DeclaredObject(GraphObject):
    """Client object built from an :class:`ObjectSpec`."""

    def __init__(self, spec: ObjectSpec, registry: dict[str, "DeclaredObject"]):
        self.spec = spec
        self._registry = registry

    def __repr__(self) -> str:
        return f"DeclaredObject({self.spec.name!r})"

    def node_for(self) -> Node | None:
        if self.spec.hidden:
            return None
        return Node(dict(self.spec.attributes), self.spec.id)

    def points_to(self):
        return [self._resolve(ref) for ref in self.spec.points_to]

    def pointed_to_by(self):
        return [self._resolve(ref) for ref in self.spec.pointed_to_by]

    def related(self):
        return [self._registry[name] for name in self.spec.related]

    def _resolve(self, ref: str | ReferenceSpec):
        if isinstance(ref, str):
            return self._registry[ref]
        return Attributed(self._registry[ref.name], ref.attributes)


class DocumentRoot(GraphObject):
    """Invisible root relating every declared object, in declaration order."""

    def __init__(self, objects: list[DeclaredObject]):
        self.objects = objects

    def node_for(self) -> Node | None:
        return None

    def related(self):
        return self.objects


class JsonGraphSource:
    """Loads a JSON graph document into discoverable objects."""

    def __init__(self, document: GraphDocument):
        self.document = document
        self.objects: dict[str, DeclaredObject] = {}

        for spec in document.nodes:
            if spec.name in self.objects:
                raise GraphSourceError(f"Duplicate object name '{spec.name}'")
            self.objects[spec.name] = DeclaredObject(spec, self.objects)

        self._check_references()

    @classmethod
    def from_dict(cls, data: dict) -> "JsonGraphSource":
        try:
            document = GraphDocument(**data)
        except (ValidationError, TypeError) as e:
            raise GraphSourceError(f"Invalid graph document: {e}") from e
        return cls(document)

    @classmethod
    def load(cls, path: str | Path) -> "JsonGraphSource":
        """Load a graph document from a JSON file.

        Raises:
            GraphSourceError: If the file is missing or malformed
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise GraphSourceError(f"Graph document not found: {path}") from e
        except json.JSONDecodeError as e:
            raise GraphSourceError(f"Invalid JSON in graph document {path}: {e}") from e

        if not isinstance(data, dict):
            raise GraphSourceError(f"Graph document {path} must contain a JSON object")
        source = cls.from_dict(data)
        logger.debug(f"Loaded {len(source.objects)} objects from {path}")
        return source

    @property
    def attributes(self) -> dict[str, Any]:
        return self.document.attributes

    def root(self) -> GraphObject:
        """Object to start discovery from."""
        if self.document.root is not None:
            return self.objects[self.document.root]
        return DocumentRoot(list(self.objects.values()))

    def _check_references(self) -> None:
        names = set(self.objects)
        if self.document.root is not None and self.document.root not in names:
            raise GraphSourceError(f"Root '{self.document.root}' is not a declared object")

        for spec in self.document.nodes:
            refs = [r if isinstance(r, str) else r.name for r in spec.points_to + spec.pointed_to_by]
            for name in refs + spec.related:
                if name not in names:
                    raise GraphSourceError(
                        f"Object '{spec.name}' references undeclared object '{name}'"
                    )
