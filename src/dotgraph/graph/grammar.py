"""Attribute grammars: which attributes each entity kind accepts, and their types.

Grammars are data. The bundled table (``data/graphviz.json``) covers a
common subset of Graphviz attributes; callers may load their own with
:func:`load_grammars`.
"""

import json
import logging
from enum import Enum
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..errors import GrammarError
from .models import EntityKind

logger = logging.getLogger(__name__)

DEFAULT_GRAMMAR_RESOURCE = "graphviz.json"


class ValueKind(str, Enum):
    """Declared value types for attributes."""
    INTEGER = "integer"
    BOOLEAN = "boolean"
    TEXT = "text"
    FLOAT = "float"
    ENUM = "enum"


class AttributeSpec(BaseModel):
    """Declared type of one attribute."""
    type: ValueKind
    values: list[Any] | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_values(self):
        if self.type == ValueKind.ENUM:
            if not self.values:
                raise ValueError("enum attributes need a non-empty 'values' list")
        elif self.values is not None:
            raise ValueError(f"'values' is only allowed for enum attributes, not {self.type.value}")
        return self

    def describe(self) -> str:
        """Human-readable type description."""
        if self.type == ValueKind.ENUM:
            return "one of " + ", ".join(_describe_member(v) for v in self.values)
        return self.type.value


def enum_of(values) -> AttributeSpec:
    """Spec for an enumeration attribute accepting ``values``."""
    return AttributeSpec(type=ValueKind.ENUM, values=list(values))


INTEGER = AttributeSpec(type=ValueKind.INTEGER)
BOOLEAN = AttributeSpec(type=ValueKind.BOOLEAN)
TEXT = AttributeSpec(type=ValueKind.TEXT)
FLOAT = AttributeSpec(type=ValueKind.FLOAT)


def _describe_member(value: Any) -> str:
    if isinstance(value, Enum):
        return value.name.lower()
    return str(value)


class AttributeGrammar(BaseModel):
    """Mapping of attribute name to declared type for one entity kind."""
    attributes: dict[str, AttributeSpec] = Field(default_factory=dict)

    def lookup(self, name: str) -> AttributeSpec | None:
        return self.attributes.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self.attributes

    def __len__(self) -> int:
        return len(self.attributes)


class AttributeGrammars(BaseModel):
    """Grammars for graph, node and edge attributes."""
    graph: AttributeGrammar = Field(default_factory=AttributeGrammar)
    node: AttributeGrammar = Field(default_factory=AttributeGrammar)
    edge: AttributeGrammar = Field(default_factory=AttributeGrammar)

    model_config = ConfigDict(extra="forbid")

    def for_kind(self, kind: EntityKind | str) -> AttributeGrammar:
        return getattr(self, EntityKind(kind).value)

    @classmethod
    def from_dict(cls, data: dict) -> "AttributeGrammars":
        """Build grammars from ``{"graph": {name: spec}, "node": ..., "edge": ...}``."""
        if not isinstance(data, dict):
            raise GrammarError(f"Grammar data must be an object, got {type(data).__name__}")
        try:
            return cls(**{
                kind: AttributeGrammar(attributes=table)
                for kind, table in data.items()
            })
        except (ValidationError, TypeError) as e:
            raise GrammarError(f"Invalid grammar data: {e}") from e


def load_grammars(path: str | Path) -> AttributeGrammars:
    """Load attribute grammars from a JSON file.

    Raises:
        GrammarError: If the file is missing, not JSON, or not a valid grammar
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise GrammarError(f"Grammar file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise GrammarError(f"Invalid JSON in grammar file {path}: {e}") from e

    grammars = AttributeGrammars.from_dict(data)
    logger.debug(
        f"Loaded grammars from {path}: {len(grammars.graph)} graph, "
        f"{len(grammars.node)} node, {len(grammars.edge)} edge attributes"
    )
    return grammars


def default_grammars() -> AttributeGrammars:
    """Grammars bundled with dotgraph (a subset of Graphviz attributes)."""
    text = resources.files("dotgraph.graph.data").joinpath(DEFAULT_GRAMMAR_RESOURCE).read_text(encoding="utf-8")
    return AttributeGrammars.from_dict(json.loads(text))
