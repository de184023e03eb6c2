"""Graph sources: ready-made discoverable object graphs."""

from .json_source import DeclaredObject, GraphDocument, JsonGraphSource

__all__ = ["DeclaredObject", "GraphDocument", "JsonGraphSource"]
