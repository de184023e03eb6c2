"""Renderer framework: pluggable text renderers for discovered graphs."""

import logging
from abc import ABC, abstractmethod
from typing import TextIO

from .models import Graph

logger = logging.getLogger(__name__)


class GraphRenderer(ABC):
    """Abstract base class for graph renderers."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name of the output format."""
        pass

    @abstractmethod
    def render(self, graph: Graph) -> str:
        """Render graph to string format."""
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get file extension for this format."""
        pass

    def write(self, graph: Graph, sink: TextIO) -> None:
        """Render graph and write it, newline-terminated, to a text sink."""
        sink.write(self.render(graph))
        sink.write("\n")
