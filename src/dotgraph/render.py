"""External rendering: pipe DOT text through the Graphviz executable."""

import logging
import shutil
import subprocess
import sys
from pathlib import Path

from .errors import ExecutableNotFoundError, ExternalRenderError, UnsupportedPlatformError
from .graph.dot import DotRenderer
from .graph.grammar import AttributeGrammars
from .graph.models import Graph

logger = logging.getLogger(__name__)

# Platforms without a process-spawning mechanism
UNSUPPORTED_PLATFORMS = ("emscripten", "wasi")


class ExternalRenderer:
    """Converts a Graph to an image (or other) format with an external program.

    The graph is serialized with :class:`DotRenderer`, piped to
    ``<executable> -T<format> -o<path>`` on standard input, and whatever
    the program prints on standard output is returned to the caller.
    """

    def __init__(
        self,
        executable: str = "dot",
        grammars: AttributeGrammars | None = None,
        timeout: float | None = None,
    ):
        self.executable = executable
        self.dot = DotRenderer(grammars)
        self.timeout = timeout

    def locate(self) -> str:
        """Resolve the executable to a full path.

        Raises:
            UnsupportedPlatformError: If the platform cannot spawn processes
            ExecutableNotFoundError: If the executable is not on PATH
        """
        if sys.platform in UNSUPPORTED_PLATFORMS:
            raise UnsupportedPlatformError(sys.platform)

        resolved = shutil.which(self.executable)
        if resolved is None:
            raise ExecutableNotFoundError(self.executable)
        return resolved

    def render(self, graph: Graph, path: str | Path, fmt: str) -> str:
        """Render ``graph`` into ``path`` using output format ``fmt``.

        Args:
            graph: Graph to render
            path: Output file path
            fmt: Output format token understood by the executable (svg, png, ...)

        Returns:
            Standard output of the rendering program

        Raises:
            AttributeValidationError: If the graph has invalid attributes
            UnsupportedPlatformError: If the platform cannot spawn processes
            ExecutableNotFoundError: If the executable cannot be located
            ExternalRenderError: If the program fails or times out
        """
        # Serialize first so validation errors surface before any process is spawned
        text = self.dot.render(graph)
        executable = self.locate()
        command = [executable, f"-T{fmt}", f"-o{path}"]

        logger.info(f"Rendering {fmt} to {path} with {executable}")
        try:
            result = subprocess.run(
                command,
                input=text,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ExternalRenderError(
                f"{self.executable} timed out after {self.timeout} seconds"
            ) from e

        if result.returncode != 0:
            raise ExternalRenderError(
                f"{self.executable} exited with status {result.returncode}: {result.stderr.strip()}",
                returncode=result.returncode,
                stderr=result.stderr,
            )

        if result.stderr:
            logger.warning(f"{self.executable}: {result.stderr.strip()}")
        return result.stdout
