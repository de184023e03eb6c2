"""Exception hierarchy for dotgraph."""

from typing import Any


class DotgraphError(Exception):
    """Base class for all dotgraph errors."""


class AttributeValidationError(DotgraphError):
    """An attribute failed validation against its grammar."""

    def __init__(self, key: str, kind: str, message: str):
        self.key = key
        self.kind = kind
        super().__init__(message)


class UnknownAttributeError(AttributeValidationError):
    """Attribute name is not declared in the grammar for its entity kind."""

    def __init__(self, key: str, kind: str):
        super().__init__(key, kind, f"Unknown {kind} attribute '{key}'")


class AttributeTypeError(AttributeValidationError):
    """Attribute value does not satisfy its declared type."""

    def __init__(self, key: str, kind: str, value: Any, expected: str):
        self.value = value
        self.expected = expected
        super().__init__(
            key, kind,
            f"Invalid value {value!r} for {kind} attribute '{key}': expected {expected}"
        )


class GrammarError(DotgraphError):
    """Attribute grammar data is malformed."""


class DuplicateNodeIdError(DotgraphError):
    """Two nodes in one discovery run share an identifier."""

    def __init__(self, node_id: int):
        self.node_id = node_id
        super().__init__(f"Node identifier {node_id} is already in use")


class GraphSourceError(DotgraphError):
    """A JSON graph document is malformed."""


class ExternalRenderError(DotgraphError):
    """The external rendering program failed."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class ExecutableNotFoundError(ExternalRenderError):
    """The rendering executable could not be located."""

    def __init__(self, executable: str):
        self.executable = executable
        super().__init__(f"Rendering executable '{executable}' not found on PATH")


class UnsupportedPlatformError(ExternalRenderError):
    """The host platform cannot spawn processes."""

    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"Process spawning is not supported on platform '{platform}'")
