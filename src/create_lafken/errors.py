"""
create_lafken.errors - Materialization Failure Taxonomy
=======================================================

Every way a template tree can fail to materialize falls into one of three
kinds. The materializer raises the matching subclass at the point of
failure and never tries to recover, so callers only ever need to catch
``MaterializeError``.

    MaterializeError (base)
    ├── SourceAccessError      - template tree missing or unreadable
    ├── DestinationWriteError  - directory creation or file write failed
    └── RenderError            - template engine rejected a template

The underlying ``OSError`` or engine exception is always chained as
``__cause__``.

Usage Example
-------------
>>> try:
...     materialize(source, dest, context)
... except MaterializeError as e:
...     print(e.kind.value, e.path)
render src/index.ts.eta
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    """
    The three terminal failure kinds of a materialization run.

    Attributes
    ----------
    SOURCE_ACCESS : str
        The source root, or an entry below it, is missing or unreadable.

    DESTINATION_WRITE : str
        A destination directory or file could not be created or written.

    RENDER : str
        The template engine rejected a template's content or context.
    """

    SOURCE_ACCESS = "source-access"
    DESTINATION_WRITE = "destination-write"
    RENDER = "render"

    @property
    def description(self) -> str:
        """Human-readable label for console output."""
        descriptions = {
            ErrorKind.SOURCE_ACCESS: "Cannot read template source",
            ErrorKind.DESTINATION_WRITE: "Cannot write to destination",
            ErrorKind.RENDER: "Template rendering failed",
        }
        return descriptions[self]


class MaterializeError(Exception):
    """
    Base class for all materialization failures.

    Parameters
    ----------
    kind : ErrorKind
        Which part of the pipeline failed.

    path : Path | str
        The offending entry, relative to the source root for source and
        render failures, relative to the destination root for writes.

    message : str | None
        Optional detail. Defaults to the kind's description.
    """

    kind: ErrorKind = ErrorKind.SOURCE_ACCESS

    def __init__(self, path: Path | str, message: str | None = None) -> None:
        self.path = Path(path)
        self.message = message or self.kind.description
        super().__init__(f"{self.message}: {self.path}")


class SourceAccessError(MaterializeError):
    """Raised when the template tree cannot be listed or read."""

    kind = ErrorKind.SOURCE_ACCESS


class DestinationWriteError(MaterializeError):
    """Raised when a destination directory or file cannot be written."""

    kind = ErrorKind.DESTINATION_WRITE


class RenderError(MaterializeError):
    """
    Raised when a template cannot be rendered.

    Engines may raise this without knowing which file they were given; the
    materializer re-raises it with the template's path filled in.
    """

    kind = ErrorKind.RENDER

    def __init__(self, path: Path | str = ".", message: str | None = None) -> None:
        super().__init__(path, message)
