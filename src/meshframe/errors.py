"""
Load Errors
===========
Typed failures reported by the load boundary.

Only file-level and format-level problems are errors. Degenerate geometry and
degenerate UVs are absorbed by the pipeline and never surface here.
"""
from __future__ import annotations

from enum import StrEnum


class LoadErrorKind(StrEnum):
    FILE_OPEN = "file_open"
    UNSUPPORTED_FORMAT = "unsupported_format"


class MeshLoadError(Exception):
    """Base class for errors that abort a mesh load."""
    kind: LoadErrorKind

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class FileOpenError(MeshLoadError):
    """The source file is missing or cannot be read."""
    kind = LoadErrorKind.FILE_OPEN


class UnsupportedFormatError(MeshLoadError):
    """The declared format tag is not recognized."""
    kind = LoadErrorKind.UNSUPPORTED_FORMAT

    def __init__(self, tag: str, path: str | None = None) -> None:
        super().__init__(f"The mesh loader cannot load file type '{tag}'.", path=path)
        self.tag = tag
