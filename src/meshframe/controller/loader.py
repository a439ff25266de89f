"""
Load Boundary
=============
Entry point used by the rendering collaborator to obtain a mesh.

Why is this file needed?
------------------------
1. Explicit failures: `load_mesh` never raises for file- or format-level
   problems. It returns a `LoadResult`, which the caller must inspect.
2. Atomicity: The result holds either a fully built mesh or an error, never
   a partially constructed mesh.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from meshframe.config import DEFAULT_FORMAT, DEFAULT_LINE_MAGNITUDE, DEFAULT_PROJECTION, LoadOptions
from meshframe.errors import MeshLoadError
from meshframe.model.mesh import Mesh
from meshframe.model.types import FileFormat, UVProjection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a load: exactly one of `mesh` and `error` is set."""
    mesh: Optional[Mesh] = None
    error: Optional[MeshLoadError] = None

    def __post_init__(self) -> None:
        if (self.mesh is None) == (self.error is None):
            raise ValueError("LoadResult requires exactly one of 'mesh' or 'error'.")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Mesh:
        """Return the mesh, or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.mesh


def load_mesh(
    path: str,
    file_format: FileFormat | str = DEFAULT_FORMAT,
    projection: UVProjection | str | None = DEFAULT_PROJECTION,
    line_magnitude: float = DEFAULT_LINE_MAGNITUDE,
) -> LoadResult:
    """
    Parse `path` and build a mesh with all derived attributes.

    Args:
        path: Model file to load.
        file_format: Format tag of the file ("obj").
        projection: "none", "spherical", "cylindrical" or "planar".
        line_magnitude: Initial length factor of the debug lines.

    Returns:
        LoadResult with either the mesh or a FileOpenError/UnsupportedFormatError.

    Raises:
        ValueError: For an unknown projection name or a zero line magnitude;
            these are caller mistakes, not load failures.
    """
    logger.info(f"Loading mesh from: {path}")
    try:
        mesh = Mesh.from_file(path, file_format=file_format, projection=projection, line_magnitude=line_magnitude)
    except MeshLoadError as e:
        if e.path is None:
            e.path = path
        logger.error(f"Failed to load mesh ({e.kind.value}): {e}")
        return LoadResult(error=e)
    return LoadResult(mesh=mesh)


def load_with_options(path: str, options: LoadOptions) -> LoadResult:
    return load_mesh(
        path,
        file_format=options.file_format,
        projection=options.projection,
        line_magnitude=options.line_magnitude,
    )
