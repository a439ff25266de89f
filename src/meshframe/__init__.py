"""
meshframe
=========
Derives per-vertex and per-face normals, tangents and bitangents for a
polygonal model, plus optional analytic UVs and debug line geometry.

    >>> from meshframe import load_mesh
    >>> result = load_mesh("assets/cube.obj", projection="planar")
    >>> mesh = result.unwrap()
"""
from meshframe.controller.loader import LoadResult, load_mesh
from meshframe.errors import FileOpenError, LoadErrorKind, MeshLoadError, UnsupportedFormatError
from meshframe.model.mesh import Mesh
from meshframe.model.types import FileFormat, UVProjection

__all__ = [
    "FileFormat",
    "FileOpenError",
    "LoadErrorKind",
    "LoadResult",
    "Mesh",
    "MeshLoadError",
    "UVProjection",
    "UnsupportedFormatError",
    "load_mesh",
]
