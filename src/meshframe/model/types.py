"""Enums and record types shared by the pipeline stages."""
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


# ------------------------------------------------------------------------------
# Enums
# ------------------------------------------------------------------------------
class FileFormat(StrEnum):
    """Source model formats understood by the parser."""
    OBJ = "obj"


class UVProjection(StrEnum):
    """Analytic UV parameterization applied after normalization."""
    NONE = "none"
    SPHERICAL = "spherical"
    CYLINDRICAL = "cylindrical"
    PLANAR = "planar"


# ------------------------------------------------------------------------------
# Data Structures
# ------------------------------------------------------------------------------
@dataclass(frozen=True)
class Vertex:
    """Read-only view of a single vertex record."""
    position: tuple[float, float, float]
    normal: tuple[float, float, float]
    tangent: tuple[float, float, float]
    bitangent: tuple[float, float, float]
    uv: tuple[float, float]


@dataclass
class FaceAttributes:
    """
    Per-face derived vectors, index-aligned with the face array.

    Normals are unit length (zero for degenerate triangles); tangents and
    bitangents are left unnormalized.
    """
    normals: npt.NDArray[np.float64]
    tangents: npt.NDArray[np.float64]
    bitangents: npt.NDArray[np.float64]

    def __len__(self) -> int:
        return len(self.normals)

    @classmethod
    def empty(cls, n_faces: int = 0) -> FaceAttributes:
        return cls(
            normals=np.zeros((n_faces, 3), dtype=np.float64),
            tangents=np.zeros((n_faces, 3), dtype=np.float64),
            bitangents=np.zeros((n_faces, 3), dtype=np.float64),
        )
