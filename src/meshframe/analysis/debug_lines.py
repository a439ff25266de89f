"""
Debug Line Geometry
===================
Line segments visualizing every vertex and face normal, tangent and bitangent.

Each collection is a (K, 2, 3) array: ``lines[k, 0]`` is the start point
(vertex position or face centroid), ``lines[k, 1]`` the end point
``start + vector * magnitude``.

Rescaling multiplies every segment's delta by ``new / old`` in place instead of
recomputing from the source vectors, so successive rescales compose:
scaling by a then by b equals scaling once by a * b.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from meshframe.config import DEFAULT_LINE_MAGNITUDE

if TYPE_CHECKING:
    import numpy.typing as npt
    from meshframe.model.types import FaceAttributes

logger = logging.getLogger(__name__)

COLLECTION_NAMES: tuple[str, ...] = (
    "vertex_normals",
    "vertex_tangents",
    "vertex_bitangents",
    "face_normals",
    "face_tangents",
    "face_bitangents",
)


def make_lines(
    starts: npt.NDArray[np.float64],
    vectors: npt.NDArray[np.float64],
    magnitude: float = DEFAULT_LINE_MAGNITUDE,
) -> npt.NDArray[np.float64]:
    """Build a (K, 2, 3) segment array running from `starts` along `vectors`."""
    return np.stack((starts, starts + vectors * magnitude), axis=1)


def scale_lines(lines: npt.NDArray[np.float64], scale: float) -> None:
    """Multiply each segment's delta by `scale`, keeping its start point."""
    lines[:, 1] = lines[:, 0] + (lines[:, 1] - lines[:, 0]) * scale


@dataclass
class DebugLines:
    vertex_normals: npt.NDArray[np.float64]
    vertex_tangents: npt.NDArray[np.float64]
    vertex_bitangents: npt.NDArray[np.float64]
    face_normals: npt.NDArray[np.float64]
    face_tangents: npt.NDArray[np.float64]
    face_bitangents: npt.NDArray[np.float64]
    magnitude: float = DEFAULT_LINE_MAGNITUDE

    @classmethod
    def generate(
        cls,
        positions: npt.NDArray[np.float64],
        normals: npt.NDArray[np.float64],
        tangents: npt.NDArray[np.float64],
        bitangents: npt.NDArray[np.float64],
        face_centroids: npt.NDArray[np.float64],
        face_attributes: FaceAttributes,
        magnitude: float = DEFAULT_LINE_MAGNITUDE,
    ) -> DebugLines:
        """
        Create the six line collections, one line per vertex or per face.

        Args:
            positions: (N, 3) vertex positions, start points of the vertex lines.
            normals, tangents, bitangents: (N, 3) vertex frame.
            face_centroids: (F, 3) start points of the face lines.
            face_attributes: Per-face normals, tangents and bitangents.
            magnitude: Length factor applied to every vector.
        """
        if magnitude == 0.0:
            raise ValueError("Debug line magnitude must be non-zero.")
        return cls(
            vertex_normals=make_lines(positions, normals, magnitude),
            vertex_tangents=make_lines(positions, tangents, magnitude),
            vertex_bitangents=make_lines(positions, bitangents, magnitude),
            face_normals=make_lines(face_centroids, face_attributes.normals, magnitude),
            face_tangents=make_lines(face_centroids, face_attributes.tangents, magnitude),
            face_bitangents=make_lines(face_centroids, face_attributes.bitangents, magnitude),
            magnitude=float(magnitude),
        )

    def collections(self) -> dict[str, npt.NDArray[np.float64]]:
        """Ordered mapping of collection name to its (K, 2, 3) array."""
        return {name: getattr(self, name) for name in COLLECTION_NAMES}

    def set_magnitude(self, new_magnitude: float) -> None:
        """
        Rescale every line proportionally to a new target magnitude.

        Raises:
            ValueError: If `new_magnitude` is zero; the next proportional
                rescale would have to divide by it.
        """
        new_magnitude = float(new_magnitude)
        if new_magnitude == 0.0:
            raise ValueError("Debug line magnitude must be non-zero.")

        scale = new_magnitude / self.magnitude
        for lines in self.collections().values():
            scale_lines(lines, scale)

        logger.debug(f"Rescaled debug lines from {self.magnitude:g} to {new_magnitude:g}.")
        self.magnitude = new_magnitude
