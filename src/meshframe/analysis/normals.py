from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from meshframe.utils import normalize_rows

if TYPE_CHECKING:
    import numpy.typing as npt
    from meshframe.analysis.adjacency import VertexAdjacency

logger = logging.getLogger(__name__)


def face_edges(
    positions: npt.NDArray[np.float64],
    faces: npt.NDArray[np.int64],
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """Edge vectors B - A and C - A of every face (A, B, C)."""
    a = positions[faces[:, 0]]
    return positions[faces[:, 1]] - a, positions[faces[:, 2]] - a


def face_centroids(positions: npt.NDArray[np.float64], faces: npt.NDArray[np.int64]) -> npt.NDArray[np.float64]:
    return (positions[faces[:, 0]] + positions[faces[:, 1]] + positions[faces[:, 2]]) / 3.0


def calculate_face_normals(
    positions: npt.NDArray[np.float64],
    faces: npt.NDArray[np.int64],
) -> npt.NDArray[np.float64]:
    """
    Unit normal of every triangle, ``normalize(cross(B - A, C - A))``.

    The winding of the face decides the sign. Zero-area triangles get a zero
    vector instead of a unit normal.
    """
    edge1, edge2 = face_edges(positions, faces)
    normals = normalize_rows(np.cross(edge1, edge2))

    n_degenerate = int(np.count_nonzero(~normals.any(axis=1)))
    if n_degenerate:
        logger.warning(f"{n_degenerate} zero-area faces have no defined normal.")
    return normals


def average_over_adjacency(
    face_vectors: npt.NDArray[np.float64],
    adjacency: VertexAdjacency,
) -> npt.NDArray[np.float64]:
    """
    Unweighted mean of the face vectors adjacent to each vertex.

    Vertices without adjacent faces get a zero vector.
    """
    out = np.zeros((len(adjacency), 3), dtype=np.float64)
    for vertex, group in enumerate(adjacency):
        if group:
            out[vertex] = face_vectors[group].sum(axis=0) * (1.0 / len(group))
    return out


def calculate_vertex_normals(
    face_normals: npt.NDArray[np.float64],
    adjacency: VertexAdjacency,
) -> npt.NDArray[np.float64]:
    """
    Vertex normal = normalized unweighted mean of the adjacent face normals.

    The mean is taken over the deduplicated adjacency, so each distinct face
    orientation contributes once regardless of how often it was exported.
    Area or angle weighting is deliberately not applied.
    """
    normals = normalize_rows(average_over_adjacency(face_normals, adjacency))

    isolated = adjacency.isolated_vertices
    if isolated:
        logger.warning(f"{len(isolated)} vertices are not referenced by any face; their frames are zero.")
    return normals
