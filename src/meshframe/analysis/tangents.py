"""
Tangent Space
=============
Per-face and per-vertex tangent/bitangent vectors for normal mapping.

Face level: solve the 2x2 UV-gradient system of each triangle

    [edge1]   [duv1.u  duv1.v] [T]
    [edge2] = [duv2.u  duv2.v] [B]

which gives, with f = 1 / det,

    T = f * ( duv2.v * edge1 - duv1.v * edge2)
    B = f * (-duv2.u * edge1 + duv1.u * edge2)

Face tangents and bitangents are not normalized.

Vertex level: the tangent is the unweighted mean of the adjacent face
tangents, Gram-Schmidt orthogonalized against the vertex normal and
normalized. The bitangent is NOT averaged; it is derived as
``normalize(cross(tangent, normal))`` so every vertex frame is orthonormal.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from meshframe.config import EPSILON
from meshframe.analysis.normals import face_edges, average_over_adjacency
from meshframe.utils import normalize_rows, row_dot

if TYPE_CHECKING:
    import numpy.typing as npt
    from meshframe.analysis.adjacency import VertexAdjacency

logger = logging.getLogger(__name__)


def calculate_face_tangents_bitangents(
    positions: npt.NDArray[np.float64],
    uvs: npt.NDArray[np.float64],
    faces: npt.NDArray[np.int64],
    epsilon: float = EPSILON,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Solve the UV-gradient system of every face.

    Args:
        positions: (N, 3) vertex positions.
        uvs: (N, 2) vertex texture coordinates.
        faces: (F, 3) zero-based vertex indices.
        epsilon: |det| below this marks a degenerate UV triangle.

    Returns:
        (tangents, bitangents), each (F, 3). Degenerate UV triangles yield
        zero vectors instead of failing.
    """
    edge1, edge2 = face_edges(positions, faces)
    uv_a = uvs[faces[:, 0]]
    duv1 = uvs[faces[:, 1]] - uv_a
    duv2 = uvs[faces[:, 2]] - uv_a

    det = duv1[:, 0] * duv2[:, 1] - duv2[:, 0] * duv1[:, 1]
    degenerate = np.abs(det) < epsilon
    f = np.zeros_like(det)
    np.divide(1.0, det, out=f, where=~degenerate)
    f = f[:, np.newaxis]

    tangents = f * (duv2[:, 1:2] * edge1 - duv1[:, 1:2] * edge2)
    bitangents = f * (-duv2[:, 0:1] * edge1 + duv1[:, 0:1] * edge2)

    n_degenerate = int(np.count_nonzero(degenerate))
    if n_degenerate:
        logger.debug(f"{n_degenerate} of {len(faces)} faces have a degenerate UV mapping; zero tangents used.")
    return tangents, bitangents


def calculate_vertex_tangents_bitangents(
    face_tangents: npt.NDArray[np.float64],
    vertex_normals: npt.NDArray[np.float64],
    adjacency: VertexAdjacency,
) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Orthonormal vertex tangent frame.

    Returns:
        (tangents, bitangents), each (N, 3), with ``tangent . normal ~ 0`` and
        ``bitangent == normalize(cross(tangent, normal))``.
    """
    tangents = average_over_adjacency(face_tangents, adjacency)
    # Gram-Schmidt against the vertex normal
    tangents -= vertex_normals * row_dot(tangents, vertex_normals)
    tangents = normalize_rows(tangents)
    bitangents = normalize_rows(np.cross(tangents, vertex_normals))
    return tangents, bitangents
