from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

import numpy as np

from meshframe.utils import flatten_groups_in_order, unflatten_groups

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class VertexAdjacency:
    """
    For each vertex, the ordered list of faces that reference it.

    Built once after the face normals exist; read-only afterwards. Faces whose
    normals are exactly equal count once per vertex, so a coplanar duplicate
    does not weigh twice in the averages taken over this list.
    """
    def __init__(self, groups: list[list[int]]) -> None:
        self._groups = groups

    @classmethod
    def build(
        cls,
        faces: npt.NDArray[np.int64],
        n_vertices: int,
        face_normals: npt.NDArray[np.float64],
    ) -> VertexAdjacency:
        """
        Collect the faces around every vertex and drop parallel contributions.

        Args:
            faces: (F, 3) zero-based vertex indices.
            n_vertices: Number of vertices in the mesh.
            face_normals: (F, 3) face normals, index-aligned with `faces`.
        """
        if len(face_normals) != len(faces):
            raise ValueError(
                f"Face normals ({len(face_normals)}) must be computed for every face ({len(faces)}) "
                "before building the adjacency."
            )

        groups: list[list[int]] = [[] for _ in range(n_vertices)]
        for face_index, (a, b, c) in enumerate(faces.tolist()):
            groups[a].append(face_index)
            groups[b].append(face_index)
            groups[c].append(face_index)

        # Exact component-wise comparison; NaN normals never match anything
        normal_keys = [tuple(n) for n in face_normals.tolist()]
        removed = 0
        for vertex, group in enumerate(groups):
            deduplicated = remove_parallel_adjacencies(group, normal_keys)
            removed += len(group) - len(deduplicated)
            groups[vertex] = deduplicated

        if removed:
            logger.debug(f"Removed {removed} parallel face contributions from the vertex adjacency.")
        return cls(groups)

    def __getitem__(self, vertex: int) -> list[int]:
        return self._groups[vertex]

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[list[int]]:
        return iter(self._groups)

    def degree(self, vertex: int) -> int:
        return len(self._groups[vertex])

    @property
    def isolated_vertices(self) -> list[int]:
        """Vertices that no face references."""
        return [v for v, group in enumerate(self._groups) if not group]

    def to_csr(self) -> tuple[npt.NDArray[np.int64], npt.NDArray[np.int64]]:
        """(offsets, face indices) representation, used for storage."""
        return flatten_groups_in_order(self._groups)

    @classmethod
    def from_csr(cls, offsets: npt.NDArray[np.int64], indices: npt.NDArray[np.int64]) -> VertexAdjacency:
        return cls(unflatten_groups(offsets, indices))


def remove_parallel_adjacencies(
    adjacency: list[int],
    normal_keys: list[tuple[float, float, float]],
) -> list[int]:
    """
    Keep one face per distinct normal direction, preserving order.

    A face is dropped when a later face in the list has exactly the same
    normal, so the last face of each group survives. The pairwise scan is
    O(k^2) in the vertex degree k.
    """
    kept: list[int] = []
    for i, face_index in enumerate(adjacency):
        search_normal = normal_keys[face_index]
        if any(normal_keys[other] == search_normal for other in adjacency[i + 1:]):
            continue
        kept.append(face_index)
    return kept
