"""
Render Buffers (Boundary Adapter)
=================================
Packs a mesh into the contiguous, typed buffers a GPU-upload routine copies.

Why is this file needed?
------------------------
The mesh itself works on float64 arenas and knows nothing about byte sizes.
This adapter is the only place where element counts and byte sizes exist:

- vertices: float32, 14 per vertex (position, normal, tangent, bitangent, uv)
- faces: uint32, 3 indices per face
- lines: float32, 6 per line (start xyz, end xyz), counted as 2 vertices each
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from meshframe.analysis.debug_lines import COLLECTION_NAMES

if TYPE_CHECKING:
    import numpy.typing as npt
    from meshframe.model.mesh import Mesh

logger = logging.getLogger(__name__)

VERTS_PER_LINE = 2
FLOATS_PER_LINE = 6
INDICES_PER_FACE = 3


@dataclass(frozen=True)
class BufferView:
    """
    A C-contiguous typed buffer and its element count.

    `count` is what a draw call needs: vertices for the vertex buffer, indices
    for the index buffer and line vertices (2 per line) for line buffers.
    """
    name: str
    data: npt.NDArray
    count: int

    @property
    def nbytes(self) -> int:
        return int(self.data.nbytes)

    def memoryview(self) -> memoryview:
        """Zero-copy view on the raw bytes."""
        return memoryview(self.data).cast("B")


@dataclass(frozen=True)
class RenderBuffers:
    vertices: BufferView
    faces: BufferView
    lines: dict[str, BufferView]

    @classmethod
    def from_mesh(cls, mesh: Mesh) -> RenderBuffers:
        """Pack the current state of `mesh`, including its current debug line lengths."""
        vertex_data = np.ascontiguousarray(mesh.vertex_records(), dtype=np.float32)
        index_data = np.ascontiguousarray(mesh.faces, dtype=np.uint32)

        lines: dict[str, BufferView] = {}
        for name, segments in mesh.debug_lines.collections().items():
            packed = np.ascontiguousarray(segments.reshape(-1, FLOATS_PER_LINE), dtype=np.float32)
            lines[name] = BufferView(name=name, data=packed, count=len(packed) * VERTS_PER_LINE)

        buffers = cls(
            vertices=BufferView(name="vertices", data=vertex_data, count=len(vertex_data)),
            faces=BufferView(name="faces", data=index_data, count=len(index_data) * INDICES_PER_FACE),
            lines=lines,
        )
        logger.debug(f"Packed render buffers ({buffers.total_bytes} bytes).")
        return buffers

    def line_buffer(self, name: str) -> BufferView:
        if name not in self.lines:
            raise KeyError(f"Unknown line collection '{name}'. Expected one of: {', '.join(COLLECTION_NAMES)}.")
        return self.lines[name]

    def all_views(self) -> list[BufferView]:
        """Vertex buffer, index buffer, then the six line buffers in fixed order."""
        return [self.vertices, self.faces] + [self.lines[name] for name in COLLECTION_NAMES]

    @property
    def total_bytes(self) -> int:
        return sum(view.nbytes for view in self.all_views())
