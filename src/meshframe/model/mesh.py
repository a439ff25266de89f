from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from meshframe.config import DEFAULT_FORMAT, DEFAULT_LINE_MAGNITUDE, DEFAULT_PROJECTION, VERTEX_FIELD_COUNT
from meshframe.model.types import FaceAttributes, FileFormat, UVProjection, Vertex
from meshframe.pre.parser import ParsedSource, parse_source, resolve_format, POSITION_SLOTS, UV_SLOTS
from meshframe.pre.normalize import normalize_positions
from meshframe.pre.uv_projection import apply_projection, resolve_projection
from meshframe.analysis.adjacency import VertexAdjacency
from meshframe.analysis.normals import calculate_face_normals, calculate_vertex_normals, face_centroids
from meshframe.analysis.tangents import calculate_face_tangents_bitangents, calculate_vertex_tangents_bitangents
from meshframe.analysis.debug_lines import DebugLines

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def _freeze(*arrays: npt.NDArray) -> None:
    for array in arrays:
        array.flags.writeable = False


class Mesh:
    """
    A triangle mesh with a complete per-vertex and per-face tangent frame.

    Vertices and faces are flat, index-aligned arrays; the adjacency refers to
    faces by index. Geometry is read-only once built. Only the debug lines can
    still change, through :meth:`set_normal_line_length`.
    """
    def __init__(
        self,
        positions: npt.NDArray[np.float64],
        normals: npt.NDArray[np.float64],
        tangents: npt.NDArray[np.float64],
        bitangents: npt.NDArray[np.float64],
        uvs: npt.NDArray[np.float64],
        faces: npt.NDArray[np.int64],
        face_attributes: FaceAttributes,
        adjacency: VertexAdjacency,
        debug_lines: DebugLines,
        source: str | None = None,
        projection: UVProjection = UVProjection.NONE,
    ) -> None:
        """
        Initialize the Mesh class from already computed arrays.

        Use :meth:`from_file` or :meth:`from_parsed` to run the pipeline.
        """
        self.positions = positions
        self.normals = normals
        self.tangents = tangents
        self.bitangents = bitangents
        self.uvs = uvs
        self.faces = faces
        self.face_attributes = face_attributes
        self.adjacency = adjacency
        self.debug_lines = debug_lines
        self.source = source
        self.projection = projection
        _freeze(
            self.positions, self.normals, self.tangents, self.bitangents, self.uvs, self.faces,
            self.face_attributes.normals, self.face_attributes.tangents, self.face_attributes.bitangents,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(vertices={self.vertex_count}, faces={self.face_count}, source={self.source!r})"

    @classmethod
    def from_file(
        cls,
        filename: str,
        file_format: FileFormat | str = DEFAULT_FORMAT,
        projection: UVProjection | str | None = DEFAULT_PROJECTION,
        line_magnitude: float = DEFAULT_LINE_MAGNITUDE,
    ) -> Mesh:
        """
        Load a model file and run the full attribute pipeline.

        Raises:
            UnsupportedFormatError: `file_format` is not recognized (checked first).
            FileOpenError: The file is missing or unreadable.
            ValueError: `projection` is not a known projection name.
        """
        projection = resolve_projection(projection)
        file_format = resolve_format(file_format)
        parsed = parse_source(filename, file_format)
        return cls.from_parsed(parsed, projection=projection, line_magnitude=line_magnitude, source=filename)

    @classmethod
    def from_parsed(
        cls,
        parsed: ParsedSource,
        projection: UVProjection | str | None = DEFAULT_PROJECTION,
        line_magnitude: float = DEFAULT_LINE_MAGNITUDE,
        source: str | None = None,
    ) -> Mesh:
        """
        Run normalize -> project -> normals -> adjacency -> tangents -> debug lines.

        `parsed` is not modified; every stage works on copies so a failure leaves
        no half-built state behind.
        """
        positions = np.array(parsed.records[:, POSITION_SLOTS], dtype=np.float64)
        uvs = np.array(parsed.records[:, UV_SLOTS], dtype=np.float64)
        faces = np.array(parsed.faces, dtype=np.int64).reshape(-1, 3)
        n_vertices = len(positions)

        # 1) Recenter and rescale to the unit sphere
        normalize_positions(positions)

        # 2) Optional UV projection
        projection = apply_projection(positions, uvs, projection)

        # 3) Face normals, then adjacency (deduplication compares face normals)
        face_normals = calculate_face_normals(positions, faces)
        adjacency = VertexAdjacency.build(faces, n_vertices, face_normals)
        normals = calculate_vertex_normals(face_normals, adjacency)

        # 4) Tangent space
        face_tangents, face_bitangents = calculate_face_tangents_bitangents(positions, uvs, faces)
        tangents, bitangents = calculate_vertex_tangents_bitangents(face_tangents, normals, adjacency)
        face_attributes = FaceAttributes(normals=face_normals, tangents=face_tangents, bitangents=face_bitangents)

        # 5) Debug line geometry
        debug_lines = DebugLines.generate(
            positions=positions,
            normals=normals,
            tangents=tangents,
            bitangents=bitangents,
            face_centroids=face_centroids(positions, faces),
            face_attributes=face_attributes,
            magnitude=line_magnitude,
        )

        mesh = cls(
            positions=positions,
            normals=normals,
            tangents=tangents,
            bitangents=bitangents,
            uvs=uvs,
            faces=faces,
            face_attributes=face_attributes,
            adjacency=adjacency,
            debug_lines=debug_lines,
            source=source,
            projection=projection,
        )
        logger.info(f"Built mesh with {mesh.vertex_count} vertices and {mesh.face_count} faces.")
        return mesh

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def face_count(self) -> int:
        return len(self.faces)

    def vertex(self, index: int) -> Vertex:
        """Return the record of one vertex."""
        return Vertex(
            position=tuple(self.positions[index].tolist()),
            normal=tuple(self.normals[index].tolist()),
            tangent=tuple(self.tangents[index].tolist()),
            bitangent=tuple(self.bitangents[index].tolist()),
            uv=tuple(self.uvs[index].tolist()),
        )

    def vertex_records(self) -> npt.NDArray[np.float64]:
        """
        (N, 14) array in record order: position, normal, tangent, bitangent, uv.
        """
        records = np.hstack((self.positions, self.normals, self.tangents, self.bitangents, self.uvs))
        return records.reshape(-1, VERTEX_FIELD_COUNT)

    def set_normal_line_length(self, new_length: float) -> None:
        """Rescale all debug lines to a new magnitude (see :class:`DebugLines`)."""
        self.debug_lines.set_magnitude(new_length)
