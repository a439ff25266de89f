"""
VTK and Geometry Utilities
Helper functions converting meshes and debug lines to pyvista data sets.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
import pyvista as pv

if TYPE_CHECKING:
    from meshframe.model.mesh import Mesh

logger = logging.getLogger(__name__)

LINE_COLORS: dict[str, str] = {
    "vertex_normals": "blue",
    "vertex_tangents": "red",
    "vertex_bitangents": "green",
    "face_normals": "cyan",
    "face_tangents": "magenta",
    "face_bitangents": "yellow",
}


class VtkUtils:
    @staticmethod
    def mesh_to_polydata(mesh: Mesh) -> pv.PolyData:
        """
        Convert a mesh to a triangle PolyData.

        Vertex normals, tangents and bitangents become point data arrays and the
        UVs become the active texture coordinates.
        """
        n_faces = mesh.face_count
        cells = np.hstack(
            [np.full((n_faces, 1), 3, dtype=np.int_), np.asarray(mesh.faces, dtype=np.int_)]
        ).ravel()

        pd = pv.PolyData(np.array(mesh.positions), faces=cells)
        pd.point_data["Normals"] = np.array(mesh.normals)
        pd.point_data["Tangents"] = np.array(mesh.tangents)
        pd.point_data["Bitangents"] = np.array(mesh.bitangents)
        pd.active_texture_coordinates = np.array(mesh.uvs)
        pd.cell_data["FaceNormals"] = np.array(mesh.face_attributes.normals)
        return pd

    @staticmethod
    def lines_to_polydata(lines: npt.NDArray[np.float64]) -> pv.PolyData:
        """Convert a (K, 2, 3) segment array to a PolyData of K two-point lines."""
        lines = np.asarray(lines, dtype=np.float64).reshape(-1, 2, 3)
        k = lines.shape[0]
        points = lines.reshape(-1, 3)
        pd = pv.PolyData(points)
        if k:
            connectivity = np.arange(2 * k, dtype=np.int_).reshape(-1, 2)
            pd.lines = np.hstack([np.full((k, 1), 2, dtype=np.int_), connectivity]).ravel()
        return pd

    def show(self, mesh: Mesh, collections: list[str] | None = None) -> None:
        """Open an interactive window with the surface and the chosen debug lines."""
        plotter = pv.Plotter()
        plotter.add_mesh(self.mesh_to_polydata(mesh), color="lightgray", show_edges=True)

        all_lines = mesh.debug_lines.collections()
        for name in collections or ["vertex_normals"]:
            if name not in all_lines:
                logger.warning(f"Unknown debug line collection '{name}', skipping it.")
                continue
            plotter.add_mesh(self.lines_to_polydata(all_lines[name]), color=LINE_COLORS[name], line_width=2)

        plotter.show()
