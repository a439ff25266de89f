"""
Input/Output Manager (HDF5)
Handles saving fully built meshes to .h5 files and loading them back without
rerunning the attribute pipeline.
"""
from __future__ import annotations

import logging
from importlib.metadata import version, PackageNotFoundError

import h5py
import numpy as np

from meshframe.analysis.adjacency import VertexAdjacency
from meshframe.analysis.debug_lines import COLLECTION_NAMES, DebugLines
from meshframe.model.mesh import Mesh
from meshframe.model.types import FaceAttributes, UVProjection

# Get module logger
logger = logging.getLogger(__name__)

try:
    APP_VERSION = version("meshframe")
except PackageNotFoundError:
    APP_VERSION = "0.0.0-dev"

VERTEX_DATASETS = ("positions", "normals", "tangents", "bitangents", "uvs")
FACE_DATASETS = ("normals", "tangents", "bitangents")


class MeshIO:
    @staticmethod
    def save(mesh: Mesh, filepath: str) -> None:
        logger.info(f"Saving mesh to: {filepath}")
        with h5py.File(filepath, "w") as f:
            f.attrs["version"] = APP_VERSION
            f.attrs["source"] = mesh.source or ""
            f.attrs["projection"] = mesh.projection.value

            # --- 1. VERTICES ---
            grp_vert = f.create_group("vertices")
            for name in VERTEX_DATASETS:
                grp_vert.create_dataset(name, data=getattr(mesh, name), compression="gzip")

            # --- 2. FACES ---
            grp_face = f.create_group("faces")
            grp_face.create_dataset("indices", data=mesh.faces, compression="gzip")
            for name in FACE_DATASETS:
                grp_face.create_dataset(name, data=getattr(mesh.face_attributes, name), compression="gzip")

            # --- 3. ADJACENCY (CSR) ---
            offsets, indices = mesh.adjacency.to_csr()
            grp_adj = f.create_group("adjacency")
            grp_adj.create_dataset("offsets", data=offsets)
            grp_adj.create_dataset("indices", data=indices)

            # --- 4. DEBUG LINES ---
            grp_lines = f.create_group("debug_lines")
            grp_lines.attrs["magnitude"] = mesh.debug_lines.magnitude
            for name, lines in mesh.debug_lines.collections().items():
                grp_lines.create_dataset(name, data=lines, compression="gzip")

        logger.info(f"Mesh saved to: {filepath}")

    @staticmethod
    def load(filepath: str) -> Mesh:
        logger.info(f"Loading mesh from: {filepath}")
        if not h5py.is_hdf5(filepath):
            msg = f"File '{filepath}' is not a valid HDF5 file."
            logger.error(msg)
            raise ValueError(msg)

        with h5py.File(filepath, "r") as f:
            stored_version = f.attrs.get("version", "unknown")
            if stored_version != APP_VERSION:
                logger.debug(f"Mesh was written by version {stored_version}, reading with {APP_VERSION}.")

            grp_vert = f["vertices"]
            vertex_arrays = {name: grp_vert[name][:] for name in VERTEX_DATASETS}

            grp_face = f["faces"]
            faces = grp_face["indices"][:].astype(np.int64)
            face_attributes = FaceAttributes(**{name: grp_face[name][:] for name in FACE_DATASETS})

            grp_adj = f["adjacency"]
            adjacency = VertexAdjacency.from_csr(grp_adj["offsets"][:], grp_adj["indices"][:])

            grp_lines = f["debug_lines"]
            debug_lines = DebugLines(
                **{name: grp_lines[name][:] for name in COLLECTION_NAMES},
                magnitude=float(grp_lines.attrs["magnitude"]),
            )

            source = str(f.attrs.get("source", "")) or None
            projection = UVProjection(str(f.attrs.get("projection", UVProjection.NONE.value)))

        mesh = Mesh(
            **vertex_arrays,
            faces=faces,
            face_attributes=face_attributes,
            adjacency=adjacency,
            debug_lines=debug_lines,
            source=source,
            projection=projection,
        )
        logger.info(f"Mesh loaded from: {filepath}")
        return mesh
