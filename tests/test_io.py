import os
import tempfile
import unittest

import numpy as np

from meshframe.analysis.debug_lines import COLLECTION_NAMES
from meshframe.model.io import MeshIO
from meshframe.model.mesh import Mesh
from meshframe.model.types import UVProjection
from tests.helpers import OCTAHEDRON_OBJ, write_obj


class TestMeshIO(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = self._tmp.name
        source = write_obj(self.tmp, OCTAHEDRON_OBJ)
        self.mesh = Mesh.from_file(source, projection="spherical")
        self.mesh.set_normal_line_length(0.3)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_save_and_load_preserve_the_mesh(self) -> None:
        path = os.path.join(self.tmp, "octahedron.h5")
        MeshIO.save(self.mesh, path)
        loaded = MeshIO.load(path)

        for name in ("positions", "normals", "tangents", "bitangents", "uvs", "faces"):
            np.testing.assert_array_equal(getattr(loaded, name), getattr(self.mesh, name))
        np.testing.assert_array_equal(loaded.face_attributes.tangents, self.mesh.face_attributes.tangents)
        self.assertEqual(list(loaded.adjacency), list(self.mesh.adjacency))
        for name in COLLECTION_NAMES:
            np.testing.assert_array_equal(getattr(loaded.debug_lines, name), getattr(self.mesh.debug_lines, name))
        self.assertAlmostEqual(loaded.debug_lines.magnitude, 0.3)
        self.assertIs(loaded.projection, UVProjection.SPHERICAL)
        self.assertEqual(loaded.source, self.mesh.source)

    def test_loaded_mesh_can_still_rescale(self) -> None:
        path = os.path.join(self.tmp, "octahedron.h5")
        MeshIO.save(self.mesh, path)
        loaded = MeshIO.load(path)

        loaded.set_normal_line_length(0.6)
        delta = loaded.debug_lines.vertex_normals[:, 1] - loaded.debug_lines.vertex_normals[:, 0]
        np.testing.assert_allclose(delta, self.mesh.normals * 0.6)

    def test_rejects_non_hdf5_file(self) -> None:
        path = write_obj(self.tmp, OCTAHEDRON_OBJ, name="not_hdf5.h5")
        with self.assertLogs("meshframe.model.io", level="ERROR"):
            with self.assertRaises(ValueError):
                MeshIO.load(path)


if __name__ == "__main__":
    unittest.main()
