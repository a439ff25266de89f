import os
import tempfile
import unittest

import numpy as np

from meshframe.config import ASSETS_PATH
from meshframe.model.mesh import Mesh
from meshframe.model.types import UVProjection, Vertex
from meshframe.pre.parser import parse_obj_lines
from meshframe.utils import normalize_rows
from tests.helpers import OCTAHEDRON_OBJ, SQUARE_OBJ, SQUARE_TRIANGLES_OBJ, TETRA_OBJ, write_obj


def _mesh_from_text(text: str, **kwargs) -> Mesh:
    return Mesh.from_parsed(parse_obj_lines(text.splitlines(keepends=True)), **kwargs)


class TestMeshInvariants(unittest.TestCase):
    def setUp(self) -> None:
        self.meshes = [
            _mesh_from_text(TETRA_OBJ),
            _mesh_from_text(OCTAHEDRON_OBJ, projection="spherical"),
            _mesh_from_text(SQUARE_OBJ),
        ]

    def test_positions_are_centered(self) -> None:
        for mesh in self.meshes:
            np.testing.assert_allclose(mesh.positions.mean(axis=0), 0.0, atol=1e-12)

    def test_farthest_vertex_is_on_unit_sphere(self) -> None:
        for mesh in self.meshes:
            self.assertAlmostEqual(np.linalg.norm(mesh.positions, axis=1).max(), 1.0, places=12)

    def test_face_normals_are_unit(self) -> None:
        for mesh in self.meshes:
            np.testing.assert_allclose(np.linalg.norm(mesh.face_attributes.normals, axis=1), 1.0, rtol=1e-12)

    def test_vertex_frames_are_orthonormal(self) -> None:
        for mesh in self.meshes:
            np.testing.assert_allclose(np.einsum("ij,ij->i", mesh.tangents, mesh.normals), 0.0, atol=1e-12)
            np.testing.assert_array_equal(mesh.bitangents, normalize_rows(np.cross(mesh.tangents, mesh.normals)))

    def test_face_attributes_are_index_aligned(self) -> None:
        for mesh in self.meshes:
            self.assertEqual(len(mesh.face_attributes), mesh.face_count)
            self.assertEqual(mesh.face_attributes.tangents.shape, (mesh.face_count, 3))


class TestSquareScenario(unittest.TestCase):
    def test_unit_square_normals_point_along_z(self) -> None:
        mesh = _mesh_from_text(SQUARE_TRIANGLES_OBJ)

        np.testing.assert_array_equal(mesh.faces, [[0, 1, 2], [0, 2, 3]])
        np.testing.assert_array_equal(mesh.face_attributes.normals, [[0.0, 0.0, 1.0]] * 2)
        np.testing.assert_array_equal(mesh.normals, [[0.0, 0.0, 1.0]] * 4)

    def test_shared_vertices_use_a_single_face(self) -> None:
        mesh = _mesh_from_text(SQUARE_TRIANGLES_OBJ)
        self.assertEqual(mesh.adjacency[0], [1])
        self.assertEqual(mesh.adjacency[2], [1])

    def test_uv_aligned_square_tangent_frame(self) -> None:
        mesh = _mesh_from_text(SQUARE_OBJ)

        np.testing.assert_allclose(mesh.tangents, [[1.0, 0.0, 0.0]] * 4, atol=1e-12)
        # bitangent = normalize(cross(tangent, normal)) = cross(+X, +Z)
        np.testing.assert_allclose(mesh.bitangents, [[0.0, -1.0, 0.0]] * 4, atol=1e-12)
        # Face level keeps the raw UV gradients, so the face bitangent points along +Y
        self.assertGreater(mesh.face_attributes.bitangents[0, 1], 0.0)

    def test_missing_uvs_give_zero_tangents_without_failing(self) -> None:
        mesh = _mesh_from_text(SQUARE_TRIANGLES_OBJ)
        np.testing.assert_array_equal(mesh.tangents, np.zeros((4, 3)))
        np.testing.assert_array_equal(mesh.face_attributes.tangents, np.zeros((2, 3)))


class TestMeshLoading(unittest.TestCase):
    def test_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = write_obj(tmp, OCTAHEDRON_OBJ)
            mesh = Mesh.from_file(path, "obj", projection=UVProjection.CYLINDRICAL)

        self.assertEqual(mesh.vertex_count, 6)
        self.assertEqual(mesh.face_count, 8)
        self.assertEqual(mesh.source, path)
        self.assertIs(mesh.projection, UVProjection.CYLINDRICAL)

    def test_bundled_cube_normals_point_to_corners(self) -> None:
        mesh = Mesh.from_file(os.path.join(ASSETS_PATH, "cube.obj"))

        self.assertEqual(mesh.face_count, 12)
        np.testing.assert_allclose(mesh.normals, mesh.positions, atol=1e-12)

    def test_octahedron_face_normals_point_outward(self) -> None:
        mesh = _mesh_from_text(OCTAHEDRON_OBJ)
        centroids = mesh.positions[mesh.faces].mean(axis=1)
        self.assertTrue(np.all(np.einsum("ij,ij->i", mesh.face_attributes.normals, centroids) > 0.0))

    def test_parsed_source_is_not_modified(self) -> None:
        parsed = parse_obj_lines(TETRA_OBJ.splitlines(keepends=True))
        before = parsed.records.copy()
        Mesh.from_parsed(parsed, projection="planar")
        np.testing.assert_array_equal(parsed.records, before)

    def test_isolated_vertex_is_absorbed(self) -> None:
        mesh = _mesh_from_text(SQUARE_TRIANGLES_OBJ + "v 5.0 5.0 5.0\n")
        self.assertEqual(mesh.vertex_count, 5)
        np.testing.assert_array_equal(mesh.normals[4], [0.0, 0.0, 0.0])


class TestMeshAccessors(unittest.TestCase):
    def setUp(self) -> None:
        self.mesh = _mesh_from_text(SQUARE_OBJ)

    def test_vertex_record(self) -> None:
        vertex = self.mesh.vertex(1)
        self.assertIsInstance(vertex, Vertex)
        self.assertEqual(vertex.normal, (0.0, 0.0, 1.0))
        self.assertEqual(vertex.uv, (1.0, 0.0))
        self.assertEqual(len(vertex.position), 3)

    def test_vertex_records_layout(self) -> None:
        records = self.mesh.vertex_records()
        self.assertEqual(records.shape, (4, 14))
        np.testing.assert_array_equal(records[:, 0:3], self.mesh.positions)
        np.testing.assert_array_equal(records[:, 3:6], self.mesh.normals)
        np.testing.assert_array_equal(records[:, 12:14], self.mesh.uvs)

    def test_geometry_is_read_only(self) -> None:
        with self.assertRaises(ValueError):
            self.mesh.positions[0, 0] = 3.0
        with self.assertRaises(ValueError):
            self.mesh.face_attributes.normals[0, 0] = 3.0

    def test_set_normal_line_length(self) -> None:
        self.mesh.set_normal_line_length(0.5)
        self.assertEqual(self.mesh.debug_lines.magnitude, 0.5)
        delta = self.mesh.debug_lines.vertex_normals[:, 1] - self.mesh.debug_lines.vertex_normals[:, 0]
        np.testing.assert_allclose(delta, [[0.0, 0.0, 0.5]] * 4)

    def test_repr(self) -> None:
        self.assertIn("vertices=4", repr(self.mesh))


if __name__ == "__main__":
    unittest.main()
