import unittest

import numpy as np

from meshframe.pre.normalize import normalize_positions


class TestNormalizePositions(unittest.TestCase):
    def test_centroid_moves_to_origin_and_radius_is_one(self) -> None:
        positions = np.array([
            [10.0, 4.0, -2.0],
            [13.0, 4.5, -2.0],
            [11.0, 9.0, -1.0],
            [11.5, 5.0, 3.0],
            [12.0, 6.0, 0.0],
        ])
        normalize_positions(positions)

        np.testing.assert_allclose(positions.mean(axis=0), 0.0, atol=1e-12)
        self.assertAlmostEqual(np.linalg.norm(positions, axis=1).max(), 1.0, places=12)

    def test_uses_true_centroid_not_bounding_box_center(self) -> None:
        # Bounding-box center is x = 1.5, the mean is x = 1.0
        positions = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 0.0], [3.0, 0.0, 0.0]])
        _, radius = normalize_positions(positions)

        self.assertAlmostEqual(radius, 2.0)
        np.testing.assert_allclose(positions[:, 0], [-0.5, -0.5, 1.0])

    def test_operates_in_place(self) -> None:
        positions = np.array([[2.0, 0.0, 0.0], [4.0, 0.0, 0.0]])
        result, _ = normalize_positions(positions)
        self.assertIs(result, positions)
        np.testing.assert_allclose(positions, [[-1.0, 0.0, 0.0], [1.0, 0.0, 0.0]])

    def test_coincident_points_are_centered_without_scaling(self) -> None:
        positions = np.array([[1.0, 2.0, 3.0], [1.0, 2.0, 3.0]])
        with self.assertLogs("meshframe.pre.normalize", level="WARNING"):
            _, radius = normalize_positions(positions)

        self.assertEqual(radius, 0.0)
        np.testing.assert_array_equal(positions, np.zeros((2, 3)))

    def test_empty_input(self) -> None:
        positions = np.zeros((0, 3))
        _, radius = normalize_positions(positions)
        self.assertEqual(radius, 0.0)


if __name__ == "__main__":
    unittest.main()
