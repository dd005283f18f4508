import os
import tempfile
import unittest

import numpy as np

from mctsp import DistanceTable, InputSourceError, TSPInstance, read_coordinates

UNIT_SQUARE = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]


class TestDistanceTable(unittest.TestCase):

    def setUp(self):
        self.table = DistanceTable.build(UNIT_SQUARE)

    def test_shape_symmetry_and_diagonal(self):
        for n in (1, 2, 5, 17):
            coords = TSPInstance.random_euclidean(n, seed=n).coords
            D = DistanceTable.build(coords).matrix
            self.assertEqual(D.shape, (n, n))
            self.assertTrue(np.array_equal(D, D.T))
            self.assertTrue(np.all(np.diag(D) == 0.0))
            self.assertTrue(np.all(D >= 0.0))

    def test_euclidean_values(self):
        self.assertEqual(self.table[0, 1], 1.0)
        self.assertAlmostEqual(self.table[0, 2], np.sqrt(2), places=12)
        self.assertEqual(self.table.distance(3, 0), 1.0)

    def test_matches_instance_distance(self):
        inst = TSPInstance.random_euclidean(8, seed=3)
        table = inst.distance_matrix()
        for i in range(8):
            for j in range(8):
                self.assertAlmostEqual(table[i, j], inst.distance(i, j), places=9)

    def test_single_city(self):
        table = DistanceTable.build([(2.5, -1.0)])
        self.assertEqual(table.size, 1)
        self.assertEqual(table[0, 0], 0.0)

    def test_index_out_of_range(self):
        with self.assertRaises(IndexError):
            self.table[0, 4]
        with self.assertRaises(IndexError):
            self.table[-1, 0]
        with self.assertRaises(IndexError):
            self.table.coordinate(9)

    def test_read_only(self):
        with self.assertRaises(ValueError):
            self.table.matrix[0, 1] = 5.0
        with self.assertRaises(ValueError):
            self.table.coords[0, 0] = 5.0

    def test_keeps_coordinates(self):
        self.assertEqual(self.table.coordinate(2), (1.0, 1.0))
        self.assertEqual(len(self.table), 4)

    def test_non_finite_coordinates(self):
        for bad in (float("nan"), float("inf"), -float("inf")):
            with self.assertRaises(InputSourceError):
                DistanceTable.build([(0.0, 0.0), (bad, 1.0)])
        with self.assertRaises(InputSourceError):
            TSPInstance(coords=[(0.0, float("nan"))]).distance_matrix()

    def test_overflowing_distances(self):
        with self.assertRaises(InputSourceError):
            DistanceTable.build([(-1e308, 0.0), (1e308, 0.0), (0.0, 0.0)])
        # every edge is finite but a closed tour over them is not
        with self.assertRaises(InputSourceError):
            DistanceTable.build([(0.0, 0.0), (1e308, 0.0)])

    def test_large_finite_coordinates(self):
        table = DistanceTable.build([(0.0, 0.0), (1e150, 0.0)])
        self.assertEqual(table[0, 1], 1e150)

    def test_no_cities(self):
        with self.assertRaises(InputSourceError):
            DistanceTable.build([])


class TestReadCoordinates(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, text):
        path = os.path.join(self.tmpdir.name, "cities.txt")
        with open(path, "w") as f:
            f.write(text)
        return path

    def test_reads_pairs(self):
        data = read_coordinates(self._write("0 0\n1 0\n1 1\n0 1\n"))
        self.assertEqual(data.shape, (4, 2))
        self.assertEqual(data[2].tolist(), [1.0, 1.0])

    def test_single_line(self):
        data = read_coordinates(self._write("3.5 -2\n"))
        self.assertEqual(data.shape, (1, 2))

    def test_missing_file(self):
        with self.assertRaises(InputSourceError):
            read_coordinates(os.path.join(self.tmpdir.name, "nope.txt"))

    def test_not_numeric(self):
        with self.assertRaises(InputSourceError):
            read_coordinates(self._write("0 0\nfoo bar\n"))

    def test_wrong_column_count(self):
        with self.assertRaises(InputSourceError):
            read_coordinates(self._write("0 0 0\n1 1 1\n"))
        with self.assertRaises(InputSourceError):
            read_coordinates(self._write("0 0\n1\n"))

    def test_empty_file(self):
        with self.assertRaises(InputSourceError):
            read_coordinates(self._write(""))

    def test_non_finite(self):
        with self.assertRaises(InputSourceError):
            read_coordinates(self._write("0 0\nnan 1\n"))

    def test_instance_from_file(self):
        inst = TSPInstance.from_file(self._write("0 0\n3 4\n"), name="pair")
        self.assertEqual(inst.name, "pair")
        self.assertEqual(inst.coords, [(0.0, 0.0), (3.0, 4.0)])
        self.assertEqual(inst.n_cities(), 2)
        self.assertEqual(inst.distance(0, 1), 5.0)


class TestRandomInstance(unittest.TestCase):

    def test_reproducible(self):
        a = TSPInstance.random_euclidean(10, seed=7, square_size=50.0)
        b = TSPInstance.random_euclidean(10, seed=7, square_size=50.0)
        self.assertEqual(a.coords, b.coords)
        self.assertTrue(all(0 <= x <= 50.0 and 0 <= y <= 50.0 for x, y in a.coords))


if __name__ == '__main__':
    unittest.main()
