"""Tests for seam computation and removal."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.image import PixelBuffer
from seamcarve.energy import basic_energy_map
from seamcarve.seam import (CostMatrix, find_min_energy_seam, find_vertical_seam,
                            find_horizontal_seam, remove_vertical_seam,
                            remove_horizontal_seam)

from conftest import (ENERGIES, grid_energy, make_column_image, make_row_image,
                      make_random_image)


def rows_as_columns(img):
    """Per row, the first channel of every pixel (the column id in column images)."""
    return img.as_tensor()[:, :, 0].tolist()


class TestMinEnergySeam:
    def test_known_grid(self):
        seam = find_min_energy_seam(torch.tensor(ENERGIES))
        assert seam == [3, 4, 3, 2]

    def test_known_grid_through_energy_function(self):
        img = PixelBuffer(5, 4)
        seam = find_vertical_seam(img, grid_energy(ENERGIES))
        assert seam == [3, 4, 3, 2]

    def test_seam_follows_zero_energy_column(self):
        energy = torch.ones(20, 20)
        energy[:, 10] = 0.0
        seam = find_min_energy_seam(energy)
        assert seam == [10] * 20

    def test_seam_follows_diagonal_valley(self):
        H, W = 12, 20
        energy = torch.ones(H, W) * 10.0
        for i in range(H):
            energy[i, 5 + i] = 0.0
        seam = find_min_energy_seam(energy)
        assert seam == [5 + i for i in range(H - 1, -1, -1)]

    def test_ties_prefer_leftmost(self):
        """A uniform grid has all seams equal; the left edge wins."""
        seam = find_min_energy_seam(torch.zeros(6, 7))
        assert seam == [0] * 6

    def test_predecessor_tie_prefers_leftmost(self):
        energy = torch.tensor([[1, 0, 0],
                               [5, 0, 5]])
        assert find_min_energy_seam(energy) == [1, 1]
        energy = torch.tensor([[0, 1, 0],
                               [5, 0, 5]])
        assert find_min_energy_seam(energy) == [1, 0]

    def test_seam_continuity_and_length(self):
        torch.manual_seed(42)
        energy = torch.rand(50, 40)
        seam = find_min_energy_seam(energy)
        assert len(seam) == 50
        assert all(0 <= x < 40 for x in seam)
        assert all(abs(a - b) <= 1 for a, b in zip(seam, seam[1:]))

    def test_seam_is_optimal(self):
        """Compare with an exhaustive search over every path of a small grid."""
        torch.manual_seed(3)
        H, W = 5, 4
        energy = torch.randint(0, 10, (H, W))

        def best_from(y, x):
            here = energy[y, x].item()
            if y == H - 1:
                return here
            return here + min(best_from(y + 1, nx) for nx in (x - 1, x, x + 1) if 0 <= nx < W)

        optimum = min(best_from(0, x) for x in range(W))
        seam = find_min_energy_seam(energy)
        total = sum(energy[H - 1 - i, x].item() for i, x in enumerate(seam))
        assert total == optimum

    def test_single_column(self):
        assert find_min_energy_seam(torch.rand(5, 1)) == [0] * 5

    def test_single_row(self):
        assert find_min_energy_seam(torch.tensor([[3, 1, 2]])) == [1]

    @pytest.mark.parametrize("shape", [(0, 3), (3, 0)])
    def test_empty_grid_raises(self, shape):
        with pytest.raises(ValueError):
            find_min_energy_seam(torch.zeros(shape))

    def test_deterministic(self):
        img = make_random_image(30, 20)
        assert find_vertical_seam(img) == find_vertical_seam(img)


class TestCostMatrix:
    def test_reuse_gives_same_seam(self):
        """Stale values from a larger pass must never leak into a smaller one."""
        cm = CostMatrix(100)
        torch.manual_seed(0)
        find_min_energy_seam(torch.rand(10, 10) * 1000, cm)
        energy = torch.tensor(ENERGIES)
        assert find_min_energy_seam(energy, cm) == [3, 4, 3, 2]
        assert find_min_energy_seam(energy, cm) == find_min_energy_seam(energy)

    def test_capacity_is_not_reallocated(self):
        cm = CostMatrix(40)
        storage = cm._cost.data_ptr()
        find_min_energy_seam(torch.rand(5, 8), cm)
        find_min_energy_seam(torch.rand(5, 7), cm)
        assert cm._cost.data_ptr() == storage
        assert (cm.width, cm.height) == (7, 5)

    def test_rejects_extent_beyond_capacity(self):
        cm = CostMatrix(10)
        with pytest.raises(ValueError):
            find_min_energy_seam(torch.rand(4, 4), cm)

    def test_backpointers_stay_in_neighbourhood(self):
        cm = CostMatrix(64)
        find_min_energy_seam(torch.rand(8, 8), cm)
        cols = torch.arange(8)
        assert ((cm.backptr - cols).abs() <= 1).all()
        assert (cm.backptr >= 0).all() and (cm.backptr < 8).all()


class TestHorizontalSeam:
    def test_transpose_of_vertical(self):
        img = make_random_image(12, 9)
        energy = basic_energy_map(img)
        assert find_horizontal_seam(img) == find_min_energy_seam(energy.t())

    def test_length_matches_width(self):
        img = make_random_image(12, 9)
        seam = find_horizontal_seam(img)
        assert len(seam) == 12
        assert all(0 <= y < 9 for y in seam)

    def test_follows_zero_energy_row(self):
        energy = [[1] * 6 for _ in range(5)]
        energy[2] = [0] * 6
        img = PixelBuffer(6, 5)
        assert find_horizontal_seam(img, grid_energy(energy)) == [2] * 6


class TestRemoveVerticalSeam:
    def test_known_seam(self, column_image):
        remove_vertical_seam(column_image, [3, 4, 3, 2])
        assert (column_image.width, column_image.height) == (4, 4)
        assert column_image.nbytes == 4 * 4 * 3
        assert rows_as_columns(column_image) == [
            [0, 1, 3, 4],
            [0, 1, 2, 4],
            [0, 1, 2, 3],
            [0, 1, 2, 4],
        ]

    def test_channels_stay_together(self):
        array = torch.arange(3 * 4 * 3, dtype=torch.uint8).view(3, 4, 3)
        img = PixelBuffer.from_array(array)
        remove_vertical_seam(img, [0, 1, 2])
        expected = torch.stack([
            array[0, [0, 1, 3]],
            array[1, [0, 2, 3]],
            array[2, [1, 2, 3]],
        ])
        assert torch.equal(img.as_tensor(), expected)

    def test_edge_columns(self):
        img = make_column_image(4, 2)
        remove_vertical_seam(img, [3, 3])
        assert rows_as_columns(img) == [[0, 1, 2], [0, 1, 2]]
        remove_vertical_seam(img, [0, 0])
        assert rows_as_columns(img) == [[1, 2], [1, 2]]

    def test_invalid_seam_leaves_image_untouched(self, column_image):
        before = column_image.to_array()
        with pytest.raises(ValueError):
            remove_vertical_seam(column_image, [0, 1, 2])
        with pytest.raises(ValueError):
            remove_vertical_seam(column_image, [0, 0, 0, 5])
        with pytest.raises(ValueError):
            remove_vertical_seam(column_image, [0, 2, 2, 2])
        with pytest.raises(ValueError):
            remove_vertical_seam(column_image, [1.5, 1, 1, 1])
        assert column_image.width == 5
        assert (column_image.to_array() == before).all()

    def test_single_column_cannot_shrink(self):
        img = PixelBuffer(1, 3)
        with pytest.raises(ValueError):
            remove_vertical_seam(img, [0, 0, 0])


class TestRemoveHorizontalSeam:
    def test_zigzag_seam(self):
        img = make_row_image(3, 4)
        # Right-most column first: column 2 loses row 1, column 1 row 2, column 0 row 1
        remove_horizontal_seam(img, [1, 2, 1])
        assert (img.width, img.height) == (3, 3)
        assert img.nbytes == 3 * 3 * 3
        assert img.as_tensor()[:, :, 0].tolist() == [
            [0, 0, 0],
            [2, 1, 2],
            [3, 3, 3],
        ]

    def test_mirror_of_vertical_removal(self):
        """Removing a horizontal seam equals transposing, removing, transposing back."""
        img = make_random_image(7, 6)
        seam = [2, 3, 3, 4, 5, 5, 4]

        transposed = PixelBuffer.from_array(img.as_tensor().transpose(0, 1))
        remove_vertical_seam(transposed, seam)
        remove_horizontal_seam(img, seam)

        assert torch.equal(img.as_tensor(), transposed.as_tensor().transpose(0, 1))

    def test_single_row_cannot_shrink(self):
        img = PixelBuffer(3, 1)
        with pytest.raises(ValueError):
            remove_horizontal_seam(img, [0, 0, 0])

    def test_non_integer_seam_leaves_image_untouched(self):
        img = make_row_image(3, 4)
        before = img.to_array()
        with pytest.raises(ValueError):
            remove_horizontal_seam(img, [1, 1.5, 1])
        assert img.height == 4
        assert (img.to_array() == before).all()
