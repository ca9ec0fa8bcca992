"""Shared test fixtures for the seamcarve test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.image import PixelBuffer


# 4 rows x 5 columns; minimum seam (bottom row first) is [3, 4, 3, 2]
ENERGIES = [
    [9, 9, 0, 9, 9],
    [9, 1, 9, 8, 9],
    [9, 9, 9, 9, 0],
    [9, 9, 9, 0, 9],
]


def grid_energy(grid):
    """Energy function that ignores the pixels and reads from a fixed grid."""
    def energy(image, x, y):
        return grid[y][x]
    return energy


def make_column_image(W, H):
    """Every pixel in column c is (c, c, c)."""
    cols = torch.arange(W, dtype=torch.uint8)
    return PixelBuffer.from_array(cols.view(1, W, 1).expand(H, W, 3))


def make_row_image(W, H):
    """Every pixel in row r is (r, r, r)."""
    rows = torch.arange(H, dtype=torch.uint8)
    return PixelBuffer.from_array(rows.view(H, 1, 1).expand(H, W, 3))


def make_random_image(W, H, seed=42):
    gen = torch.Generator().manual_seed(seed)
    pixels = torch.randint(0, 256, (H, W, 3), generator=gen).to(torch.uint8)
    return PixelBuffer.from_array(pixels)


@pytest.fixture
def column_image():
    """5x4 image where column c holds (c, c, c)."""
    return make_column_image(5, 4)


@pytest.fixture
def random_image():
    """Random 24x16 RGB image."""
    return make_random_image(24, 16)
