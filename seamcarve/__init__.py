"""
Content-aware image resizing by seam carving.

Based on "Seam Carving for Content-Aware Image Resizing"
by Avidan & Shamir, 2007.
"""

__version__ = "0.1.0"

from .image import PixelBuffer
from .energy import basic_energy, basic_energy_map, energy_map
from .seam import (CostMatrix, find_min_energy_seam, find_vertical_seam,
                   find_horizontal_seam, remove_vertical_seam, remove_horizontal_seam)
from .carving import SeamCarver, carve_image
from .visualize import normalize_energy, energy_image, draw_seam
from .io import ImageIOError, load_image, save_image, save_gray_image

__all__ = [
    'PixelBuffer',
    'basic_energy',
    'basic_energy_map',
    'energy_map',
    'CostMatrix',
    'find_min_energy_seam',
    'find_vertical_seam',
    'find_horizontal_seam',
    'remove_vertical_seam',
    'remove_horizontal_seam',
    'SeamCarver',
    'carve_image',
    'normalize_energy',
    'energy_image',
    'draw_seam',
    'ImageIOError',
    'load_image',
    'save_image',
    'save_gray_image',
]
