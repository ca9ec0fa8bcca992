"""
Diagnostic images: normalised energy maps and seam overlays.
"""

from typing import List, Sequence

import torch

from .energy import basic_energy, energy_map
from .image import PixelBuffer
from .seam import _check_seam


def normalize_energy(energy: torch.Tensor) -> torch.Tensor:
    """Remap an energy grid linearly to [0, 255].

    255 * (e - min) / (max - min), truncated to uint8. A uniform grid has no
    range to stretch and maps to all zeros.

    Args:
        energy: Energy map (H, W)

    Returns:
        Grayscale map (H, W), uint8
    """
    energy = energy.to(torch.float64)
    e_min = energy.min()
    e_max = energy.max()
    if e_max == e_min:
        return torch.zeros(energy.shape, dtype=torch.uint8)
    return (255.0 * (energy - e_min) / (e_max - e_min)).to(torch.uint8)


def energy_image(image: PixelBuffer, energy_fn=basic_energy) -> torch.Tensor:
    """Grayscale energy visualisation of an image, brighter = higher energy."""
    return normalize_energy(energy_map(image, energy_fn))


def draw_seam(image: PixelBuffer, seam: List[int], direction: str = 'vertical',
              color: Sequence[int] = (255, 0, 0)) -> PixelBuffer:
    """
    Paint a seam onto a copy of an image.

    Args:
        image: Pixel buffer
        seam: Seam as returned by find_vertical_seam / find_horizontal_seam
        direction: 'vertical' or 'horizontal'
        color: RGB colour of the seam

    Returns:
        New PixelBuffer with the seam drawn
    """
    vis = image.copy()
    pixels = vis.as_tensor()
    color = torch.tensor(color, dtype=torch.uint8)

    if direction == 'vertical':
        seam = _check_seam(seam, image.height, image.width, 'vertical')
        for i, col in enumerate(seam):
            pixels[image.height - 1 - i, col] = color
    elif direction == 'horizontal':
        seam = _check_seam(seam, image.width, image.height, 'horizontal')
        for j, row in enumerate(seam):
            pixels[row, image.width - 1 - j] = color
    else:
        raise ValueError(f"Invalid direction: {direction}")

    return vis
