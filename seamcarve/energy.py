"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

An energy function is any callable ``energy_fn(image, x, y) -> score``
returning a non-negative number for pixel (x, y) of a PixelBuffer. It must
be deterministic and side-effect free. A function may also carry a
vectorised form as its ``energy_map`` attribute, taking the whole image and
returning an (H, W) tensor with exactly the same values; :func:`energy_map`
uses it when present.
"""

import torch

from .image import PixelBuffer


def basic_energy(image: PixelBuffer, x: int, y: int) -> int:
    """
    Sum of squared channel differences between the neighbours of (x, y).

    E(x, y) = sum_c (I(x-1, y)_c - I(x+1, y)_c)^2 + (I(x, y-1)_c - I(x, y+1)_c)^2

    Neighbour coordinates are clamped to the image, so edge pixels compare
    against themselves and a 1x1 image has zero energy. The largest possible
    value is 2 * 3 * 255^2 = 390150.

    Args:
        image: Pixel buffer
        x: Column, 0 <= x < width
        y: Row, 0 <= y < height

    Returns:
        Non-negative integer energy
    """
    w, h = image.width, image.height
    if not (0 <= x < w and 0 <= y < h):
        raise IndexError(f"Pixel ({x}, {y}) out of range for {w}x{h} image")

    x1, x2 = max(x - 1, 0), min(x + 1, w - 1)
    y1, y2 = max(y - 1, 0), min(y + 1, h - 1)

    left, right = image.get_pixel(x1, y), image.get_pixel(x2, y)
    up, down = image.get_pixel(x, y1), image.get_pixel(x, y2)

    total = 0
    for c in range(image.CHANNELS):
        dh = left[c] - right[c]
        dv = up[c] - down[c]
        total += dh * dh + dv * dv
    return total


def basic_energy_map(image: PixelBuffer) -> torch.Tensor:
    """
    Vectorised :func:`basic_energy` over every pixel.

    Args:
        image: Pixel buffer

    Returns:
        Energy map (H, W), int64
    """
    pixels = image.as_tensor().to(torch.int64)
    H, W = image.height, image.width

    cols = torch.arange(W)
    rows = torch.arange(H)
    left = pixels[:, (cols - 1).clamp(min=0)]
    right = pixels[:, (cols + 1).clamp(max=W - 1)]
    up = pixels[(rows - 1).clamp(min=0)]
    down = pixels[(rows + 1).clamp(max=H - 1)]

    return ((left - right) ** 2 + (up - down) ** 2).sum(dim=2)


# Vectorised form picked up by energy_map().
basic_energy.energy_map = basic_energy_map


def energy_map(image: PixelBuffer, energy_fn=basic_energy) -> torch.Tensor:
    """
    Evaluate an energy function at every pixel of an image.

    Args:
        image: Pixel buffer
        energy_fn: Energy function. If it has an ``energy_map`` attribute,
                   that is called once with the image instead and must return
                   the same (H, W) values as per-pixel evaluation.

    Returns:
        Energy map (H, W). int64 for the vectorised default, float64 for
        functions evaluated pixel by pixel.
    """
    vectorised = getattr(energy_fn, 'energy_map', None)
    if vectorised is not None:
        return vectorised(image)

    values = [[energy_fn(image, x, y) for x in range(image.width)]
              for y in range(image.height)]
    return torch.tensor(values, dtype=torch.float64)
