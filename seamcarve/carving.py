"""
High-level carving functions that orchestrate the seam carving workflow.

Each iteration recomputes the full energy map of the current image, finds
one minimum-energy seam and removes it in place. Iterations are strictly
sequential; the image is in a valid state after each one.
"""

import logging
from typing import Callable, Optional

from .energy import basic_energy
from .image import PixelBuffer
from .seam import (CostMatrix, find_vertical_seam, find_horizontal_seam,
                   remove_vertical_seam, remove_horizontal_seam)

logger = logging.getLogger(__name__)


def _check_target(target: int, current: int, name: str):
    if target < 1:
        raise ValueError(f"Target {name} must be at least 1, got {target}")
    if target > current:
        raise ValueError(
            f"Target {name} {target} exceeds current {name} {current}; only shrinking is supported")


class SeamCarver:
    """
    Shrinks a PixelBuffer by repeatedly removing its minimum-energy seam.

    The carver mutates ``image`` in place. One CostMatrix, sized for the
    initial pixel count, is shared by every seam search it performs.
    """

    def __init__(self, image: PixelBuffer, energy_fn=basic_energy):
        """
        Args:
            image: Pixel buffer to resize (modified in place)
            energy_fn: Energy function used for every seam search
        """
        self.image = image
        self.energy_fn = energy_fn
        self.cost_matrix = CostMatrix.for_image(image)

    def resize_horizontal(self, target_width: int,
                          callback: Optional[Callable] = None) -> PixelBuffer:
        """
        Remove vertical seams until the image is ``target_width`` wide.

        Args:
            target_width: New width, 1 <= target_width <= current width
            callback: Optional ``callback(carver, removed, total)`` called
                      after every seam removal

        Returns:
            The resized image (same object)
        """
        _check_target(target_width, self.image.width, 'width')
        n_seams = self.image.width - target_width
        logger.debug("Removing %d vertical seams from %r", n_seams, self.image)

        for i in range(n_seams):
            seam = find_vertical_seam(self.image, self.energy_fn, self.cost_matrix)
            remove_vertical_seam(self.image, seam)
            if callback is not None:
                callback(self, i + 1, n_seams)

        self.image.shrink_to_fit()
        return self.image

    def resize_vertical(self, target_height: int,
                        callback: Optional[Callable] = None) -> PixelBuffer:
        """
        Remove horizontal seams until the image is ``target_height`` tall.

        Args:
            target_height: New height, 1 <= target_height <= current height
            callback: Optional ``callback(carver, removed, total)``

        Returns:
            The resized image (same object)
        """
        _check_target(target_height, self.image.height, 'height')
        n_seams = self.image.height - target_height
        logger.debug("Removing %d horizontal seams from %r", n_seams, self.image)

        for i in range(n_seams):
            seam = find_horizontal_seam(self.image, self.energy_fn, self.cost_matrix)
            remove_horizontal_seam(self.image, seam)
            if callback is not None:
                callback(self, i + 1, n_seams)

        self.image.shrink_to_fit()
        return self.image

    def resize(self, width: Optional[int] = None, height: Optional[int] = None,
               callback: Optional[Callable] = None) -> PixelBuffer:
        """
        Resize to ``width`` and/or ``height``: all vertical seams first,
        then all horizontal seams. Both targets are validated before the
        image is touched.
        """
        if width is not None:
            _check_target(width, self.image.width, 'width')
        if height is not None:
            _check_target(height, self.image.height, 'height')

        if width is not None:
            self.resize_horizontal(width, callback)
        if height is not None:
            self.resize_vertical(height, callback)
        return self.image


def carve_image(image: PixelBuffer, width: Optional[int] = None,
                height: Optional[int] = None, energy_fn=basic_energy) -> PixelBuffer:
    """
    Seam-carve a copy of ``image`` down to ``width`` x ``height``.

    Args:
        image: Source image (left untouched)
        width: Target width (None keeps the current width)
        height: Target height (None keeps the current height)
        energy_fn: Energy function

    Returns:
        Carved image
    """
    carved = image.copy()
    SeamCarver(carved, energy_fn).resize(width, height)
    return carved
