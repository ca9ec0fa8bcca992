"""
Image file loading and saving.

Decoding and encoding are delegated to Pillow; the carving code only ever
sees 8-bit RGB PixelBuffers.
"""

import numpy as np
import torch
from PIL import Image

from .image import PixelBuffer


class ImageIOError(OSError):
    """An image could not be read from or written to disk."""


def load_image(path) -> PixelBuffer:
    """Load an image file as an RGB PixelBuffer."""
    try:
        with Image.open(path) as img:
            array = np.array(img.convert('RGB'), dtype=np.uint8)
    except (OSError, ValueError) as exc:
        raise ImageIOError(f"Failed to open image {path}: {exc}") from exc
    return PixelBuffer.from_array(array)


def _save_array(array: np.ndarray, path):
    try:
        Image.fromarray(array).save(path)
    except (OSError, ValueError) as exc:
        raise ImageIOError(f"Failed to save image {path}: {exc}") from exc


def save_image(image: PixelBuffer, path):
    """Save a PixelBuffer; the format follows the file extension."""
    _save_array(image.to_array(), path)


def save_gray_image(gray: torch.Tensor, path):
    """Save an (H, W) uint8 tensor as a grayscale image."""
    _save_array(gray.to(torch.uint8).numpy().copy(), path)
