"""
Pixel buffer used by the seam carving engine.

An image is stored as a single flat uint8 tensor holding
``width * height * 3`` bytes in row-major, channel-interleaved (RGB) order
with no row padding. Seam removal compacts this buffer in place, so the
row stride changes whenever the width does.
"""

import numpy as np
import torch
from typing import Tuple


def _as_uint8(data) -> torch.Tensor:
    """Convert pixel data to uint8, refusing values a byte cannot hold."""
    tensor = data if isinstance(data, torch.Tensor) else torch.as_tensor(np.asarray(data))
    if tensor.dtype == torch.uint8:
        return tensor
    if tensor.is_floating_point() or tensor.is_complex() or tensor.dtype == torch.bool:
        raise ValueError(f"Pixel data must be integers in [0, 255], got dtype {tensor.dtype}")
    if tensor.numel() and (tensor.min() < 0 or tensor.max() > 255):
        raise ValueError(
            f"Pixel values must lie in [0, 255], got range [{tensor.min().item()}, {tensor.max().item()}]")
    return tensor.to(torch.uint8)


class PixelBuffer:
    """
    Flat RGB pixel buffer with a logical width and height.

    The invariant ``data.numel() == width * height * CHANNELS`` holds between
    operations. Anything that shrinks the logical extent goes through
    :meth:`truncate`, which drops the stale trailing bytes immediately.
    """

    CHANNELS = 3

    def __init__(self, width: int, height: int, data=None):
        """
        Create a pixel buffer.

        Args:
            width: Image width in pixels (>= 1)
            height: Image height in pixels (>= 1)
            data: Optional pixel bytes (tensor, numpy array, bytes or list)
                  of length width * height * 3. Zero-filled if omitted.
                  The buffer always keeps its own copy.
        """
        width, height = int(width), int(height)
        if width < 1 or height < 1:
            raise ValueError(f"Image must be at least 1x1, got {width}x{height}")

        size = width * height * self.CHANNELS
        if data is None:
            data = torch.zeros(size, dtype=torch.uint8)
        elif isinstance(data, (bytes, bytearray)):
            data = torch.frombuffer(bytearray(data), dtype=torch.uint8)
        else:
            data = _as_uint8(data).flatten().clone()

        if data.numel() != size:
            raise ValueError(
                f"Expected {size} bytes for a {width}x{height} RGB image, got {data.numel()}")

        self.width = width
        self.height = height
        self.data = data

    @classmethod
    def from_array(cls, array):
        """
        Build a buffer from an (H, W, 3) uint8 array or tensor.

        Args:
            array: numpy array or torch tensor of shape (H, W, 3). Other
                   integer dtypes are accepted if every value lies in
                   [0, 255]; float data raises ValueError.

        Returns:
            New PixelBuffer holding a copy of the pixels
        """
        tensor = _as_uint8(np.ascontiguousarray(array))
        if tensor.dim() != 3 or tensor.shape[2] != cls.CHANNELS:
            raise ValueError(f"Expected an (H, W, 3) array, got shape {tuple(tensor.shape)}")
        H, W, _ = tensor.shape
        return cls(W, H, tensor)

    def to_array(self) -> np.ndarray:
        """Return a copy of the pixels as an (H, W, 3) uint8 numpy array."""
        return self.as_tensor().numpy().copy()

    def as_tensor(self) -> torch.Tensor:
        """(H, W, 3) view sharing memory with the flat buffer."""
        return self.data.view(self.height, self.width, self.CHANNELS)

    def copy(self) -> 'PixelBuffer':
        return PixelBuffer(self.width, self.height, self.data)

    @property
    def nbytes(self) -> int:
        return self.data.numel()

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        """
        Retrieve the colour components of pixel (x, y).

        Raises:
            IndexError: if (x, y) lies outside the image
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) out of range for {self.width}x{self.height} image")
        idx = self.CHANNELS * (y * self.width + x)
        return tuple(self.data[idx:idx + self.CHANNELS].tolist())

    def truncate(self, width: int, height: int):
        """
        Set a smaller logical extent and drop the trailing bytes.

        The leading ``width * height * 3`` bytes must already hold the packed
        pixels for the new extent. The result is a view, so the old capacity
        is retained until :meth:`shrink_to_fit`.
        """
        if width < 1 or height < 1:
            raise ValueError(f"Image must be at least 1x1, got {width}x{height}")
        if width * height > self.width * self.height:
            raise ValueError("truncate() cannot grow the buffer")
        self.width = width
        self.height = height
        self.data = self.data[:width * height * self.CHANNELS]

    def shrink_to_fit(self):
        """Release any storage beyond the current logical size."""
        self.data = self.data.clone()

    def __repr__(self):
        return f"PixelBuffer(width={self.width}, height={self.height})"
