"""
Seam computation and removal.

Seams are found with dynamic programming over a cost / back-pointer matrix
(Avidan & Shamir 2007). A seam is returned as a list of indices ordered from
the last row (or column) back to the first, which is the order the
back-pointer walk produces them in:

- vertical seam: one column index per row, bottom row first
- horizontal seam: one row index per column, right-most column first

Removal compacts the flat pixel buffer in place and truncates it.
"""

import operator
from typing import List, Optional

import torch

from .energy import basic_energy, energy_map
from .image import PixelBuffer


class CostMatrix:
    """
    Scratch storage for the seam DP: accumulated cost and back pointer
    for every pixel of the current extent.

    Storage is allocated once for a fixed capacity (the pixel count of the
    largest image it will serve) and re-used by every pass; :meth:`reset`
    only changes the logical extent. Costs are float64, which represents
    every accumulated integer energy exactly.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._cost = torch.empty(capacity, dtype=torch.float64)
        self._backptr = torch.empty(capacity, dtype=torch.long)
        self.width = 0
        self.height = 0

    @classmethod
    def for_image(cls, image: PixelBuffer) -> 'CostMatrix':
        return cls(image.width * image.height)

    def reset(self, width: int, height: int):
        """Set the logical extent for the next pass, keeping the storage."""
        if width < 1 or height < 1:
            raise ValueError(f"Cannot find a seam in a {width}x{height} image")
        if width * height > self.capacity:
            raise ValueError(
                f"{width}x{height} extent exceeds cost matrix capacity {self.capacity}")
        self.width = width
        self.height = height

    @property
    def cost(self) -> torch.Tensor:
        """Accumulated cost (H, W) view."""
        return self._cost[:self.width * self.height].view(self.height, self.width)

    @property
    def backptr(self) -> torch.Tensor:
        """Predecessor column in the previous row (H, W) view."""
        return self._backptr[:self.width * self.height].view(self.height, self.width)


def find_min_energy_seam(energy: torch.Tensor,
                         cost_matrix: Optional[CostMatrix] = None) -> List[int]:
    """
    Find the minimum total-energy top-to-bottom seam of an energy grid.

    Each step moves to column x-1, x or x+1 of the next row. Every row is
    computed as one vectorised operation over its columns, since a row only
    depends on the finished row above it. Ties are broken towards the
    left-most column, both when picking a predecessor and when picking the
    end point, so results are reproducible.

    Args:
        energy: Energy grid (H, W)
        cost_matrix: Optional re-usable scratch matrix with capacity >= H * W

    Returns:
        Seam columns, one per row, from the last row up to row 0
    """
    if energy.dim() != 2 or energy.shape[0] == 0 or energy.shape[1] == 0:
        raise ValueError(f"Cannot find a seam in an energy grid of shape {tuple(energy.shape)}")

    H, W = energy.shape
    if cost_matrix is None:
        cost_matrix = CostMatrix(H * W)
    cost_matrix.reset(W, H)
    cost = cost_matrix.cost
    backptr = cost_matrix.backptr

    energy = energy.to(torch.float64)
    cols = torch.arange(W)

    # Row 0 is written unconditionally, so stale values are never read
    cost[0] = energy[0]
    backptr[0] = cols

    # Candidate predecessors in left, centre, right order; argmin returns the
    # first minimum, which makes the left-most column win ties.
    candidates = torch.empty(3, W, dtype=torch.float64)
    candidates[0, 0] = float('inf')
    candidates[2, W - 1] = float('inf')

    for y in range(1, H):
        prev = cost[y - 1]
        candidates[0, 1:] = prev[:-1]
        candidates[1] = prev
        candidates[2, :-1] = prev[1:]

        offset = torch.argmin(candidates, dim=0)
        best = candidates.gather(0, offset.unsqueeze(0)).squeeze(0)

        cost[y] = best + energy[y]
        backptr[y] = cols + offset - 1

    x = int(torch.argmin(cost[H - 1]))
    seam = []
    for y in range(H - 1, -1, -1):
        seam.append(x)
        x = int(backptr[y, x])

    return seam


def find_vertical_seam(image: PixelBuffer, energy_fn=basic_energy,
                       cost_matrix: Optional[CostMatrix] = None) -> List[int]:
    """
    Find the minimum-energy vertical seam of an image.

    Args:
        image: Pixel buffer
        energy_fn: Energy function
        cost_matrix: Optional re-usable scratch matrix

    Returns:
        Column index per row, bottom row first (length = height)
    """
    return find_min_energy_seam(energy_map(image, energy_fn), cost_matrix)


def find_horizontal_seam(image: PixelBuffer, energy_fn=basic_energy,
                         cost_matrix: Optional[CostMatrix] = None) -> List[int]:
    """
    Find the minimum-energy horizontal seam of an image.

    The energy is evaluated in the image's own orientation and the DP runs
    over its transpose.

    Returns:
        Row index per column, right-most column first (length = width)
    """
    energy = energy_map(image, energy_fn)
    return find_min_energy_seam(energy.t().contiguous(), cost_matrix)


def _check_seam(seam, length: int, limit: int, direction: str) -> List[int]:
    """Validate a seam against an extent and return it as a list of ints."""
    if len(seam) != length:
        raise ValueError(f"A {direction} seam needs {length} entries, got {len(seam)}")
    checked = []
    for i, entry in enumerate(seam):
        try:
            idx = operator.index(entry)
        except TypeError:
            raise ValueError(f"Seam entry {i} = {entry!r} is not an integer") from None
        if not 0 <= idx < limit:
            raise ValueError(f"Seam entry {i} = {idx} out of range [0, {limit})")
        if checked and abs(idx - checked[-1]) > 1:
            raise ValueError(f"Seam is not connected between entries {i - 1} and {i}")
        checked.append(idx)
    return checked


def _shift_bytes(buf, dst: int, src: int, n: int):
    """Copy buf[src:src+n] to buf[dst:dst+n] with memmove semantics (dst <= src)."""
    if n > 0 and dst != src:
        buf[dst:dst + n] = buf[src:src + n]


def remove_vertical_seam(image: PixelBuffer, seam: List[int]):
    """
    Remove a vertical seam from an image in place.

    Row y loses the pixel at column ``seam[height - 1 - y]``. Rows are
    re-packed front to back with the narrower stride: every write lands at
    or before the byte it reads from, so a forward pass never overwrites
    data it still needs. The buffer is then truncated to the new size.

    Args:
        image: Pixel buffer, modified in place
        seam: Column per row, bottom row first
    """
    W, H, C = image.width, image.height, image.CHANNELS
    seam = _check_seam(seam, H, W, 'vertical')
    if W == 1:
        raise ValueError("Cannot remove a vertical seam from a 1-pixel-wide image")

    buf = image.data.numpy()
    old_stride = W * C
    new_stride = (W - 1) * C

    for y in range(H):
        cut = seam[H - 1 - y] * C
        src = y * old_stride
        dst = y * new_stride
        _shift_bytes(buf, dst, src, cut)
        _shift_bytes(buf, dst + cut, src + cut + C, new_stride - cut)

    image.truncate(W - 1, H)


def remove_horizontal_seam(image: PixelBuffer, seam: List[int]):
    """
    Remove a horizontal seam from an image in place.

    Column x loses the pixel at row ``seam[width - 1 - x]``. The stride is
    unchanged; new row y takes old row y above the seam and old row y+1 at
    or below it. Rows are processed top to bottom, so row y+1 is always read
    before it is overwritten.

    Args:
        image: Pixel buffer, modified in place
        seam: Row per column, right-most column first
    """
    W, H = image.width, image.height
    seam = _check_seam(seam, W, H, 'horizontal')
    if H == 1:
        raise ValueError("Cannot remove a horizontal seam from a 1-pixel-tall image")

    pixels = image.as_tensor()
    seam_rows = torch.tensor(seam[::-1], dtype=torch.long)

    for y in range(H - 1):
        below = (seam_rows <= y).unsqueeze(1)
        pixels[y] = torch.where(below, pixels[y + 1], pixels[y])

    image.truncate(W, H - 1)
