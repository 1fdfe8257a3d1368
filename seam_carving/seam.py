"""
Seam computation and removal.

Seams are found with the exact dynamic program over cumulative energy:
each pixel's cost is its energy plus the cheapest of the three pixels
that can precede it. Ties are broken deterministically, preferring the
straight predecessor, then the lower-index diagonal, then the
higher-index diagonal.

Removal happens in place on a PixelBuffer: pixels past the seam are
shifted by one and the logical width (or height) shrinks by one.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

import torch

from .buffer import PixelBuffer

logger = logging.getLogger(__name__)

DIRECTIONS = ('vertical', 'horizontal')


class SeamError(ValueError):
    """Raised when a seam cannot be applied to a buffer."""


@dataclass
class SeamPath:
    """
    One seam: a perpendicular index per scanline.

    For a vertical seam, indices[r] is the column removed from row r.
    For a horizontal seam, indices[c] is the row removed from column c.
    A seam is valid for exactly one removal.
    """
    indices: torch.Tensor
    direction: str
    cost: float
    consumed: bool = field(default=False, repr=False)

    def __len__(self):
        return int(self.indices.shape[0])

    def tolist(self) -> List[int]:
        return self.indices.tolist()


def _check_direction(direction: str):
    if direction not in DIRECTIONS:
        raise ValueError(f"Invalid direction: {direction}")


def cumulative_energy(energy: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Top-to-bottom cumulative minimum energy and backpointers.

    dist[0] = energy[0]. For r >= 1 the predecessor of (r, c) starts as
    (r-1, c); it is replaced by (r-1, c-1) only if strictly cheaper, then
    by (r-1, c+1) only if strictly cheaper than the current best. Each row
    is evaluated in one vectorized pass that applies the same ordering.

    Args:
        energy: Energy map (H, W)

    Returns:
        dist: (H, W) float64 cumulative cost
        back: (H, W) long predecessor column, -1 in the first row
    """
    if energy.dim() != 2 or energy.shape[0] < 1 or energy.shape[1] < 1:
        raise ValueError(f"Expected non-empty (H, W) energy, got {tuple(energy.shape)}")

    energy = energy.to(torch.float64)
    H, W = energy.shape
    cols = torch.arange(W, dtype=torch.long)

    dist = torch.empty((H, W), dtype=torch.float64)
    back = torch.empty((H, W), dtype=torch.long)
    dist[0] = energy[0]
    back[0] = -1

    for r in range(1, H):
        prev = dist[r - 1]
        best = prev.clone()
        best_x = cols.clone()

        if W > 1:
            # Up-left replaces straight only when strictly smaller
            take_left = prev[:-1] < best[1:]
            best[1:] = torch.where(take_left, prev[:-1], best[1:])
            best_x[1:] = torch.where(take_left, cols[:-1], best_x[1:])

            # Up-right replaces the current best only when strictly smaller
            take_right = prev[1:] < best[:-1]
            best[:-1] = torch.where(take_right, prev[1:], best[:-1])
            best_x[:-1] = torch.where(take_right, cols[1:], best_x[:-1])

        dist[r] = best + energy[r]
        back[r] = best_x

    return dist, back


def _min_path(energy: torch.Tensor) -> Tuple[torch.Tensor, float]:
    """Minimum-cost top-to-bottom path: (column per row, total cost)."""
    dist, back = cumulative_energy(energy)
    H = dist.shape[0]

    # argmin returns the first minimum on ties
    end = int(torch.argmin(dist[H - 1]))
    cost = float(dist[H - 1, end])

    path = torch.empty(H, dtype=torch.long)
    path[H - 1] = end
    for r in range(H - 1, 0, -1):
        path[r - 1] = back[r, path[r]]

    return path, cost


def find_vertical_seam(energy: torch.Tensor) -> SeamPath:
    """
    Minimum-energy vertical seam (removes one column).

    Ties between predecessors resolve straight > left > right; ties in the
    last row resolve to the leftmost column.

    Args:
        energy: Energy map (H, W)

    Returns:
        SeamPath with one column index per row (length H)
    """
    path, cost = _min_path(energy)
    return SeamPath(indices=path, direction='vertical', cost=cost)


def find_horizontal_seam(energy: torch.Tensor) -> SeamPath:
    """
    Minimum-energy horizontal seam (removes one row).

    Column-by-column version of the vertical search. On the transposed map
    "left" is the row above, so ties resolve straight > up > down and the
    last column resolves to the topmost row.

    Args:
        energy: Energy map (H, W)

    Returns:
        SeamPath with one row index per column (length W)
    """
    path, cost = _min_path(energy.t())
    return SeamPath(indices=path, direction='horizontal', cost=cost)


def find_seam(energy: torch.Tensor, direction: str = 'vertical') -> SeamPath:
    """Dispatch to the vertical or horizontal seam search."""
    _check_direction(direction)
    if direction == 'vertical':
        return find_vertical_seam(energy)
    return find_horizontal_seam(energy)


def remove_seam(buffer: PixelBuffer, seam: SeamPath):
    """
    Remove a seam from a buffer in place.

    Vertical: in each row, columns after the seam shift left by one and the
    logical width shrinks by one. Horizontal: in each column, rows after the
    seam shift up by one and the logical height shrinks by one.

    A seam coordinate outside the current extent is skipped for that
    scanline and logged; a correct seam never triggers this.

    Args:
        buffer: PixelBuffer to mutate
        seam: SeamPath from find_seam on this buffer's current energy
    """
    _check_direction(seam.direction)
    if seam.consumed:
        raise SeamError("Seam has already been removed")

    data = buffer.data
    H, W = buffer.height, buffer.width

    if seam.direction == 'vertical':
        if len(seam) != H:
            raise SeamError(f"Vertical seam length {len(seam)} does not match height {H}")

        for r in range(H):
            x = int(seam.indices[r])
            if not 0 <= x < W:
                logger.warning("Skipping row %d: seam column %d outside width %d", r, x, W)
                continue
            data[r, x:W - 1] = data[r, x + 1:W].clone()

        buffer.shrink_width()

    else:
        if len(seam) != W:
            raise SeamError(f"Horizontal seam length {len(seam)} does not match width {W}")

        for c in range(W):
            y = int(seam.indices[c])
            if not 0 <= y < H:
                logger.warning("Skipping column %d: seam row %d outside height %d", c, y, H)
                continue
            data[y:H - 1, c] = data[y + 1:H, c].clone()

        buffer.shrink_height()

    seam.consumed = True
