"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

We use the dual-gradient energy: the squared color difference between the
left/right neighbours plus the squared color difference between the
upper/lower neighbours, summed over the three channels. The grid wraps
around at its edges (toroidal), so border pixels are compared with the
opposite border instead of being padded.
"""

from typing import Union

import torch

from .buffer import PixelBuffer


def wrap_index(i: int, n: int) -> int:
    """Map index i onto [0, n) with wraparound: -1 -> n-1, n -> 0."""
    if n <= 0:
        raise ValueError(f"Dimension must be positive, got {n}")
    return i % n


def neighbor_indices(n: int):
    """
    Wrapped predecessor/successor index vectors for a dimension of size n.

    Returns:
        (before, after) long tensors of shape (n,) where before[i] is
        wrap_index(i - 1, n) and after[i] is wrap_index(i + 1, n)
    """
    before = torch.tensor([wrap_index(i - 1, n) for i in range(n)], dtype=torch.long)
    after = torch.tensor([wrap_index(i + 1, n) for i in range(n)], dtype=torch.long)
    return before, after


def dual_gradient_energy(image: Union[torch.Tensor, PixelBuffer]) -> torch.Tensor:
    """
    Compute dual-gradient energy with toroidal wraparound.

    E(r, c) = sum_ch (I[r, c+1] - I[r, c-1])^2 + sum_ch (I[r+1, c] - I[r-1, c])^2

    Channel values are widened to int64 before differencing, so uint8
    input never wraps and the squares never overflow.

    Args:
        image: Pixel tensor (H, W, 3) or a PixelBuffer (its logical region is used)

    Returns:
        Energy map (H, W), float64
    """
    if isinstance(image, PixelBuffer):
        image = image.pixels()

    if image.dim() != 3:
        raise ValueError(f"Expected (H, W, C) image, got {tuple(image.shape)}")

    H, W, _ = image.shape
    pixels = image.to(torch.int64)

    up, down = neighbor_indices(H)
    left, right = neighbor_indices(W)

    dx = pixels[:, right, :] - pixels[:, left, :]
    dy = pixels[down, :, :] - pixels[up, :, :]

    dx2 = (dx * dx).sum(dim=2)
    dy2 = (dy * dy).sum(dim=2)

    return (dx2 + dy2).to(torch.float64)
