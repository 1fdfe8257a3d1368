"""
Fixed-capacity pixel storage for seam carving.

The buffer is allocated once at the original (H, W, 3) size. Removing a
seam shifts pixels inside the logical region and shrinks the logical
height or width; the underlying tensor is never reallocated, so bytes
beyond the logical extent are stale and never read.
"""

from typing import Tuple, Union

import numpy as np
import torch

CHANNELS = 3


class PixelBuffer:
    """
    Mutable 3-channel image with a shrink-only logical extent.

    Storage is a contiguous row-major uint8 tensor of shape (H0, W0, 3),
    so element (row, col, channel) lives at flat offset
    (row * W0 + col) * 3 + channel.
    """

    def __init__(self, pixels: Union[torch.Tensor, np.ndarray]):
        """
        Args:
            pixels: Image array (H, W, 3). Values are cast to uint8.
        """
        if isinstance(pixels, np.ndarray):
            pixels = torch.from_numpy(np.ascontiguousarray(pixels))

        if pixels.dim() != 3 or pixels.shape[2] != CHANNELS:
            raise ValueError(f"Expected (H, W, 3) pixels, got {tuple(pixels.shape)}")
        if pixels.shape[0] < 1 or pixels.shape[1] < 1:
            raise ValueError(f"Image must be at least 1x1, got {tuple(pixels.shape)}")

        self.data = pixels.to(torch.uint8).clone().contiguous()
        self.height = int(pixels.shape[0])
        self.width = int(pixels.shape[1])

    @property
    def capacity(self) -> Tuple[int, int]:
        """Physical (height, width) allocated at construction."""
        return int(self.data.shape[0]), int(self.data.shape[1])

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self.height, self.width, CHANNELS

    def _check_index(self, row: int, col: int, channel: int):
        if not (0 <= row < self.height and 0 <= col < self.width and 0 <= channel < CHANNELS):
            raise IndexError(
                f"Pixel ({row}, {col}, {channel}) outside logical extent "
                f"{self.height}x{self.width}x{CHANNELS}"
            )

    def __getitem__(self, index: Tuple[int, int, int]) -> int:
        row, col, channel = index
        self._check_index(row, col, channel)
        return int(self.data[row, col, channel])

    def __setitem__(self, index: Tuple[int, int, int], value: int):
        row, col, channel = index
        self._check_index(row, col, channel)
        self.data[row, col, channel] = value

    def pixels(self) -> torch.Tensor:
        """View of the logical region (H, W, 3). Shares storage with the buffer."""
        return self.data[:self.height, :self.width]

    def to_numpy(self) -> np.ndarray:
        """Owned (H, W, 3) uint8 copy of the logical region."""
        return self.pixels().clone().numpy()

    def shrink_width(self):
        """Drop the last logical column. Caller has already shifted pixels."""
        if self.width <= 1:
            raise ValueError("Cannot shrink width below 1")
        self.width -= 1

    def shrink_height(self):
        """Drop the last logical row. Caller has already shifted pixels."""
        if self.height <= 1:
            raise ValueError("Cannot shrink height below 1")
        self.height -= 1

    def __repr__(self):
        h0, w0 = self.capacity
        return f"PixelBuffer({self.height}x{self.width}, capacity={h0}x{w0})"
