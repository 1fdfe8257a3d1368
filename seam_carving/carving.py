"""
High-level carving functions that orchestrate the resize loop.

Each iteration recomputes energy on the current image, finds one seam and
removes it. All width reduction happens before any height reduction.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Union

import numpy as np
import torch

from .buffer import PixelBuffer
from .energy import dual_gradient_energy
from .seam import SeamPath, find_horizontal_seam, find_vertical_seam, remove_seam

logger = logging.getLogger(__name__)

# Called once per seam with a copy of the current pixels and the seam about to go
SeamSink = Callable[[np.ndarray, SeamPath], None]

PROGRESS_EVERY = 20


@dataclass
class ResizeState:
    """Sizes and counters for one resize run, owned by the driver."""
    original_height: int
    original_width: int
    target_height: int
    target_width: int
    vertical_removed: int = 0
    horizontal_removed: int = 0

    @property
    def total_removed(self) -> int:
        return self.vertical_removed + self.horizontal_removed


def clamp_target(target: int, original: int) -> int:
    """Cap a requested dimension at the original one."""
    return min(int(target), int(original))


def _notify(sink: Optional[SeamSink], buffer: PixelBuffer, seam: SeamPath):
    if sink is None:
        return
    try:
        sink(buffer.to_numpy(), seam)
    except Exception:
        logger.warning("Seam sink failed; continuing without it", exc_info=True)


def carve_to_size(buffer: PixelBuffer, target_height: int, target_width: int,
                  sink: Optional[SeamSink] = None) -> ResizeState:
    """
    Shrink a buffer in place toward (target_height, target_width).

    Targets above the original size are clamped to it. Each phase stops at
    its target or when the dimension reaches 1, so targets of 0 and 1 both
    end at 1.

    Args:
        buffer: PixelBuffer to carve
        target_height: Desired height
        target_width: Desired width
        sink: Optional observer called before each seam is removed

    Returns:
        ResizeState with the clamped targets and seam counts
    """
    state = ResizeState(
        original_height=buffer.height,
        original_width=buffer.width,
        target_height=clamp_target(target_height, buffer.height),
        target_width=clamp_target(target_width, buffer.width),
    )
    if (state.target_height, state.target_width) != (target_height, target_width):
        logger.debug("Clamped target %dx%d to %dx%d", target_width, target_height,
                     state.target_width, state.target_height)

    n_vertical = max(0, buffer.width - max(state.target_width, 1))
    while buffer.width > state.target_width and buffer.width >= 2:
        energy = dual_gradient_energy(buffer)
        seam = find_vertical_seam(energy)
        _notify(sink, buffer, seam)
        remove_seam(buffer, seam)
        state.vertical_removed += 1

        logger.debug("Vertical seam cost %.1f, size now %dx%d",
                     seam.cost, buffer.width, buffer.height)
        if state.vertical_removed % PROGRESS_EVERY == 0:
            logger.info("Removed %d/%d vertical seams, size: %dx%d",
                        state.vertical_removed, n_vertical, buffer.width, buffer.height)

    n_horizontal = max(0, buffer.height - max(state.target_height, 1))
    while buffer.height > state.target_height and buffer.height >= 2:
        energy = dual_gradient_energy(buffer)
        seam = find_horizontal_seam(energy)
        _notify(sink, buffer, seam)
        remove_seam(buffer, seam)
        state.horizontal_removed += 1

        logger.debug("Horizontal seam cost %.1f, size now %dx%d",
                     seam.cost, buffer.width, buffer.height)
        if state.horizontal_removed % PROGRESS_EVERY == 0:
            logger.info("Removed %d/%d horizontal seams, size: %dx%d",
                        state.horizontal_removed, n_horizontal, buffer.width, buffer.height)

    return state


def carve_image(image: Union[np.ndarray, torch.Tensor], target_height: int,
                target_width: int, sink: Optional[SeamSink] = None) -> np.ndarray:
    """
    Seam-carve an (H, W, 3) image array to the target size.

    Args:
        image: Image array (H, W, 3); values are cast to uint8
        target_height: Desired height
        target_width: Desired width
        sink: Optional per-seam observer

    Returns:
        Carved image (h, w, 3) uint8
    """
    buffer = PixelBuffer(image)
    carve_to_size(buffer, target_height, target_width, sink=sink)
    return buffer.to_numpy()
