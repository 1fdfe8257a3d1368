"""
Content-aware image resizing by seam carving.

Energy is the dual-gradient energy with wraparound boundaries; seams are
found by dynamic programming and removed in place from a fixed-capacity
pixel buffer. Width is reduced first, then height.
"""

__version__ = "0.1.0"

from .buffer import PixelBuffer
from .energy import wrap_index, dual_gradient_energy
from .seam import (SeamPath, SeamError, cumulative_energy, find_seam,
                   find_vertical_seam, find_horizontal_seam, remove_seam)
from .carving import ResizeState, clamp_target, carve_to_size, carve_image
from .image_io import ImageDecodeError, load_image, save_image

__all__ = [
    'PixelBuffer',
    'wrap_index',
    'dual_gradient_energy',
    'SeamPath',
    'SeamError',
    'cumulative_energy',
    'find_seam',
    'find_vertical_seam',
    'find_horizontal_seam',
    'remove_seam',
    'ResizeState',
    'clamp_target',
    'carve_to_size',
    'carve_image',
    'ImageDecodeError',
    'load_image',
    'save_image',
]
