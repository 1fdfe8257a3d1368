"""Reading and writing images as PixelBuffers (Pillow)."""

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from .buffer import PixelBuffer


class ImageDecodeError(RuntimeError):
    """Raised when an image file cannot be opened or decoded."""


def load_image(path: Union[str, Path]) -> PixelBuffer:
    """Load an image file into a PixelBuffer (RGB, uint8)."""
    path = Path(path)
    try:
        with Image.open(path) as img:
            img_array = np.array(img.convert('RGB'), dtype=np.uint8)
    except FileNotFoundError as ex:
        raise ImageDecodeError(f"Image not found: {path}") from ex
    except (UnidentifiedImageError, OSError) as ex:
        raise ImageDecodeError(f"Failed to decode image '{path}': {ex}") from ex

    return PixelBuffer(img_array)


def save_image(buffer: PixelBuffer, path: Union[str, Path]):
    """Write the buffer's logical region to an image file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(buffer.to_numpy()).save(path)
