"""
Seam visualization: overlays, a live matplotlib preview and GIF export.

Everything here is a seam sink for carve_to_size: a callable taking
(pixels, seam) that only ever sees a copy of the image.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import matplotlib.pyplot as plt
from PIL import Image

from .seam import SeamPath

SEAM_COLOR = (255, 0, 0)


def overlay_seam(pixels: np.ndarray, seam: SeamPath,
                 color: Tuple[int, int, int] = SEAM_COLOR) -> np.ndarray:
    """
    Paint a seam onto a copy of an image.

    The seam pixel and its two perpendicular neighbours are painted so the
    seam stays visible on large images. Out-of-range coordinates are skipped.

    Args:
        pixels: Image (H, W, 3) uint8
        seam: Seam to draw
        color: RGB color

    Returns:
        New (H, W, 3) uint8 image with the seam drawn
    """
    vis = np.array(pixels, dtype=np.uint8, copy=True)
    H, W = vis.shape[:2]

    if seam.direction == 'vertical':
        for y, x in enumerate(seam.tolist()[:H]):
            if not 0 <= x < W:
                continue
            vis[y, max(0, x - 1):min(W, x + 2)] = color
    else:
        for x, y in enumerate(seam.tolist()[:W]):
            if not 0 <= y < H:
                continue
            vis[max(0, y - 1):min(H, y + 2), x] = color

    return vis


def combine_sinks(*sinks):
    """Fan one seam notification out to several sinks."""
    active = [s for s in sinks if s is not None]

    def sink(pixels, seam):
        for s in active:
            s(pixels, seam)

    return sink


class SeamPreview:
    """Live matplotlib window showing each seam before it is removed."""

    def __init__(self, delay: float = 0.1, title: str = "Seam carving"):
        self.delay = delay
        self.title = title
        self.fig, self.ax = plt.subplots()
        if self.fig.canvas.manager is not None:
            self.fig.canvas.manager.set_window_title(title)

    def _draw(self, image: np.ndarray, label: str):
        self.ax.clear()
        self.ax.imshow(image)
        self.ax.set_title(label)
        self.ax.axis('off')
        plt.pause(self.delay)

    def __call__(self, pixels: np.ndarray, seam: SeamPath):
        H, W = pixels.shape[:2]
        self._draw(overlay_seam(pixels, seam), f"{W} x {H} ({seam.direction} seam)")

    def show_final(self, pixels: np.ndarray, block: bool = True):
        """Display the carved result and optionally wait for the window to close."""
        H, W = pixels.shape[:2]
        self._draw(pixels, f"Result: {W} x {H}")
        if block:
            plt.show()

    def close(self):
        plt.close(self.fig)


class FrameRecorder:
    """Collects seam overlay frames for export as an animated GIF."""

    def __init__(self, every: int = 1):
        if every < 1:
            raise ValueError(f"every must be >= 1, got {every}")
        self.every = every
        self.frames: List[Image.Image] = []
        self._seen = 0

    def __call__(self, pixels: np.ndarray, seam: SeamPath):
        if self._seen % self.every == 0:
            self.frames.append(Image.fromarray(overlay_seam(pixels, seam)))
        self._seen += 1

    def add_frame(self, pixels: np.ndarray):
        """Append a plain frame, e.g. the final carved image."""
        self.frames.append(Image.fromarray(np.asarray(pixels, dtype=np.uint8)))

    def save_gif(self, path: Union[str, Path], fps: int = 5,
                 size: Optional[Sequence[int]] = None):
        """
        Write the collected frames as a looping GIF.

        Frames shrink as seams are removed, so each one is pasted at the
        top-left of a canvas the size of the first frame (or `size`).
        """
        if not self.frames:
            raise ValueError("No frames were recorded")

        canvas_size = tuple(size) if size is not None else self.frames[0].size
        padded = []
        for frame in self.frames:
            canvas = Image.new('RGB', canvas_size)
            canvas.paste(frame, (0, 0))
            padded.append(canvas)

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)
        padded[0].save(
            path,
            save_all=True,
            append_images=padded[1:],
            duration=duration,
            loop=0,
            optimize=False
        )
