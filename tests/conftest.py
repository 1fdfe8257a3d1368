"""Shared test fixtures for the seam carving test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import matplotlib
matplotlib.use('Agg')

import numpy as np
import torch


def make_random_image(H, W, seed=42):
    """Random (H, W, 3) uint8 image."""
    generator = torch.Generator().manual_seed(seed)
    return torch.randint(0, 256, (H, W, 3), dtype=torch.uint8, generator=generator)


def make_column_index_image(H, W):
    """Every pixel in column c holds (c, c, c), so shifts are easy to read."""
    cols = torch.arange(W, dtype=torch.uint8).view(1, W, 1)
    return cols.expand(H, W, 3).clone()


def make_row_index_image(H, W):
    """Every pixel in row r holds (r, r, r)."""
    rows = torch.arange(H, dtype=torch.uint8).view(H, 1, 1)
    return rows.expand(H, W, 3).clone()


def make_edge_image(H, W, edge_col):
    """Black left of edge_col, white from edge_col on."""
    image = torch.zeros(H, W, 3, dtype=torch.uint8)
    image[:, edge_col:] = 255
    return image


def reference_energy(image, r, c):
    """Dual-gradient energy at one pixel with plain Python arithmetic."""
    img = np.asarray(image, dtype=np.int64)
    H, W = img.shape[:2]
    left, right = img[r, (c - 1) % W], img[r, (c + 1) % W]
    up, down = img[(r - 1) % H, c], img[(r + 1) % H, c]
    dx2 = int(((right - left) ** 2).sum())
    dy2 = int(((down - up) ** 2).sum())
    return float(dx2 + dy2)
