"""Tests for energy functions."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seam_carving.buffer import PixelBuffer
from seam_carving.energy import wrap_index, neighbor_indices, dual_gradient_energy

from conftest import make_random_image, reference_energy


class TestWrapIndex:
    def test_interior_unchanged(self):
        assert [wrap_index(i, 5) for i in range(5)] == [0, 1, 2, 3, 4]

    def test_wraps_both_ends(self):
        """-1 maps to the last index and n maps to 0."""
        assert wrap_index(-1, 5) == 4
        assert wrap_index(5, 5) == 0

    def test_single_element(self):
        """In a dimension of size 1 every neighbour is the element itself."""
        assert wrap_index(-1, 1) == 0
        assert wrap_index(1, 1) == 0

    def test_rejects_empty_dimension(self):
        with pytest.raises(ValueError):
            wrap_index(0, 0)

    def test_neighbor_indices(self):
        before, after = neighbor_indices(4)
        assert before.tolist() == [3, 0, 1, 2]
        assert after.tolist() == [1, 2, 3, 0]


class TestDualGradientEnergy:
    def test_corners_and_edge_midpoints(self):
        """Border pixels use the opposite border as their missing neighbour."""
        image = make_random_image(5, 5, seed=7)
        energy = dual_gradient_energy(image)
        points = [(0, 0), (0, 4), (4, 0), (4, 4),   # corners
                  (0, 2), (4, 2), (2, 0), (2, 4)]   # edge midpoints
        for r, c in points:
            assert energy[r, c].item() == reference_energy(image, r, c), f"({r}, {c})"

    def test_matches_reference_everywhere(self):
        """Every pixel of a non-square image matches the per-pixel formula."""
        image = make_random_image(4, 6, seed=3)
        energy = dual_gradient_energy(image)
        for r in range(4):
            for c in range(6):
                assert energy[r, c].item() == reference_energy(image, r, c)

    def test_single_bright_pixel(self):
        """A lone white pixel lights up its four neighbours, not itself or the corners."""
        image = torch.zeros(3, 3, 3, dtype=torch.uint8)
        image[1, 1] = 255
        energy = dual_gradient_energy(image)
        edge = 3 * 255 ** 2
        expected = torch.tensor([[0, edge, 0],
                                 [edge, 0, edge],
                                 [0, edge, 0]], dtype=torch.float64)
        assert torch.equal(energy, expected)

    def test_horizontal_wraparound(self):
        """First and last columns compare against each other."""
        row = torch.tensor([0, 10, 50, 100], dtype=torch.uint8)
        image = row.view(1, 4, 1).expand(1, 4, 3).clone()
        energy = dual_gradient_energy(image)
        # Height 1: vertical neighbours are the pixel itself
        assert energy[0].tolist() == [3 * 90 ** 2, 3 * 50 ** 2, 3 * 90 ** 2, 3 * 50 ** 2]

    def test_vertical_wraparound(self):
        """First and last rows compare against each other."""
        col = torch.tensor([0, 10, 50, 100], dtype=torch.uint8)
        image = col.view(4, 1, 1).expand(4, 1, 3).clone()
        energy = dual_gradient_energy(image)
        assert energy[:, 0].tolist() == [3 * 90 ** 2, 3 * 50 ** 2, 3 * 90 ** 2, 3 * 50 ** 2]

    def test_no_uint8_overflow(self):
        """Differences of 255 are squared in wide integers."""
        image = torch.zeros(1, 2, 3, dtype=torch.uint8)
        image[0, 1] = 255
        energy = dual_gradient_energy(image)
        # Width 2: left and right neighbours are the same pixel, so dx is 0
        assert energy.tolist() == [[0.0, 0.0]]

        image = torch.zeros(1, 3, 3, dtype=torch.uint8)
        image[0, 2] = 255
        energy = dual_gradient_energy(image)
        assert energy[0, 1].item() == 3 * 255 ** 2

    def test_uniform_image_is_zero(self):
        image = torch.full((6, 6, 3), 128, dtype=torch.uint8)
        assert dual_gradient_energy(image).max().item() == 0.0

    def test_output_shape_and_dtype(self):
        energy = dual_gradient_energy(make_random_image(8, 11))
        assert energy.shape == (8, 11)
        assert energy.dtype == torch.float64

    def test_energy_nonnegative(self):
        energy = dual_gradient_energy(make_random_image(20, 20))
        assert (energy >= 0).all()

    def test_uses_buffer_logical_region(self):
        """Passing a PixelBuffer uses only its current logical extent."""
        buffer = PixelBuffer(make_random_image(5, 6))
        buffer.shrink_width()
        buffer.shrink_height()
        energy = dual_gradient_energy(buffer)
        assert energy.shape == (4, 5)
        assert torch.equal(energy, dual_gradient_energy(buffer.pixels().clone()))

    def test_rejects_2d_input(self):
        with pytest.raises(ValueError):
            dual_gradient_energy(torch.zeros(4, 4))
