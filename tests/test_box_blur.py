"""
Tests for the box blur engine.

Tests cover:
- Kernel size derivation from sigma
- A single pass against a per-pixel reference
- Edge clamping and alpha preservation
- Passes reading only from the pre-pass buffer
"""

import unittest

import pytest

from IP_Libs.ImageCoreLib import Dimensions, OwnedImage, Pixel
from IP_Libs.ImageCoreLib.box_blur import (
    box_blur_pass,
    gaussian_box_blur,
    kernel_sizes_for_sigma,
    radius_for_size,
)
from tests.image_helpers import make_random_image, naive_box_blur_pass


class TestKernelSizes(unittest.TestCase):
    """Test deriving box sizes from sigma."""

    def test_sigma_zero_gives_unit_boxes(self):
        self.assertEqual(kernel_sizes_for_sigma(0), [1, 1, 1])

    def test_sigma_one(self):
        """sqrt(5) floors to 2; m = ceil(2.75) = 3."""
        self.assertEqual(kernel_sizes_for_sigma(1), [2, 2, 2])

    def test_sigma_two(self):
        self.assertEqual(kernel_sizes_for_sigma(2), [4, 4, 4])

    def test_sigma_three(self):
        self.assertEqual(kernel_sizes_for_sigma(3), [6, 6, 6])

    def test_integer_sigma_gives_equal_boxes(self):
        """For integer sigma >= 1, wl is 2 * sigma and m rounds up to 3."""
        for sigma in range(1, 20):
            self.assertEqual(kernel_sizes_for_sigma(sigma), [2 * sigma] * 3)

    def test_fractional_sigma_mixes_sizes(self):
        """sigma 1.4: sqrt(8.84) floors to 2; m = ceil(1.79) = 2, so one upper box."""
        self.assertEqual(kernel_sizes_for_sigma(1.4), [2, 2, 4])

    def test_three_passes(self):
        for sigma in range(0, 12):
            sizes = kernel_sizes_for_sigma(sigma)
            self.assertEqual(len(sizes), 3)
            self.assertTrue(all(size >= 1 for size in sizes))

    def test_negative_sigma_rejected(self):
        with self.assertRaises(ValueError):
            kernel_sizes_for_sigma(-2)

    def test_radius_truncates(self):
        self.assertEqual(radius_for_size(1), 0)
        self.assertEqual(radius_for_size(2), 0)
        self.assertEqual(radius_for_size(3), 1)
        self.assertEqual(radius_for_size(6), 2)


class TestBoxBlurPass:
    """Tests for one box-blur pass."""

    @pytest.mark.parametrize("radius", [1, 2, 3])
    @pytest.mark.parametrize("width,height", [(7, 5), (1, 6), (4, 1), (3, 3)])
    def test_matches_naive_reference(self, width, height, radius):
        image = make_random_image(width, height, seed=width * 31 + height * 7 + radius)
        data = image.pixels()
        result = box_blur_pass(data, image.dimensions, radius)
        assert bytes(result) == naive_box_blur_pass(data, width, height, radius)

    def test_radius_zero_is_copy(self):
        image = make_random_image(4, 4, seed=1)
        data = image.pixels()
        assert bytes(box_blur_pass(data, image.dimensions, 0)) == data

    def test_does_not_modify_input(self):
        image = make_random_image(6, 6, seed=6)
        data = bytearray(image.pixels())
        snapshot = bytes(data)
        box_blur_pass(data, image.dimensions, 2)
        assert bytes(data) == snapshot

    def test_alpha_copied_from_input(self):
        image = make_random_image(5, 5, seed=12)
        data = image.pixels()
        result = box_blur_pass(data, image.dimensions, 1)
        assert result[3::4] == data[3::4]

    def test_edge_replicated_not_zero_padded(self):
        """A bright left column stays bright at the edge: clamped neighbors repeat it."""
        dims = Dimensions(3, 1)
        data = bytes([90, 90, 90, 255, 0, 0, 0, 255, 0, 0, 0, 255])
        result = box_blur_pass(data, dims, 1)
        # Neighborhood of (0, 0) is rows clamped to 0 and columns -1, 0, 1:
        # (90 + 90 + 0) * 3 rows / 9 = 60
        assert result[0] == 60
        # Neighborhood of (2, 0): columns 1, 2, 2 all zero
        assert result[8] == 0

    def test_single_pixel_point_spreads_evenly(self):
        dims = Dimensions(3, 3)
        data = bytearray(36)
        data[16:20] = bytes([90, 180, 225, 255])
        result = box_blur_pass(bytes(data), dims, 1)
        # Every pixel's 3x3 neighborhood contains the center pixel once
        for index in range(0, 36, 4):
            assert tuple(result[index:index + 3]) == (10, 20, 25)

    def test_empty_buffer(self):
        assert box_blur_pass(b"", Dimensions(0, 0), 3) == bytearray()


class TestGaussianBoxBlur(unittest.TestCase):
    """Test the three-pass composite."""

    def test_composes_three_passes(self):
        image = make_random_image(9, 7, seed=21)
        dims, data = image.to_parts()
        expected = data
        for size in kernel_sizes_for_sigma(3):
            expected = naive_box_blur_pass(expected, dims.width, dims.height, radius_for_size(size))
        self.assertEqual(bytes(gaussian_box_blur(data, dims, 3)), expected)

    def test_amount_one_is_no_op(self):
        """All three boxes have width 2, i.e. radius 0."""
        image = make_random_image(5, 5, seed=22)
        dims, data = image.to_parts()
        self.assertEqual(bytes(gaussian_box_blur(data, dims, 1)), data)

    def test_uniform_image_any_amount(self):
        for amount in (2, 6, 10):
            image = OwnedImage.filled(Dimensions(5, 4), Pixel(13, 200, 77, 31))
            dims, data = image.to_parts()
            self.assertEqual(bytes(gaussian_box_blur(data, dims, amount)), data)

    def test_negative_amount_rejected(self):
        with self.assertRaises(ValueError):
            gaussian_box_blur(bytes(4), Dimensions(1, 1), -1)
