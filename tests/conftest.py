"""
Pytest configuration and shared fixtures for Image Processor tests.

This module provides shared test fixtures used across multiple
test modules.
"""

import pytest

from IP_Libs.ImageCoreLib import Dimensions, OwnedImage, Pixel
from tests.image_helpers import make_gradient_image


@pytest.fixture
def gradient_image():
    """A 6x4 image with a distinct value at every pixel."""
    return make_gradient_image(6, 4)


@pytest.fixture
def sample_pixels():
    """
    Provide four distinct pixels for small hand-checked grids.

    Returns:
        Tuple of (A, B, C, D) Pixels
    """
    return (
        Pixel(255, 0, 0, 255),    # Red
        Pixel(0, 255, 0, 200),    # Green, partly transparent
        Pixel(0, 0, 255, 100),    # Blue, mostly transparent
        Pixel(255, 255, 255, 0),  # White, fully transparent
    )


@pytest.fixture
def two_by_two(sample_pixels):
    """A 2x2 image with rows [A, B], [C, D]."""
    a, b, c, d = sample_pixels
    return OwnedImage(Dimensions(2, 2), a.to_bytes() + b.to_bytes() + c.to_bytes() + d.to_bytes())
