"""
Box Blur Engine.

Approximates a Gaussian blur with three successive box blurs whose kernel
sizes are derived from the requested standard deviation.

Each box-blur pass:
- averages R, G and B over a (2r+1) x (2r+1) neighborhood
- replicates edge pixels for neighbors outside the image
- divides by the full neighborhood area with truncating integer division
- copies alpha unchanged from the pre-pass buffer

A pass reads only from its input buffer and writes a new output buffer.
Sums are computed with a NumPy summed-area table over an edge-padded copy,
which gives the same integers as the direct per-pixel average.

Example:
    >>> sizes = kernel_sizes_for_sigma(3)
    >>> sizes
    [6, 6, 6]
    >>> blurred = gaussian_box_blur(pixels, Dimensions(640, 480), amount=3)
"""

import logging
import math
from typing import List

import numpy as np

from IP_Libs.constants import BLUR_PASSES, CHANNELS
from IP_Libs.ImageCoreLib.image_models import Dimensions

logger = logging.getLogger(__name__)


# ============================================================================
# Kernel sizes
# ============================================================================

def kernel_sizes_for_sigma(sigma: float, passes: int = BLUR_PASSES) -> List[int]:
    """
    Derive box sizes whose successive application approximates a Gaussian.

    Args:
        sigma: Standard deviation of the target Gaussian (>= 0)
        passes: Number of box passes (default 3)

    Returns:
        List of ``passes`` box widths. The first ``m`` are the lower width
        ``wl`` and the rest are ``wl + 2``.

    Raises:
        ValueError: If sigma is negative or passes < 1
    """
    if sigma < 0:
        raise ValueError(f"sigma must be >= 0, got {sigma}")
    if passes < 1:
        raise ValueError(f"passes must be >= 1, got {passes}")

    n = float(passes)
    w_ideal = math.sqrt(12.0 * sigma * sigma / n + 1.0)
    wl = math.floor(w_ideal)
    wu = wl + 2

    m_ideal = (12.0 * sigma * sigma - n * wl * wl - 4.0 * n * wl - 3.0 * n) / (-4.0 * wl - 4.0)
    m = math.ceil(m_ideal)

    return [wl if i < m else wu for i in range(passes)]


def radius_for_size(size: int) -> int:
    """Box radius for a box width, truncating toward zero."""
    return int((size - 1) / 2)


# ============================================================================
# Single pass
# ============================================================================

def box_blur_pass(pixels, dims: Dimensions, radius: int) -> bytearray:
    """
    Run one box-blur pass over an RGBA buffer.

    Args:
        pixels: Source buffer (row-major RGBA), left untouched
        dims: Dimensions of the buffer
        radius: Neighborhood radius; 0 or less copies the input

    Returns:
        New blurred buffer of the same size
    """
    if radius <= 0 or dims.pixel_count == 0:
        return bytearray(pixels)

    source = np.frombuffer(bytes(pixels), dtype=np.uint8).reshape(
        dims.height, dims.width, CHANNELS
    )
    rgb = source[:, :, :3].astype(np.int64)

    # Edge padding replicates border pixels for any radius
    padded = np.pad(rgb, ((radius, radius), (radius, radius), (0, 0)), mode="edge")

    # Summed-area table with a leading zero row and column
    table = np.zeros((padded.shape[0] + 1, padded.shape[1] + 1, 3), dtype=np.int64)
    table[1:, 1:] = padded.cumsum(axis=0).cumsum(axis=1)

    size = 2 * radius + 1
    totals = (
        table[size:, size:]
        - table[:-size, size:]
        - table[size:, :-size]
        + table[:-size, :-size]
    )

    result = source.copy()
    result[:, :, :3] = (totals // (size * size)).astype(np.uint8)
    return bytearray(result.tobytes())


# ============================================================================
# Gaussian approximation
# ============================================================================

def gaussian_box_blur(pixels, dims: Dimensions, amount: int) -> bytearray:
    """
    Blur an RGBA buffer with three box passes approximating a Gaussian.

    Args:
        pixels: Source buffer (row-major RGBA), left untouched
        dims: Dimensions of the buffer
        amount: Standard deviation of the approximated Gaussian (>= 0)

    Returns:
        New blurred buffer of the same size

    Raises:
        ValueError: If amount is negative
    """
    if amount < 0:
        raise ValueError(f"blur amount must be >= 0, got {amount}")

    sizes = kernel_sizes_for_sigma(amount)
    logger.debug(f"Blurring {dims.width}x{dims.height} buffer, amount={amount}, box sizes={sizes}")

    result = bytearray(pixels)
    for size in sizes:
        result = box_blur_pass(result, dims, radius_for_size(size))
    return result
