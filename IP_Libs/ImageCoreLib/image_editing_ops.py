"""
Core pixel editing operations for the Image Processor.

This module provides the buffer-level kernels behind the image classes. All
functions work on flat, row-major RGBA byte buffers whose size is described
by a ``Dimensions``. Out-of-place and in-place variants share the same
per-pixel arithmetic so their results are identical.

Functions:
    luma: Greyscale value of one RGB triple
    greyscale_pixels: Return a greyscale copy of a buffer
    greyscale_pixels_in_place: Convert a buffer to greyscale in place
    flip_pixels: Return a flipped copy of a buffer
    flip_pixels_in_place: Flip a buffer in place by swapping mirrored pairs
"""

import math
from typing import Iterator, Tuple

from IP_Libs.constants import CHANNELS, CHANNEL_MAX, LUMA_RED, LUMA_GREEN, LUMA_BLUE
from IP_Libs.ImageCoreLib.image_models import Dimensions


# ============================================================================
# Greyscale
# ============================================================================

def luma(r: int, g: int, b: int) -> int:
    """
    Compute the luma of an RGB triple.

    Uses fixed ITU-R BT.601 weights and rounds half up.

    Args:
        r: Red channel (0-255)
        g: Green channel (0-255)
        b: Blue channel (0-255)

    Returns:
        Luma value in 0-255
    """
    value = LUMA_RED * r + LUMA_GREEN * g + LUMA_BLUE * b
    return min(CHANNEL_MAX, int(math.floor(value + 0.5)))


def greyscale_pixels(pixels) -> bytearray:
    """Return a greyscale copy of an RGBA buffer. Alpha is kept."""
    result = bytearray(pixels)
    greyscale_pixels_in_place(result)
    return result


def greyscale_pixels_in_place(buffer: bytearray) -> None:
    """Replace R, G and B of every pixel with its luma. Alpha is kept."""
    for index in range(0, len(buffer), CHANNELS):
        value = luma(buffer[index], buffer[index + 1], buffer[index + 2])
        buffer[index] = value
        buffer[index + 1] = value
        buffer[index + 2] = value


# ============================================================================
# Flip
# ============================================================================

def flip_pixels(pixels, dims: Dimensions, horiz: bool, vert: bool) -> bytearray:
    """
    Return a flipped copy of an RGBA buffer.

    Every destination pixel gathers its mirrored source pixel, so the source
    is only ever read.

    Args:
        pixels: Source buffer (row-major RGBA)
        dims: Dimensions of the source buffer
        horiz: Mirror left-right (x' = w - 1 - x)
        vert: Mirror top-bottom (y' = h - 1 - y)

    Returns:
        New buffer of the same size
    """
    width, height = dims.width, dims.height
    result = bytearray()

    for j in range(height):
        src_y = height - 1 - j if vert else j
        for i in range(width):
            src_x = width - 1 - i if horiz else i
            index = (src_y * width + src_x) * CHANNELS
            result += pixels[index:index + CHANNELS]

    return result


def _mirrored_pairs(
    dims: Dimensions,
    horiz: bool,
    vert: bool,
) -> Iterator[Tuple[int, int, int, int]]:
    """Yield each (i, j, partner_i, partner_j) mirrored pair exactly once."""
    width, height = dims.width, dims.height

    if horiz and vert:
        # Point reflection: pixel k pairs with pixel N - 1 - k in row-major order
        for k in range((dims.pixel_count + 1) // 2):
            i, j = k % width, k // width
            yield i, j, width - 1 - i, height - 1 - j
    elif horiz:
        for j in range(height):
            for i in range((width + 1) // 2):
                yield i, j, width - 1 - i, j
    elif vert:
        for j in range((height + 1) // 2):
            for i in range(width):
                yield i, j, i, height - 1 - j


def flip_pixels_in_place(buffer: bytearray, dims: Dimensions, horiz: bool, vert: bool) -> None:
    """
    Flip an RGBA buffer in place.

    Each mirrored pair is swapped once: the pixel at (i, j) is saved and
    written to its partner's slot, then the partner's original value is
    written to (i, j). With neither flag set nothing is touched.

    Args:
        buffer: Buffer to modify (row-major RGBA)
        dims: Dimensions of the buffer
        horiz: Mirror left-right
        vert: Mirror top-bottom
    """
    width = dims.width

    for i, j, partner_i, partner_j in _mirrored_pairs(dims, horiz, vert):
        index = (j * width + i) * CHANNELS
        partner_index = (partner_j * width + partner_i) * CHANNELS

        saved = bytes(buffer[index:index + CHANNELS])
        partner = bytes(buffer[partner_index:partner_index + CHANNELS])
        buffer[partner_index:partner_index + CHANNELS] = saved
        buffer[index:index + CHANNELS] = partner
