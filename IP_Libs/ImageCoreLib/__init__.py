"""
ImageCoreLib - Core image functionality

This module provides owned images, zero-copy slices, and the flip,
greyscale and box-blur transformations for the Image Processor project.
"""

from IP_Libs.ImageCoreLib.image_models import Dimensions, Pixel, SliceSpec, RgbaColor
from IP_Libs.ImageCoreLib.errors import (
    ImageError,
    OutOfBoundsError,
    InvalidBufferError,
    DecodeError,
    EncodeError,
    BorrowError,
)
from IP_Libs.ImageCoreLib.owned_image import OwnedImage
from IP_Libs.ImageCoreLib.image_slice import ImageSlice, ImageSliceMut
from IP_Libs.ImageCoreLib.box_blur import (
    kernel_sizes_for_sigma,
    box_blur_pass,
    gaussian_box_blur,
)

__all__ = [
    "Dimensions",
    "Pixel",
    "SliceSpec",
    "RgbaColor",
    "ImageError",
    "OutOfBoundsError",
    "InvalidBufferError",
    "DecodeError",
    "EncodeError",
    "BorrowError",
    "OwnedImage",
    "ImageSlice",
    "ImageSliceMut",
    "kernel_sizes_for_sigma",
    "box_blur_pass",
    "gaussian_box_blur",
]
