"""
Owned images.

An ``OwnedImage`` exclusively owns a row-major RGBA buffer of exactly
``width * height * 4`` bytes. It is the only image type that can be
transformed in place. Slices borrowed from it (see ``image_slice``) lock it
against modification until they are released.
"""

import logging
from typing import Any, Optional, Tuple

from IP_Libs.constants import CHANNELS
from IP_Libs.ImageCoreLib.borrow import BorrowFlag
from IP_Libs.ImageCoreLib.box_blur import gaussian_box_blur
from IP_Libs.ImageCoreLib.errors import InvalidBufferError, OutOfBoundsError
from IP_Libs.ImageCoreLib.image_base import ImageBase, require_readable_image
from IP_Libs.ImageCoreLib.image_editing_ops import (
    flip_pixels_in_place,
    greyscale_pixels_in_place,
)
from IP_Libs.ImageCoreLib.image_models import Dimensions, Pixel

logger = logging.getLogger(__name__)


def _validated_buffer(dims: Dimensions, pixels: Any) -> bytearray:
    if not isinstance(dims, Dimensions):
        raise TypeError(f"Expected Dimensions, got {type(dims)}")
    try:
        view = memoryview(pixels)
    except TypeError:
        raise TypeError(f"Expected a bytes-like RGBA buffer, got {type(pixels)}") from None
    buffer = bytearray(view)
    if len(buffer) != dims.buffer_length:
        raise InvalidBufferError(
            f"Buffer holds {len(buffer)} bytes but a {dims.width}x{dims.height} "
            f"RGBA image needs {dims.buffer_length}"
        )
    return buffer


class OwnedImage(ImageBase):
    """
    An image that owns its pixels.

    Example:
        >>> image = OwnedImage(Dimensions(2, 1), bytes([255, 0, 0, 255, 0, 0, 255, 255]))
        >>> image.get_pixel(1, 0)
        Pixel(r=0, g=0, b=255, alpha=255)
        >>> image.flip(True, False)
        >>> image.get_pixel(1, 0)
        Pixel(r=255, g=0, b=0, alpha=255)
    """

    def __init__(self, dims: Dimensions, pixels: Any):
        """
        Create an image from dimensions and a bytes-like RGBA buffer.

        The buffer is copied.

        Raises:
            InvalidBufferError: If len(pixels) != width * height * 4
            TypeError: If dims is not a Dimensions or pixels is not bytes-like
        """
        self._pixels = _validated_buffer(dims, pixels)
        self._dims = dims
        self._borrow = BorrowFlag("owned image")

    @classmethod
    def adopt(cls, dims: Dimensions, buffer: bytearray) -> "OwnedImage":
        """Wrap a freshly built bytearray without copying it again."""
        image = cls.__new__(cls)
        if len(buffer) != dims.buffer_length:
            raise InvalidBufferError(
                f"Buffer holds {len(buffer)} bytes, expected {dims.buffer_length}"
            )
        image._pixels = buffer
        image._dims = dims
        image._borrow = BorrowFlag("owned image")
        return image

    @classmethod
    def empty(cls) -> "OwnedImage":
        """Create a 0x0 image, typically filled later with copy_from()."""
        return cls.adopt(Dimensions(0, 0), bytearray())

    @classmethod
    def filled(cls, dims: Dimensions, pixel: Optional[Pixel] = None) -> "OwnedImage":
        """Create an image where every pixel is ``pixel`` (transparent black by default)."""
        pixel = pixel if pixel is not None else Pixel(0, 0, 0, 0)
        return cls.adopt(dims, bytearray(pixel.to_bytes() * dims.pixel_count))

    # ------------------------------------------------------------------
    # Buffer access
    # ------------------------------------------------------------------

    @property
    def dimensions(self) -> Dimensions:
        return self._dims

    @property
    def is_borrowed(self) -> bool:
        return self._borrow.is_borrowed

    def _index(self, x: int, y: int) -> int:
        if not self._dims.contains(x, y):
            raise OutOfBoundsError(x, y, self._dims.width, self._dims.height)
        return (y * self._dims.width + x) * CHANNELS

    def get_pixel(self, x: int, y: int) -> Pixel:
        self._borrow.check_readable()
        return Pixel.from_bytes(self._pixels, self._index(x, y))

    def set_pixel(self, x: int, y: int, pixel: Pixel) -> None:
        self._borrow.check_writable()
        index = self._index(x, y)
        self._pixels[index:index + CHANNELS] = pixel.to_bytes()

    def pixels(self) -> bytes:
        self._borrow.check_readable()
        return bytes(self._pixels)

    def to_parts(self) -> Tuple[Dimensions, bytes]:
        """Return (dimensions, RGBA bytes), e.g. for saving."""
        return self._dims, self.pixels()

    def _slice_source(self):
        return self._pixels, (0, 0), self._dims

    # ------------------------------------------------------------------
    # Mutable operations
    # ------------------------------------------------------------------

    def crop_mut(self, x: int, y: int, dims: Dimensions) -> "ImageSliceMut":
        """
        Mutably borrow a sub-image.

        Clamps exactly like crop(). While the returned slice is alive the
        owner can be neither read nor modified.
        """
        from IP_Libs.ImageCoreLib.image_slice import ImageSliceMut

        return ImageSliceMut(self, x, y, dims)

    def blur(self, amount: int) -> None:
        """Blur this image in place."""
        self._borrow.check_writable()
        self._pixels = gaussian_box_blur(self._pixels, self._dims, amount)

    def flip(self, horiz: bool, vert: bool) -> None:
        """Flip this image in place."""
        self._borrow.check_writable()
        flip_pixels_in_place(self._pixels, self._dims, horiz, vert)

    def greyscale_mut(self) -> None:
        """Turn this image into greyscale in place."""
        self._borrow.check_writable()
        greyscale_pixels_in_place(self._pixels)

    def copy_from(self, source: Any) -> None:
        """
        Replace this image's dimensions and pixels with those of ``source``.

        Args:
            source: Any readable image (OwnedImage, ImageSlice, ...)

        Raises:
            TypeError: If source is not a readable image
            BorrowError: If this image is currently borrowed
        """
        require_readable_image(source)
        self._borrow.check_writable()

        dims = source.dimensions
        self._pixels = _validated_buffer(dims, source.pixels())
        self._dims = dims
        logger.debug(f"Copied {dims.width}x{dims.height} image into owned image")

    def blur_from(self, amount: int, source: Any) -> None:
        """Copy ``source`` into this image, then blur it in place."""
        self.copy_from(source)
        self.blur(amount)

    def flip_from(self, horiz: bool, vert: bool, source: Any) -> None:
        """Copy ``source`` into this image, then flip it in place."""
        self.copy_from(source)
        self.flip(horiz, vert)

    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OwnedImage):
            return NotImplemented
        return self._dims == other._dims and self._pixels == other._pixels

    __hash__ = None

    def __repr__(self) -> str:
        return f"OwnedImage({self._dims.width}x{self._dims.height})"
