"""
Zero-copy image slices.

An ``ImageSlice`` is a rectangular window onto another image's buffer. It
stores its placement as a ``SliceSpec`` in pixel units and translates its own
(x, y) into a byte address in the backing buffer, using the backing width as
the row stride. Nothing is copied until ``pixels()`` materializes the slice.

``ImageSliceMut`` is the exclusive variant: it can write pixels through to
the backing buffer, and while it is alive the lender can be neither read nor
modified.

Slices release their borrow with ``release()``, at the end of a ``with``
block, or when they are garbage collected.

Example:
    >>> with image.crop(100, 100, Dimensions(500, 400)) as region:
    ...     grey = region.greyscale()
"""

import logging
import weakref
from typing import Any

from IP_Libs.constants import CHANNELS
from IP_Libs.ImageCoreLib.borrow import BorrowFlag
from IP_Libs.ImageCoreLib.errors import BorrowError, OutOfBoundsError
from IP_Libs.ImageCoreLib.image_base import ImageBase, clamp_region
from IP_Libs.ImageCoreLib.image_models import Dimensions, Pixel, SliceSpec

logger = logging.getLogger(__name__)


class ImageSlice(ImageBase):
    """A read-only, borrowed slice of an image."""

    _exclusive = False

    def __init__(self, parent: Any, x: int, y: int, dims: Dimensions):
        """
        Borrow a region of ``parent``.

        The request is clamped to the parent's own dimensions; offsets of a
        slice taken from another slice are composed onto the same backing
        buffer.

        Raises:
            BorrowError: If the parent's buffer cannot be borrowed this way
        """
        x, y, size = clamp_region(parent.dimensions, x, y, dims)
        buffer, (base_x, base_y), backing = parent._slice_source()
        spec = SliceSpec(offset=(base_x + x, base_y + y), backing=backing, dims=size)

        lender: BorrowFlag = parent._borrow
        if self._exclusive:
            lender.acquire_exclusive()
        else:
            lender.acquire_shared()

        view = memoryview(buffer)
        self._buffer = view if self._exclusive else view.toreadonly()
        self._parent = parent
        self._spec = spec
        self._borrow = BorrowFlag(type(self).__name__)
        self._finalizer = weakref.finalize(self, lender.release, self._exclusive)

        logger.debug(
            f"Borrowed {size.width}x{size.height} slice at {spec.offset} "
            f"of {backing.width}x{backing.height} buffer"
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def released(self) -> bool:
        return not self._finalizer.alive

    def release(self) -> None:
        """
        Give the borrow back to the lender.

        Releasing twice is a no-op.

        Raises:
            BorrowError: If slices taken from this slice are still alive
        """
        if self.released:
            return
        if self._borrow.is_borrowed:
            raise BorrowError("Cannot release a slice while slices of it are alive")
        self._finalizer()
        self._buffer = None
        self._parent = None

    def __enter__(self) -> "ImageSlice":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None and self._borrow.is_borrowed:
            # Let the in-flight exception propagate; the borrow is returned
            # by release() or collection once the child slices are gone
            logger.warning(f"{self!r} left borrowed after an error: slices of it are still alive")
            return
        self.release()

    def _check_alive(self) -> None:
        if self.released:
            raise BorrowError("Slice has been released")

    # ------------------------------------------------------------------
    # Addressing
    # ------------------------------------------------------------------

    @property
    def dimensions(self) -> Dimensions:
        return self._spec.dims

    @property
    def offset(self):
        """(x, y) of this slice's top-left pixel in the backing buffer."""
        return self._spec.offset

    @property
    def spec(self) -> SliceSpec:
        return self._spec

    def _index(self, x: int, y: int) -> int:
        dims = self._spec.dims
        if not dims.contains(x, y):
            raise OutOfBoundsError(x, y, dims.width, dims.height)
        return self._spec.byte_index(x, y)

    def get_pixel(self, x: int, y: int) -> Pixel:
        self._check_alive()
        self._borrow.check_readable()
        return Pixel.from_bytes(self._buffer, self._index(x, y))

    def pixels(self) -> bytes:
        """Copy this slice's rows out of the backing buffer."""
        self._check_alive()
        self._borrow.check_readable()

        result = bytearray()
        for row in range(self._spec.dims.height):
            start, end = self._spec.row_range(row)
            result += self._buffer[start:end]
        return bytes(result)

    def _slice_source(self):
        self._check_alive()
        return self._buffer, self._spec.offset, self._spec.backing

    def __repr__(self) -> str:
        dims = self._spec.dims
        return f"{type(self).__name__}({dims.width}x{dims.height} at {self._spec.offset})"


class ImageSliceMut(ImageSlice):
    """A mutable, exclusively borrowed slice of an image."""

    _exclusive = True

    def set_pixel(self, x: int, y: int, pixel: Pixel) -> None:
        """Write one pixel through to the backing buffer."""
        self._check_alive()
        self._borrow.check_writable()
        index = self._index(x, y)
        self._buffer[index:index + CHANNELS] = pixel.to_bytes()

    def crop_mut(self, x: int, y: int, dims: Dimensions) -> "ImageSliceMut":
        """Mutably borrow a sub-region of this slice."""
        return ImageSliceMut(self, x, y, dims)
