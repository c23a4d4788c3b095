"""
Exception types raised by the image core and codec.

Each exception also derives from the closest builtin so callers can catch
either the specific type or the builtin family (e.g. ``IndexError``).
"""


class ImageError(Exception):
    """Base class for all Image Processor errors."""


class OutOfBoundsError(ImageError, IndexError):
    """Pixel coordinates fall outside the image or slice."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(f"Pixel ({x}, {y}) is outside a {width}x{height} image")
        self.x = x
        self.y = y
        self.width = width
        self.height = height


class InvalidBufferError(ImageError, ValueError):
    """Pixel buffer length does not match the declared dimensions."""


class DecodeError(ImageError, OSError):
    """An image file could not be read."""


class EncodeError(ImageError, OSError):
    """An image file could not be written."""


class BorrowError(ImageError, RuntimeError):
    """A buffer borrow conflicts with another live borrow."""
