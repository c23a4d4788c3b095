"""
Read-only image operations shared by owned images and slices.

``ImageBase`` implements every immutable transformation in terms of three
primitives that subclasses provide: ``dimensions``, ``get_pixel`` and
``pixels``. Immutable transformations always return a new ``OwnedImage``.
"""

from typing import Any, Iterator, Tuple

from IP_Libs.constants import CHANNELS
from IP_Libs.ImageCoreLib.box_blur import gaussian_box_blur
from IP_Libs.ImageCoreLib.image_editing_ops import flip_pixels, greyscale_pixels
from IP_Libs.ImageCoreLib.image_models import Dimensions, Pixel


def clamp_region(bounds: Dimensions, x: int, y: int, dims: Dimensions) -> Tuple[int, int, Dimensions]:
    """
    Shrink a crop request so it fits inside ``bounds``.

    Args:
        bounds: Dimensions of the image being cropped
        x: Requested left column (clamped to 0..width)
        y: Requested top row (clamped to 0..height)
        dims: Requested slice size

    Returns:
        (x, y, dims) of the clamped region; never larger than the request
    """
    if not isinstance(dims, Dimensions):
        raise TypeError(f"Expected Dimensions, got {type(dims)}")

    x = min(max(int(x), 0), bounds.width)
    y = min(max(int(y), 0), bounds.height)
    width = min(dims.width, bounds.width - x)
    height = min(dims.height, bounds.height - y)
    return x, y, Dimensions(width, height)


def require_readable_image(source: Any) -> None:
    """Raise TypeError unless ``source`` offers dimensions and pixels()."""
    if not hasattr(source, "dimensions") or not callable(getattr(source, "pixels", None)):
        raise TypeError(f"Expected a readable image, got {type(source)}")


class ImageBase:
    """
    Immutable image operations.

    Subclasses provide ``dimensions``, ``get_pixel`` and ``pixels`` and, when
    they can lend their buffer to slices, ``_slice_source`` and ``_borrow``.
    """

    @property
    def dimensions(self) -> Dimensions:
        raise NotImplementedError

    @property
    def width(self) -> int:
        return self.dimensions.width

    @property
    def height(self) -> int:
        return self.dimensions.height

    def get_pixel(self, x: int, y: int) -> Pixel:
        raise NotImplementedError

    def pixels(self) -> bytes:
        """Return a contiguous copy of this image's RGBA bytes."""
        raise NotImplementedError

    def _slice_source(self):
        """Return (buffer, offset, backing dimensions) for new slices."""
        raise NotImplementedError

    def iter_pixels(self) -> Iterator[Pixel]:
        """Yield every pixel in row-major order."""
        data = self.pixels()
        for index in range(0, len(data), CHANNELS):
            yield Pixel.from_bytes(data, index)

    def crop(self, x: int, y: int, dims: Dimensions) -> "ImageSlice":
        """
        Borrow a read-only sub-image.

        Requests that exceed the image are clamped to fit; cropping never
        fails for integer arguments.

        Args:
            x: Left column of the slice
            y: Top row of the slice
            dims: Requested slice size

        Returns:
            An ImageSlice sharing this image's buffer
        """
        from IP_Libs.ImageCoreLib.image_slice import ImageSlice

        return ImageSlice(self, x, y, dims)

    def to_owned(self) -> "OwnedImage":
        """Materialize this image into a standalone OwnedImage."""
        from IP_Libs.ImageCoreLib.owned_image import OwnedImage

        return OwnedImage(self.dimensions, self.pixels())

    def blurred(self, amount: int) -> "OwnedImage":
        """Return a new image that is this one blurred by ``amount`` (sigma)."""
        from IP_Libs.ImageCoreLib.owned_image import OwnedImage

        dims = self.dimensions
        return OwnedImage.adopt(dims, gaussian_box_blur(self.pixels(), dims, amount))

    def flipped(self, horiz: bool, vert: bool) -> "OwnedImage":
        """Return a new image that is this one flipped."""
        from IP_Libs.ImageCoreLib.owned_image import OwnedImage

        dims = self.dimensions
        return OwnedImage.adopt(dims, flip_pixels(self.pixels(), dims, horiz, vert))

    def greyscale(self) -> "OwnedImage":
        """Return a new image that is this one in greyscale."""
        from IP_Libs.ImageCoreLib.owned_image import OwnedImage

        return OwnedImage.adopt(self.dimensions, greyscale_pixels(self.pixels()))
