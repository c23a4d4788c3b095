"""
Image data models for the Image Processor.

This module defines the plain value types used throughout the image core.

Classes:
    Dimensions: Width and height of an image or slice, in pixels
    Pixel: One RGBA pixel with 8-bit channels
    SliceSpec: Placement of a slice inside a larger backing image

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
"""

from dataclasses import dataclass
from typing import Tuple

from IP_Libs.constants import CHANNELS, CHANNEL_MAX

RgbaColor = Tuple[int, int, int, int]


def _require_non_negative_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")


@dataclass(frozen=True)
class Dimensions:
    """Width and height of an image, in pixels.

    Attributes:
        width: Number of pixel columns
        height: Number of pixel rows
    """
    width: int
    height: int

    def __post_init__(self):
        _require_non_negative_int("width", self.width)
        _require_non_negative_int("height", self.height)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def buffer_length(self) -> int:
        """Number of bytes an RGBA buffer of this size must hold."""
        return self.width * self.height * CHANNELS

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def as_tuple(self) -> Tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class Pixel:
    """One RGBA pixel. Each channel is in 0-255."""
    r: int
    g: int
    b: int
    alpha: int = CHANNEL_MAX

    def __post_init__(self):
        for name in ("r", "g", "b", "alpha"):
            value = getattr(self, name)
            if not isinstance(value, int) or not (0 <= value <= CHANNEL_MAX):
                raise ValueError(f"{name} must be an integer 0-{CHANNEL_MAX}, got {value!r}")

    @classmethod
    def from_tuple(cls, color: RgbaColor) -> "Pixel":
        r, g, b, alpha = color
        return cls(r, g, b, alpha)

    @classmethod
    def from_bytes(cls, data, index: int = 0) -> "Pixel":
        """Read one pixel starting at ``index`` of a bytes-like buffer."""
        return cls(data[index], data[index + 1], data[index + 2], data[index + 3])

    def as_tuple(self) -> RgbaColor:
        return (self.r, self.g, self.b, self.alpha)

    def to_bytes(self) -> bytes:
        return bytes((self.r, self.g, self.b, self.alpha))


@dataclass(frozen=True)
class SliceSpec:
    """Placement of a slice inside its backing image.

    Offsets and sizes are stored in pixel units. The channel stride is only
    applied when a byte address is computed.

    Attributes:
        offset: (x, y) of the slice's top-left pixel in the backing image
        backing: Full dimensions of the backing image (the row stride)
        dims: Dimensions of the slice itself
    """
    offset: Tuple[int, int]
    backing: Dimensions
    dims: Dimensions

    def __post_init__(self):
        off_x, off_y = self.offset
        _require_non_negative_int("offset x", off_x)
        _require_non_negative_int("offset y", off_y)
        if off_x + self.dims.width > self.backing.width:
            raise ValueError(
                f"Slice columns {off_x}..{off_x + self.dims.width} exceed "
                f"backing width {self.backing.width}"
            )
        if off_y + self.dims.height > self.backing.height:
            raise ValueError(
                f"Slice rows {off_y}..{off_y + self.dims.height} exceed "
                f"backing height {self.backing.height}"
            )

    def byte_index(self, x: int, y: int) -> int:
        """Byte address in the backing buffer of slice pixel (x, y)."""
        off_x, off_y = self.offset
        return ((off_y + y) * self.backing.width + off_x + x) * CHANNELS

    def row_range(self, row: int) -> Tuple[int, int]:
        """Start and end byte addresses of one slice row in the backing buffer."""
        off_x, off_y = self.offset
        start = self.backing.width * (off_y + row) * CHANNELS + off_x * CHANNELS
        return start, start + self.dims.width * CHANNELS
