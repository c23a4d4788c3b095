"""
Raster file input and output for the Image Processor.

This module reads and writes standard raster formats through Pillow and
converts them to and from the core's raw RGBA8 buffers.

Functions:
    decode: Read an image file into (Dimensions, RGBA bytes)
    encode: Write (Dimensions, RGBA bytes) to an image file
    import_image: Read an image file into an OwnedImage
    save_image: Write any readable image to disk
    save_images: Batch save named images with the output prefix
    from_pil: Convert a PIL Image to an OwnedImage
    to_pil: Convert any readable image to a PIL Image
    is_supported_format: Check a path's extension
"""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError

from IP_Libs.constants import (
    DEFAULT_OUTPUT_FORMAT,
    OUTPUT_FILE_PREFIX,
    PIXEL_MODE,
    SUPPORTED_STANDARD_IMAGES,
)
from IP_Libs.ImageCoreLib.errors import DecodeError, EncodeError
from IP_Libs.ImageCoreLib.image_base import require_readable_image
from IP_Libs.ImageCoreLib.image_models import Dimensions
from IP_Libs.ImageCoreLib.owned_image import OwnedImage

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def get_supported_image_formats() -> List[str]:
    """
    Get list of supported standard image formats.

    Returns:
        List of file extensions (e.g., ['.bmp', '.gif', ...])
    """
    return sorted(SUPPORTED_STANDARD_IMAGES)


def is_supported_format(file_path: PathLike) -> bool:
    """Check whether a path has a supported raster extension."""
    return Path(file_path).suffix.lower() in SUPPORTED_STANDARD_IMAGES


def decode(path: PathLike) -> Tuple[Dimensions, bytes]:
    """
    Read an image file and convert it to RGBA8.

    Args:
        path: Image file to read

    Returns:
        (dimensions, row-major RGBA bytes)

    Raises:
        DecodeError: If the file is missing or cannot be decoded
    """
    path = Path(path)
    try:
        with Image.open(path) as img:
            rgba = img.convert(PIXEL_MODE)
            dims = Dimensions(*rgba.size)
            data = rgba.tobytes()
    except (OSError, UnidentifiedImageError, ValueError) as e:
        raise DecodeError(f"Can't open image {path}: {e}") from e

    logger.debug(f"Decoded {path} ({dims.width}x{dims.height})")
    return dims, data


def encode(
    path: PathLike,
    dims: Dimensions,
    pixels: Any,
    format: Optional[str] = None,
) -> None:
    """
    Write an RGBA8 buffer to an image file.

    Args:
        path: Destination file
        dims: Dimensions of the buffer
        pixels: Row-major RGBA bytes
        format: Pillow format name; inferred from the extension when None

    Raises:
        EncodeError: If the buffer does not match dims or the file cannot be written
    """
    path = Path(path)
    try:
        img = Image.frombytes(PIXEL_MODE, dims.as_tuple(), bytes(pixels))
        img.save(path, format=format)
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Can't save image {path}: {e}") from e

    logger.debug(f"Encoded {dims.width}x{dims.height} image to {path}")


def import_image(path: PathLike) -> OwnedImage:
    """Read an image file into an OwnedImage."""
    dims, data = decode(path)
    return OwnedImage(dims, data)


def save_image(image: Any, path: PathLike, format: Optional[str] = None) -> None:
    """
    Save any readable image (owned image or slice) to disk.

    Slices are materialized first, so only the slice's own region is written.
    """
    require_readable_image(image)
    encode(path, image.dimensions, image.pixels(), format=format)


def save_images(named_images: Iterable[Tuple[str, Any]], output_dir: Path) -> int:
    """
    Save multiple images to disk in PNG format.

    Each image is saved with a 'modified_' prefix added to its filename.

    Args:
        named_images: Sequence of (filename, image) pairs
        output_dir: Directory path where images should be saved

    Returns:
        The number of images saved

    Raises:
        OSError: If directory does not exist or is not a directory
        EncodeError: If an image cannot be written
    """
    output_dir = Path(output_dir)
    if not output_dir.exists():
        raise OSError(f"Output directory does not exist: {output_dir}")

    if not output_dir.is_dir():
        raise OSError(f"Output path is not a directory: {output_dir}")

    saved_count = 0
    for name, image in named_images:
        save_path = output_dir / f"{OUTPUT_FILE_PREFIX}{Path(name).name}"
        save_image(image, save_path, format=DEFAULT_OUTPUT_FORMAT)
        saved_count += 1
    return saved_count


def from_pil(image: Any) -> OwnedImage:
    """Convert a PIL Image (any mode) to an OwnedImage."""
    if not hasattr(image, "convert"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")
    rgba = image.convert(PIXEL_MODE)
    return OwnedImage(Dimensions(*rgba.size), rgba.tobytes())


def to_pil(image: Any) -> Any:
    """Convert any readable image to an RGBA PIL Image."""
    require_readable_image(image)
    dims = image.dimensions
    return Image.frombytes(PIXEL_MODE, dims.as_tuple(), image.pixels())
