"""
CodecLib - Raster file input and output

This module converts between image files on disk and the core's
RGBA8 buffers, using Pillow.
"""

from IP_Libs.CodecLib.image_io import (
    decode,
    encode,
    import_image,
    save_image,
    save_images,
    from_pil,
    to_pil,
    get_supported_image_formats,
    is_supported_format,
)

__all__ = [
    "decode",
    "encode",
    "import_image",
    "save_image",
    "save_images",
    "from_pil",
    "to_pil",
    "get_supported_image_formats",
    "is_supported_format",
]
