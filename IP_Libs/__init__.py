"""
IP_Libs - Image Processor Library Modules

This package contains the core functionality for the Image Processor project,
organized into specialized sub-packages:

- ImageCoreLib: Owned images, zero-copy image slices and pixel transforms
- CodecLib: Reading and writing raster files through Pillow
- ProcessingLib: Named operations for running transforms by name
"""

__version__ = "0.1.0"
