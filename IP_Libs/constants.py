"""
Constants and configuration values for the Image Processor.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the library.
"""

# Pixel layout (RGBA, 8 bits per channel, row-major)
CHANNELS = 4
CHANNEL_MAX = 255
PIXEL_MODE = "RGBA"

# ITU-R BT.601 luma weights used for greyscale conversion
LUMA_RED = 0.299
LUMA_GREEN = 0.587
LUMA_BLUE = 0.114

# Number of box-blur passes composed to approximate a Gaussian
BLUR_PASSES = 3

# File naming
OUTPUT_FILE_PREFIX = "modified_"
DEFAULT_OUTPUT_FORMAT = "PNG"

# Supported file formats
SUPPORTED_STANDARD_IMAGES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tiff", ".webp"}

# Operation names
OPERATION_CROP = "Crop"
OPERATION_FLIP = "Flip"
OPERATION_GREYSCALE = "Greyscale"
OPERATION_BLUR = "Blur"
OPERATION_COPY = "Copy"

# Operation parameter names
PARAM_X = "x"
PARAM_Y = "y"
PARAM_WIDTH = "width"
PARAM_HEIGHT = "height"
PARAM_HORIZONTAL = "horizontal"
PARAM_VERTICAL = "vertical"
PARAM_AMOUNT = "amount"
