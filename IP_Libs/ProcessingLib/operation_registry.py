"""
Named image operations.

Each built-in transformation is exposed as an executor taking
``(params, image)`` and returning a new ``OwnedImage``. ``OPERATIONS`` maps
operation names to executors so a pipeline can be written as plain
dictionaries and applied with ``run_operations``.
"""

from typing import Any, Callable, Dict, Iterable, Mapping, Optional
import logging

from IP_Libs.constants import (
    OPERATION_BLUR,
    OPERATION_COPY,
    OPERATION_CROP,
    OPERATION_FLIP,
    OPERATION_GREYSCALE,
    PARAM_AMOUNT,
    PARAM_HEIGHT,
    PARAM_HORIZONTAL,
    PARAM_VERTICAL,
    PARAM_WIDTH,
    PARAM_X,
    PARAM_Y,
)
from IP_Libs.ImageCoreLib.image_base import require_readable_image
from IP_Libs.ImageCoreLib.image_models import Dimensions
from IP_Libs.ImageCoreLib.owned_image import OwnedImage

logger = logging.getLogger(__name__)

# Type alias for executor function
OperationExecutor = Callable[[Dict[str, Any], Any], OwnedImage]

# Key naming the operation inside a step dictionary
STEP_TYPE_KEY = "type"


# ============================================================================
# Built-in executors
# ============================================================================

def _int_param(params: Dict[str, Any], key: str, default: int) -> int:
    value = params.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    return value


def _bool_param(params: Dict[str, Any], key: str) -> bool:
    value = params.get(key, False)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be a boolean, got {value!r}")
    return value


def execute_crop(params: Dict[str, Any], image: Any) -> OwnedImage:
    """
    Crop an image into a new OwnedImage.

    Params:
        - 'x', 'y': Top-left corner (default 0)
        - 'width', 'height': Region size (default: the whole image)
    """
    require_readable_image(image)
    dims = image.dimensions
    x = _int_param(params, PARAM_X, 0)
    y = _int_param(params, PARAM_Y, 0)
    width = _int_param(params, PARAM_WIDTH, dims.width)
    height = _int_param(params, PARAM_HEIGHT, dims.height)
    if width < 0 or height < 0:
        raise ValueError(f"crop size must be >= 0, got {width}x{height}")

    with image.crop(x, y, Dimensions(width, height)) as region:
        return region.to_owned()


def execute_flip(params: Dict[str, Any], image: Any) -> OwnedImage:
    """
    Flip an image.

    Params:
        - 'horizontal': Mirror left-right (default False)
        - 'vertical': Mirror top-bottom (default False)
    """
    require_readable_image(image)
    return image.flipped(_bool_param(params, PARAM_HORIZONTAL), _bool_param(params, PARAM_VERTICAL))


def execute_greyscale(params: Dict[str, Any], image: Any) -> OwnedImage:
    """Convert an image to greyscale. Takes no params."""
    require_readable_image(image)
    return image.greyscale()


def execute_blur(params: Dict[str, Any], image: Any) -> OwnedImage:
    """
    Blur an image.

    Params:
        - 'amount': Standard deviation of the approximated Gaussian (required, >= 0)
    """
    require_readable_image(image)
    if PARAM_AMOUNT not in params:
        raise ValueError("Blur requires an 'amount' parameter")
    amount = _int_param(params, PARAM_AMOUNT, 0)
    if amount < 0:
        raise ValueError(f"amount must be >= 0, got {amount}")
    return image.blurred(amount)


def execute_copy(params: Dict[str, Any], image: Any) -> OwnedImage:
    """Copy any readable image into a new OwnedImage."""
    require_readable_image(image)
    result = OwnedImage.empty()
    result.copy_from(image)
    return result



OPERATIONS: Dict[str, OperationExecutor] = {
    OPERATION_CROP: execute_crop,
    OPERATION_FLIP: execute_flip,
    OPERATION_GREYSCALE: execute_greyscale,
    OPERATION_BLUR: execute_blur,
    OPERATION_COPY: execute_copy,
}


def get_operation(
    name: str, operations: Optional[Mapping[str, OperationExecutor]] = None
) -> OperationExecutor:
    """
    Look up an executor by name.

    Raises:
        KeyError: If no operation has that name
    """
    operations = OPERATIONS if operations is None else operations
    try:
        return operations[name]
    except KeyError:
        available = ", ".join(sorted(operations))
        raise KeyError(f"Unknown operation '{name}'. Available operations: {available}") from None


def run_operations(
    steps: Iterable[Dict[str, Any]],
    image: Any,
    operations: Optional[Mapping[str, OperationExecutor]] = None,
) -> OwnedImage:
    """
    Apply a sequence of operation steps to an image.

    Each step is a dict with a 'type' key naming the operation; the remaining
    keys are passed to the executor as params. The input image is left as is.

    Example:
        >>> run_operations(
        ...     [
        ...         {"type": "Crop", "x": 100, "y": 100, "width": 500, "height": 400},
        ...         {"type": "Greyscale"},
        ...     ],
        ...     image,
        ... )

    Args:
        steps: Operation steps, applied in order
        image: Any readable image (owned image or slice)
        operations: Name to executor mapping (default: ``OPERATIONS``)

    Returns:
        The final OwnedImage (a copy of the input when steps is empty)

    Raises:
        ValueError: If a step has no 'type'
        KeyError: If a step names an unknown operation
    """
    current = execute_copy({}, image)

    for index, step in enumerate(steps):
        name = step.get(STEP_TYPE_KEY)
        if not name:
            raise ValueError(f"Step {index} has no '{STEP_TYPE_KEY}'")
        executor = get_operation(name, operations)
        params = {k: v for k, v in step.items() if k != STEP_TYPE_KEY}
        logger.debug(f"Running step {index}: {name} {params}")
        current = executor(params, current)

    return current
